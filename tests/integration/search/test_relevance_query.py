"""Integration-тесты перезаписи запроса на реальной SQLite базе.

Строки приходят в порядке релевантности поисковой выдачи, а не в
порядке первичного ключа.
"""

import pytest
from peewee import BooleanField, CharField, ForeignKeyField, Model

from searchable import SearchHit, SearchIndex, rewrite_query
from searchable.domain import SearchResultSet
from searchable.integrations.peewee import unregister_model


@pytest.fixture
def articles(create_test_model, stub_client, backend):
    """Модель с десятью строками и клиентом с выдачей [5, 2, 9]."""
    client = stub_client([SearchHit(key=5), SearchHit(key=2), SearchHit(key=9)])
    Article = create_test_model(
        fields={"title": CharField(), "published": BooleanField(default=True)},
        index_config={"client": client, "indexer": backend},
    )
    for number in range(1, 11):
        Article.create(title=f"Article {number}", published=number != 2)
    Article.client = client
    return Article


def test_rows_follow_relevance_order(articles):
    query = articles.search.query(lambda q: q.match("python"))

    assert [a.id for a in query] == [5, 2, 9]


def test_query_is_composable(articles):
    """Дальнейшие условия пользователя сохраняют порядок релевантности."""
    query = articles.search.query(lambda q: q.match("python")).where(
        articles.published == True  # noqa: E712
    )

    assert [a.id for a in query] == [5, 9]


def test_without_relevance_order_falls_back_to_db(articles):
    query = articles.search.query(
        lambda q: q.match("python"), sort_by_relevance=False
    ).order_by(articles.id)

    assert [a.id for a in query] == [2, 5, 9]


def test_custom_base_query(articles):
    base = articles.select(articles.id).where(articles.id > 3)

    query = articles.search.query(lambda q: q.match("python"), query=base)

    assert [a.id for a in query] == [5, 9]


def test_empty_results_give_no_rows(create_test_model, stub_client, backend):
    """Пустая выдача: ни одной строки, а не вся таблица."""
    Article = create_test_model(
        fields={"title": CharField()},
        index_config={"client": stub_client([]), "indexer": backend},
    )
    Article.create(title="a")
    Article.create(title="b")

    assert list(Article.search.query(lambda q: q.match("nothing"))) == []


def test_duplicate_keys_use_first_position(create_test_model, stub_client, backend):
    Article = create_test_model(
        fields={"title": CharField()},
        index_config={
            "client": stub_client([SearchHit(key=3), SearchHit(key=1), SearchHit(key=3)]),
            "indexer": backend,
        },
    )
    for title in "abc":
        Article.create(title=title)

    assert [a.id for a in Article.search.query(lambda q: q)] == [3, 1]


def test_explicit_key_field(create_test_model, stub_client, backend):
    """Ограничение по полю документа вместо ключа."""
    hits = [
        SearchHit(key=100, fields={"slug": "gamma"}),
        SearchHit(key=101, fields={"slug": "alpha"}),
    ]
    Article = create_test_model(
        fields={"slug": CharField(), "title": CharField()},
        index_config={"client": stub_client(hits), "indexer": backend},
    )
    for slug in ("alpha", "beta", "gamma"):
        Article.create(slug=slug, title=slug.title())

    query = Article.search.query(lambda q: q, key="slug")

    assert [a.slug for a in query] == ["gamma", "alpha"]


def test_descriptor_default_sort_setting(create_test_model, stub_client, backend):
    Article = create_test_model(
        fields={"title": CharField()},
        index_config={
            "client": stub_client([SearchHit(key=2), SearchHit(key=1)]),
            "indexer": backend,
            "sort_by_relevance": False,
        },
    )
    Article.create(title="a")
    Article.create(title="b")

    sql, _ = Article.search.query(lambda q: q).sql()

    assert "ORDER BY" not in sql


def test_end_to_end_with_in_memory_backend(create_test_model):
    """Индексация при записи и поиск через тот же backend."""
    Article = create_test_model(fields={"title": CharField(), "body": CharField()})
    Article.create(title="Rust", body="ownership and borrowing")
    python_once = Article.create(title="Python", body="list comprehensions")
    python_twice = Article.create(title="Python tips", body="python generators")

    titles = [
        a.title for a in Article.search.query(lambda q: q.match("python"))
    ]

    assert titles == [python_twice.title, python_once.title]


def test_hits_returns_raw_results(articles):
    results = articles.search.hits(lambda q: q.match("python").limit(3))

    assert results.keys() == [5, 2, 9]
    assert articles.client.queries[-1].size == 3


def test_rewrite_with_join(in_memory_db):
    """Ключ квалифицирован таблицей модели, JOIN не даёт неоднозначности."""

    class Author(Model):
        name = CharField()

        class Meta:
            database = in_memory_db

    class Book(Model):
        title = CharField()
        author = ForeignKeyField(Author, backref="books")

        class Meta:
            database = in_memory_db

    in_memory_db.create_tables([Author, Book])
    alice = Author.create(name="Alice")
    bob = Author.create(name="Bob")
    Book.create(title="B1", author=alice)
    Book.create(title="B2", author=bob)
    Book.create(title="B3", author=alice)

    query = Book.select(Book, Author).join(Author)
    results = SearchResultSet([SearchHit(key=3), SearchHit(key=1)])

    books = list(rewrite_query(query, Book, results))

    assert [b.title for b in books] == ["B3", "B1"]
    assert books[0].author.name == "Alice"
