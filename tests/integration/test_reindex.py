"""Integration-тесты массовой переиндексации модели."""

import pytest
from peewee import CharField, ForeignKeyField, Model

from searchable import InMemorySearchBackend, SearchIndex
from searchable.exceptions import ConfigurationError
from searchable.integrations.peewee import (
    iter_for_indexing,
    resolve_relations,
    unregister_model,
)


@pytest.fixture
def library(in_memory_db):
    """Author/Book с поисковым индексом книг и предзагрузкой автора."""
    backend = InMemorySearchBackend()

    class Author(Model):
        name = CharField()

        class Meta:
            database = in_memory_db

    class Book(Model):
        title = CharField()
        author = ForeignKeyField(Author, backref="books")

        search = SearchIndex(
            client=backend,
            eager_loaded=("author",),
            attributes=lambda book: {
                "id": book.id,
                "title": book.title,
                "author_name": book.author.name,
            },
        )

        class Meta:
            database = in_memory_db

    in_memory_db.create_tables([Author, Book])
    yield Author, Book, backend
    unregister_model(Book)


def test_reindex_all_rows(library):
    Author, Book, backend = library
    tolstoy = Author.create(name="Tolstoy")
    for number in range(7):
        Book.create(title=f"Volume {number}", author=tolstoy)

    assert Book.search.flush() == 7
    assert Book.search.count() == 0

    assert Book.search.reindex(batch_size=3) == 7
    assert Book.search.count() == 7
    assert backend.get("book", 1)["author_name"] == "Tolstoy"


def test_reindex_counts_failures(library, monkeypatch):
    Author, Book, backend = library
    author = Author.create(name="A")
    Book.create(title="ok", author=author)
    Book.create(title="bad", author=author)

    original = backend.index

    def flaky(index_type, key, fields):
        if fields["title"] == "bad":
            raise RuntimeError("rejected")
        original(index_type, key, fields)

    monkeypatch.setattr(backend, "index", flaky)

    assert Book.search.reindex() == 1
    assert Book.search.descriptor.binder.failures == 1


def test_reindex_empty_table(library):
    _, Book, _ = library

    assert Book.search.reindex() == 0


def test_iter_for_indexing_batches(library):
    Author, Book, _ = library
    author = Author.create(name="A")
    for number in range(5):
        Book.create(title=str(number), author=author)

    titles = [book.title for book in iter_for_indexing(Book, ("author",), batch_size=2)]

    assert titles == ["0", "1", "2", "3", "4"]


def test_iter_for_indexing_rejects_bad_batch_size(library):
    _, Book, _ = library

    with pytest.raises(ValueError):
        list(iter_for_indexing(Book, batch_size=0))


def test_resolve_relations(library):
    Author, Book, _ = library

    assert resolve_relations(Book, ["author"]) == [Author]
    assert resolve_relations(Author, ["books"]) == [Book]

    with pytest.raises(ConfigurationError):
        resolve_relations(Book, ["publisher"])
