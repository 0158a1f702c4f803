"""Unit-тесты InMemorySearchBackend."""

import pytest

from searchable import InMemorySearchBackend
from searchable.config import SearchableConfig
from searchable.exceptions import ConfigurationError
from searchable.infrastructure.index import create_backend


@pytest.fixture
def populated():
    backend = InMemorySearchBackend()
    backend.index("articles", 1, {"title": "Python basics", "published": True})
    backend.index("articles", 2, {"title": "Python python python", "published": False})
    backend.index("articles", 3, {"title": "Rust ownership", "published": True})
    backend.index("articles", 4, {"title": "Python and Rust", "published": True})
    return backend


def test_scores_by_term_frequency(populated):
    results = populated.search("articles", lambda q: q.match("python"))

    assert results.keys() == [2, 1, 4]
    assert results[0].score == 3.0


def test_equal_scores_keep_insertion_order(populated):
    results = populated.search("articles", lambda q: q.match("rust"))

    assert results.keys() == [3, 4]


def test_without_text_returns_everything(populated):
    results = populated.search("articles", lambda q: q)

    assert results.keys() == [1, 2, 3, 4]


def test_filters(populated):
    results = populated.search(
        "articles", lambda q: q.match("python").filter(published=True)
    )

    assert results.keys() == [1, 4]


def test_filter_on_missing_field_excludes(populated):
    assert populated.search("articles", lambda q: q.filter(author="x")).is_empty()


def test_limit_offset_and_total(populated):
    results = populated.search("articles", lambda q: q.match("python").limit(1).offset(1))

    assert results.keys() == [1]
    assert results.total == 3


def test_default_limit_applies():
    backend = InMemorySearchBackend(default_limit=2)
    for key in range(5):
        backend.index("notes", key, {"text": "note"})

    results = backend.search("notes", lambda q: q.match("note"))

    assert len(results) == 2
    assert results.total == 5


def test_callback_may_return_none(populated):
    """Callback может мутировать запрос и ничего не возвращать."""

    def build(query):
        query.match("rust")

    assert populated.search("articles", build).keys() == [3, 4]


def test_reindex_replaces_document(populated):
    populated.index("articles", 3, {"title": "Go channels", "published": True})

    assert populated.count("articles") == 4
    assert populated.get("articles", 3)["title"] == "Go channels"
    assert populated.search("articles", lambda q: q.match("rust")).keys() == [4]


def test_remove_and_drop(populated):
    populated.remove("articles", 1)
    populated.remove("articles", 999)
    populated.remove("unknown", 1)

    assert populated.count("articles") == 3
    assert populated.drop("articles") == 3
    assert populated.count("articles") == 0
    assert populated.drop("articles") == 0


def test_collections_are_isolated(populated):
    populated.index("comments", 1, {"body": "python"})

    assert populated.search("comments", lambda q: q.match("python")).keys() == [1]
    assert populated.count("articles") == 4


def test_stored_fields_are_copied():
    backend = InMemorySearchBackend()
    fields = {"title": "x"}
    backend.index("articles", 1, fields)
    fields["title"] = "changed"

    assert backend.get("articles", 1) == {"title": "x"}
    assert backend.get("articles", 2) is None


class TestCreateBackend:
    def test_memory(self):
        backend = create_backend(SearchableConfig(backend="memory", search_limit=7))

        assert isinstance(backend, InMemorySearchBackend)
        assert backend.default_limit == 7

    def test_unknown_backend(self):
        config = SearchableConfig.model_construct(backend="elastic")

        with pytest.raises(ConfigurationError):
            create_backend(config)
