"""Integration-тесты для Descriptor Protocol SearchIndex.

Проверяет регистрацию, __get__, __set_name__ и взаимодействие с моделями.
"""

import pytest
from peewee import CharField, Model, TextField

from searchable import InMemorySearchBackend, SearchIndex
from searchable.exceptions import ConfigurationError
from searchable.integrations.base import InstanceManager
from searchable.integrations.peewee import unregister_model
from searchable.integrations.search_proxy import SearchProxy


def test_descriptor_set_name(create_test_model):
    """Проверяет автоматическую установку name и owner при создании класса."""
    TestModel = create_test_model(fields={"title": CharField()})

    descriptor = vars(TestModel)["search"]
    assert descriptor.name == "search"
    assert descriptor.owner is TestModel


def test_descriptor_class_access(create_test_model):
    """Доступ через класс (Model.search) -> SearchProxy."""
    TestModel = create_test_model(fields={"content": TextField()})

    search_proxy = TestModel.search
    assert isinstance(search_proxy, SearchProxy)
    assert search_proxy.model is TestModel
    assert search_proxy.descriptor is vars(TestModel)["search"]


def test_descriptor_instance_access(create_test_model):
    """Доступ через инстанс (instance.search) -> InstanceManager."""
    TestModel = create_test_model(fields={"text": TextField()})

    obj = TestModel.create(text="Hello World")

    manager = obj.search
    assert isinstance(manager, InstanceManager)
    assert manager.instance is obj
    assert manager.descriptor is TestModel.search.descriptor


def test_descriptor_cannot_set(create_test_model):
    """Присваивание дескриптору запрещено."""
    TestModel = create_test_model(fields={"data": TextField()})

    obj = TestModel.create(data="Test")

    with pytest.raises(AttributeError, match="Cannot set attribute"):
        obj.search = "something"


def test_client_without_indexer_rejected(stub_client):
    """Клиент только для поиска требует явного индексатора."""
    with pytest.raises(ConfigurationError, match="indexer is required"):
        SearchIndex(client=stub_client())


def test_separate_client_and_indexer(stub_client, backend):
    index = SearchIndex(client=stub_client(), indexer=backend)

    assert index.indexer is backend
    assert index.binder.indexer is backend


def test_index_type_from_table_name(create_test_model):
    TestModel = create_test_model(fields={"title": CharField()}, table_name="posts")

    assert TestModel.search.index_type == "posts"


def test_instance_manager_document(create_test_model):
    TestModel = create_test_model(
        fields={"title": CharField(), "views": CharField()},
        index_config={"data_types": {"id": "integer", "views": "integer"}},
    )
    obj = TestModel.create(title="Hello", views="12")

    document = obj.search.document()

    assert document.key == obj.id
    assert document.fields == {"id": obj.id, "title": "Hello", "views": 12}


def test_manual_index_update_via_instance_manager(create_test_model, backend):
    """Ручное обновление индекса после обхода хуков."""
    TestModel = create_test_model(fields={"text": TextField()})
    obj = TestModel.create(text="Initial text")

    # Массовый UPDATE обходит хуки
    TestModel.update(text="Modified text").where(TestModel.id == obj.id).execute()
    assert backend.get("article", obj.id)["text"] == "Initial text"

    obj = TestModel.get_by_id(obj.id)
    obj.search.update()

    assert backend.get("article", obj.id)["text"] == "Modified text"


def test_manual_index_delete_via_instance_manager(create_test_model, backend):
    TestModel = create_test_model(fields={"content": TextField()})
    obj = TestModel.create(content="Content to remove from index")

    obj.search.delete()

    assert backend.get("article", obj.id) is None
    assert TestModel.select().count() == 1


def test_manual_update_propagates_errors(create_test_model, backend, monkeypatch):
    """В отличие от хуков, ручная индексация ошибки не глотает."""
    TestModel = create_test_model(fields={"content": TextField()})
    obj = TestModel.create(content="x")

    def broken(*args, **kwargs):
        raise RuntimeError("index is read-only")

    monkeypatch.setattr(backend, "index", broken)

    with pytest.raises(RuntimeError):
        obj.search.update()


def test_multiple_descriptors_on_same_model(in_memory_db):
    """Несколько дескрипторов на одной модели пишут в свои коллекции."""
    primary = InMemorySearchBackend()
    secondary = InMemorySearchBackend()

    class Article(Model):
        title = CharField()
        body = TextField()

        search = SearchIndex(client=primary)
        search_titles = SearchIndex(
            client=secondary,
            index_type="article_titles",
            attributes=lambda a: {"id": a.id, "title": a.title},
        )

        class Meta:
            database = in_memory_db

    in_memory_db.create_tables([Article])
    try:
        article = Article.create(title="Python", body="Generators")

        assert primary.get("article", article.id) == {
            "id": article.id,
            "title": "Python",
            "body": "Generators",
        }
        assert secondary.get("article_titles", article.id) == {
            "id": article.id,
            "title": "Python",
        }
        assert Article.search_titles.index_type == "article_titles"
    finally:
        unregister_model(Article)


def test_auto_index_disabled(in_memory_db, backend):
    class Draft(Model):
        title = CharField()

        search = SearchIndex(client=backend, auto_index=False)

        class Meta:
            database = in_memory_db

    in_memory_db.create_tables([Draft])
    draft = Draft.create(title="Not yet")

    assert backend.count("draft") == 0

    draft.search.update()
    assert backend.count("draft") == 1
