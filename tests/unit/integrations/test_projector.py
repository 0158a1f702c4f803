"""Unit-тесты для DocumentProjector.

Проверяет чистую логику сборки Document из объектов без БД.
"""

import pytest
from peewee import CharField, IntegerField, Model, SqliteDatabase

from searchable.domain import Document
from searchable.integrations.projector import (
    DEFAULT_DATA_TYPES,
    DocumentProjector,
    SearchableOptions,
)


class MockObject:
    """Фейковый объект с атрибутами для тестирования."""

    def __init__(self, **kwargs):
        for key, value in kwargs.items():
            setattr(self, key, value)


_db = SqliteDatabase(":memory:")


class Product(Model):
    sku = CharField()
    price = CharField()
    stock = IntegerField(default=0)

    class Meta:
        database = _db
        table_name = "products"


def test_transform_attributes_scenario():
    """Объявленные поля приводятся, остальные проходят без изменений."""
    projector = DocumentProjector(
        SearchableOptions(data_types={"id": "integer", "active": "boolean"})
    )

    result = projector.transform_attributes({"id": "7", "active": "1", "name": "x"})

    assert result == {"id": 7, "active": True, "name": "x"}
    assert list(result) == ["id", "active", "name"]


def test_transform_attributes_ignores_unknown_declared_fields():
    """Поля из таблицы типов, которых нет в атрибутах, не добавляются."""
    projector = DocumentProjector(SearchableOptions(data_types={"missing": "integer"}))

    assert projector.transform_attributes({"name": "x"}) == {"name": "x"}


def test_transform_attributes_does_not_mutate_input():
    projector = DocumentProjector()
    attributes = {"id": "3"}

    result = projector.transform_attributes(attributes)

    assert result == {"id": 3}
    assert attributes == {"id": "3"}
    assert result is not attributes


def test_default_data_types():
    """По умолчанию приводится только id."""
    assert DocumentProjector().search_data_types() == dict(DEFAULT_DATA_TYPES)


def test_empty_data_types_disable_coercion():
    projector = DocumentProjector(SearchableOptions(data_types={}))

    assert projector.transform_attributes({"id": "3"}) == {"id": "3"}


def test_indexable_attributes_plain_object():
    """Для не-peewee объектов берутся публичные атрибуты экземпляра."""
    projector = DocumentProjector()
    obj = MockObject(id=1, title="Hello", _secret="hidden")

    assert projector.indexable_attributes(obj) == {"id": 1, "title": "Hello"}


def test_indexable_attributes_model_snapshot():
    """Для peewee модели снимок строится из __data__ и не связан с инстансом."""
    projector = DocumentProjector()
    product = Product(id=3, sku="A-1", price="9.90")

    snapshot = projector.indexable_attributes(product)
    product.sku = "B-2"

    assert snapshot["sku"] == "A-1"
    assert snapshot["id"] == 3


def test_custom_attributes_callable():
    projector = DocumentProjector(
        SearchableOptions(attributes=lambda obj: {"id": obj.id, "label": obj.title.upper()})
    )

    obj = MockObject(id="5", title="hello", body="ignored")

    assert projector.build(obj).fields == {"id": 5, "label": "HELLO"}


def test_index_type_defaults_to_table_name():
    projector = DocumentProjector()

    assert projector.index_type(Product) == "products"
    assert projector.index_type(Product(sku="x")) == "products"


def test_index_type_override():
    projector = DocumentProjector(SearchableOptions(index_type="catalog"))

    assert projector.index_type(Product) == "catalog"


def test_index_type_plain_object_uses_class_name():
    assert DocumentProjector().index_type(MockObject()) == "mockobject"


def test_search_key_defaults_to_primary_key():
    projector = DocumentProjector()

    assert projector.search_key_name(Product) == "id"
    assert projector.search_key(Product(id=11, sku="x")) == 11


def test_search_key_custom_field():
    projector = DocumentProjector(SearchableOptions(search_key="sku"))

    assert projector.search_key(Product(id=11, sku="A-1")) == "A-1"
    assert projector.relative_search_key(Product) is Product.sku


def test_relative_search_key_default():
    assert DocumentProjector().relative_search_key(Product) is Product.id


def test_eager_loaded():
    projector = DocumentProjector(SearchableOptions(eager_loaded=("author", "tags")))

    assert projector.eager_loaded() == ("author", "tags")


def test_build_document():
    """Сборка Document из модели: коллекция, ключ и приведённые поля."""
    projector = DocumentProjector(
        SearchableOptions(data_types={"id": "integer", "price": "float", "stock": "string"})
    )
    product = Product(id=4, sku="A-1", price="9.90", stock=12)

    document = projector.build(product)

    assert isinstance(document, Document)
    assert document.index_type == "products"
    assert document.key == 4
    assert document.fields == {"id": 4, "sku": "A-1", "price": 9.9, "stock": "12"}


@pytest.mark.parametrize("method", ["index_type", "search_key_name"])
def test_projector_subclass_overrides(method):
    """Каждая возможность переопределяется в подклассе."""

    class CustomProjector(DocumentProjector):
        def index_type(self, target):
            return "custom"

        def search_key_name(self, target):
            return "sku"

    projector = CustomProjector()

    assert getattr(projector, method)(Product) in ("custom", "sku")
    assert projector.build(Product(id=1, sku="Z")).index_type == "custom"
    assert projector.build(Product(id=1, sku="Z")).key == "Z"
