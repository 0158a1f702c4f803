"""
Конфигурация pytest для тестов searchable.

Определяет фикстуры для:
- In-memory базы Peewee и поисковых backend'ов
- Создания тестовых моделей с SearchIndex
- Сброса глобальной конфигурации между тестами
"""

from typing import Any, Iterable, Mapping

import pytest
from peewee import Model, SqliteDatabase

from searchable import (
    BaseSearchClient,
    InMemorySearchBackend,
    SearchHit,
    SearchIndex,
    SearchQuery,
    SearchResultSet,
)
from searchable.config import reset_config
from searchable.integrations.peewee import unregister_model


class StubSearchClient(BaseSearchClient):
    """Поисковый клиент с заранее заданной выдачей.

    Запоминает последний выполненный запрос, чтобы тесты могли
    проверить, что callback был применён.
    """

    def __init__(self, hits: Iterable[Any] = (), total: int | None = None):
        self.hits = [
            hit if isinstance(hit, SearchHit) else SearchHit(key=hit) for hit in hits
        ]
        self.total = total
        self.queries: list[SearchQuery] = []

    def execute(self, query: SearchQuery) -> SearchResultSet:
        self.queries.append(query)
        return SearchResultSet(self.hits, index_type=query.index_type, total=self.total)


@pytest.fixture(autouse=True)
def reset_searchable_config():
    """Каждый тест начинает с чистой глобальной конфигурации."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def in_memory_db():
    """In-memory SQLite база для моделей приложения.

    Создает чистую БД для каждого теста.
    """
    db = SqliteDatabase(":memory:")
    db.connect()
    yield db
    db.close()


@pytest.fixture
def backend():
    """Чистый in-memory поисковый backend."""
    return InMemorySearchBackend()


@pytest.fixture
def stub_client():
    """Фабрика клиентов с фиксированной выдачей."""
    return StubSearchClient


@pytest.fixture
def create_test_model(in_memory_db, backend):
    """Фабрика для создания тестовых Peewee моделей с SearchIndex.

    Использование:
        >>> Article = create_test_model(
        ...     fields={"title": CharField(), "published": BooleanField(default=False)},
        ...     index_config={"data_types": {"id": "integer", "published": "boolean"}},
        ... )

    По умолчанию дескриптор пишет в фикстуру backend. Клиент и индексатор
    можно переопределить через index_config.
    """
    created_models: list[type[Model]] = []

    def factory(
        fields: Mapping[str, Any],
        index_config: Mapping[str, Any] | None = None,
        model_name: str = "Article",
        table_name: str | None = None,
    ) -> type[Model]:
        """Создает динамическую модель Peewee с SearchIndex.

        Args:
            fields: Словарь {имя_поля: Field()} (можно добавлять методы).
            index_config: Аргументы SearchIndex.
            model_name: Имя класса модели.
            table_name: Имя таблицы (по умолчанию выводится peewee).

        Returns:
            Класс модели с дескриптором SearchIndex.
        """
        config = {"client": backend, **(index_config or {})}

        class Meta:
            database = in_memory_db

        if table_name:
            Meta.table_name = table_name

        class_dict: dict[str, Any] = {"__module__": __name__, "Meta": Meta}
        class_dict.update(fields)
        class_dict["search"] = SearchIndex(**config)

        # type() вызывает __set_name__, хуки регистрируются сразу
        model = type(model_name, (Model,), class_dict)

        in_memory_db.create_tables([model])
        created_models.append(model)
        return model

    yield factory

    for model in created_models:
        unregister_model(model)
    in_memory_db.drop_tables(created_models, safe=True)
