"""Интеграция с Peewee ORM.

Классы:
    PeeweeAdapter
        Хуки save()/delete_instance()/restore() для автоиндексации.

Функции:
    register_model(model, descriptor) -> None
        Регистрирует модель для автоматической индексации.
    rewrite_query(query, model, results, ...) -> ModelSelect
        Ограничивает запрос выдачей и сортирует по релевантности.
    search(query, model, client, build, ...) -> ModelSelect
        Поиск и перезапись запроса за один вызов.
    iter_for_indexing(model, relations, batch_size) -> Iterator[Model]
        Обход строк модели для массовой индексации.
"""

from searchable.integrations.peewee.adapter import (
    PeeweeAdapter,
    register_model,
    unregister_model,
)
from searchable.integrations.peewee.query import (
    positional_order,
    rewrite_query,
    search,
)
from searchable.integrations.peewee.utils import iter_for_indexing, resolve_relations

__all__ = [
    "PeeweeAdapter",
    "register_model",
    "unregister_model",
    "positional_order",
    "rewrite_query",
    "search",
    "iter_for_indexing",
    "resolve_relations",
]
