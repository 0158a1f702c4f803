"""Слой интерфейсов (контракты поискового backend'а).

Классы:
    BaseSearchClient
        Выполнение поисковых запросов.
    BaseIndexer
        Приёмник индексации.
    BaseSearchBackend
        Совмещённый контракт.
"""

from searchable.interfaces.search_backend import (
    BaseIndexer,
    BaseSearchBackend,
    BaseSearchClient,
    QueryCallback,
)

__all__ = [
    "BaseSearchClient",
    "BaseIndexer",
    "BaseSearchBackend",
    "QueryCallback",
]
