"""Реализация поискового индекса для SQLite FTS5 + Peewee.

Модули:
    engine
        Инициализация SQLite с проверкой FTS5.
    models
        Внутренняя FTS5 модель.
    adapter
        Реализация BaseSearchBackend.
"""

from searchable.infrastructure.index.sqlite_fts.adapter import (
    SqliteFtsSearchBackend,
    sanitize_fts_query,
)
from searchable.infrastructure.index.sqlite_fts.engine import init_index_database

__all__ = [
    "SqliteFtsSearchBackend",
    "sanitize_fts_query",
    "init_index_database",
]
