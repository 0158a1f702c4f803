"""Поисковые backend'ы.

Классы:
    InMemorySearchBackend
        Индекс в памяти процесса.
    SqliteFtsSearchBackend
        Индекс на SQLite FTS5.

Функции:
    create_backend(config: SearchableConfig | None = None) -> BaseSearchBackend
        Создаёт backend по конфигурации.
"""

from typing import Optional

from searchable.config import SearchableConfig, get_config
from searchable.exceptions import ConfigurationError
from searchable.infrastructure.index.in_memory import InMemorySearchBackend
from searchable.infrastructure.index.sqlite_fts import (
    SqliteFtsSearchBackend,
    init_index_database,
)
from searchable.interfaces import BaseSearchBackend


def create_backend(config: Optional[SearchableConfig] = None) -> BaseSearchBackend:
    """Создаёт поисковый backend по конфигурации.

    Args:
        config: Конфигурация (по умолчанию глобальная).

    Returns:
        Готовый к работе backend.

    Raises:
        ConfigurationError: Если backend неизвестен.
    """
    config = config or get_config()

    if config.backend == "memory":
        return InMemorySearchBackend(default_limit=config.search_limit)
    if config.backend == "sqlite":
        database = init_index_database(config.index_path)
        return SqliteFtsSearchBackend(database, default_limit=config.search_limit)

    raise ConfigurationError(f"Unknown search backend: {config.backend}")


__all__ = [
    "InMemorySearchBackend",
    "SqliteFtsSearchBackend",
    "init_index_database",
    "create_backend",
]
