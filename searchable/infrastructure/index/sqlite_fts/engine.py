"""Инициализация SQLite БД для полнотекстового индекса.

Функции:
    init_index_database
        Создаёт и настраивает БД с проверкой FTS5.
"""

from pathlib import Path

from playhouse.sqlite_ext import FTS5Model, SqliteExtDatabase

from searchable.exceptions import SearchBackendError
from searchable.utils.logger import get_logger

logger = get_logger(__name__)


def init_index_database(db_path: str | Path = ":memory:") -> SqliteExtDatabase:
    """Инициализирует SQLite БД для индекса.

    Args:
        db_path: Путь к файлу БД или ":memory:".

    Returns:
        Подключённый SqliteExtDatabase.

    Raises:
        SearchBackendError: Если SQLite собран без FTS5.
    """
    logger.info("Initializing index database", path=str(db_path))

    pragmas = {"cache_size": -1024 * 16, "synchronous": 0}
    if str(db_path) != ":memory:":
        pragmas["journal_mode"] = "wal"

    database = SqliteExtDatabase(str(db_path), pragmas=pragmas)
    database.connect(reuse_if_open=True)

    if not FTS5Model.fts5_installed():
        database.close()
        raise SearchBackendError("SQLite FTS5 extension is not available", backend="sqlite")

    return database
