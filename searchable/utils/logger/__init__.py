"""Семантическое логирование с эмодзи и фильтрацией секретов.

Функции:
    get_logger(name: str) -> SearchableLogger
        Получить настроенный логгер для модуля.

    setup_logging(config: LoggingConfig | None = None) -> None
        Инициализировать систему логирования.

    dump_debug_info(config: LoggingConfig | None = None) -> str
        Собрать диагностическую информацию для баг-репортов.

Классы:
    SearchableLogger
        Адаптер с поддержкой контекста (bind).

    LoggingConfig
        Pydantic-модель конфигурации с поддержкой environment variables.

Example:
    >>> from searchable.utils.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> log = logger.bind(index_type="articles")
    >>> log.info("Reindex started")  # -> 🔍 [articles] Reindex started
"""

import logging

from rich.logging import RichHandler

from .config import LoggingConfig
from .filters import SensitiveDataFilter
from .formatters import FileFormatter, JSONFormatter
from .levels import TRACE, install_trace_level
from .logger import SearchableLogger
from .diagnostics import ROOT_LOGGER_NAME, dump_debug_info, check_config, get_handlers_info

install_trace_level()

_logging_configured: bool = False
_current_config: LoggingConfig | None = None


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Инициализирует систему логирования.

    Настраивает:
    - RichHandler для консоли
    - FileHandler для файла (опционально)
    - SensitiveDataFilter для маскирования секретов

    Args:
        config: Конфигурация логирования. Если None, используются дефолты.

    Note:
        Безопасно вызывать повторно: старые хендлеры будут удалены.
    """
    global _logging_configured, _current_config

    config = config or LoggingConfig()
    _current_config = config

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # TRACE чтобы не фильтровать раньше хендлеров
    root_logger.setLevel(TRACE)

    sensitive_filter = SensitiveDataFilter() if config.redact_secrets else None

    # markup=False: иначе [articles/42] интерпретируется как style tag
    console_handler = RichHandler(
        level=logging.getLevelName(config.level),
        show_time=True,
        show_level=False,
        show_path=config.show_path,
        rich_tracebacks=True,
        markup=False,
    )
    if sensitive_filter:
        console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.getLevelName(config.file_level))
        file_handler.setFormatter(FileFormatter(json_context=config.json_format))
        if sensitive_filter:
            file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)

    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> SearchableLogger:
    """Получить настроенный логгер для модуля.

    При первом вызове лениво инициализирует логирование с дефолтами.

    Args:
        name: Имя модуля (обычно __name__).

    Returns:
        SearchableLogger с поддержкой контекста и эмодзи.
    """
    if not _logging_configured:
        setup_logging()

    return SearchableLogger(name)


def get_current_config() -> LoggingConfig:
    """Активная LoggingConfig или дефолтная, если логирование не настроено."""
    return _current_config or LoggingConfig()


__all__ = [
    "TRACE",
    "get_logger",
    "setup_logging",
    "get_current_config",
    "dump_debug_info",
    "check_config",
    "get_handlers_info",
    "SearchableLogger",
    "LoggingConfig",
    "FileFormatter",
    "JSONFormatter",
    "SensitiveDataFilter",
]
