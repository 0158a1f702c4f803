"""Форматтеры логирования с семантическими эмодзи.

Классы:
    FileFormatter
        Подробный форматтер для файлового вывода.

    JSONFormatter
        Структурированный JSON для агрегаторов логов.

Функции:
    get_module_emoji(logger_name: str) -> str
        Эмодзи по имени логгера.
"""

import json
import logging
from datetime import datetime
from typing import Any

from .levels import TRACE

# Маппинг частей имени модуля на эмодзи
EMOJI_MAP: dict[str, str] = {
    # Projection & documents
    "projector": "🧩",
    "base": "🧩",
    "field_types": "🧩",
    "domain": "🧩",
    # Lifecycle events
    "lifecycle": "🔔",
    "adapter": "🪝",
    # Index backends
    "index": "💾",
    "in_memory": "💾",
    "sqlite_fts": "💾",
    "engine": "🗄️",
    "models": "🗄️",
    "peewee": "🗄️",
    # Search & query rewriting
    "search": "🔍",
    "search_proxy": "🔍",
    "query": "🔍",
    # Config & CLI
    "config": "⚙️",
    "cli": "🖥️",
    "commands": "🖥️",
    "diagnostics": "🩺",
}

LEVEL_EMOJI: dict[int, str] = {
    logging.CRITICAL: "💀",
    logging.ERROR: "❌",
    logging.WARNING: "⚠️",
    logging.INFO: "",  # Для INFO используем эмодзи модуля
    logging.DEBUG: "🔧",
    TRACE: "🔬",
}

FALLBACK_EMOJI: str = "📌"

# Ключи контекста для отображения в префиксе
CONTEXT_ID_KEYS: tuple[str, ...] = (
    "request_id",
    "index_type",
    "doc_key",
)

# Запись от SearchableLogger: эмодзи и префикс уже в сообщении
PREFIXED_ATTR = "_searchable_prefixed"


def get_module_emoji(logger_name: str) -> str:
    """Определяет эмодзи по имени логгера.

    Совпадение ищется с конца имени (более специфичные модули важнее).

    Args:
        logger_name: Полное имя логгера (например, searchable.integrations.lifecycle).

    Returns:
        Эмодзи для модуля или FALLBACK_EMOJI.
    """
    parts = logger_name.lower().split(".")

    for part in reversed(parts):
        if part in EMOJI_MAP:
            return EMOJI_MAP[part]

    return FALLBACK_EMOJI


def format_context_prefix(record: logging.LogRecord) -> str:
    """Формирует префикс вида "[req-1/articles/42] " или пустую строку."""
    context_ids: list[str] = []

    for key in CONTEXT_ID_KEYS:
        value = getattr(record, key, None)
        if value is not None and value != "":
            context_ids.append(str(value))

    if context_ids:
        return f"[{'/'.join(context_ids)}] "
    return ""


# Стандартные поля LogRecord, которые не попадают в extra
_STANDARD_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


def format_extra_context(record: logging.LogRecord) -> dict[str, Any]:
    """Извлекает пользовательский контекст из записи.

    Args:
        record: Запись лога.

    Returns:
        Словарь с контекстом без стандартных полей и context-id ключей.
    """
    context_fields = set(CONTEXT_ID_KEYS)

    extra: dict[str, Any] = {}
    for key, value in record.__dict__.items():
        if key in _STANDARD_FIELDS or key in context_fields:
            continue
        if not key.startswith("_"):
            extra[key] = value

    return extra


class FileFormatter(logging.Formatter):
    """Подробный форматтер для файлового вывода.

    Формат: 2025-12-03 14:20:02 | LIFECYCLE | INFO | 🔔 [articles/42] Message | key=value
    """

    def __init__(self, json_context: bool = False) -> None:
        """Инициализирует форматтер.

        Args:
            json_context: Выводить контекст как JSON.
        """
        super().__init__()
        self.json_context = json_context

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        module = record.name.split(".")[-1].upper()
        message = record.getMessage()
        if not getattr(record, PREFIXED_ATTR, False):
            emoji = get_module_emoji(record.name)
            message = f"{emoji} {format_context_prefix(record)}{message}"
        extra = format_extra_context(record)

        parts = [time_str, module, record.levelname, message]

        if extra:
            if self.json_context:
                parts.append(json.dumps(extra, ensure_ascii=False, default=str))
            else:
                parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))

        result = " | ".join(parts)

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


class JSONFormatter(logging.Formatter):
    """JSON-форматтер для логов.

    Формат:
        {
            "timestamp": "2024-12-03T14:30:00.123Z",
            "level": "INFO",
            "logger": "searchable.integrations.lifecycle",
            "message": "Document indexed",
            "context": {"index_type": "articles", "doc_key": 42},
            "extra": {"event": "created"}
        }
    """

    def __init__(self, include_location: bool = True) -> None:
        super().__init__()
        self.include_location = include_location

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context: dict[str, Any] = {}
        for key in CONTEXT_ID_KEYS:
            value = getattr(record, key, None)
            if value is not None:
                context[key] = value
        if context:
            data["context"] = context

        extra = format_extra_context(record)
        if extra:
            data["extra"] = extra

        if self.include_location:
            data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(data, ensure_ascii=False, default=str)
