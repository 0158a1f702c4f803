"""Семантический логгер с поддержкой контекста.

Классы:
    SearchableLogger
        Адаптер над logging.Logger с привязкой контекста (bind).
"""

from __future__ import annotations

import logging
import traceback
from typing import Any

from .levels import TRACE
from .formatters import CONTEXT_ID_KEYS, LEVEL_EMOJI, PREFIXED_ATTR, get_module_emoji


class SearchableLogger:
    """Адаптер для структурированного логирования с контекстом.

    Контекст передаётся именованными аргументами и попадает в extra
    записи. Ключи из CONTEXT_ID_KEYS дополнительно выводятся префиксом.

    Attributes:
        name: Имя логгера.
        _logger: Обёрнутый logging.Logger.
        _context: Привязанный контекст для всех сообщений.

    Example:
        >>> logger = SearchableLogger("searchable.integrations.lifecycle")
        >>> log = logger.bind(index_type="articles")
        >>> log.info("Document indexed", doc_key=42)  # -> 🔔 [articles/42] Document indexed
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = context or {}

    def bind(self, **context: Any) -> SearchableLogger:
        """Создаёт новый логгер с дополнительным контекстом.

        Args:
            **context: Ключи контекста (index_type, doc_key, request_id, ...).

        Returns:
            Новый SearchableLogger с объединённым контекстом.
        """
        merged_context = {**self._context, **context}
        return SearchableLogger(self.name, merged_context)

    def _log(self, level: int, msg: str, **context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return

        extra = {**self._context, **context}

        # RichHandler не использует наш форматтер, поэтому префикс вшиваем в сообщение
        context_ids = [
            str(extra[key])
            for key in CONTEXT_ID_KEYS
            if extra.get(key) is not None and extra.get(key) != ""
        ]
        context_prefix = f"[{'/'.join(context_ids)}] " if context_ids else ""

        emoji = LEVEL_EMOJI.get(level, "") or get_module_emoji(self.name)

        self._logger.log(
            level,
            f"{emoji} {context_prefix}{msg}",
            extra={**extra, PREFIXED_ATTR: True},
        )

    def trace(self, msg: str, **context: Any) -> None:
        """Логирование на уровне TRACE (5): дампы документов и запросов."""
        self._log(TRACE, msg, **context)

    def debug(self, msg: str, **context: Any) -> None:
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(logging.ERROR, msg, **context)

    def critical(self, msg: str, **context: Any) -> None:
        self._log(logging.CRITICAL, msg, **context)

    def error_with_context(
        self,
        exc: BaseException,
        msg: str | None = None,
        *,
        include_traceback: bool = True,
        **context: Any,
    ) -> None:
        """Логирование исключения с расширенным контекстом.

        Args:
            exc: Исключение.
            msg: Сообщение (по умолчанию str(exc)).
            include_traceback: Включить traceback в контекст.
            **context: Дополнительный контекст.
        """
        error_context = {
            "exception_type": type(exc).__name__,
            "exception_msg": str(exc),
            **context,
        }

        if include_traceback:
            error_context["traceback"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            )

        self.error(msg or str(exc), **error_context)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def level(self) -> int:
        """Эффективный уровень логгера."""
        return self._logger.getEffectiveLevel()
