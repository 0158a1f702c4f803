"""Фильтры логирования для безопасности.

Классы:
    SensitiveDataFilter
        Фильтр для маскирования паролей, токенов и ключей в логах.
"""

import logging
import re
from typing import Pattern

# Пароль в DSN сохраняем как группу-префикс, маскируем только секрет
DSN_PASSWORD_PATTERN: Pattern[str] = re.compile(
    r"(?P<prefix>[a-z][a-z0-9+.-]*://[^:/\s@]+:)[^@\s]+(?=@)"
)

SENSITIVE_PATTERNS: list[Pattern[str]] = [
    re.compile(r"(?i)bearer\s+[a-zA-Z0-9._~+/=-]{16,}"),  # Bearer tokens
    re.compile(r"(?i)(?:api[_-]?key|password|secret)=[^\s&]+"),  # query-string секреты
    re.compile(r"key-[0-9a-zA-Z]{32,}"),  # Generic API Key
]

REDACTED: str = "***REDACTED***"


class SensitiveDataFilter(logging.Filter):
    """Маскирует секреты в record.msg и record.args.

    Запись никогда не отбрасывается, только модифицируется.

    Attributes:
        patterns: Список скомпилированных regex-паттернов для поиска.
        redacted: Строка замены для найденных секретов.
    """

    def __init__(
        self,
        patterns: list[Pattern[str]] | None = None,
        redacted: str = REDACTED,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.patterns = patterns or SENSITIVE_PATTERNS
        self.redacted = redacted

    def _redact_string(self, text: str) -> str:
        """Маскирует все секреты в строке.

        Args:
            text: Исходная строка.

        Returns:
            Строка с замаскированными секретами.
        """
        result = DSN_PASSWORD_PATTERN.sub(
            lambda m: f"{m.group('prefix')}{self.redacted}", text
        )
        for pattern in self.patterns:
            result = pattern.sub(self.redacted, result)
        return result

    def _redact_value(self, value: object) -> object:
        """Рекурсивно маскирует секреты в значении."""
        if isinstance(value, str):
            return self._redact_string(value)
        elif isinstance(value, dict):
            return {k: self._redact_value(v) for k, v in value.items()}
        elif isinstance(value, (list, tuple)):
            redacted_items = [self._redact_value(item) for item in value]
            return type(value)(redacted_items)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        """Фильтрует запись, маскируя секреты.

        Args:
            record: Запись лога.

        Returns:
            True всегда.
        """
        if isinstance(record.msg, str):
            record.msg = self._redact_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        return True
