"""Исключения пакета.

Классы:
    SearchableError
        Базовое исключение.
    ConfigurationError
        Некорректная конфигурация (неизвестный backend, модель не найдена).
    SearchBackendError
        Ошибка поискового backend'а (например, нет FTS5).
"""


class SearchableError(Exception):
    """Базовое исключение пакета searchable."""


class ConfigurationError(SearchableError):
    """Некорректная конфигурация интеграции или CLI."""


class SearchBackendError(SearchableError):
    """Ошибка поискового backend'а.

    Attributes:
        backend: Имя backend'а, в котором возникла ошибка.
    """

    def __init__(self, message: str, backend: str | None = None):
        super().__init__(message)
        self.backend = backend
