"""Интерфейсы поискового индекса.

Классы:
    BaseSearchClient
        ABC для выполнения поисковых запросов.
    BaseIndexer
        ABC для приёмника индексации (index/remove).
    BaseSearchBackend
        Backend, совмещающий оба контракта.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, Optional

from searchable.domain import SearchQuery, SearchResultSet

QueryCallback = Callable[[SearchQuery], Optional[SearchQuery]]


class BaseSearchClient(ABC):
    """Контракт поискового клиента.

    Скрывает детали движка: интеграция с ORM видит только упорядоченный
    SearchResultSet.
    """

    default_limit: Optional[int] = None

    def search(self, index_type: str, build: QueryCallback) -> SearchResultSet:
        """Строит запрос через callback и выполняет его.

        Args:
            index_type: Коллекция, в которой искать.
            build: Callback, заполняющий SearchQuery. Может вернуть
                запрос или None (тогда используется переданный объект).

        Returns:
            SearchResultSet в порядке релевантности.
        """
        query = SearchQuery(index_type=index_type, size=self.default_limit)
        built = build(query)
        return self.execute(built if built is not None else query)

    @abstractmethod
    def execute(self, query: SearchQuery) -> SearchResultSet:
        """Выполняет готовый запрос.

        Args:
            query: Заполненный SearchQuery.

        Returns:
            SearchResultSet в порядке релевантности.
        """
        raise NotImplementedError


class BaseIndexer(ABC):
    """Приёмник индексации.

    Работает по принципу best-effort: вызывающий код не ждёт
    подтверждения и не повторяет попытки.
    """

    @abstractmethod
    def index(self, index_type: str, key: Any, fields: Mapping[str, Any]) -> None:
        """Добавляет или заменяет документ.

        Args:
            index_type: Коллекция в индексе.
            key: Ключ документа.
            fields: Поля документа.
        """
        raise NotImplementedError

    @abstractmethod
    def remove(self, index_type: str, key: Any) -> None:
        """Удаляет документ. Отсутствующий документ не является ошибкой."""
        raise NotImplementedError

    @abstractmethod
    def drop(self, index_type: str) -> int:
        """Удаляет все документы коллекции.

        Returns:
            Количество удалённых документов.
        """
        raise NotImplementedError

    @abstractmethod
    def count(self, index_type: str) -> int:
        """Количество документов в коллекции."""
        raise NotImplementedError


class BaseSearchBackend(BaseSearchClient, BaseIndexer):
    """Backend, который одновременно ищет и индексирует."""

    name: str = "base"
