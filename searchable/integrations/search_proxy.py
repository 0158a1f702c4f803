"""Прокси-объект для выполнения поисковых запросов.

Классы:
    SearchProxy
        Поиск по коллекции модели и обслуживание её индекса.
"""

from typing import Optional, TYPE_CHECKING

from peewee import ModelSelect

from searchable.domain import LifecycleEvent, SearchResultSet
from searchable.integrations.peewee.query import KeyInput, search
from searchable.integrations.peewee.utils import iter_for_indexing
from searchable.interfaces import QueryCallback
from searchable.utils.logger import get_logger

if TYPE_CHECKING:
    from searchable.integrations.base import SearchIndex

logger = get_logger(__name__)


class SearchProxy:
    """Прокси для поиска и обслуживания индекса модели.

    Пример:
        >>> query = Article.search.query(lambda q: q.match("python").limit(20))
        >>> for article in query.where(Article.published == True):
        ...     print(article.title)

    Attributes:
        model: Класс ORM модели.
        descriptor: Родительский дескриптор SearchIndex.
    """

    def __init__(self, model: type, descriptor: "SearchIndex"):
        self.model = model
        self.descriptor = descriptor

    @property
    def index_type(self) -> str:
        return self.descriptor.projector.index_type(self.model)

    def hits(self, build: QueryCallback) -> SearchResultSet:
        """Выполняет поиск и возвращает сырую выдачу индекса.

        Args:
            build: Callback, заполняющий SearchQuery.

        Returns:
            SearchResultSet в порядке релевантности.
        """
        return self.descriptor.client.search(self.index_type, build)

    def query(
        self,
        build: QueryCallback,
        key: KeyInput = None,
        sort_by_relevance: Optional[bool] = None,
        query: Optional[ModelSelect] = None,
    ) -> ModelSelect:
        """Ограничивает запрос к модели выдачей поиска.

        Args:
            build: Callback, заполняющий SearchQuery.
            key: Поле для извлечения значений и ограничения.
            sort_by_relevance: Сортировать ли по релевантности
                (по умолчанию настройка дескриптора).
            query: Отложенный запрос (по умолчанию model.select()).

        Returns:
            Переписанный ModelSelect, не выполненный.
        """
        if sort_by_relevance is None:
            sort_by_relevance = self.descriptor.sort_by_relevance

        return search(
            query if query is not None else self.model.select(),
            self.model,
            self.descriptor.client,
            build,
            key=key,
            sort_by_relevance=sort_by_relevance,
            projector=self.descriptor.projector,
        )

    def reindex(self, batch_size: int = 500) -> int:
        """Индексирует все строки модели заново.

        Связи из eager_loaded подгружаются пачками. Ошибки отдельных
        строк логируются и не прерывают обход.

        Args:
            batch_size: Размер пачки.

        Returns:
            Количество успешно проиндексированных строк.
        """
        log = logger.bind(index_type=self.index_type)
        log.info("Reindex started", batch_size=batch_size)

        binder = self.descriptor.binder
        indexed = 0
        failed = 0

        relations = self.descriptor.projector.eager_loaded()
        for instance in iter_for_indexing(self.model, relations, batch_size):
            if binder.notify(LifecycleEvent.SAVED, instance) is None:
                failed += 1
            else:
                indexed += 1

        log.info("Reindex finished", indexed=indexed, failed=failed)
        return indexed

    def flush(self) -> int:
        """Удаляет все документы коллекции модели.

        Returns:
            Количество удалённых документов.
        """
        removed = self.descriptor.indexer.drop(self.index_type)
        logger.info("Index flushed", index_type=self.index_type, removed=removed)
        return removed

    def count(self) -> int:
        """Количество документов коллекции модели в индексе."""
        return self.descriptor.indexer.count(self.index_type)
