"""Связка событий жизненного цикла с индексацией.

Классы:
    LifecycleBinder
        Превращает события сущности в действия индексации.
"""

from typing import Any, Optional, Union

from searchable.domain import IndexAction, IndexDocument, LifecycleEvent, RemoveDocument
from searchable.integrations.projector import DocumentProjector
from searchable.interfaces import BaseIndexer
from searchable.utils.logger import get_logger

logger = get_logger(__name__)


class LifecycleBinder:
    """Превращает события жизненного цикла в действия индексации.

    created/saved/updated/restored -> IndexDocument со свежей проекцией,
    deleted -> RemoveDocument (только коллекция и ключ).

    Уведомления через on_* работают по принципу fire-and-forget: ошибка
    индексации логируется и учитывается в failures, но никогда не
    пробрасывается в операцию записи, которая её вызвала.

    Attributes:
        projector: DocumentProjector вида сущности.
        indexer: Приёмник индексации.
        failures: Количество неудачных уведомлений.

    Example:
        >>> binder = LifecycleBinder(DocumentProjector(), backend)
        >>> binder.on_created(article)
        IndexDocument(document=Document(index_type='article', key=1, fields=3))
    """

    def __init__(self, projector: DocumentProjector, indexer: BaseIndexer):
        self.projector = projector
        self.indexer = indexer
        self.failures = 0

    def action_for(
        self, event: Union[LifecycleEvent, str], entity: Any
    ) -> IndexAction:
        """Действие для события (без побочных эффектов).

        Args:
            event: Событие жизненного цикла.
            entity: Затронутая сущность.

        Returns:
            IndexDocument или RemoveDocument.
        """
        event = LifecycleEvent(event)

        if event.removes:
            return RemoveDocument(
                index_type=self.projector.index_type(entity),
                key=self.projector.search_key(entity),
            )
        return IndexDocument(document=self.projector.build(entity))

    def apply(self, action: IndexAction) -> None:
        """Передаёт действие в индексатор. Ошибки пробрасываются."""
        if isinstance(action, RemoveDocument):
            self.indexer.remove(action.index_type, action.key)
        else:
            document = action.document
            self.indexer.index(document.index_type, document.key, document.fields)

    def prepare(
        self, event: Union[LifecycleEvent, str], entity: Any
    ) -> Optional[IndexAction]:
        """Строит действие для события с изоляцией ошибок проекции.

        Позволяет снять ключ и коллекцию до операции записи, а доставить
        действие после неё (см. deliver).

        Returns:
            Действие или None, если проекция не удалась.
        """
        event = LifecycleEvent(event)

        try:
            return self.action_for(event, entity)
        except Exception as exc:
            self._record_failure(exc, event, entity)
            return None

    def deliver(
        self, event: Union[LifecycleEvent, str], entity: Any, action: IndexAction
    ) -> Optional[IndexAction]:
        """Передаёт готовое действие в индексатор с изоляцией ошибок.

        Returns:
            Выполненное действие или None, если индексация не удалась.
        """
        event = LifecycleEvent(event)

        try:
            self.apply(action)
        except Exception as exc:
            self._record_failure(exc, event, entity)
            return None

        logger.debug(
            "Index action applied",
            event=event.value,
            action=type(action).__name__,
            index_type=action.index_type,
            doc_key=action.key,
        )
        return action

    def notify(
        self, event: Union[LifecycleEvent, str], entity: Any
    ) -> Optional[IndexAction]:
        """Обрабатывает событие с изоляцией ошибок индексации.

        Args:
            event: Событие жизненного цикла.
            entity: Затронутая сущность.

        Returns:
            Выполненное действие или None, если индексация не удалась.
        """
        action = self.prepare(event, entity)
        if action is None:
            return None
        return self.deliver(event, entity, action)

    def _record_failure(self, exc: Exception, event: LifecycleEvent, entity: Any) -> None:
        # Индексация не участвует в транзакции записи
        self.failures += 1
        logger.error_with_context(
            exc,
            "Indexing failed, write operation is not affected",
            event=event.value,
            entity_type=type(entity).__name__,
        )

    def on_created(self, entity: Any) -> Optional[IndexAction]:
        return self.notify(LifecycleEvent.CREATED, entity)

    def on_saved(self, entity: Any) -> Optional[IndexAction]:
        return self.notify(LifecycleEvent.SAVED, entity)

    def on_updated(self, entity: Any) -> Optional[IndexAction]:
        return self.notify(LifecycleEvent.UPDATED, entity)

    def on_deleted(self, entity: Any) -> Optional[IndexAction]:
        return self.notify(LifecycleEvent.DELETED, entity)

    def on_restored(self, entity: Any) -> Optional[IndexAction]:
        return self.notify(LifecycleEvent.RESTORED, entity)
