"""События жизненного цикла и действия индексации.

Классы:
    LifecycleEvent
        Перечисление событий жизненного цикла сущности.
    IndexDocument
        Действие "проиндексировать документ".
    RemoveDocument
        Действие "удалить документ из индекса".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from searchable.domain.document import Document


class LifecycleEvent(str, Enum):
    """Событие жизненного цикла сущности.

    Attributes:
        CREATED: Строка создана.
        SAVED: Явное сохранение.
        UPDATED: Строка обновлена.
        DELETED: Строка удалена.
        RESTORED: Строка восстановлена после мягкого удаления.
    """

    CREATED = "created"
    SAVED = "saved"
    UPDATED = "updated"
    DELETED = "deleted"
    RESTORED = "restored"

    @property
    def removes(self) -> bool:
        """True если событие ведёт к удалению документа из индекса."""
        return self is LifecycleEvent.DELETED


@dataclass(frozen=True)
class IndexDocument:
    """Проиндексировать (или переиндексировать) документ.

    Attributes:
        document: Свежая проекция сущности на момент события.
    """

    document: Document

    @property
    def index_type(self) -> str:
        return self.document.index_type

    @property
    def key(self) -> Any:
        return self.document.key


@dataclass(frozen=True)
class RemoveDocument:
    """Удалить документ из индекса.

    Тело документа не передаётся: к моменту удаления его может уже не быть.

    Attributes:
        index_type: Коллекция в индексе.
        key: Ключ документа.
    """

    index_type: str
    key: Any


IndexAction = Union[IndexDocument, RemoveDocument]
