"""Модель поискового документа.

Классы:
    Document
        Типизированная проекция атрибутов сущности для индексации.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Document:
    """Документ для поискового индекса.

    Создаётся заново при каждой проекции и после передачи в индексатор
    больше не используется. Не привязан к ORM, чистый DTO.

    Attributes:
        index_type: Коллекция (тип) в индексе, обычно имя таблицы.
        key: Уникальный ключ сущности (обычно первичный ключ).
        fields: Приведённые атрибуты в порядке исходной модели.
    """

    index_type: str
    key: Any
    fields: dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return (
            f"Document(index_type='{self.index_type}', key={self.key!r}, "
            f"fields={len(self.fields)})"
        )
