"""Доменный слой с чистыми объектами данных (DTO).

Классы:
    Document
        Типизированная проекция сущности для индекса.
    FieldType
        Перечисление типов полей документа.
    SearchHit
        Одно совпадение из индекса.
    SearchResultSet
        Упорядоченный по релевантности набор совпадений.
    SearchQuery
        Построитель поискового запроса.
    LifecycleEvent
        События жизненного цикла сущности.
    IndexDocument, RemoveDocument
        Действия индексации.
"""

from searchable.domain.document import Document
from searchable.domain.field_types import FieldType, coerce, resolve_field_type
from searchable.domain.search_result import SearchHit, SearchResultSet
from searchable.domain.search_query import SearchQuery
from searchable.domain.actions import (
    IndexAction,
    IndexDocument,
    LifecycleEvent,
    RemoveDocument,
)

__all__ = [
    "Document",
    "FieldType",
    "coerce",
    "resolve_field_type",
    "SearchHit",
    "SearchResultSet",
    "SearchQuery",
    "LifecycleEvent",
    "IndexAction",
    "IndexDocument",
    "RemoveDocument",
]
