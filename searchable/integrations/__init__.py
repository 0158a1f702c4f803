"""Слой интеграции с ORM.

Классы:
    SearchIndex
        Дескриптор для добавления поиска к Peewee моделям.
    DocumentProjector
        Строитель документов из ORM инстансов.
    SearchableOptions
        Возможности вида сущности для индексации.
    LifecycleBinder
        Связка событий жизненного цикла с индексацией.
    SearchProxy
        Прокси-объект для поиска и обслуживания индекса.
"""

from searchable.integrations.base import InstanceManager, SearchIndex
from searchable.integrations.lifecycle import LifecycleBinder
from searchable.integrations.projector import DocumentProjector, SearchableOptions
from searchable.integrations.search_proxy import SearchProxy

__all__ = [
    "SearchIndex",
    "InstanceManager",
    "DocumentProjector",
    "SearchableOptions",
    "LifecycleBinder",
    "SearchProxy",
]
