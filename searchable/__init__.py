"""searchable — синхронизация Peewee моделей с поисковым индексом.

Архитектура:
    Domain: Чистые DTO (Document, SearchResultSet, LifecycleEvent).
    Interfaces: Контракты (BaseSearchClient, BaseIndexer).
    Infrastructure: Реализации (InMemorySearchBackend, SqliteFtsSearchBackend).
    Integrations: Проекция атрибутов, события жизненного цикла, перезапись запросов.

Пример:
    >>> from peewee import Model, CharField, BooleanField
    >>> from searchable import SearchIndex, create_backend
    >>>
    >>> backend = create_backend()
    >>>
    >>> class Article(Model):
    ...     title = CharField()
    ...     active = BooleanField(default=True)
    ...     search = SearchIndex(client=backend, data_types={"id": "integer", "active": "boolean"})
    >>>
    >>> Article.create(title="Python generators")  # индексируется автоматически
    >>> Article.search.query(lambda q: q.match("python")).where(Article.active == True)
"""

__version__ = "0.3.0"

from searchable.domain import (
    Document,
    FieldType,
    IndexDocument,
    LifecycleEvent,
    RemoveDocument,
    SearchHit,
    SearchQuery,
    SearchResultSet,
    coerce,
)
from searchable.exceptions import ConfigurationError, SearchableError, SearchBackendError
from searchable.interfaces import BaseIndexer, BaseSearchBackend, BaseSearchClient
from searchable.config import SearchableConfig, get_config
from searchable.infrastructure.index import (
    InMemorySearchBackend,
    SqliteFtsSearchBackend,
    create_backend,
    init_index_database,
)
from searchable.integrations import (
    DocumentProjector,
    InstanceManager,
    LifecycleBinder,
    SearchableOptions,
    SearchIndex,
    SearchProxy,
)
from searchable.integrations.peewee import rewrite_query, search

__all__ = [
    "__version__",
    # Domain
    "Document",
    "FieldType",
    "IndexDocument",
    "LifecycleEvent",
    "RemoveDocument",
    "SearchHit",
    "SearchQuery",
    "SearchResultSet",
    "coerce",
    # Exceptions
    "SearchableError",
    "ConfigurationError",
    "SearchBackendError",
    # Interfaces
    "BaseSearchClient",
    "BaseIndexer",
    "BaseSearchBackend",
    # Config
    "SearchableConfig",
    "get_config",
    # Infrastructure
    "InMemorySearchBackend",
    "SqliteFtsSearchBackend",
    "create_backend",
    "init_index_database",
    # Integrations
    "SearchIndex",
    "InstanceManager",
    "DocumentProjector",
    "SearchableOptions",
    "LifecycleBinder",
    "SearchProxy",
    "rewrite_query",
    "search",
]
