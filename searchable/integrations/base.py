"""Базовые классы для интеграции с ORM.

Классы:
    InstanceManager
        Менеджер индекса конкретного инстанса.
    SearchIndex
        Дескриптор для добавления поиска к Peewee моделям.
"""

from typing import Any, Callable, Mapping, Optional, TYPE_CHECKING

from peewee import Model

from searchable.domain import Document, IndexAction, LifecycleEvent
from searchable.exceptions import ConfigurationError
from searchable.integrations.lifecycle import LifecycleBinder
from searchable.integrations.projector import DocumentProjector, SearchableOptions
from searchable.interfaces import BaseIndexer, BaseSearchClient

if TYPE_CHECKING:
    from searchable.integrations.search_proxy import SearchProxy


class InstanceManager:
    """Менеджер для управления индексом конкретного инстанса.

    Возвращается при обращении к дескриптору через инстанс. В отличие от
    автоматических хуков, ошибки индексатора здесь пробрасываются.

    Attributes:
        instance: ORM инстанс.
        descriptor: Родительский дескриптор SearchIndex.
    """

    def __init__(self, instance: Any, descriptor: "SearchIndex"):
        self.instance = instance
        self.descriptor = descriptor

    def document(self) -> Document:
        """Проекция инстанса без записи в индекс."""
        return self.descriptor.projector.build(self.instance)

    def update(self) -> IndexAction:
        """Переиндексирует текущий инстанс."""
        binder = self.descriptor.binder
        action = binder.action_for(LifecycleEvent.SAVED, self.instance)
        binder.apply(action)
        return action

    def delete(self) -> IndexAction:
        """Удаляет документ инстанса из индекса."""
        binder = self.descriptor.binder
        action = binder.action_for(LifecycleEvent.DELETED, self.instance)
        binder.apply(action)
        return action


class SearchIndex:
    """Дескриптор для добавления поиска к Peewee моделям.

    При создании класса модели регистрирует хуки автоиндексации, при
    доступе через класс возвращает SearchProxy, а через инстанс
    InstanceManager. Поисковый клиент передаётся явно, глобального
    состояния нет.

    Пример:
        >>> from peewee import Model, CharField, BooleanField
        >>> from searchable import SearchIndex, InMemorySearchBackend
        >>>
        >>> backend = InMemorySearchBackend()
        >>>
        >>> class Article(Model):
        ...     title = CharField()
        ...     published = BooleanField(default=False)
        ...
        ...     search = SearchIndex(
        ...         client=backend,
        ...         data_types={"id": "integer", "published": "boolean"},
        ...     )
        >>>
        >>> # Class access - поиск с сохранением релевантности
        >>> query = Article.search.query(lambda q: q.match("python"))
        >>>
        >>> # Instance access - управление индексом
        >>> Article.get_by_id(1).search.update()

    Attributes:
        client: Поисковый клиент.
        indexer: Приёмник индексации (по умолчанию сам клиент).
        projector: DocumentProjector вида сущности.
        binder: LifecycleBinder для событий модели.
        sort_by_relevance: Значение по умолчанию для SearchProxy.query().
        name: Имя дескриптора (устанавливается автоматически).
        owner: Класс-владелец (устанавливается автоматически).
    """

    def __init__(
        self,
        client: BaseSearchClient,
        data_types: Optional[Mapping[str, Any]] = None,
        index_type: Optional[str] = None,
        search_key: Optional[str] = None,
        eager_loaded: tuple[str, ...] = (),
        attributes: Optional[Callable[[Any], Mapping[str, Any]]] = None,
        projector: Optional[DocumentProjector] = None,
        indexer: Optional[BaseIndexer] = None,
        sort_by_relevance: bool = True,
        auto_index: bool = True,
    ):
        if indexer is None:
            if not isinstance(client, BaseIndexer):
                raise ConfigurationError("indexer is required when client cannot index documents")
            indexer = client

        self.client = client
        self.indexer = indexer
        self.projector = projector or DocumentProjector(
            SearchableOptions(
                data_types=data_types,
                index_type=index_type,
                search_key=search_key,
                eager_loaded=tuple(eager_loaded),
                attributes=attributes,
            )
        )
        self.binder = LifecycleBinder(self.projector, self.indexer)
        self.sort_by_relevance = sort_by_relevance
        self.auto_index = auto_index
        self.name: Optional[str] = None
        self.owner: Optional[type] = None

    def __set_name__(self, owner: type, name: str) -> None:
        """Регистрирует дескриптор при создании класса.

        Args:
            owner: Класс-владелец дескриптора.
            name: Имя атрибута дескриптора.
        """
        self.name = name
        self.owner = owner

        if self.auto_index and issubclass(owner, Model):
            from searchable.integrations.peewee.adapter import register_model

            register_model(owner, self)

    def __get__(self, instance: Any, owner: type) -> "SearchProxy | InstanceManager":
        if instance is None:
            from searchable.integrations.search_proxy import SearchProxy

            return SearchProxy(model=owner, descriptor=self)
        return InstanceManager(instance=instance, descriptor=self)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"Cannot set attribute '{self.name}'")
