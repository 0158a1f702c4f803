"""Перезапись peewee-запроса по результатам поиска.

Функции:
    positional_order(field, values) -> Case
        Выражение позиционной сортировки по списку значений.
    rewrite_query(query, model, results, ...) -> ModelSelect
        Ограничивает запрос ключами из выдачи и сортирует по релевантности.
    search(query, model, client, build, ...) -> ModelSelect
        Выполняет поиск и переписывает запрос.
"""

from typing import Any, Optional, Sequence, Union

from peewee import Case, CompositeKey, Entity, Field, Model, ModelSelect, Node

from searchable.domain import SearchResultSet
from searchable.integrations.projector import DocumentProjector
from searchable.interfaces import BaseSearchClient, QueryCallback
from searchable.utils.logger import get_logger

logger = get_logger(__name__)

KeyInput = Union[str, Field, None]


def positional_order(field: Node, values: Sequence[Any]) -> Case:
    """Выражение позиционной сортировки.

    CASE field WHEN v0 THEN 0 WHEN v1 THEN 1 ... ELSE len(values) END.
    Для повторяющихся значений действует первая позиция, строки со
    значением вне списка получают последний ранг.

    Args:
        field: Колонка, по значению которой сортируются строки.
        values: Значения в порядке релевантности.

    Returns:
        peewee Case для ORDER BY.
    """
    ordinals: dict[Any, int] = {}
    for position, value in enumerate(values):
        ordinals.setdefault(value, position)

    return Case(field, list(ordinals.items()), len(values))


def _key_name(key: KeyInput) -> Optional[str]:
    if isinstance(key, Field):
        return key.name
    return key


def resolve_key_field(
    model: type[Model], key: KeyInput, projector: DocumentProjector
) -> Node:
    """Колонка для ограничения и сортировки.

    Без явного ключа: поле ключа модели, квалифицированное таблицей.
    С явным ключом: одноимённое поле модели или голая колонка.
    """
    if key is None:
        return projector.relative_search_key(model)
    if isinstance(key, Field):
        return key

    field = model._meta.fields.get(key)
    if field is not None:
        return field
    return Entity(key)


def rewrite_query(
    query: ModelSelect,
    model: type[Model],
    results: SearchResultSet,
    key: KeyInput = None,
    sort_by_relevance: bool = True,
    projector: Optional[DocumentProjector] = None,
) -> ModelSelect:
    """Ограничивает запрос ключами выдачи и сохраняет порядок релевантности.

    1. values — ключи выдачи (или значения поля key) в порядке релевантности.
    2. При sort_by_relevance и непустых values дописывается позиционная
       сортировка, затем первичный ключ для стабильности.
    3. Всегда дописывается WHERE field IN values. Пустая выдача даёт
       запрос без строк, а не запрос без ограничений.

    Args:
        query: Отложенный запрос (не выполняется).
        model: Класс модели запроса.
        results: Выдача поискового индекса.
        key: Поле для извлечения значений и ограничения (по умолчанию ключ документа).
        sort_by_relevance: Дописывать ли позиционную сортировку.
        projector: DocumentProjector вида сущности.

    Returns:
        Переписанный ModelSelect для дальнейшей композиции.
    """
    projector = projector or DocumentProjector()

    key_name = _key_name(key)
    values = results.keys() if key_name is None else results.pluck(key_name)
    field = resolve_key_field(model, key, projector)

    if sort_by_relevance and values:
        ordering = [positional_order(field, values).asc()]

        primary_key = model._meta.primary_key
        if isinstance(primary_key, Field) and not isinstance(primary_key, CompositeKey):
            ordering.append(primary_key.asc())

        query = query.order_by_extend(*ordering)

    return query.where(field.in_(values))


def search(
    query: ModelSelect,
    model: type[Model],
    client: BaseSearchClient,
    build: QueryCallback,
    key: KeyInput = None,
    sort_by_relevance: bool = True,
    projector: Optional[DocumentProjector] = None,
) -> ModelSelect:
    """Выполняет поиск в коллекции модели и переписывает запрос.

    Args:
        query: Отложенный запрос.
        model: Класс модели.
        client: Поисковый клиент.
        build: Callback, заполняющий SearchQuery.
        key: Поле для извлечения значений и ограничения.
        sort_by_relevance: Дописывать ли позиционную сортировку.
        projector: DocumentProjector вида сущности.

    Returns:
        Переписанный ModelSelect (не выполненный).
    """
    projector = projector or DocumentProjector()
    index_type = projector.index_type(model)

    results = client.search(index_type, build)

    logger.debug(
        "Search results received",
        index_type=index_type,
        hits=len(results),
        total=results.total,
        sort_by_relevance=sort_by_relevance,
    )

    return rewrite_query(
        query,
        model,
        results,
        key=key,
        sort_by_relevance=sort_by_relevance,
        projector=projector,
    )
