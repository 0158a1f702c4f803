"""Утилиты для работы с Peewee ORM.

Функции:
    resolve_relations(model, names) -> list[type[Model]]
        Находит модели связей по именам полей и обратных ссылок.
    iter_for_indexing(model, relations, batch_size) -> Iterator[Model]
        Обходит все строки модели пачками с предзагрузкой связей.
"""

from typing import Iterable, Iterator

from peewee import ForeignKeyField, Model, prefetch

from searchable.exceptions import ConfigurationError


def resolve_relations(model: type[Model], names: Iterable[str]) -> list[type[Model]]:
    """Находит модели связей для prefetch.

    Имя может быть ForeignKeyField модели или backref внешнего ключа,
    указывающего на модель.

    Args:
        model: Класс Peewee модели.
        names: Имена связей.

    Returns:
        Список связанных моделей в порядке имён.

    Raises:
        ConfigurationError: Если связь не найдена.
    """
    related: list[type[Model]] = []

    for name in names:
        field = model._meta.fields.get(name)
        if isinstance(field, ForeignKeyField):
            related.append(field.rel_model)
            continue

        for foreign_key, rel_model in model._meta.backrefs.items():
            if foreign_key.backref == name:
                related.append(rel_model)
                break
        else:
            raise ConfigurationError(
                f"{model.__name__} has no relation named '{name}'"
            )

    return related


def iter_for_indexing(
    model: type[Model],
    relations: Iterable[str] = (),
    batch_size: int = 500,
) -> Iterator[Model]:
    """Обходит все строки модели пачками в порядке первичного ключа.

    Args:
        model: Класс Peewee модели.
        relations: Связи для предзагрузки (prefetch) в каждой пачке.
        batch_size: Размер пачки.

    Yields:
        Инстансы модели с подгруженными связями.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    related = resolve_relations(model, relations)
    query = model.select().order_by(model._meta.primary_key)

    page = 1
    while True:
        batch_query = query.paginate(page, batch_size)
        rows = prefetch(batch_query, *related) if related else list(batch_query)
        if not rows:
            return

        yield from rows

        if len(rows) < batch_size:
            return
        page += 1
