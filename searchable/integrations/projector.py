"""Проекция атрибутов сущности в поисковый документ.

Классы:
    SearchableOptions
        Набор возможностей вида сущности (типы полей, ключ, коллекция).
    DocumentProjector
        Строитель Document из ORM инстансов.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from peewee import Field, Model

from searchable.domain import Document, coerce

DEFAULT_DATA_TYPES: Mapping[str, str] = {"id": "integer"}


@dataclass
class SearchableOptions:
    """Возможности вида сущности для индексации.

    Attributes:
        data_types: Таблица типов поле -> тег (integer/string/float/boolean).
            None означает дефолт {"id": "integer"}, пустой словарь отключает приведение.
        index_type: Имя коллекции в индексе (по умолчанию имя таблицы).
        search_key: Имя поля с ключом документа (по умолчанию первичный ключ).
        eager_loaded: Связи, подгружаемые перед проекцией при массовой индексации.
        attributes: Callable, возвращающий снимок атрибутов вместо полного.
    """

    data_types: Optional[Mapping[str, Any]] = None
    index_type: Optional[str] = None
    search_key: Optional[str] = None
    eager_loaded: tuple[str, ...] = field(default_factory=tuple)
    attributes: Optional[Callable[[Any], Mapping[str, Any]]] = None


def _model_of(target: Any) -> type:
    return target if isinstance(target, type) else type(target)


class DocumentProjector:
    """Строитель документов из ORM инстансов.

    Каждый метод соответствует одной возможности вида сущности и может
    быть переопределён в подклассе. Проекция не имеет побочных эффектов.

    Attributes:
        options: SearchableOptions вида сущности.

    Example:
        >>> projector = DocumentProjector(
        ...     SearchableOptions(data_types={"id": "integer", "active": "boolean"})
        ... )
        >>> projector.transform_attributes({"id": "7", "active": "1", "name": "x"})
        {'id': 7, 'active': True, 'name': 'x'}
    """

    def __init__(self, options: Optional[SearchableOptions] = None):
        self.options = options or SearchableOptions()

    def indexable_attributes(self, instance: Any) -> dict[str, Any]:
        """Снимок текущих атрибутов сущности без фильтрации.

        Args:
            instance: Объект ORM модели.

        Returns:
            Новый словарь поле -> сырое значение.
        """
        if self.options.attributes is not None:
            return dict(self.options.attributes(instance))

        data = getattr(instance, "__data__", None)
        if isinstance(data, Mapping):
            return dict(data)

        # Не-peewee объекты: публичные атрибуты экземпляра
        return {k: v for k, v in vars(instance).items() if not k.startswith("_")}

    def search_data_types(self) -> dict[str, Any]:
        """Таблица типов полей для приведения."""
        if self.options.data_types is None:
            return dict(DEFAULT_DATA_TYPES)
        return dict(self.options.data_types)

    def transform_attributes(self, attributes: Mapping[str, Any]) -> dict[str, Any]:
        """Приводит значения полей к объявленным типам.

        Меняются только поля, которые есть и в attributes, и в таблице
        типов. Остальные проходят без изменений, порядок ключей сохраняется.

        Args:
            attributes: Сырые атрибуты сущности.

        Returns:
            Новый словарь с приведёнными значениями.
        """
        data_types = self.search_data_types()
        if not data_types:
            return dict(attributes)

        return {
            name: coerce(value, data_types[name]) if name in data_types else value
            for name, value in attributes.items()
        }

    def index_type(self, target: Any) -> str:
        """Коллекция в индексе для инстанса или класса модели."""
        if self.options.index_type:
            return self.options.index_type

        model = _model_of(target)
        meta = getattr(model, "_meta", None)
        table_name = getattr(meta, "table_name", None)
        return table_name or model.__name__.lower()

    def search_key_name(self, target: Any) -> str:
        """Имя поля, значение которого служит ключом документа."""
        if self.options.search_key:
            return self.options.search_key

        model = _model_of(target)
        meta = getattr(model, "_meta", None)
        primary_key = getattr(meta, "primary_key", None)
        if isinstance(primary_key, Field):
            return primary_key.name
        return "id"

    def search_key(self, instance: Any) -> Any:
        """Ключ документа (по умолчанию первичный ключ)."""
        return getattr(instance, self.search_key_name(instance), None)

    def relative_search_key(self, model: type[Model]) -> Field:
        """Поле ключа, квалифицированное таблицей (для JOIN'ов)."""
        return getattr(model, self.search_key_name(model))

    def eager_loaded(self) -> tuple[str, ...]:
        """Связи для предзагрузки перед проекцией."""
        return tuple(self.options.eager_loaded)

    def build(self, instance: Any) -> Document:
        """Строит Document из ORM инстанса.

        Args:
            instance: Объект ORM модели.

        Returns:
            Свежий Document на момент вызова.
        """
        return Document(
            index_type=self.index_type(instance),
            key=self.search_key(instance),
            fields=self.transform_attributes(self.indexable_attributes(instance)),
        )
