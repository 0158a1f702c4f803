"""Модель результата поиска.

Классы:
    SearchHit
        Одно совпадение из индекса.
    SearchResultSet
        Упорядоченный по релевантности набор совпадений.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional


@dataclass
class SearchHit:
    """Совпадение в поисковом индексе.

    Attributes:
        key: Ключ документа.
        score: Релевантность (чем больше, тем лучше).
        fields: Сохранённые поля документа.
    """

    key: Any
    score: float = 0.0
    fields: dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        """Значение поля документа по имени."""
        return self.fields.get(name, default)


class SearchResultSet:
    """Упорядоченный набор совпадений одного поискового запроса.

    Совпадения идут в порядке релевантности, в котором их вернул
    индекс. Набор потребляется один раз: из него сразу извлекаются ключи.

    Attributes:
        index_type: Коллекция, по которой выполнялся поиск.
        total: Количество совпадений до применения limit.
    """

    def __init__(
        self,
        hits: Iterable[SearchHit] = (),
        index_type: Optional[str] = None,
        total: Optional[int] = None,
    ):
        self._hits: list[SearchHit] = list(hits)
        self.index_type = index_type
        self.total = len(self._hits) if total is None else total

    def __iter__(self) -> Iterator[SearchHit]:
        return iter(self._hits)

    def __len__(self) -> int:
        return len(self._hits)

    def __getitem__(self, index: int) -> SearchHit:
        return self._hits[index]

    def is_empty(self) -> bool:
        return not self._hits

    def keys(self) -> list[Any]:
        """Ключи документов в порядке релевантности."""
        return [hit.key for hit in self._hits]

    def pluck(self, name: str) -> list[Any]:
        """Значения поля в порядке релевантности.

        Совпадения без поля (или с None) пропускаются.

        Args:
            name: Имя поля документа.

        Returns:
            Список значений.
        """
        values = []
        for hit in self._hits:
            value = hit.fields.get(name)
            if value is not None:
                values.append(value)
        return values

    def __repr__(self) -> str:
        return (
            f"SearchResultSet(index_type='{self.index_type}', "
            f"hits={len(self._hits)}, total={self.total})"
        )
