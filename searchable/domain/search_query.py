"""Построитель поискового запроса.

Классы:
    SearchQuery
        Описание одного запроса к индексу, заполняемое callback'ом.
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class SearchQuery:
    """Запрос к поисковому индексу.

    Передаётся в callback поиска, который заполняет его через
    цепочку методов. Backend читает поля и выполняет запрос.

    Attributes:
        index_type: Коллекция, по которой идёт поиск.
        text: Полнотекстовый запрос (None — все документы).
        filters: Фильтры на точное совпадение полей.
        size: Максимальное количество совпадений.
        start: Смещение от начала выдачи.

    Example:
        >>> client.search("articles", lambda q: q.match("python").filter(published=True))
    """

    index_type: str
    text: Optional[str] = None
    filters: dict[str, Any] = field(default_factory=dict)
    size: Optional[int] = None
    start: int = 0

    def match(self, text: str) -> "SearchQuery":
        self.text = text
        return self

    def filter(self, **fields: Any) -> "SearchQuery":
        self.filters.update(fields)
        return self

    def limit(self, size: int) -> "SearchQuery":
        if size < 0:
            raise ValueError(f"limit must be non-negative, got {size}")
        self.size = size
        return self

    def offset(self, start: int) -> "SearchQuery":
        if start < 0:
            raise ValueError(f"offset must be non-negative, got {start}")
        self.start = start
        return self

    def terms(self) -> list[str]:
        """Термы полнотекстового запроса в нижнем регистре."""
        if not self.text:
            return []
        return [term for term in self.text.lower().split() if term]
