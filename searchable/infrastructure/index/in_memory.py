"""In-memory поисковый backend для тестов и локальной разработки.

Классы:
    InMemorySearchBackend
        Словарный индекс с подсчётом вхождений термов.
"""

import re
from typing import Any, Mapping, Optional

from searchable.domain import SearchHit, SearchQuery, SearchResultSet
from searchable.interfaces import BaseSearchBackend
from searchable.utils.logger import get_logger

logger = get_logger(__name__)

_TOKEN = re.compile(r"\w+", re.UNICODE)


class InMemorySearchBackend(BaseSearchBackend):
    """Простой индекс в памяти процесса.

    Скор совпадения равен числу вхождений термов запроса в строковые поля.
    При равном скоре сохраняется порядок добавления документов.

    Attributes:
        default_limit: Лимит совпадений, если запрос его не задал.
    """

    name = "memory"

    def __init__(self, default_limit: Optional[int] = None) -> None:
        self.default_limit = default_limit
        self._collections: dict[str, dict[Any, dict[str, Any]]] = {}

    def index(self, index_type: str, key: Any, fields: Mapping[str, Any]) -> None:
        collection = self._collections.setdefault(index_type, {})
        # Переиндексация перемещает документ в конец порядка добавления
        collection.pop(key, None)
        collection[key] = dict(fields)
        logger.trace("Document stored", index_type=index_type, doc_key=key)

    def remove(self, index_type: str, key: Any) -> None:
        collection = self._collections.get(index_type)
        if collection is not None:
            collection.pop(key, None)

    def drop(self, index_type: str) -> int:
        return len(self._collections.pop(index_type, {}))

    def count(self, index_type: str) -> int:
        return len(self._collections.get(index_type, {}))

    def get(self, index_type: str, key: Any) -> Optional[dict[str, Any]]:
        """Сохранённые поля документа или None."""
        document = self._collections.get(index_type, {}).get(key)
        return dict(document) if document is not None else None

    def execute(self, query: SearchQuery) -> SearchResultSet:
        collection = self._collections.get(query.index_type, {})
        terms = query.terms()

        scored: list[SearchHit] = []
        for key, fields in collection.items():
            if not self._match_filters(fields, query.filters):
                continue
            score = self._score(fields, terms) if terms else 0.0
            if terms and score <= 0:
                continue
            scored.append(SearchHit(key=key, score=score, fields=dict(fields)))

        # sort стабилен: при равном скоре остаётся порядок добавления
        scored.sort(key=lambda hit: hit.score, reverse=True)

        end = None if query.size is None else query.start + query.size
        page = scored[query.start:end]

        logger.debug(
            "Search executed",
            index_type=query.index_type,
            terms=len(terms),
            total=len(scored),
            returned=len(page),
        )
        return SearchResultSet(page, index_type=query.index_type, total=len(scored))

    @staticmethod
    def _score(fields: Mapping[str, Any], terms: list[str]) -> float:
        tokens: list[str] = []
        for value in fields.values():
            if isinstance(value, str):
                tokens.extend(token.lower() for token in _TOKEN.findall(value))
        return float(sum(tokens.count(term) for term in terms))

    @staticmethod
    def _match_filters(fields: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
        for name, expected in filters.items():
            if name not in fields:
                return False
            actual = fields[name]
            if actual != expected and str(actual) != str(expected):
                return False
        return True
