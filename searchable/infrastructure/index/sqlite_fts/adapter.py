"""Поисковый backend на SQLite FTS5.

Классы:
    SqliteFtsSearchBackend
        Реализация BaseSearchBackend поверх peewee FTS5Model.

Функции:
    sanitize_fts_query(query: str) -> str
        Экранирует пользовательский запрос для FTS5 MATCH.
"""

import json
from typing import Any, Mapping, Optional

from peewee import SQL, fn
from playhouse.sqlite_ext import SqliteExtDatabase

from searchable.domain import SearchHit, SearchQuery, SearchResultSet
from searchable.infrastructure.index.sqlite_fts.models import IndexedDocumentModel
from searchable.interfaces import BaseSearchBackend
from searchable.utils.logger import get_logger

logger = get_logger(__name__)


def sanitize_fts_query(query: str) -> str:
    """Экранирует запрос для FTS5.

    Каждый токен оборачивается в кавычки, поэтому операторы FTS5
    (`-`, `*`, `OR`, `NEAR`, `col:`) трактуются как обычный текст.
    Токены объединяются неявным AND.

    Args:
        query: Пользовательский запрос.

    Returns:
        Экранированный запрос для FTS5 MATCH.
    """
    tokens = []
    for token in query.split():
        token = token.replace('"', '""')
        tokens.append(f'"{token}"')
    return " ".join(tokens)


def _content_of(fields: Mapping[str, Any]) -> str:
    return " ".join(str(value) for value in fields.values() if value is not None)


class SqliteFtsSearchBackend(BaseSearchBackend):
    """Полнотекстовый индекс на SQLite FTS5 с ранжированием bm25.

    Ключ документа хранится в JSON payload вместе с полями, поэтому
    результаты возвращают ключи исходного типа (int остаётся int).

    Attributes:
        db: Подключённая SqliteExtDatabase.
        default_limit: Лимит совпадений, если запрос его не задал.
    """

    name = "sqlite"

    def __init__(self, database: SqliteExtDatabase, default_limit: Optional[int] = None):
        self.db = database
        self.default_limit = default_limit

        IndexedDocumentModel._meta.database = self.db
        self.db.create_tables([IndexedDocumentModel], safe=True)

        logger.debug("SqliteFtsSearchBackend initialized", database=str(self.db.database))

    def _scope(self, index_type: str):
        return IndexedDocumentModel.index_type == index_type

    def _document(self, index_type: str, key: Any):
        return self._scope(index_type) & (IndexedDocumentModel.doc_key == str(key))

    def index(self, index_type: str, key: Any, fields: Mapping[str, Any]) -> None:
        payload = json.dumps({"key": key, "fields": dict(fields)}, ensure_ascii=False, default=str)

        with self.db.atomic():
            IndexedDocumentModel.delete().where(self._document(index_type, key)).execute()
            IndexedDocumentModel.insert(
                index_type=index_type,
                doc_key=str(key),
                payload=payload,
                content=_content_of(fields),
            ).execute()

        logger.trace("Document stored", index_type=index_type, doc_key=key)

    def remove(self, index_type: str, key: Any) -> None:
        IndexedDocumentModel.delete().where(self._document(index_type, key)).execute()

    def drop(self, index_type: str) -> int:
        return IndexedDocumentModel.delete().where(self._scope(index_type)).execute()

    def count(self, index_type: str) -> int:
        return IndexedDocumentModel.select().where(self._scope(index_type)).count()

    def execute(self, query: SearchQuery) -> SearchResultSet:
        model = IndexedDocumentModel
        condition = self._scope(query.index_type)

        for name, value in query.filters.items():
            path = '$.fields."{}"'.format(name.replace('"', '\\"'))
            condition &= fn.json_extract(model.payload, path) == value

        if query.text and query.text.strip():
            condition &= model.match(sanitize_fts_query(query.text))
            # bm25 в FTS5 отрицательный: чем меньше, тем релевантнее
            select = model.select(model.payload, model.bm25().alias("rank")).where(condition)
            select = select.order_by(model.bm25(), SQL("rowid"))
        else:
            select = model.select(model.payload, SQL("0").alias("rank")).where(condition)
            select = select.order_by(SQL("rowid"))

        total = select.count()

        if query.start:
            select = select.offset(query.start)
        if query.size is not None:
            select = select.limit(query.size)

        hits = []
        for row in select.dicts():
            payload = json.loads(row["payload"])
            hits.append(
                SearchHit(
                    key=payload["key"],
                    score=-float(row["rank"] or 0.0),
                    fields=payload["fields"],
                )
            )

        logger.debug(
            "Search executed",
            index_type=query.index_type,
            total=total,
            returned=len(hits),
        )
        return SearchResultSet(hits, index_type=query.index_type, total=total)
