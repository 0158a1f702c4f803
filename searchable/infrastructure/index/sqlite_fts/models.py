"""Внутренняя FTS5 модель индекса (скрыта от внешнего API).

Классы:
    IndexedDocumentModel
        Виртуальная таблица FTS5 с документами всех коллекций.
"""

from playhouse.sqlite_ext import FTS5Model, SearchField


class IndexedDocumentModel(FTS5Model):
    """Документ поискового индекса.

    Attributes:
        index_type: Коллекция (не индексируется).
        doc_key: Строковое представление ключа для замены и удаления.
        payload: JSON с типизированным ключом и полями документа.
        content: Текст всех полей для полнотекстового поиска.
    """

    index_type = SearchField(unindexed=True)
    doc_key = SearchField(unindexed=True)
    payload = SearchField(unindexed=True)
    content = SearchField()

    class Meta:
        database = None  # Будет установлена в адаптере
        table_name = "search_documents"
