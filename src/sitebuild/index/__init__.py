"""Content index storage and query foundations."""

from .repository import ContentIndex, PageFieldsRow, QueryResult

__all__ = ["ContentIndex", "PageFieldsRow", "QueryResult"]
