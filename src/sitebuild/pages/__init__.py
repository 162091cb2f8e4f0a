"""Page registration and materialization."""

from .materializer import PageQueryError, materialize_pages
from .registry import DuplicatePageError, PageRegistry, TemplateNotFoundError, TemplateResolver

__all__ = [
    "DuplicatePageError",
    "PageQueryError",
    "PageRegistry",
    "TemplateNotFoundError",
    "TemplateResolver",
    "materialize_pages",
]
