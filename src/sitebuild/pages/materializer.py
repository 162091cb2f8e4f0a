"""Turn indexed content nodes into page registrations."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol

from sitebuild.content.models import PageDescriptor
from sitebuild.index.repository import DEFAULT_QUERY_LIMIT, QueryResult


LOGGER = logging.getLogger(__name__)


class _PageFieldsSource(Protocol):
    def query_page_fields(self, *, limit: int = DEFAULT_QUERY_LIMIT) -> QueryResult:
        ...


class _PageSink(Protocol):
    def create_page(self, descriptor: PageDescriptor) -> None:
        ...


@dataclass(slots=True)
class PageQueryError(RuntimeError):
    """Domain error raised when the content index reports query errors."""

    errors: list[str]

    def __str__(self) -> str:
        return "Content query failed: " + "; ".join(self.errors)


def materialize_pages(
    index: _PageFieldsSource,
    registry: _PageSink,
    *,
    limit: int = DEFAULT_QUERY_LIMIT,
) -> list[PageDescriptor]:
    """Register one page per managed node; nothing is registered when the query fails."""

    result = index.query_page_fields(limit=limit)
    if result.errors:
        LOGGER.error("Content query returned errors: %s", result.errors)
        raise PageQueryError(errors=list(result.errors))

    rows = result.data or []
    if result.total_count > len(rows):
        LOGGER.warning(
            "Content query capped at %d of %d managed nodes; %d node(s) get no page",
            len(rows),
            result.total_count,
            result.total_count - len(rows),
        )

    descriptors: list[PageDescriptor] = []
    for row in rows:
        descriptor = PageDescriptor(
            path=row.slug,
            template_key=row.layout,
            # Context values are available to the template as query variables.
            context={"slug": row.slug},
        )
        registry.create_page(descriptor)
        descriptors.append(descriptor)

    LOGGER.info("Materialized %d content page(s)", len(descriptors))
    return descriptors
