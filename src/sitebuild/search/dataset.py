"""Remote book dataset fetch and client-side search page registration."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import httpx

from sitebuild.content.models import PageDescriptor
from sitebuild.pages.registry import PageRegistry


LOGGER = logging.getLogger(__name__)

DEFAULT_BOOKS_URL = "https://bvaughn.github.io/js-search/books.json"
DEFAULT_FETCH_TIMEOUT_SECONDS = 10.0
SEARCH_PAGE_PATH = "/search"
SEARCH_TEMPLATE_KEY = "ClientSearchTemplate"

SEARCH_OPTIONS: dict[str, Any] = {
    "indexStrategy": "Prefix match",
    "searchSanitizer": "Lower Case",
    "TitleIndex": True,
    "AuthorIndex": True,
    "SearchByTerm": True,
}


@dataclass(slots=True)
class DatasetFetchError(RuntimeError):
    """Domain error raised when the book dataset cannot be fetched or parsed."""

    url: str
    message: str

    def __str__(self) -> str:
        return f"error on page creation:\n{self.message} (url={self.url})"


class BookDatasetClient:
    """Fetch the ``{"books": [...]}`` document; no retries."""

    def __init__(
        self,
        url: str = DEFAULT_BOOKS_URL,
        *,
        timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        if not url.startswith(("http://", "https://")):
            raise ValueError("dataset url must start with http:// or https://")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

        self._url = url
        self._timeout_seconds = timeout_seconds
        self._client = client

    @property
    def url(self) -> str:
        return self._url

    def fetch(self) -> list[Any]:
        try:
            payload = self._get_json()
        except httpx.HTTPError as exc:
            LOGGER.error("Book dataset request failed for %s: %s", self._url, exc)
            raise DatasetFetchError(url=self._url, message=f"Request failed: {exc}") from exc
        except ValueError as exc:
            LOGGER.error("Book dataset at %s is not valid JSON: %s", self._url, exc)
            raise DatasetFetchError(url=self._url, message=f"Invalid JSON: {exc}") from exc

        books = payload.get("books") if isinstance(payload, dict) else None
        if not isinstance(books, list):
            LOGGER.error("Book dataset at %s has no 'books' list", self._url)
            raise DatasetFetchError(url=self._url, message="Response missing list 'books'")

        LOGGER.info("Fetched %d book(s) from %s", len(books), self._url)
        return books

    def _get_json(self) -> Any:
        if self._client is not None:
            response = self._client.get(self._url, timeout=self._timeout_seconds)
            response.raise_for_status()
            return response.json()

        with httpx.Client(timeout=self._timeout_seconds, follow_redirects=True) as client:
            response = client.get(self._url)
            response.raise_for_status()
            return response.json()


def build_search_page(books: list[Any]) -> PageDescriptor:
    return PageDescriptor(
        path=SEARCH_PAGE_PATH,
        template_key=SEARCH_TEMPLATE_KEY,
        context={
            "bookData": {
                "allBooks": books,
                "options": dict(SEARCH_OPTIONS),
            },
        },
    )


def register_search_page(registry: PageRegistry, dataset: BookDatasetClient) -> PageDescriptor:
    """Fetch the dataset and register the search page with it embedded in context."""

    descriptor = build_search_page(dataset.fetch())
    registry.create_page(descriptor)
    return descriptor
