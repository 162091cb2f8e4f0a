"""Client-side search page backed by a remote book dataset."""

from .dataset import SEARCH_OPTIONS, BookDatasetClient, DatasetFetchError, build_search_page, register_search_page

__all__ = [
    "SEARCH_OPTIONS",
    "BookDatasetClient",
    "DatasetFetchError",
    "build_search_page",
    "register_search_page",
]
