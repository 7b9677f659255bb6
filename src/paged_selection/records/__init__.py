"""Remote record pages: data model, cache, fetcher and loader."""

from .cache import PageCache, PageListener
from .fetch import DEFAULT_FIELDS, FetchError, HttpPageFetcher, PageFetcher, parse_page
from .loader import PageLoader
from .models import Page, Record, RecordId

__all__ = [
    "DEFAULT_FIELDS",
    "FetchError",
    "HttpPageFetcher",
    "Page",
    "PageCache",
    "PageFetcher",
    "PageListener",
    "PageLoader",
    "Record",
    "RecordId",
    "parse_page",
]
