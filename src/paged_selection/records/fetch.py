"""Fetch collaborator boundary and its HTTP implementation."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

import httpx

from paged_selection.runtime import telemetry

from .models import Page, Record

DEFAULT_FIELDS: tuple[str, ...] = (
    "id",
    "title",
    "place_of_origin",
    "artist_display",
    "inscriptions",
    "date_start",
    "date_end",
)


class FetchError(RuntimeError):
    """Raised when a page cannot be fetched or its payload is unusable."""

    def __init__(self, page_number: int, reason: str) -> None:
        super().__init__(f"page {page_number} failed to load: {reason}")
        self.page_number = page_number
        self.reason = reason


class PageFetcher(Protocol):
    """Anything able to produce a ``Page`` for a 1-based page number."""

    async def fetch_page(self, page_number: int) -> Page:
        """Return the records and pagination metadata for ``page_number``."""
        ...


class HttpPageFetcher:
    """Fetches pages from a JSON API shaped like ``{data: [...], pagination: {...}}``.

    An injected ``httpx.AsyncClient`` is used as-is and left open; otherwise
    the fetcher owns a client and ``aclose`` releases it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        page_size: int = 12,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        fields: Sequence[str] = DEFAULT_FIELDS,
    ) -> None:
        self.base_url = base_url
        self.page_size = page_size
        self.timeout = timeout
        self.fields = tuple(fields)
        self._client = client
        self._owns_client = client is None
        self.logger = telemetry.get_logger("paged_selection.fetch")

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch_page(self, page_number: int) -> Page:
        params: dict[str, Any] = {"page": page_number, "limit": self.page_size}
        if self.fields:
            params["fields"] = ",".join(self.fields)
        try:
            response = await self._get_client().get(
                self.base_url,
                params=params,
                timeout=self.timeout,
                follow_redirects=True,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise FetchError(page_number, f"{type(exc).__name__}: {exc}") from exc

        if response.status_code != 200:
            raise FetchError(page_number, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(page_number, "response is not valid JSON") from exc

        return parse_page(payload, page_number, default_size=self.page_size)


def parse_page(payload: Any, page_number: int, *, default_size: int) -> Page:
    """Build a ``Page`` from a decoded API payload."""

    if not isinstance(payload, Mapping):
        raise FetchError(page_number, "payload is not an object")
    data = payload.get("data")
    pagination = payload.get("pagination") or {}
    if not isinstance(data, list) or not isinstance(pagination, Mapping):
        raise FetchError(page_number, "payload is missing 'data' or 'pagination'")

    try:
        total = int(pagination.get("total", 0))
        size = int(pagination.get("limit") or default_size)
        number = int(pagination.get("current_page") or page_number)
        records = tuple(_parse_record(item) for item in data)
    except (TypeError, ValueError) as exc:
        raise FetchError(page_number, f"malformed payload: {exc}") from exc

    if number != page_number:
        raise FetchError(
            page_number, f"server answered with page {number} instead"
        )

    try:
        return Page(number=number, size=size, records=records, total_count=total)
    except ValueError as exc:
        raise FetchError(page_number, str(exc)) from exc


def _parse_record(item: Any) -> Record:
    if not isinstance(item, Mapping) or "id" not in item:
        raise ValueError("record without an 'id'")
    record_id = item["id"]
    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise ValueError(f"record id {record_id!r} is not an integer")
    attributes = {key: value for key, value in item.items() if key != "id"}
    return Record(id=record_id, attributes=attributes)


__all__ = [
    "DEFAULT_FIELDS",
    "FetchError",
    "HttpPageFetcher",
    "PageFetcher",
    "parse_page",
]
