"""Asynchronous page-change driver sitting between the fetcher and the cache."""

from __future__ import annotations

from typing import Optional

from paged_selection.events import (
    PAGE_FAILED,
    PAGE_LOADED,
    PAGE_LOADING,
    PAGE_STALE,
    SelectionBus,
)
from paged_selection.runtime import telemetry

from .cache import PageCache
from .fetch import FetchError, PageFetcher
from .models import Page


class PageLoader:
    """Requests pages and applies only the response to the latest request.

    Every ``goto`` takes a fresh request token. When a response arrives for
    a token that has since been superseded it is dropped, so a slow reply
    for an abandoned page can neither overwrite the cache nor trigger
    resolution for the wrong page.
    """

    def __init__(
        self,
        cache: PageCache,
        fetcher: PageFetcher,
        *,
        bus: Optional[SelectionBus] = None,
    ) -> None:
        self.cache = cache
        self.fetcher = fetcher
        self.bus = bus or SelectionBus()
        self.logger = telemetry.get_logger("paged_selection.loader")
        self.loading = False
        self.last_error: Optional[FetchError] = None
        self._token = 0
        self._requested_page: Optional[int] = None

    @property
    def requested_page(self) -> Optional[int]:
        return self._requested_page

    async def goto(self, page_number: int) -> Optional[Page]:
        if page_number < 1:
            raise ValueError(f"page number must be >= 1, got {page_number}")

        self._token += 1
        token = self._token
        self._requested_page = page_number
        self.loading = True
        self.bus.emit(PAGE_LOADING, page_number)

        try:
            page = await self.fetcher.fetch_page(page_number)
        except FetchError as exc:
            if token != self._token:
                self._discard(token, page_number)
                return None
            self._fail(page_number, exc)
            return None
        except BaseException:
            if token == self._token:
                self.loading = False
            raise

        if token != self._token:
            self._discard(token, page_number)
            return None

        try:
            self.cache.load(page)
        finally:
            self.loading = False
        self.last_error = None
        self.bus.emit(PAGE_LOADED, page)
        return page

    async def reload(self) -> Optional[Page]:
        return await self.goto(self._requested_page or self.cache.page_number)

    def _fail(self, page_number: int, exc: FetchError) -> None:
        self.loading = False
        self.last_error = exc
        self.logger.warning(str(exc))
        telemetry.record_event(
            "page_loader.failed",
            level="warning",
            data={"page": page_number, "reason": exc.reason},
        )
        self.bus.emit(PAGE_FAILED, exc)

    def _discard(self, token: int, page_number: int) -> None:
        telemetry.record_event(
            "page_loader.stale",
            level="debug",
            data={
                "page": page_number,
                "token": token,
                "latest_token": self._token,
                "latest_page": self._requested_page,
            },
        )
        self.bus.emit(PAGE_STALE, page_number)


__all__ = ["PageLoader"]
