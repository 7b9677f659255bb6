"""Single-page cache; the one place where the loaded page changes."""

from __future__ import annotations

from typing import Callable, List

from paged_selection.runtime import telemetry

from .models import Page

PageListener = Callable[[Page], None]


class PageCache:
    """Holds the currently loaded page and notifies listeners on replacement.

    Listeners run synchronously inside ``load`` so that anything derived
    from the page (placeholder resolution in particular) is settled before
    the caller regains control.
    """

    def __init__(self, *, page_size: int = 12) -> None:
        self._page = Page.empty(page_size)
        self._listeners: List[PageListener] = []
        self._loads = 0

    def on_load(self, listener: PageListener) -> None:
        self._listeners.append(listener)

    def load(self, page: Page) -> None:
        with telemetry.span(
            "page_cache::load",
            component="page_cache",
            metadata={"page": page.number, "records": len(page)},
        ):
            self._page = page
            self._loads += 1
            for listener in self._listeners:
                listener(page)
        telemetry.record_event(
            "page_cache.load",
            level="debug",
            data={
                "page": page.number,
                "size": page.size,
                "records": len(page),
                "total": page.total_count,
            },
        )

    def current(self) -> Page:
        return self._page

    @property
    def has_loaded(self) -> bool:
        return self._loads > 0

    @property
    def page_number(self) -> int:
        return self._page.number

    @property
    def page_size(self) -> int:
        return self._page.size

    @property
    def total_count(self) -> int:
        return self._page.total_count

    @property
    def page_count(self) -> int:
        return self._page.page_count

    def __repr__(self) -> str:
        return (
            f"PageCache(page={self._page.number}, records={len(self._page)}, "
            f"total={self._page.total_count})"
        )


__all__ = ["PageCache", "PageListener"]
