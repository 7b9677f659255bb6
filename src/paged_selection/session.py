"""Session wiring: one cache, store, resolver and loader behind UI handlers."""

from __future__ import annotations

from typing import Iterable, Optional

from paged_selection.events import SelectionBus
from paged_selection.records import Page, PageCache, PageFetcher, PageLoader, Record
from paged_selection.runtime import telemetry
from paged_selection.runtime.config import EngineConfig
from paged_selection.selection import (
    MarkerCodec,
    SelectionResolver,
    SelectionStore,
    parse_bulk_count,
)


class SelectionSession:
    """Composition root exposing the surface a table widget talks to.

    Resolution is registered as a cache listener before anything else, so
    every page the loader applies is resolved before ``page.loaded`` is
    emitted and before any handler here can read it.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        *,
        config: Optional[EngineConfig] = None,
        bus: Optional[SelectionBus] = None,
    ) -> None:
        self.config = (config or EngineConfig()).validate()
        self.bus = bus or SelectionBus()
        self.codec = MarkerCodec(self.config.marker_base)
        self.cache = PageCache(page_size=self.config.page_size)
        self.store = SelectionStore(self.cache, codec=self.codec, bus=self.bus)
        self.resolver = SelectionResolver(bus=self.bus)
        self.resolver.attach(self.cache, self.store)
        self.loader = PageLoader(self.cache, fetcher, bus=self.bus)
        self.bulk_count: Optional[int] = None
        self.logger = telemetry.get_logger("paged_selection.session")

    # -- reads ---------------------------------------------------------------

    @property
    def page(self) -> Page:
        return self.cache.current()

    @property
    def loading(self) -> bool:
        return self.loader.loading

    @property
    def selection_count(self) -> int:
        return self.store.count()

    @property
    def is_all_selected(self) -> bool:
        return self.store.is_all_selected

    def is_row_selected(self, record: Record) -> bool:
        return self.store.is_row_selected(record)

    def selected_records(self) -> list[Record]:
        return self.store.selected_records_on_current_page()

    # -- handlers ------------------------------------------------------------

    def on_row_toggle(self, record: Record) -> bool:
        return self.store.toggle_row(record)

    def on_page_selection_change(
        self, records: Iterable[Record], checked: bool = True
    ) -> None:
        """Apply a multi-row gesture scoped to the visible page.

        With ``checked`` the records are every row now selected on the page;
        without it they are rows to drop from the page's current selection.
        """

        records = list(records)
        if checked:
            self.store.set_page_selection(records)
            return
        dropped = {record.id for record in records}
        remaining = [
            record
            for record in self.store.selected_records_on_current_page()
            if record.id not in dropped
        ]
        self.store.set_page_selection(remaining)

    def on_select_all_change(self, checked: bool) -> None:
        self.store.select_all_on_page(checked)

    def on_bulk_select(self, raw_count: object) -> int:
        """Select the first N logical records; raises on invalid input."""

        count = parse_bulk_count(raw_count)
        selected = self.store.bulk_select_first_n(count)
        self.bulk_count = count
        return selected

    def on_clear_all(self) -> None:
        self.store.clear_all()
        self.bulk_count = None

    # -- navigation ----------------------------------------------------------

    def _clamp(self, page_number: int) -> int:
        last = self.cache.page_count if self.cache.has_loaded else 0
        if last:
            page_number = min(page_number, last)
        return max(page_number, 1)

    async def start(self) -> Optional[Page]:
        return await self.loader.goto(self.config.start_page)

    async def goto_page(self, page_number: int) -> Optional[Page]:
        return await self.loader.goto(self._clamp(page_number))

    def _step_origin(self) -> int:
        # An in-flight request is where the user is heading; otherwise the
        # cached page is where they are, even after a failed load.
        if self.loader.loading and self.loader.requested_page is not None:
            return self.loader.requested_page
        return self.cache.page_number

    async def next_page(self) -> Optional[Page]:
        return await self.goto_page(self._step_origin() + 1)

    async def previous_page(self) -> Optional[Page]:
        return await self.goto_page(self._step_origin() - 1)

    async def reload(self) -> Optional[Page]:
        return await self.loader.reload()


__all__ = ["SelectionSession"]
