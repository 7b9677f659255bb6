"""Selection store: the public selection contract for one session."""

from __future__ import annotations

from typing import Iterable, Optional

from paged_selection.events import SELECTION_CHANGED, SelectionBus
from paged_selection.records.cache import PageCache
from paged_selection.records.models import Page, Record
from paged_selection.runtime import telemetry

from .markers import MarkerCodec, Pending
from .state import SelectionEntry, SelectionSet
from .validation import ensure_count, ensure_page_size


class SelectionStore:
    """Owns the selection and interprets row gestures against the cache.

    Row-level operations only ever touch ids of the page currently held by
    ``cache``; entries belonging to other pages, resolved or pending, are
    left alone. ``bulk_select_first_n`` is the exception and replaces the
    whole selection.
    """

    def __init__(
        self,
        cache: PageCache,
        *,
        codec: Optional[MarkerCodec] = None,
        bus: Optional[SelectionBus] = None,
        selection: Optional[SelectionSet] = None,
    ) -> None:
        self.cache = cache
        self.codec = codec or MarkerCodec()
        self.bus = bus or SelectionBus()
        self.selection = selection if selection is not None else SelectionSet()
        self.codec.ensure_capacity(cache.page_size)

    def _page_ids(self) -> list[int]:
        return list(self.cache.current().ids)

    def _changed(self, label: str) -> None:
        self.bus.emit(SELECTION_CHANGED, {"action": label, "count": len(self.selection)})

    def toggle_row(self, record: Record) -> bool:
        """Flip ``record``'s membership; returns the new state."""

        if record.id in self.selection:
            self.selection.discard(record.id)
            selected = False
        else:
            self.selection.add(record.id)
            selected = True
        self._changed("toggle_row")
        return selected

    def set_page_selection(self, records: Iterable[Record]) -> None:
        """Make ``records`` the loaded page's entire contribution to the selection."""

        incoming = [record.id for record in records]
        self.selection.difference_update(self._page_ids())
        self.selection.update(incoming)
        self._changed("set_page_selection")

    def select_all_on_page(self, checked: bool) -> None:
        page_ids = self._page_ids()
        if checked:
            self.selection.update(page_ids)
        else:
            self.selection.difference_update(page_ids)
        self._changed("select_all_on_page")

    @property
    def is_all_selected(self) -> bool:
        page_ids = self._page_ids()
        return bool(page_ids) and all(record_id in self.selection for record_id in page_ids)

    def bulk_select_first_n(
        self,
        n: int,
        total_records: Optional[int] = None,
        page_size: Optional[int] = None,
        current_page: Optional[Page] = None,
    ) -> int:
        """Replace the selection with logical positions ``1..min(n, total)``.

        Positions on ``current_page`` (within its loaded records) become real
        ids; every other position becomes a ``Pending`` placeholder that the
        resolver rewrites when its page is loaded. Returns the number of
        entries selected. Validation happens before anything is touched.
        """

        ensure_count(n)
        page = current_page if current_page is not None else self.cache.current()
        size = ensure_page_size(page.size if page_size is None else page_size)
        self.codec.ensure_capacity(size)
        total = page.total_count if total_records is None else total_records
        if total < 0:
            raise ValueError(f"total_records must be >= 0, got {total}")

        effective = min(n, total)
        with telemetry.span(
            "selection::bulk_select",
            component="selection",
            metadata={"n": n, "effective": effective, "page": page.number},
        ):
            entries: list[SelectionEntry] = []
            for position in range(1, effective + 1):
                pending = Pending.for_position(position, size)
                record = (
                    page.record_at(pending.index) if pending.page == page.number else None
                )
                entries.append(record.id if record is not None else pending)
            self.selection.replace(entries)

        telemetry.record_event(
            "selection.bulk_select",
            data={
                "requested": n,
                "selected": effective,
                "pending": len(self.selection.pending()),
            },
        )
        self._changed("bulk_select")
        return effective

    def clear_all(self) -> None:
        cleared = len(self.selection)
        self.selection.clear()
        telemetry.record_event("selection.clear", level="debug", data={"cleared": cleared})
        self._changed("clear_all")

    def count(self) -> int:
        return len(self.selection)

    def pending_count(self) -> int:
        return len(self.selection.pending())

    def is_row_selected(self, record: Record) -> bool:
        return record.id in self.selection

    def selected_records_on_current_page(self) -> list[Record]:
        return [
            record
            for record in self.cache.current().records
            if record.id in self.selection
        ]

    def snapshot(self) -> frozenset[int]:
        return self.selection.snapshot(self.codec)

    def __len__(self) -> int:
        return len(self.selection)

    def __repr__(self) -> str:
        return f"SelectionStore({self.selection!r}, page={self.cache.page_number})"


__all__ = ["SelectionStore"]
