"""Turns pending placeholders into real record ids once their page loads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from paged_selection.events import SELECTION_RESOLVED, SelectionBus
from paged_selection.records.cache import PageCache
from paged_selection.records.models import Page
from paged_selection.runtime import telemetry

from .state import SelectionSet

if TYPE_CHECKING:
    from .store import SelectionStore


def resolve(selection: SelectionSet, page: Page) -> int:
    """Resolve, in place, every pending entry that ``page`` can answer.

    Returns the number of entries rewritten. Entries for other pages and
    indices past the end of ``page.records`` are left pending.
    """

    resolved = 0
    for pending in selection.pending():
        if pending.page != page.number:
            continue
        record = page.record_at(pending.index)
        if record is None:
            continue
        selection.discard(pending)
        selection.add(record.id)
        resolved += 1
    return resolved


class SelectionResolver:
    """Runs ``resolve`` against a store whenever the page cache loads."""

    def __init__(self, *, bus: Optional[SelectionBus] = None) -> None:
        self.bus = bus or SelectionBus()

    def attach(self, cache: PageCache, store: "SelectionStore") -> None:
        cache.on_load(lambda page: self.resolve_store(store, page))

    def resolve_store(self, store: "SelectionStore", page: Page) -> int:
        with telemetry.span(
            "selection::resolve",
            component="selection",
            metadata={"page": page.number},
        ) as handle:
            count = resolve(store.selection, page)
            handle.add_metadata("resolved", count)
        if count:
            telemetry.record_event(
                "selection.resolve",
                level="debug",
                data={
                    "page": page.number,
                    "resolved": count,
                    "pending": len(store.selection.pending()),
                },
            )
            self.bus.emit(SELECTION_RESOLVED, {"page": page.number, "resolved": count})
        return count


__all__ = ["SelectionResolver", "resolve"]
