"""Textual adapter that turns table gestures into session calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from paged_selection.events import (
    PAGE_FAILED,
    PAGE_LOADED,
    PAGE_LOADING,
    PAGE_STALE,
    SELECTION_CHANGED,
    SELECTION_RESOLVED,
)
from paged_selection.records import FetchError, Page, Record
from paged_selection.selection import SelectionValidationError
from paged_selection.session import SelectionSession

COLUMNS: tuple[tuple[str, str], ...] = (
    ("title", "Title"),
    ("place_of_origin", "Place of Origin"),
    ("artist_display", "Artist"),
    ("inscriptions", "Inscriptions"),
    ("date_start", "Start Date"),
    ("date_end", "End Date"),
)
MISSING = "N/A"


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TableRow:
    """One rendered table row."""

    record_id: int
    selected: bool
    cells: tuple[str, ...]


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_table: Callable[[Sequence[TableRow]], None]
    update_status: Callable[[str], None] = _noop
    show_error: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


def format_cell(value: object) -> str:
    if value is None or value == "":
        return MISSING
    return str(value)


def range_report(page: Page) -> str:
    """Paginator text, e.g. ``Showing 13 to 24 of 100 entries``."""

    if page.is_empty:
        return f"Showing 0 to 0 of {page.total_count} entries"
    first = page.first_position
    last = first + len(page) - 1
    return f"Showing {first} to {last} of {page.total_count} entries"


def build_rows(session: SelectionSession) -> list[TableRow]:
    return [
        TableRow(
            record_id=record.id,
            selected=session.is_row_selected(record),
            cells=tuple(format_cell(record.get(key)) for key, _ in COLUMNS),
        )
        for record in session.page.records
    ]


class TextualSelectionAdapter:
    """Bridges a ``SelectionSession`` and its bus to a Textual-friendly surface."""

    def __init__(self, session: SelectionSession, hooks: TextualUIHooks) -> None:
        self.session = session
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    # -- gestures ------------------------------------------------------------

    def record_at(self, row_index: int) -> Optional[Record]:
        return self.session.page.record_at(row_index)

    def toggle_row(self, row_index: int) -> Optional[bool]:
        record = self.record_at(row_index)
        if record is None:
            return None
        self._log_state("toggle ->", row=row_index, record=record.id)
        return self.session.on_row_toggle(record)

    def toggle_select_all(self) -> bool:
        checked = not self.session.is_all_selected
        self._log_state("select_all ->", checked=checked)
        self.session.on_select_all_change(checked)
        return checked

    def submit_bulk(self, raw: object) -> bool:
        self._log_state("bulk ->", raw=raw)
        try:
            self.session.on_bulk_select(raw)
        except SelectionValidationError as exc:
            self.hooks.show_error(str(exc))
            return False
        return True

    def clear_all(self) -> None:
        self._log_state("clear ->")
        self.session.on_clear_all()

    async def start(self) -> Optional[Page]:
        return await self.session.start()

    async def next_page(self) -> Optional[Page]:
        return await self.session.next_page()

    async def previous_page(self) -> Optional[Page]:
        return await self.session.previous_page()

    async def reload(self) -> Optional[Page]:
        return await self.session.reload()

    # -- rendering -----------------------------------------------------------

    def status_text(self) -> str:
        page = self.session.page
        parts = [f"Selected: {self.session.selection_count} row(s)"]
        if self.session.cache.has_loaded:
            parts.append(range_report(page))
        if self.session.is_all_selected:
            parts.append("all on page")
        if self.session.loading:
            parts.append("loading...")
        return " | ".join(parts)

    def refresh(self) -> None:
        self.hooks.update_table(build_rows(self.session))
        self.hooks.update_status(self.status_text())

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in (
            SELECTION_CHANGED,
            SELECTION_RESOLVED,
            PAGE_LOADING,
            PAGE_LOADED,
            PAGE_FAILED,
            PAGE_STALE,
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == PAGE_FAILED and isinstance(payload, FetchError):
            self.hooks.show_error(str(payload))
        if name == PAGE_LOADING:
            self.hooks.update_status(self.status_text())
        elif name != PAGE_STALE:
            self.refresh()

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        return {
            "page": self.session.page.number,
            "requested": self.session.loader.requested_page,
            "selected": self.session.selection_count,
            "pending": self.session.store.pending_count(),
            "loading": self.session.loading,
        }


__all__ = [
    "COLUMNS",
    "TableRow",
    "TextualSelectionAdapter",
    "TextualUIHooks",
    "build_rows",
    "format_cell",
    "range_report",
]
