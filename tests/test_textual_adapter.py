from __future__ import annotations

import asyncio
from typing import List, Sequence

from paged_selection.adapters.textual import (
    TableRow,
    TextualSelectionAdapter,
    TextualUIHooks,
    format_cell,
    range_report,
)
from paged_selection.records import FetchError, Page, Record
from paged_selection.session import SelectionSession


class FakeFetcher:
    def __init__(self, failing: set[int] | None = None) -> None:
        self.failing = failing or set()

    async def fetch_page(self, page_number: int) -> Page:
        if page_number in self.failing:
            raise FetchError(page_number, "HTTP 502")
        records = tuple(
            Record(page_number * 100 + offset, {"title": f"Work {offset}", "date_end": None})
            for offset in range(1, 13)
        )
        return Page(number=page_number, size=12, records=records, total_count=100)


def make_adapter(
    *,
    tables: List[Sequence[TableRow]] | None = None,
    statuses: List[str] | None = None,
    errors: List[str] | None = None,
    logs: List[str] | None = None,
    failing: set[int] | None = None,
) -> TextualSelectionAdapter:
    hooks = TextualUIHooks(
        update_table=(tables.append if tables is not None else lambda rows: None),
        update_status=(statuses.append if statuses is not None else lambda text: None),
        show_error=(errors.append if errors is not None else lambda text: None),
        log=(logs.append if logs is not None else lambda line: None),
    )
    adapter = TextualSelectionAdapter(SelectionSession(FakeFetcher(failing)), hooks)
    asyncio.run(adapter.start())
    return adapter


def test_adapter_renders_rows_after_load() -> None:
    tables: List[Sequence[TableRow]] = []
    statuses: List[str] = []
    make_adapter(tables=tables, statuses=statuses)

    rows = tables[-1]
    assert len(rows) == 12
    assert rows[0].record_id == 101
    assert rows[0].cells[0] == "Work 1"
    assert rows[0].cells[-1] == "N/A"
    assert statuses[-1].startswith("Selected: 0 row(s)")


def test_adapter_toggle_row_refreshes_table() -> None:
    tables: List[Sequence[TableRow]] = []
    statuses: List[str] = []
    adapter = make_adapter(tables=tables, statuses=statuses)

    assert adapter.toggle_row(2) is True

    assert [row.selected for row in tables[-1]][:3] == [False, False, True]
    assert statuses[-1].startswith("Selected: 1 row(s)")
    assert adapter.toggle_row(40) is None


def test_adapter_select_all_toggles() -> None:
    statuses: List[str] = []
    adapter = make_adapter(statuses=statuses)

    assert adapter.toggle_select_all() is True
    assert "all on page" in statuses[-1]
    assert adapter.toggle_select_all() is False
    assert adapter.session.selection_count == 0


def test_adapter_reports_invalid_bulk_input() -> None:
    errors: List[str] = []
    adapter = make_adapter(errors=errors)

    assert adapter.submit_bulk("lots") is False
    assert errors == ["Please enter a valid number"]
    assert adapter.session.selection_count == 0


def test_adapter_bulk_then_navigate_resolves_rows() -> None:
    tables: List[Sequence[TableRow]] = []
    adapter = make_adapter(tables=tables)

    assert adapter.submit_bulk("15") is True
    asyncio.run(adapter.next_page())

    selected = [row.record_id for row in tables[-1] if row.selected]
    assert selected == [201, 202, 203]


def test_adapter_surfaces_fetch_failures() -> None:
    errors: List[str] = []
    adapter = make_adapter(errors=errors, failing={2})

    asyncio.run(adapter.next_page())

    assert errors and "page 2 failed to load" in errors[-1]
    assert adapter.session.page.number == 1


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(logs=logs)

    adapter.clear_all()

    assert any(line.startswith("clear ->") for line in logs)
    assert any("event=" in line for line in logs)


def test_format_cell_falls_back_for_missing_values() -> None:
    assert format_cell(None) == "N/A"
    assert format_cell("") == "N/A"
    assert format_cell(1890) == "1890"


def test_adapter_status_shows_visible_record_range() -> None:
    statuses: List[str] = []
    adapter = make_adapter(statuses=statuses)

    assert "Showing 1 to 12 of 100 entries" in statuses[-1]

    asyncio.run(adapter.next_page())

    assert "Showing 13 to 24 of 100 entries" in statuses[-1]


def test_range_report_handles_short_and_empty_pages() -> None:
    last = Page.from_ids(9, 12, [901, 902, 903, 904], total_count=100)
    empty = Page.from_ids(1, 12, [], total_count=0)

    assert range_report(last) == "Showing 97 to 100 of 100 entries"
    assert range_report(empty) == "Showing 0 to 0 of 0 entries"
