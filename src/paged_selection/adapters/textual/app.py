"""Executable Textual app: a paginated table with cross-page selection."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import on
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal
    from textual.widgets import DataTable, Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use paged_selection.adapters.textual.app"
    ) from exc

from paged_selection.records import HttpPageFetcher
from paged_selection.runtime import telemetry
from paged_selection.runtime.config import EngineConfig
from paged_selection.session import SelectionSession

from .controller import COLUMNS, TableRow, TextualSelectionAdapter, TextualUIHooks

SELECTED_MARK = "[x]"
UNSELECTED_MARK = "[ ]"


class PagedSelectionApp(App[None]):
    """Artworks table with row, page and first-N selection."""

    TITLE = "Art Institute of Chicago - Artworks"

    CSS = """
	Screen {
		layout: vertical;
	}

	#records {
		height: 1fr;
		border: round $accent;
	}

	#bulk-bar {
		height: 3;
	}

	#bulk-input {
		width: 24;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("space", "toggle_row", "Toggle row"),
        ("a", "toggle_all", "Select page"),
        ("b", "focus_bulk", "Select first N"),
        ("c", "clear_all", "Clear all"),
        ("n", "next_page", "Next page"),
        ("p", "previous_page", "Previous page"),
        ("r", "reload", "Reload"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        super().__init__()
        self.config = (config or EngineConfig.from_env()).validate()
        self.fetcher = HttpPageFetcher(
            self.config.api_url,
            page_size=self.config.page_size,
            timeout=self.config.request_timeout,
        )
        self.session = SelectionSession(self.fetcher, config=self.config)
        self.adapter: TextualSelectionAdapter | None = None
        self.logger = telemetry.get_logger("paged_selection.app")

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield DataTable(id="records", cursor_type="row", zebra_stripes=True)
        with Horizontal(id="bulk-bar"):
            yield Static("Select first ", classes="label")
            yield Input(placeholder="Enter count", id="bulk-input")
        yield Static("", id="status-line")
        yield Footer()

    async def on_mount(self) -> None:
        table = self.query_one("#records", DataTable)
        table.add_columns("", *(label for _, label in COLUMNS))
        hooks = TextualUIHooks(
            update_table=self._update_table,
            update_status=self._update_status,
            show_error=self._show_error,
            log=self.logger.debug,
        )
        self.adapter = TextualSelectionAdapter(self.session, hooks)
        self._load(self.adapter.start())

    async def on_unmount(self) -> None:
        await self.fetcher.aclose()

    def _load(self, coro) -> None:
        self.run_worker(coro, group="pages", exit_on_error=False)

    def _update_table(self, rows: Sequence[TableRow]) -> None:
        table = self.query_one("#records", DataTable)
        cursor = table.cursor_row
        table.clear()
        for row in rows:
            mark = SELECTED_MARK if row.selected else UNSELECTED_MARK
            table.add_row(mark, *row.cells, key=str(row.record_id))
        if rows:
            table.move_cursor(row=min(cursor, len(rows) - 1))

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _show_error(self, message: str) -> None:
        self.notify(message, title="Selection", severity="error")

    def action_toggle_row(self) -> None:
        if self.adapter:
            self.adapter.toggle_row(self.query_one("#records", DataTable).cursor_row)

    def action_toggle_all(self) -> None:
        if self.adapter:
            self.adapter.toggle_select_all()

    def action_clear_all(self) -> None:
        if self.adapter:
            self.adapter.clear_all()
            self.query_one("#bulk-input", Input).value = ""

    def action_focus_bulk(self) -> None:
        self.query_one("#bulk-input", Input).focus()

    def action_next_page(self) -> None:
        if self.adapter:
            self._load(self.adapter.next_page())

    def action_previous_page(self) -> None:
        if self.adapter:
            self._load(self.adapter.previous_page())

    def action_reload(self) -> None:
        if self.adapter:
            self._load(self.adapter.reload())

    @on(Input.Submitted, "#bulk-input")
    def on_bulk_submitted(self, event: Input.Submitted) -> None:
        if self.adapter and self.adapter.submit_bulk(event.value):
            self.query_one("#records", DataTable).focus()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Browse a paginated record API and select rows across pages."
    )
    parser.add_argument("--api-url", help="Paginated JSON endpoint")
    parser.add_argument("--page-size", type=int, help="Records per page")
    parser.add_argument("--start-page", type=int, help="First page to load")
    parser.add_argument(
        "--marker-base",
        type=int,
        help="Placeholder encoding base; must exceed the page size",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        help="Telemetry preset to apply before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    config = EngineConfig.from_env().with_overrides(
        api_url=args.api_url,
        page_size=args.page_size,
        marker_base=args.marker_base,
        start_page=args.start_page,
    )
    PagedSelectionApp(config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
