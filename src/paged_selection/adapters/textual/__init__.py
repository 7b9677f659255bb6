"""Textual host adapter for the selection engine."""

from .controller import (
    COLUMNS,
    TableRow,
    TextualSelectionAdapter,
    TextualUIHooks,
    build_rows,
    format_cell,
    range_report,
)

__all__ = [
    "COLUMNS",
    "TableRow",
    "TextualSelectionAdapter",
    "TextualUIHooks",
    "build_rows",
    "format_cell",
    "range_report",
]
