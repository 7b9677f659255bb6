"""Selection persistence: placeholders, resolution and the selection store."""

from .markers import (
    DEFAULT_MARKER_BASE,
    DecodeError,
    MarkerCodec,
    MarkerCollisionError,
    Pending,
)
from .resolver import SelectionResolver, resolve
from .state import SelectionEntry, SelectionSet
from .store import SelectionStore
from .validation import (
    INVALID_COUNT_MESSAGE,
    SelectionValidationError,
    parse_bulk_count,
)

__all__ = [
    "DEFAULT_MARKER_BASE",
    "DecodeError",
    "INVALID_COUNT_MESSAGE",
    "MarkerCodec",
    "MarkerCollisionError",
    "Pending",
    "SelectionEntry",
    "SelectionResolver",
    "SelectionSet",
    "SelectionStore",
    "SelectionValidationError",
    "parse_bulk_count",
    "resolve",
]
