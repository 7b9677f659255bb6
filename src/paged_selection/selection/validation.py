"""Validation helpers for user-supplied selection input."""

from __future__ import annotations

INVALID_COUNT_MESSAGE = "Please enter a valid number"


class SelectionValidationError(ValueError):
    """Raised for bulk-selection input the user has to correct."""

    def __init__(self, message: str = INVALID_COUNT_MESSAGE, *, value: object = None) -> None:
        super().__init__(message)
        self.value = value


def ensure_count(n: object) -> int:
    if isinstance(n, bool) or not isinstance(n, int) or n <= 0:
        raise SelectionValidationError(value=n)
    return n


def ensure_page_size(page_size: object) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size <= 0:
        raise SelectionValidationError(
            f"page size must be a positive integer, got {page_size!r}", value=page_size
        )
    return page_size


def _parse_number_text(text: str) -> int | float:
    cleaned = text.strip()
    try:
        return int(cleaned)
    except ValueError:
        pass
    try:
        return float(cleaned)
    except ValueError:
        raise SelectionValidationError(value=text) from None


def parse_bulk_count(raw: object) -> int:
    """Turn raw UI input (``None``, text or number) into a positive count."""

    if raw is None or isinstance(raw, bool):
        raise SelectionValidationError(value=raw)
    if isinstance(raw, str):
        raw = _parse_number_text(raw)
    if isinstance(raw, float):
        if not raw.is_integer():
            raise SelectionValidationError(value=raw)
        value = int(raw)
    elif isinstance(raw, int):
        value = raw
    else:
        raise SelectionValidationError(value=raw)
    return ensure_count(value)


__all__ = [
    "INVALID_COUNT_MESSAGE",
    "SelectionValidationError",
    "ensure_count",
    "ensure_page_size",
    "parse_bulk_count",
]
