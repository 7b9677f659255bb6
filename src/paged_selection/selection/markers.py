"""Placeholders for records whose page has not been fetched yet.

Inside the engine an unresolved selection is a ``Pending(page, index)``
value. ``MarkerCodec`` maps those onto negative integers (and back) for
callers that want a flat ``set[int]`` view, using
``-(page * base + index)``. The integer form is only collision-free while
``base`` exceeds the page size, which ``ensure_capacity`` checks.
"""

from __future__ import annotations

from dataclasses import dataclass

from paged_selection.runtime import telemetry

DEFAULT_MARKER_BASE = 10000


class DecodeError(AssertionError):
    """A value that this engine never produces was decoded as a placeholder."""

    def __init__(self, value: int, reason: str) -> None:
        super().__init__(f"cannot decode placeholder {value}: {reason}")
        self.value = value


class MarkerCollisionError(ValueError):
    """The marker base is too small for the page size."""


@dataclass(frozen=True, slots=True, order=True)
class Pending:
    """Selection of the record at ``index`` on ``page`` (not fetched yet)."""

    page: int
    index: int

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.index < 0:
            raise ValueError(f"index must be >= 0, got {self.index}")

    @classmethod
    def for_position(cls, position: int, page_size: int) -> "Pending":
        """Placeholder for 1-based logical ``position``."""

        offset = position - 1
        return cls(page=offset // page_size + 1, index=offset % page_size)

    def position(self, page_size: int) -> int:
        return (self.page - 1) * page_size + self.index + 1


class MarkerCodec:
    def __init__(self, base: int = DEFAULT_MARKER_BASE) -> None:
        if isinstance(base, bool) or not isinstance(base, int) or base < 1:
            raise ValueError(f"marker base must be a positive int, got {base!r}")
        self.base = base

    def ensure_capacity(self, page_size: int) -> None:
        if self.base <= page_size:
            raise MarkerCollisionError(
                f"marker base {self.base} must exceed page size {page_size}"
            )

    @staticmethod
    def is_placeholder(value: int) -> bool:
        return value < 0

    def encode(self, page: int, index_in_page: int) -> int:
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if not 0 <= index_in_page < self.base:
            raise ValueError(
                f"index {index_in_page} outside [0, {self.base}) for base {self.base}"
            )
        return -(page * self.base + index_in_page)

    def decode(self, value: int) -> tuple[int, int]:
        if value >= 0:
            self._fail(value, "not a placeholder")
        page, index = divmod(-value, self.base)
        if page < 1:
            self._fail(value, "encodes page 0")
        return page, index

    def to_placeholder(self, pending: Pending) -> int:
        return self.encode(pending.page, pending.index)

    def to_pending(self, value: int) -> Pending:
        page, index = self.decode(value)
        return Pending(page, index)

    def _fail(self, value: int, reason: str) -> None:
        telemetry.record_event(
            "marker.decode_error",
            level="error",
            data={"value": value, "reason": reason, "base": self.base},
        )
        raise DecodeError(value, reason)

    def __repr__(self) -> str:
        return f"MarkerCodec(base={self.base})"


__all__ = [
    "DEFAULT_MARKER_BASE",
    "DecodeError",
    "MarkerCodec",
    "MarkerCollisionError",
    "Pending",
]
