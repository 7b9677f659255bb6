"""Record and page value types shared by the cache, fetcher and selection."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

RecordId = int


@dataclass(frozen=True, slots=True)
class Record:
    """A remote record: its id plus opaque display attributes."""

    id: RecordId
    attributes: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise TypeError(f"record id must be an int, got {self.id!r}")
        if self.id < 0:
            raise ValueError(f"record id must be non-negative, got {self.id}")
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def get(self, key: str, default: object = None) -> object:
        return self.attributes.get(key, default)


@dataclass(frozen=True, slots=True)
class Page:
    """One page-worth of records plus the pagination metadata it came with."""

    number: int
    size: int
    records: tuple[Record, ...] = ()
    total_count: int = 0

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"page number must be >= 1, got {self.number}")
        if self.size < 1:
            raise ValueError(f"page size must be >= 1, got {self.size}")
        if self.total_count < 0:
            raise ValueError(f"total_count must be >= 0, got {self.total_count}")
        object.__setattr__(self, "records", tuple(self.records))

    @classmethod
    def empty(cls, size: int) -> "Page":
        return cls(number=1, size=size)

    @classmethod
    def from_ids(
        cls, number: int, size: int, ids: Iterable[RecordId], *, total_count: int
    ) -> "Page":
        return cls(
            number=number,
            size=size,
            records=tuple(Record(record_id) for record_id in ids),
            total_count=total_count,
        )

    @property
    def ids(self) -> tuple[RecordId, ...]:
        return tuple(record.id for record in self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def page_count(self) -> int:
        return -(-self.total_count // self.size)

    @property
    def first_position(self) -> int:
        """1-based logical position of the first record on this page."""

        return (self.number - 1) * self.size + 1

    def record_at(self, index: int) -> Optional[Record]:
        if 0 <= index < len(self.records):
            return self.records[index]
        return None

    def __len__(self) -> int:
        return len(self.records)


__all__ = ["Page", "Record", "RecordId"]
