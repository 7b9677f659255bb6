"""Selection container holding resolved record ids and pending placeholders."""

from __future__ import annotations

from typing import Iterable, Iterator, Set, Union

from paged_selection.records.models import RecordId

from .markers import MarkerCodec, Pending

SelectionEntry = Union[RecordId, Pending]


class SelectionSet:
    """Unordered set of ``RecordId`` and ``Pending`` entries.

    Entries are only ever added or discarded one at a time; ``replace`` and
    ``clear`` are the two whole-set operations and exist for bulk selection
    and "clear all".
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[SelectionEntry] = ()) -> None:
        self._entries: Set[SelectionEntry] = set(entries)

    @classmethod
    def from_ids(cls, ids: Iterable[int], codec: MarkerCodec) -> "SelectionSet":
        """Rebuild from the flat integer view produced by ``snapshot``."""

        return cls(
            codec.to_pending(value) if codec.is_placeholder(value) else value
            for value in ids
        )

    def __contains__(self, entry: object) -> bool:
        return entry in self._entries

    def __iter__(self) -> Iterator[SelectionEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SelectionSet):
            return self._entries == other._entries
        if isinstance(other, (set, frozenset)):
            return self._entries == other
        return NotImplemented

    def add(self, entry: SelectionEntry) -> None:
        self._entries.add(entry)

    def discard(self, entry: SelectionEntry) -> None:
        self._entries.discard(entry)

    def update(self, entries: Iterable[SelectionEntry]) -> None:
        self._entries.update(entries)

    def difference_update(self, entries: Iterable[SelectionEntry]) -> None:
        self._entries.difference_update(entries)

    def replace(self, entries: Iterable[SelectionEntry]) -> None:
        self._entries = set(entries)

    def clear(self) -> None:
        self._entries.clear()

    def copy(self) -> "SelectionSet":
        return SelectionSet(self._entries)

    def pending(self) -> list[Pending]:
        return sorted(entry for entry in self._entries if isinstance(entry, Pending))

    def resolved(self) -> set[RecordId]:
        return {entry for entry in self._entries if not isinstance(entry, Pending)}

    def snapshot(self, codec: MarkerCodec) -> frozenset[int]:
        return frozenset(
            codec.to_placeholder(entry) if isinstance(entry, Pending) else entry
            for entry in self._entries
        )

    def __repr__(self) -> str:
        pending = sum(1 for entry in self._entries if isinstance(entry, Pending))
        return f"SelectionSet(resolved={len(self) - pending}, pending={pending})"


__all__ = ["SelectionEntry", "SelectionSet"]
