"""Word entries and the immutable catalog of groups."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class WordEntry:
    word: str
    synonym: str = ""
    sentence: str = ""


@dataclass(frozen=True)
class Group:
    id: int
    name: str
    entries: tuple[WordEntry, ...] = ()

    def __len__(self) -> int:
        return len(self.entries)

    def entry_at(self, index: int) -> WordEntry | None:
        if 0 <= index < len(self.entries):
            return self.entries[index]
        return None

    def clamp_index(self, index: int) -> int:
        """Clamp index into [0, len - 1]; an empty group always yields 0."""
        if not self.entries:
            return 0
        return max(0, min(len(self.entries) - 1, int(index)))


class EntryCatalog:
    """Ordered, read-only collection of word groups keyed by id."""

    def __init__(self, groups: Iterable[Group]) -> None:
        ordered = tuple(groups)
        by_id: dict[int, Group] = {}
        for group in ordered:
            if group.id in by_id:
                raise ValueError(f"Duplicate group id: {group.id}")
            by_id[group.id] = group
        self._groups = ordered
        self._by_id = by_id

    def __iter__(self) -> Iterator[Group]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __contains__(self, group_id: object) -> bool:
        return group_id in self._by_id

    @property
    def groups(self) -> tuple[Group, ...]:
        return self._groups

    @property
    def group_ids(self) -> list[int]:
        return [group.id for group in self._groups]

    @property
    def first_group_id(self) -> int | None:
        return self._groups[0].id if self._groups else None

    def get(self, group_id: int) -> Group:
        try:
            return self._by_id[group_id]
        except KeyError:
            raise ValueError(f"Unknown group id: {group_id}") from None
