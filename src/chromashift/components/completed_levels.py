from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Set


@dataclass(slots=True)
class CompletedLevels:
    """Insert-only set of finished level ids.

    Only insertion is supported, so a finished level stays finished across
    resets, revisits and restarts.
    """

    _levels: Set[int] = field(default_factory=set)

    def __contains__(self, level: object) -> bool:
        return level in self._levels

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._levels))

    def __len__(self) -> int:
        return len(self._levels)

    def mark(self, level: int) -> bool:
        """Record ``level``; returns True when it was not already recorded."""
        if level in self._levels:
            return False
        self._levels.add(int(level))
        return True

    def merge(self, levels: Iterable[int]) -> None:
        for level in levels:
            self._levels.add(int(level))

    def snapshot(self) -> frozenset[int]:
        return frozenset(self._levels)
