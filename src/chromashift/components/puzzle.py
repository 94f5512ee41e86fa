from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence, Tuple

from chromashift.components.palette import Palette

Row = Tuple[str, ...]
Grid = Tuple[Row, ...]


class ShiftKind(Enum):
    ROW = "row"
    COLUMN = "column"


@dataclass(frozen=True, slots=True)
class ShiftMove:
    kind: ShiftKind
    index: int


def make_grid(rows: Iterable[Sequence[str]]) -> Grid:
    """Freeze nested sequences (lists from JSON, for instance) into a Grid."""
    return tuple(tuple(row) for row in rows)


@dataclass(frozen=True, slots=True)
class Puzzle:
    """One playable puzzle instance; immutable for its lifetime."""

    level: int
    size: int
    palette: Palette
    initial_grid: Grid
    target_grid: Grid
    procedural: bool = False
