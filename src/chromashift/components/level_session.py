from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from chromashift.components.palette import Palette
from chromashift.components.puzzle import Grid, Puzzle
from chromashift.constants import FIRST_LEVEL


@dataclass(slots=True)
class LevelSession:
    """Live gameplay state for the puzzle currently on the board.

    ``grid`` is replaced (never mutated) on every shift. ``puzzle`` is None
    until the first successful load.
    """

    current_level: int = FIRST_LEVEL
    move_count: int = 0
    is_complete: bool = False
    puzzle: Optional[Puzzle] = None
    grid: Grid = ()
    # Minimum number of shifts needed from the initial grid.
    par: Optional[int] = None
    has_next_level: bool = True

    @property
    def target_grid(self) -> Grid:
        return self.puzzle.target_grid if self.puzzle is not None else ()

    @property
    def palette(self) -> Optional[Palette]:
        return self.puzzle.palette if self.puzzle is not None else None

    @property
    def size(self) -> int:
        return self.puzzle.size if self.puzzle is not None else 0

    @property
    def loaded(self) -> bool:
        return self.puzzle is not None
