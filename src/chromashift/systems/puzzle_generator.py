"""Puzzle lookup (catalog) and synthesis (procedural levels)."""
from __future__ import annotations

import logging
import random
from typing import List, Tuple

from chromashift.components.palette import Palette
from chromashift.components.puzzle import Grid, Puzzle, ShiftKind, ShiftMove
from chromashift.constants import (
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    PROCEDURAL_COLOR_COUNT,
    PROCEDURAL_GRID_SIZE,
    PROCEDURAL_LEVEL_START,
    PROCEDURAL_SCRAMBLE_MOVES,
)
from chromashift.errors import LevelNotFoundError, PreconditionViolation
from chromashift.factories.levels import LevelCatalog, load_catalog
from chromashift.systems.shift_ops import apply_shift

logger = logging.getLogger(__name__)


class PuzzleGenerator:
    """Resolve a level id to a Puzzle.

    Catalog ids map one-to-one to static definitions. Ids at or beyond
    ``procedural_start`` are synthesized: a random initial grid is scrambled by
    ``scramble_moves`` random shifts and the scrambled grid becomes the target,
    so the target is always reachable. Everything else raises
    ``LevelNotFoundError``.
    """

    def __init__(
        self,
        catalog: LevelCatalog | None = None,
        *,
        rng: random.Random | None = None,
        seed: int | None = None,
        procedural_start: int | None = PROCEDURAL_LEVEL_START,
        procedural_size: int = PROCEDURAL_GRID_SIZE,
        procedural_colors: int = PROCEDURAL_COLOR_COUNT,
        scramble_moves: int = PROCEDURAL_SCRAMBLE_MOVES,
    ) -> None:
        if not MIN_GRID_SIZE <= procedural_size <= MAX_GRID_SIZE:
            raise PreconditionViolation(f"Procedural grid size {procedural_size} out of range")
        if scramble_moves < 1:
            raise PreconditionViolation("Procedural levels need at least one scramble move")
        self.catalog = catalog if catalog is not None else load_catalog()
        if rng is None:
            rng = random.Random(seed) if seed is not None else random.Random()
        self._rng = rng
        self.procedural_start = procedural_start
        self.procedural_palette = Palette.base(procedural_colors)
        self.procedural_size = procedural_size
        self.scramble_moves = scramble_moves

    def is_procedural(self, level: int) -> bool:
        return (
            self.procedural_start is not None
            and level >= self.procedural_start
            and level not in self.catalog
        )

    def has_level(self, level: int) -> bool:
        return level >= 1 and (level in self.catalog or self.is_procedural(level))

    def generate(self, level: int) -> Puzzle:
        if level < 1:
            raise LevelNotFoundError(level, reason="invalid_level")
        spec = self.catalog.get(level)
        if spec is not None:
            return spec.to_puzzle()
        if self.is_procedural(level):
            return self._generate_procedural(level)
        raise LevelNotFoundError(level)

    # ------------------------------------------------------------------
    # Procedural helpers
    # ------------------------------------------------------------------

    def random_grid(self, size: int, palette: Palette) -> Grid:
        return tuple(
            tuple(self._rng.choice(palette.colors) for _ in range(size))
            for _ in range(size)
        )

    def random_move(self, size: int) -> ShiftMove:
        kind = ShiftKind.ROW if self._rng.random() > 0.5 else ShiftKind.COLUMN
        return ShiftMove(kind, self._rng.randrange(size))

    def scramble(self, grid: Grid, palette: Palette, moves: int) -> Tuple[Grid, List[ShiftMove]]:
        """Apply ``moves`` random shifts; return the result and the moves applied."""
        size = len(grid)
        applied: List[ShiftMove] = []
        for _ in range(moves):
            move = self.random_move(size)
            grid = apply_shift(grid, move, palette)
            applied.append(move)
        return grid, applied

    def _generate_procedural(self, level: int) -> Puzzle:
        palette = self.procedural_palette
        initial_grid = self.random_grid(self.procedural_size, palette)
        target_grid, moves = self.scramble(initial_grid, palette, self.scramble_moves)
        logger.debug("Generated procedural level %d with %d scramble moves", level, len(moves))
        return Puzzle(
            level=level,
            size=self.procedural_size,
            palette=palette,
            initial_grid=initial_grid,
            target_grid=target_grid,
            procedural=True,
        )
