"""Shift sequence reconstruction.

Row and column shifts commute and each one adds 1 (mod N) to the palette index
of the cells it touches. Going from ``grid`` to ``target`` therefore needs row
counts ``r`` and column counts ``c`` with

    idx(target[i][j]) - idx(grid[i][j]) == r[i] + c[j]  (mod N)

for every cell. Solutions form a family ``(r[i] + k, c[j] - k)``; the solver
picks the ``k`` with the fewest total shifts.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from chromashift.components.palette import Palette
from chromashift.components.puzzle import Grid, ShiftKind, ShiftMove
from chromashift.systems.shift_ops import validate_grid


def _difference_matrix(grid: Grid, target: Grid, palette: Palette) -> List[List[int]]:
    n = len(palette)
    return [
        [(palette.index_of(t) - palette.index_of(g)) % n for g, t in zip(row, target_row)]
        for row, target_row in zip(grid, target)
    ]


def shift_counts(grid: Grid, target: Grid, palette: Palette) -> Optional[Tuple[List[int], List[int]]]:
    """Return minimal ``(row_counts, column_counts)`` or None when unreachable."""
    size = validate_grid(grid, palette)
    if validate_grid(target, palette) != size:
        return None
    n = len(palette)
    diff = _difference_matrix(grid, target, palette)
    rows = [(diff[i][0] - diff[0][0]) % n for i in range(size)]
    cols = [diff[0][j] % n for j in range(size)]
    for i in range(size):
        for j in range(size):
            if (rows[i] + cols[j]) % n != diff[i][j]:
                return None
    best: Tuple[List[int], List[int]] | None = None
    best_total = -1
    for k in range(n):
        row_counts = [(r + k) % n for r in rows]
        col_counts = [(c - k) % n for c in cols]
        total = sum(row_counts) + sum(col_counts)
        if best is None or total < best_total:
            best = (row_counts, col_counts)
            best_total = total
    return best


def solve(grid: Grid, target: Grid, palette: Palette) -> Optional[List[ShiftMove]]:
    """Shortest forward shift sequence turning ``grid`` into ``target``.

    Returns an empty list when the grids are already equal and None when the
    target is unreachable.
    """
    counts = shift_counts(grid, target, palette)
    if counts is None:
        return None
    row_counts, col_counts = counts
    moves: List[ShiftMove] = []
    for index, count in enumerate(row_counts):
        moves.extend(ShiftMove(ShiftKind.ROW, index) for _ in range(count))
    for index, count in enumerate(col_counts):
        moves.extend(ShiftMove(ShiftKind.COLUMN, index) for _ in range(count))
    return moves


def is_reachable(grid: Grid, target: Grid, palette: Palette) -> bool:
    return shift_counts(grid, target, palette) is not None


def minimum_moves(grid: Grid, target: Grid, palette: Palette) -> Optional[int]:
    counts = shift_counts(grid, target, palette)
    if counts is None:
        return None
    return sum(counts[0]) + sum(counts[1])


def next_move(grid: Grid, target: Grid, palette: Palette) -> Optional[ShiftMove]:
    """First move of a shortest solution, or None when solved or unreachable."""
    moves = solve(grid, target, palette)
    if not moves:
        return None
    return moves[0]
