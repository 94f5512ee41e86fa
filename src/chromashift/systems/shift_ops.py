"""Pure grid operations: cyclic row/column shifts and the solve check."""
from __future__ import annotations

from typing import Sequence

from chromashift.components.palette import Palette
from chromashift.components.puzzle import Grid, ShiftKind, ShiftMove, make_grid
from chromashift.errors import PreconditionViolation


def validate_grid(grid: Sequence[Sequence[str]], palette: Palette | None = None) -> int:
    """Check that ``grid`` is square and (optionally) uses only palette colors.

    Returns the grid size.
    """
    size = len(grid)
    if size == 0:
        raise PreconditionViolation("Grid must not be empty")
    for row_index, row in enumerate(grid):
        if len(row) != size:
            raise PreconditionViolation(
                f"Grid must be square: row {row_index} has {len(row)} cells, expected {size}"
            )
        if palette is not None:
            for col_index, color in enumerate(row):
                if color not in palette:
                    raise PreconditionViolation(
                        f"Cell ({row_index}, {col_index}) color {color!r} is not in palette {palette.colors!r}"
                    )
    return size


def _check_index(grid: Grid, index: int, axis: str) -> None:
    if not 0 <= index < len(grid):
        raise PreconditionViolation(f"{axis} index {index} out of range for grid size {len(grid)}")


def shift_row(grid: Grid, row_index: int, palette: Palette) -> Grid:
    """Return a new grid with every color in ``row_index`` advanced to its successor."""
    grid = make_grid(grid)
    _check_index(grid, row_index, "Row")
    shifted = tuple(palette.successor(color) for color in grid[row_index])
    return grid[:row_index] + (shifted,) + grid[row_index + 1:]


def shift_column(grid: Grid, col_index: int, palette: Palette) -> Grid:
    """Return a new grid with every color in ``col_index`` advanced to its successor."""
    grid = make_grid(grid)
    _check_index(grid, col_index, "Column")
    result = []
    for row in grid:
        if len(row) <= col_index:
            raise PreconditionViolation(f"Column index {col_index} out of range for ragged row {row!r}")
        result.append(row[:col_index] + (palette.successor(row[col_index]),) + row[col_index + 1:])
    return tuple(result)


def apply_shift(grid: Grid, move: ShiftMove, palette: Palette) -> Grid:
    if move.kind is ShiftKind.ROW:
        return shift_row(grid, move.index, palette)
    if move.kind is ShiftKind.COLUMN:
        return shift_column(grid, move.index, palette)
    raise PreconditionViolation(f"Unknown shift kind {move.kind!r}")


def apply_shifts(grid: Grid, moves: Sequence[ShiftMove], palette: Palette) -> Grid:
    for move in moves:
        grid = apply_shift(grid, move, palette)
    return grid


def is_solved(grid: Sequence[Sequence[str]], target_grid: Sequence[Sequence[str]]) -> bool:
    """True iff every cell of ``grid`` equals the cell at the same position in ``target_grid``."""
    if len(grid) != len(target_grid):
        raise PreconditionViolation(
            f"Grid dimensions differ: {len(grid)} rows vs {len(target_grid)} rows"
        )
    for row_index, (row, target_row) in enumerate(zip(grid, target_grid)):
        if len(row) != len(target_row):
            raise PreconditionViolation(
                f"Grid dimensions differ at row {row_index}: {len(row)} vs {len(target_row)} cells"
            )
    return all(
        cell == target_cell
        for row, target_row in zip(grid, target_grid)
        for cell, target_cell in zip(row, target_row)
    )
