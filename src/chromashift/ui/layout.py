from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from chromashift.components.puzzle import ShiftKind, ShiftMove
from chromashift.constants import (
    ARROW_STRIP_RATIO,
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    HUD_HEIGHT,
    LEGEND_BOTTOM,
    LEGEND_GAP,
    LEGEND_SWATCH_SIZE,
    MIN_CELL_SIZE,
    TARGET_GAP,
    TARGET_PREVIEW_SCALE,
)

Rect = Tuple[float, float, float, float]  # left, bottom, width, height


def _contains(rect: Rect, x: float, y: float) -> bool:
    left, bottom, width, height = rect
    return left <= x < left + width and bottom <= y < bottom + height


@dataclass(frozen=True)
class BoardGeometry:
    """Screen placement of the play grid, its shift arrows and the target preview.

    Row 0 is drawn at the top (arcade's y axis grows upwards).
    """

    size: int
    cell_size: float
    left: float
    bottom: float
    arrow_strip: float
    target_cell_size: float
    target_left: float
    target_bottom: float

    @property
    def board_extent(self) -> float:
        return self.size * self.cell_size

    @property
    def top(self) -> float:
        return self.bottom + self.board_extent

    def cell_rect(self, row: int, col: int) -> Rect:
        return (
            self.left + col * self.cell_size,
            self.bottom + (self.size - 1 - row) * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def target_cell_rect(self, row: int, col: int) -> Rect:
        return (
            self.target_left + col * self.target_cell_size,
            self.target_bottom + (self.size - 1 - row) * self.target_cell_size,
            self.target_cell_size,
            self.target_cell_size,
        )

    def row_arrow_rect(self, row: int) -> Rect:
        _, bottom, _, height = self.cell_rect(row, 0)
        return (self.left - self.arrow_strip, bottom, self.arrow_strip, height)

    def column_arrow_rect(self, col: int) -> Rect:
        left, _, width, _ = self.cell_rect(0, col)
        return (left, self.top, width, self.arrow_strip)

    def hit_test(self, x: float, y: float) -> ShiftMove | None:
        """Map a point on an arrow to the shift it triggers."""
        for index in range(self.size):
            if _contains(self.row_arrow_rect(index), x, y):
                return ShiftMove(ShiftKind.ROW, index)
            if _contains(self.column_arrow_rect(index), x, y):
                return ShiftMove(ShiftKind.COLUMN, index)
        return None


def compute_board_geometry(window_width: float, window_height: float, size: int) -> BoardGeometry:
    """Fit the grid, its arrows and the target preview into the window."""
    if size <= 0:
        raise ValueError(f"Grid size must be positive, got {size}")
    usable_height = window_height - HUD_HEIGHT - BOTTOM_MARGIN
    max_w = window_width * BOARD_MAX_WIDTH_PCT
    max_h = usable_height * BOARD_MAX_HEIGHT_PCT
    units = size + ARROW_STRIP_RATIO
    cell_size = max(min(max_w / units, max_h / units), MIN_CELL_SIZE)
    arrow_strip = cell_size * ARROW_STRIP_RATIO
    board_extent = size * cell_size
    target_cell = cell_size * TARGET_PREVIEW_SCALE
    total_width = arrow_strip + board_extent + TARGET_GAP + size * target_cell
    left = (window_width - total_width) / 2 + arrow_strip
    bottom = BOTTOM_MARGIN + (usable_height - board_extent - arrow_strip) / 2
    target_left = left + board_extent + TARGET_GAP
    target_bottom = bottom + board_extent - size * target_cell
    return BoardGeometry(
        size=size,
        cell_size=cell_size,
        left=left,
        bottom=bottom,
        arrow_strip=arrow_strip,
        target_cell_size=target_cell,
        target_left=target_left,
        target_bottom=target_bottom,
    )


def compute_legend_rects(window_width: float, count: int) -> list[Rect]:
    """One swatch per palette color, in palette order, centered horizontally."""
    total = count * LEGEND_SWATCH_SIZE + max(count - 1, 0) * LEGEND_GAP
    left = (window_width - total) / 2
    step = LEGEND_SWATCH_SIZE + LEGEND_GAP
    return [
        (left + index * step, LEGEND_BOTTOM, LEGEND_SWATCH_SIZE, LEGEND_SWATCH_SIZE)
        for index in range(count)
    ]
