from __future__ import annotations

from typing import Any

from esper import World

from chromashift.components.completed_levels import CompletedLevels
from chromashift.components.level_session import LevelSession
from chromashift.components.puzzle import ShiftKind, ShiftMove
from chromashift.constants import BASE_COLORS, CELL_PADDING, HUD_HEIGHT
from chromashift.events.bus import (
    EVENT_HINT_READY,
    EVENT_LEVEL_LOAD_FAILED,
    EVENT_LEVEL_LOADED,
    EVENT_SHIFT_APPLIED,
    EVENT_TARGET_TOGGLE_REQUEST,
    EventBus,
)
from chromashift.ui.layout import BoardGeometry, Rect, compute_board_geometry, compute_legend_rects

ARROW_COLOR = (90, 90, 110)
HINT_COLOR = (255, 255, 255)
TEXT_COLOR = (230, 230, 235)
SUCCESS_COLOR = (74, 222, 128)
WARNING_COLOR = (251, 191, 36)
UNKNOWN_CELL_COLOR = (60, 60, 60)


class RenderSystem:
    """Draws the session state: grid, shift arrows, target preview, palette legend and HUD."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.hint: ShiftMove | None = None
        self.status_message: str | None = None
        self.show_target = True
        self.event_bus.subscribe(EVENT_HINT_READY, self.on_hint_ready)
        self.event_bus.subscribe(EVENT_LEVEL_LOADED, self.on_level_loaded)
        self.event_bus.subscribe(EVENT_LEVEL_LOAD_FAILED, self.on_level_load_failed)
        self.event_bus.subscribe(EVENT_SHIFT_APPLIED, self.on_shift_applied)
        self.event_bus.subscribe(EVENT_TARGET_TOGGLE_REQUEST, self.on_target_toggle)

    def on_hint_ready(self, sender, **kwargs):
        self.hint = kwargs.get('move')

    def on_level_loaded(self, sender, **kwargs):
        self.hint = None
        self.status_message = None

    def on_level_load_failed(self, sender, **kwargs):
        self.status_message = f"Level {kwargs.get('level')} is not available"

    def on_shift_applied(self, sender, **kwargs):
        self.hint = None

    def on_target_toggle(self, sender, **kwargs):
        self.show_target = not self.show_target

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        session = self._session()
        if headless or session is None or not session.loaded:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, session.size)
        self._draw_grid(arcade, geometry, session)
        self._draw_arrows(arcade, geometry, session)
        if self.show_target:
            self._draw_target(arcade, geometry, session)
        self._draw_legend(arcade, session)
        self._draw_hud(arcade, session)

    def _draw_grid(self, arcade: Any, geometry: BoardGeometry, session: LevelSession) -> None:
        for row_index, row in enumerate(session.grid):
            for col_index, color_name in enumerate(row):
                self._draw_cell(arcade, geometry.cell_rect(row_index, col_index), color_name)

    def _draw_target(self, arcade: Any, geometry: BoardGeometry, session: LevelSession) -> None:
        for row_index, row in enumerate(session.target_grid):
            for col_index, color_name in enumerate(row):
                self._draw_cell(arcade, geometry.target_cell_rect(row_index, col_index), color_name)
        arcade.draw_text(
            "Target",
            geometry.target_left,
            geometry.top + 8,
            TEXT_COLOR,
            12,
        )

    def _draw_legend(self, arcade: Any, session: LevelSession) -> None:
        rects = compute_legend_rects(self.window.width, len(session.palette))
        for rect, color_name in zip(rects, session.palette):
            self._draw_cell(arcade, rect, color_name)

    def _draw_cell(self, arcade: Any, rect: Rect, color_name: str) -> None:
        left, bottom, width, height = rect
        color = BASE_COLORS.get(color_name, UNKNOWN_CELL_COLOR)
        arcade.draw_lbwh_rectangle_filled(
            left + CELL_PADDING,
            bottom + CELL_PADDING,
            max(width - 2 * CELL_PADDING, 1),
            max(height - 2 * CELL_PADDING, 1),
            color,
        )

    def _draw_arrows(self, arcade: Any, geometry: BoardGeometry, session: LevelSession) -> None:
        color = ARROW_COLOR if not session.is_complete else (50, 50, 55)
        for index in range(geometry.size):
            left, bottom, width, height = geometry.row_arrow_rect(index)
            # Right-pointing triangle for rows.
            arcade.draw_polygon_filled(
                [
                    (left + width * 0.25, bottom + height * 0.25),
                    (left + width * 0.25, bottom + height * 0.75),
                    (left + width * 0.8, bottom + height * 0.5),
                ],
                color,
            )
            if self.hint == ShiftMove(ShiftKind.ROW, index):
                arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, HINT_COLOR, 2)
            left, bottom, width, height = geometry.column_arrow_rect(index)
            # Down-pointing triangle for columns.
            arcade.draw_polygon_filled(
                [
                    (left + width * 0.25, bottom + height * 0.75),
                    (left + width * 0.75, bottom + height * 0.75),
                    (left + width * 0.5, bottom + height * 0.2),
                ],
                color,
            )
            if self.hint == ShiftMove(ShiftKind.COLUMN, index):
                arcade.draw_lbwh_rectangle_outline(left, bottom, width, height, HINT_COLOR, 2)

    def _draw_hud(self, arcade: Any, session: LevelSession) -> None:
        top = self.window.height - HUD_HEIGHT / 2
        completed = self._completed()
        level_label = f"Level: {session.current_level}"
        if completed is not None and session.current_level in completed:
            level_label += " (solved)"
        arcade.draw_text(level_label, 20, top, TEXT_COLOR, 16, anchor_y="center")
        moves_label = f"Moves: {session.move_count}"
        if session.par is not None:
            moves_label += f"  Par: {session.par}"
        arcade.draw_text(
            moves_label,
            self.window.width - 20,
            top,
            TEXT_COLOR,
            16,
            anchor_x="right",
            anchor_y="center",
        )
        footer = "R reset  P previous  N skip  H hint  T target"
        if session.is_complete:
            footer = f"Level complete in {session.move_count} moves!  Enter: next level"
            if not session.has_next_level:
                footer = f"Level complete in {session.move_count} moves!  No next level"
        arcade.draw_text(
            footer,
            self.window.width / 2,
            6,
            SUCCESS_COLOR if session.is_complete else TEXT_COLOR,
            12,
            anchor_x="center",
        )
        if self.status_message:
            arcade.draw_text(
                self.status_message,
                self.window.width / 2,
                top,
                WARNING_COLOR,
                14,
                anchor_x="center",
                anchor_y="center",
            )

    def _session(self) -> LevelSession | None:
        for _, session in self.world.get_component(LevelSession):
            return session
        return None

    def _completed(self) -> CompletedLevels | None:
        for _, completed in self.world.get_component(CompletedLevels):
            return completed
        return None
