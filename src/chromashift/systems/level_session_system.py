"""Level session orchestration: loading, shifting, completion and navigation."""
from __future__ import annotations

import logging
import random

from esper import World

from chromashift.components.completed_levels import CompletedLevels
from chromashift.components.game_state import GameMode
from chromashift.components.level_session import LevelSession
from chromashift.components.puzzle import Puzzle, ShiftKind, ShiftMove
from chromashift.constants import FIRST_LEVEL
from chromashift.errors import LevelNotFoundError
from chromashift.events.bus import (
    EVENT_HINT_READY,
    EVENT_HINT_REQUEST,
    EVENT_LEVEL_COMPLETED,
    EVENT_LEVEL_JUMP_REQUEST,
    EVENT_LEVEL_LOAD_FAILED,
    EVENT_LEVEL_LOADED,
    EVENT_LEVEL_NEXT_REQUEST,
    EVENT_LEVEL_PREVIOUS_REQUEST,
    EVENT_LEVEL_RESET_REQUEST,
    EVENT_SHIFT_APPLIED,
    EVENT_SHIFT_REJECTED,
    EVENT_SHIFT_REQUEST,
    EventBus,
)
from chromashift.systems.puzzle_generator import PuzzleGenerator
from chromashift.systems.shift_ops import apply_shift, is_solved
from chromashift.systems.solver import minimum_moves, next_move
from chromashift.utils.game_state import get_game_state, set_game_mode
from chromashift.world import get_session_entity

logger = logging.getLogger(__name__)


class LevelSessionSystem:
    """Owns the LevelSession component and the LOADING -> PLAYING -> COMPLETED cycle.

    Failed loads leave the previous puzzle, level id and counters in place.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        generator: PuzzleGenerator | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.generator = generator if generator is not None else PuzzleGenerator(rng=rng)
        self._session_entity = get_session_entity(world)

        self.event_bus.subscribe(EVENT_SHIFT_REQUEST, self._on_shift_request)
        self.event_bus.subscribe(EVENT_LEVEL_NEXT_REQUEST, self._on_next_request)
        self.event_bus.subscribe(EVENT_LEVEL_PREVIOUS_REQUEST, self._on_previous_request)
        self.event_bus.subscribe(EVENT_LEVEL_RESET_REQUEST, self._on_reset_request)
        self.event_bus.subscribe(EVENT_LEVEL_JUMP_REQUEST, self._on_jump_request)
        self.event_bus.subscribe(EVENT_HINT_REQUEST, self._on_hint_request)

    @property
    def session(self) -> LevelSession:
        return self.world.component_for_entity(self._session_entity, LevelSession)

    @property
    def completed_levels(self) -> CompletedLevels:
        return self.world.component_for_entity(self._session_entity, CompletedLevels)

    # ------------------------------------------------------------------
    # Level loading
    # ------------------------------------------------------------------

    def start(self, level: int | None = None) -> bool:
        """Load the first puzzle of a run, falling back to level 1 if ``level`` is unavailable."""
        requested = level if level is not None else self.session.current_level
        if self.load_level(requested):
            return True
        if requested == FIRST_LEVEL:
            return False
        logger.warning("Level %s is unavailable; starting from level %d", requested, FIRST_LEVEL)
        return self.load_level(FIRST_LEVEL)

    def load_level(self, level: int) -> bool:
        state = get_game_state(self.world)
        previous_mode = state.mode if state is not None else GameMode.LOADING
        set_game_mode(self.world, self.event_bus, GameMode.LOADING)
        try:
            puzzle = self.generator.generate(level)
        except LevelNotFoundError as exc:
            logger.warning("Cannot load level %s: %s", level, exc.reason)
            set_game_mode(self.world, self.event_bus, previous_mode)
            self.event_bus.emit(EVENT_LEVEL_LOAD_FAILED, level=level, reason=exc.reason)
            return False
        self._install(puzzle)
        return True

    def _install(self, puzzle: Puzzle) -> None:
        session = self.session
        session.current_level = puzzle.level
        session.puzzle = puzzle
        session.grid = puzzle.initial_grid
        session.move_count = 0
        session.is_complete = False
        session.par = minimum_moves(puzzle.initial_grid, puzzle.target_grid, puzzle.palette)
        session.has_next_level = self.generator.has_level(puzzle.level + 1)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        logger.info("Loaded level %d (%dx%d, %d colors)", puzzle.level, puzzle.size, puzzle.size, len(puzzle.palette))
        self.event_bus.emit(
            EVENT_LEVEL_LOADED,
            level=puzzle.level,
            size=puzzle.size,
            procedural=puzzle.procedural,
            par=session.par,
        )

    # ------------------------------------------------------------------
    # Gameplay
    # ------------------------------------------------------------------

    def apply_shift(self, kind: ShiftKind | str, index: int) -> bool:
        kind = ShiftKind(kind)
        session = self.session
        if session.puzzle is None:
            self.event_bus.emit(EVENT_SHIFT_REJECTED, kind=kind, index=index, reason="no_puzzle")
            return False
        if session.is_complete:
            self.event_bus.emit(EVENT_SHIFT_REJECTED, kind=kind, index=index, reason="complete")
            return False
        session.grid = apply_shift(session.grid, ShiftMove(kind, index), session.puzzle.palette)
        session.move_count += 1
        self.event_bus.emit(EVENT_SHIFT_APPLIED, kind=kind, index=index, move_count=session.move_count)
        if session.move_count > 0 and is_solved(session.grid, session.puzzle.target_grid):
            self._complete()
        return True

    def shift_row(self, index: int) -> bool:
        return self.apply_shift(ShiftKind.ROW, index)

    def shift_column(self, index: int) -> bool:
        return self.apply_shift(ShiftKind.COLUMN, index)

    def _complete(self) -> None:
        session = self.session
        session.is_complete = True
        completed = self.completed_levels
        completed.mark(session.current_level)
        set_game_mode(self.world, self.event_bus, GameMode.COMPLETED)
        logger.info("Level %d solved in %d moves", session.current_level, session.move_count)
        self.event_bus.emit(
            EVENT_LEVEL_COMPLETED,
            level=session.current_level,
            move_count=session.move_count,
            completed_levels=completed.snapshot(),
        )

    def hint(self) -> ShiftMove | None:
        session = self.session
        if session.puzzle is None or session.is_complete:
            return None
        return next_move(session.grid, session.puzzle.target_grid, session.puzzle.palette)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next_level(self) -> bool:
        session = self.session
        if self.load_level(session.current_level + 1):
            return True
        session.has_next_level = False
        return False

    def previous_level(self) -> bool:
        session = self.session
        if session.current_level <= FIRST_LEVEL:
            return False
        return self.load_level(session.current_level - 1)

    def jump_to_level(self, level: int) -> bool:
        return self.load_level(level)

    def reset_level(self, *, regenerate: bool = True) -> bool:
        """Restart the current level.

        With ``regenerate`` the level is loaded again, which gives procedural
        levels a fresh puzzle; otherwise the current puzzle's initial grid is
        restored.
        """
        session = self.session
        if not regenerate and session.puzzle is not None:
            self._install(session.puzzle)
            return True
        return self.load_level(session.current_level)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_shift_request(self, sender, **payload) -> None:
        kind = payload.get("kind")
        index = payload.get("index")
        if kind is None or index is None:
            return
        self.apply_shift(kind, int(index))

    def _on_next_request(self, sender, **payload) -> None:
        self.next_level()

    def _on_previous_request(self, sender, **payload) -> None:
        self.previous_level()

    def _on_reset_request(self, sender, **payload) -> None:
        self.reset_level(regenerate=bool(payload.get("regenerate", True)))

    def _on_jump_request(self, sender, **payload) -> None:
        level = payload.get("level")
        if level is None:
            return
        try:
            level = int(level)
        except (TypeError, ValueError):
            logger.warning("Ignoring jump to invalid level %r", level)
            return
        self.jump_to_level(level)

    def _on_hint_request(self, sender, **payload) -> None:
        self.event_bus.emit(EVENT_HINT_READY, move=self.hint())
