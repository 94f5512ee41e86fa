import random

from chromashift.components.completed_levels import CompletedLevels
from chromashift.components.game_state import GameMode
from chromashift.components.puzzle import ShiftKind, ShiftMove, make_grid
from chromashift.events.bus import (
    EVENT_GAME_MODE_CHANGED,
    EVENT_HINT_READY,
    EVENT_HINT_REQUEST,
    EVENT_LEVEL_COMPLETED,
    EVENT_LEVEL_JUMP_REQUEST,
    EVENT_LEVEL_LOAD_FAILED,
    EVENT_LEVEL_LOADED,
    EVENT_LEVEL_NEXT_REQUEST,
    EVENT_LEVEL_PREVIOUS_REQUEST,
    EVENT_LEVEL_RESET_REQUEST,
    EVENT_SHIFT_REJECTED,
    EVENT_SHIFT_REQUEST,
    EventBus,
)
from chromashift.factories.levels import load_catalog
from chromashift.systems.level_session_system import LevelSessionSystem
from chromashift.systems.puzzle_generator import PuzzleGenerator
from chromashift.utils.game_state import get_game_state
from chromashift.world import create_world

from helpers import ONE_MOVE_TARGET, SOLVED_3X3


def _setup(catalog, *, procedural_start=10, seed=0):
    bus = EventBus()
    world = create_world()
    generator = PuzzleGenerator(catalog, rng=random.Random(seed), procedural_start=procedural_start)
    system = LevelSessionSystem(world, bus, generator)
    return bus, world, system


def _capture(bus, name):
    captured = []
    bus.subscribe(name, lambda sender, **payload: captured.append(payload))
    return captured


def _mode(world):
    return get_game_state(world).mode


def test_load_level_initializes_session(small_catalog):
    bus, world, system = _setup(small_catalog)
    loaded = _capture(bus, EVENT_LEVEL_LOADED)

    assert _mode(world) == GameMode.LOADING
    assert system.load_level(1) is True

    session = system.session
    assert session.current_level == 1
    assert session.grid == make_grid(SOLVED_3X3)
    assert session.target_grid == make_grid(ONE_MOVE_TARGET)
    assert session.move_count == 0
    assert session.is_complete is False
    assert session.par == 1
    assert _mode(world) == GameMode.PLAYING
    assert loaded[-1]["level"] == 1
    assert loaded[-1]["procedural"] is False


def test_solving_marks_level_complete(small_catalog):
    bus, world, system = _setup(small_catalog)
    completed_events = _capture(bus, EVENT_LEVEL_COMPLETED)
    system.load_level(1)

    assert system.shift_row(0) is True

    session = system.session
    assert session.is_complete is True
    assert session.move_count == 1
    assert 1 in system.completed_levels
    assert _mode(world) == GameMode.COMPLETED
    assert completed_events[-1]["level"] == 1
    assert completed_events[-1]["move_count"] == 1


def test_shift_ignored_when_complete(small_catalog):
    bus, world, system = _setup(small_catalog)
    rejected = _capture(bus, EVENT_SHIFT_REJECTED)
    system.load_level(1)
    system.shift_row(0)
    grid_before = system.session.grid

    assert system.shift_column(1) is False
    assert system.apply_shift(ShiftKind.ROW, 2) is False

    assert system.session.grid == grid_before
    assert system.session.move_count == 1
    assert rejected[-1]["reason"] == "complete"


def test_shift_rejected_before_any_level_loaded(small_catalog):
    bus, world, system = _setup(small_catalog)
    rejected = _capture(bus, EVENT_SHIFT_REJECTED)

    assert system.shift_row(0) is False
    assert rejected[-1]["reason"] == "no_puzzle"


def test_already_solved_start_needs_a_move(small_catalog):
    bus, world, system = _setup(small_catalog)
    system.load_level(2)

    session = system.session
    assert session.grid == session.target_grid
    assert session.is_complete is False
    assert session.par == 0

    system.shift_row(0)
    assert session.is_complete is False
    system.shift_row(0)
    assert session.is_complete is False
    system.shift_row(0)

    assert session.move_count == 3
    assert session.is_complete is True
    assert 2 in system.completed_levels


def test_missing_level_keeps_previous_state(small_catalog):
    bus, world, system = _setup(small_catalog)
    failures = _capture(bus, EVENT_LEVEL_LOAD_FAILED)
    system.load_level(1)
    system.shift_column(2)
    grid_before = system.session.grid

    assert system.jump_to_level(3) is False

    session = system.session
    assert session.current_level == 1
    assert session.grid == grid_before
    assert session.move_count == 1
    assert _mode(world) == GameMode.PLAYING
    assert failures[-1]["level"] == 3
    assert failures[-1]["reason"] == "not_found"


def test_completed_levels_survive_reset_and_revisit(small_catalog):
    bus, world, system = _setup(small_catalog)
    system.load_level(1)
    system.shift_row(0)
    assert 1 in system.completed_levels

    system.reset_level()
    assert 1 in system.completed_levels
    assert system.session.is_complete is False
    assert system.session.move_count == 0

    system.jump_to_level(2)
    system.jump_to_level(1)
    assert 1 in system.completed_levels
    assert list(system.completed_levels) == [1]


def test_next_level_advances_and_resets_counters(small_catalog):
    bus, world, system = _setup(small_catalog)
    system.load_level(1)
    system.shift_row(0)

    assert system.next_level() is True

    session = system.session
    assert session.current_level == 2
    assert session.move_count == 0
    assert session.is_complete is False
    assert _mode(world) == GameMode.PLAYING


def test_next_level_into_gap_reports_no_next_level(small_catalog):
    bus, world, system = _setup(small_catalog)
    system.load_level(2)
    assert system.session.has_next_level is False

    assert system.next_level() is False

    assert system.session.current_level == 2
    assert system.session.has_next_level is False
    assert system.session.grid == make_grid(SOLVED_3X3)


def test_next_level_past_catalog_switches_to_procedural():
    catalog = load_catalog()
    bus, world, system = _setup(catalog, procedural_start=51, seed=3)
    system.load_level(50)
    assert system.session.has_next_level is True

    assert system.next_level() is True

    session = system.session
    assert session.current_level == 51
    assert session.puzzle.procedural is True
    assert session.size == 6
    assert len(session.palette) == 6


def test_previous_level_stops_at_first(small_catalog):
    bus, world, system = _setup(small_catalog)
    system.load_level(2)

    assert system.previous_level() is True
    assert system.session.current_level == 1
    assert system.previous_level() is False
    assert system.session.current_level == 1


def test_reset_procedural_level_regenerates_or_restores():
    catalog = load_catalog()
    bus, world, system = _setup(catalog, procedural_start=51, seed=11)
    system.load_level(55)
    first_puzzle = system.session.puzzle
    system.shift_row(0)

    system.reset_level(regenerate=False)
    assert system.session.puzzle is first_puzzle
    assert system.session.grid == first_puzzle.initial_grid
    assert system.session.move_count == 0

    system.reset_level()
    assert system.session.current_level == 55
    assert system.session.puzzle.procedural is True
    assert system.session.move_count == 0


def test_state_machine_passes_through_loading(small_catalog):
    bus, world, system = _setup(small_catalog)
    modes = _capture(bus, EVENT_GAME_MODE_CHANGED)
    system.load_level(1)
    system.shift_row(0)
    system.reset_level()

    transitions = [(m["previous_mode"], m["new_mode"]) for m in modes]
    assert transitions == [
        (GameMode.LOADING, GameMode.PLAYING),
        (GameMode.PLAYING, GameMode.COMPLETED),
        (GameMode.COMPLETED, GameMode.LOADING),
        (GameMode.LOADING, GameMode.PLAYING),
    ]


def test_bus_intents_drive_the_session(small_catalog):
    bus, world, system = _setup(small_catalog)
    hints = _capture(bus, EVENT_HINT_READY)
    bus.emit(EVENT_LEVEL_JUMP_REQUEST, level=1)
    assert system.session.current_level == 1

    bus.emit(EVENT_HINT_REQUEST)
    assert hints[-1]["move"] == ShiftMove(ShiftKind.ROW, 0)

    bus.emit(EVENT_SHIFT_REQUEST, kind=ShiftKind.ROW, index=0)
    assert system.session.is_complete is True

    bus.emit(EVENT_LEVEL_NEXT_REQUEST)
    assert system.session.current_level == 2
    bus.emit(EVENT_SHIFT_REQUEST, kind="column", index=1)
    assert system.session.move_count == 1

    bus.emit(EVENT_LEVEL_RESET_REQUEST)
    assert system.session.move_count == 0

    bus.emit(EVENT_LEVEL_PREVIOUS_REQUEST)
    assert system.session.current_level == 1

    bus.emit(EVENT_LEVEL_JUMP_REQUEST, level="not a level")
    assert system.session.current_level == 1


def test_hint_is_none_when_complete(small_catalog):
    bus, world, system = _setup(small_catalog)
    system.load_level(1)
    assert system.hint() == ShiftMove(ShiftKind.ROW, 0)
    system.shift_row(0)
    assert system.hint() is None


def test_start_falls_back_to_first_level(small_catalog):
    bus, world, system = _setup(small_catalog)
    failures = _capture(bus, EVENT_LEVEL_LOAD_FAILED)

    assert system.start(3) is True

    assert failures[-1]["level"] == 3
    assert system.session.current_level == 1


def test_sessions_in_separate_worlds_are_independent(small_catalog):
    _, world_a, system_a = _setup(small_catalog)
    _, world_b, system_b = _setup(small_catalog)
    system_a.load_level(1)
    system_b.load_level(1)

    system_a.shift_row(0)

    assert system_a.session.is_complete is True
    assert system_b.session.is_complete is False
    assert 1 not in next(comp for _, comp in world_b.get_component(CompletedLevels))
