from chromashift.components.completed_levels import CompletedLevels
from chromashift.components.game_state import GameMode, GameState
from chromashift.components.level_session import LevelSession
from chromashift.events.bus import EVENT_GAME_MODE_CHANGED, EventBus
from chromashift.utils.game_state import get_game_state, set_game_mode
from chromashift.world import create_world, get_session_entity


def test_world_has_single_session_entity():
    world = create_world(initial_level=7)
    entity = get_session_entity(world)

    assert world.component_for_entity(entity, GameState).mode == GameMode.LOADING
    assert world.component_for_entity(entity, LevelSession).current_level == 7
    assert len(world.component_for_entity(entity, CompletedLevels)) == 0
    assert world.component_for_entity(entity, LevelSession).loaded is False


def test_set_game_mode_emits_only_on_change():
    bus = EventBus()
    world = create_world()
    changes = []
    bus.subscribe(EVENT_GAME_MODE_CHANGED, lambda sender, **payload: changes.append(payload))

    set_game_mode(world, bus, GameMode.LOADING)
    set_game_mode(world, bus, GameMode.PLAYING)

    assert get_game_state(world).mode == GameMode.PLAYING
    assert changes == [{"previous_mode": GameMode.LOADING, "new_mode": GameMode.PLAYING}]


def test_completed_levels_are_insert_only():
    completed = CompletedLevels()
    assert completed.mark(3) is True
    assert completed.mark(3) is False
    completed.merge([1, 3])
    assert list(completed) == [1, 3]
    assert completed.snapshot() == frozenset({1, 3})
    assert not hasattr(completed, "remove")
    assert not hasattr(completed, "discard")
