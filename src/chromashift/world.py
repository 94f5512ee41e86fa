from esper import World

from chromashift.components.completed_levels import CompletedLevels
from chromashift.components.game_state import GameMode, GameState
from chromashift.components.level_session import LevelSession
from chromashift.constants import FIRST_LEVEL


def create_world(*, initial_level: int = FIRST_LEVEL) -> World:
    """Create a world holding the single session entity.

    The entity carries GameState, LevelSession and CompletedLevels; systems look
    them up through ``world.get_component``.
    """
    world = World()
    world.create_entity(
        GameState(mode=GameMode.LOADING),
        LevelSession(current_level=initial_level),
        CompletedLevels(),
    )
    return world


def get_session_entity(world: World) -> int:
    for entity, _ in world.get_component(LevelSession):
        return entity
    raise RuntimeError("LevelSession entity not found")
