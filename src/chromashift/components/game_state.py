"""Game state resource describing the active session phase."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """Session phases; shifts are accepted only while PLAYING."""
    LOADING = auto()
    PLAYING = auto()
    COMPLETED = auto()


@dataclass
class GameState:
    """Singleton component storing the current session phase."""
    mode: GameMode = GameMode.LOADING
