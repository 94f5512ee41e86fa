from esper import World

from chromashift.components.game_state import GameMode
from chromashift.components.level_session import LevelSession
from chromashift.events.bus import (
    EVENT_HINT_REQUEST,
    EVENT_KEY_PRESS,
    EVENT_LEVEL_NEXT_REQUEST,
    EVENT_LEVEL_PREVIOUS_REQUEST,
    EVENT_LEVEL_RESET_REQUEST,
    EVENT_MOUSE_PRESS,
    EVENT_SHIFT_REQUEST,
    EVENT_TARGET_TOGGLE_REQUEST,
    EventBus,
)
from chromashift.ui.layout import compute_board_geometry
from chromashift.utils.game_state import get_game_state

# arcade.key values, kept as raw codes so the system imports without arcade.
KEY_H = 104
KEY_N = 110
KEY_P = 112
KEY_R = 114
KEY_T = 116
KEY_ENTER = 65293
MOUSE_BUTTON_LEFT = 1


class InputSystem:
    """Translates raw mouse/keyboard events into shift and navigation intents."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None or button != MOUSE_BUTTON_LEFT:
            return
        state = get_game_state(self.world)
        if state is None or state.mode != GameMode.PLAYING:
            return
        session = self._session()
        if session is None or not session.loaded:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, session.size)
        move = geometry.hit_test(float(x), float(y))
        if move is None:
            return
        self.event_bus.emit(EVENT_SHIFT_REQUEST, kind=move.kind, index=move.index)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol == KEY_R:
            self.event_bus.emit(EVENT_LEVEL_RESET_REQUEST)
        elif symbol == KEY_P:
            self.event_bus.emit(EVENT_LEVEL_PREVIOUS_REQUEST)
        elif symbol == KEY_H:
            self.event_bus.emit(EVENT_HINT_REQUEST)
        elif symbol == KEY_N:
            self.event_bus.emit(EVENT_LEVEL_NEXT_REQUEST)
        elif symbol == KEY_T:
            self.event_bus.emit(EVENT_TARGET_TOGGLE_REQUEST)
        elif symbol == KEY_ENTER:
            # Enter only advances from the completion screen.
            state = get_game_state(self.world)
            if state is not None and state.mode == GameMode.COMPLETED:
                self.event_bus.emit(EVENT_LEVEL_NEXT_REQUEST)

    def _session(self) -> LevelSession | None:
        for _, session in self.world.get_component(LevelSession):
            return session
        return None
