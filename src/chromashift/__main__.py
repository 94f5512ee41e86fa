"""Entry point for Chromatic Shift.

Sets up the ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color

from chromashift.constants import WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from chromashift.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EventBus
from chromashift.systems.input import InputSystem
from chromashift.systems.level_session_system import LevelSessionSystem
from chromashift.systems.progress_system import ProgressSystem
from chromashift.systems.render import RenderSystem
from chromashift.world import create_world


class ChromaticShiftWindow(Window):
    def __init__(self):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.event_bus = EventBus()
        self.world = create_world()

        # Progress must subscribe before the first load so it is persisted.
        self.progress_system = ProgressSystem(self.world, self.event_bus)
        self.level_session_system = LevelSessionSystem(self.world, self.event_bus)

        self.render_system = RenderSystem(self.world, self.event_bus, self)
        self.input_system = InputSystem(self.world, self.event_bus, self)

        self.level_session_system.start()
        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ChromaticShiftWindow()
    run()


if __name__ == "__main__":
    main()
