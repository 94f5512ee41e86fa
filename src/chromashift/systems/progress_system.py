from __future__ import annotations

import json
import logging

from esper import World

from chromashift.components.completed_levels import CompletedLevels
from chromashift.components.level_session import LevelSession
from chromashift.constants import FIRST_LEVEL, PREF_KEY_COMPLETED_LEVELS, PREF_KEY_LEVEL
from chromashift.errors import PersistenceError
from chromashift.events.bus import (
    EVENT_LEVEL_COMPLETED,
    EVENT_LEVEL_LOADED,
    EVENT_PROGRESS_RESTORED,
    EventBus,
)
from chromashift.utils.preferences import JsonFileStore, KeyValueStore
from chromashift.world import get_session_entity

logger = logging.getLogger(__name__)


class ProgressSystem:
    """Restores and persists the current level and the completed-level set.

    Store failures are logged and never interrupt play: reads fall back to
    defaults (level 1, nothing completed) and writes are dropped.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        store: KeyValueStore | None = None,
        load_existing: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.store: KeyValueStore = store if store is not None else JsonFileStore()
        self._session_entity = get_session_entity(world)

        self.event_bus.subscribe(EVENT_LEVEL_LOADED, self._on_level_loaded)
        self.event_bus.subscribe(EVENT_LEVEL_COMPLETED, self._on_level_completed)

        if load_existing:
            self.load_progress()

    def _session(self) -> LevelSession:
        return self.world.component_for_entity(self._session_entity, LevelSession)

    def _completed(self) -> CompletedLevels:
        return self.world.component_for_entity(self._session_entity, CompletedLevels)

    def _read(self, key: str) -> str | None:
        try:
            return self.store.get(key)
        except (PersistenceError, OSError) as exc:
            logger.warning("Error reading %s: %s", key, exc)
        except Exception:
            logger.exception("Unexpected error reading %s", key)
        return None

    def _write(self, key: str, value: str) -> bool:
        try:
            stored = self.store.set(key, value)
        except (PersistenceError, OSError) as exc:
            logger.warning("Error storing %s: %s", key, exc)
            return False
        except Exception:
            # Store errors must not escape into bus handlers.
            logger.exception("Unexpected error storing %s", key)
            return False
        if not stored:
            logger.warning("Error storing %s: store rejected the value", key)
            return False
        return True

    def read_level(self) -> int:
        raw = self._read(PREF_KEY_LEVEL)
        if raw is None:
            return FIRST_LEVEL
        try:
            level = int(raw)
        except ValueError:
            logger.warning("Ignoring stored level %r", raw)
            return FIRST_LEVEL
        if level < FIRST_LEVEL:
            logger.warning("Ignoring stored level %d", level)
            return FIRST_LEVEL
        return level

    def read_completed_levels(self) -> set[int]:
        raw = self._read(PREF_KEY_COMPLETED_LEVELS)
        if raw is None:
            return set()
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable completed levels %r", raw)
            return set()
        if isinstance(payload, dict):
            candidates = [key for key, done in payload.items() if done]
        elif isinstance(payload, list):
            candidates = payload
        else:
            logger.warning("Ignoring completed levels of type %s", type(payload).__name__)
            return set()
        levels: set[int] = set()
        for candidate in candidates:
            try:
                levels.add(int(candidate))
            except (TypeError, ValueError):
                logger.warning("Ignoring completed level id %r", candidate)
        return levels

    def load_progress(self) -> int:
        """Copy stored progress into the session; returns the level to start from."""
        level = self.read_level()
        completed = self._completed()
        completed.merge(self.read_completed_levels())
        session = self._session()
        if session.puzzle is None:
            session.current_level = level
        self.event_bus.emit(EVENT_PROGRESS_RESTORED, level=level, completed_levels=completed.snapshot())
        return level

    def save_level(self, level: int) -> bool:
        return self._write(PREF_KEY_LEVEL, str(level))

    def save_completed_levels(self) -> bool:
        payload = {str(level): True for level in self._completed()}
        return self._write(PREF_KEY_COMPLETED_LEVELS, json.dumps(payload))

    def save_progress(self) -> bool:
        saved_level = self.save_level(self._session().current_level)
        saved_completed = self.save_completed_levels()
        return saved_level and saved_completed

    # Event handlers -----------------------------------------------------

    def _on_level_loaded(self, sender, **payload) -> None:
        level = payload.get("level")
        if level is None:
            return
        self.save_level(level)

    def _on_level_completed(self, sender, **payload) -> None:
        self.save_completed_levels()
