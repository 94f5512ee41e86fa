"""Key-value preference stores backing progress persistence."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Protocol

from chromashift.constants import PREFERENCES_DIR_NAME, PREFERENCES_FILE_NAME
from chromashift.errors import PersistenceError


class KeyValueStore(Protocol):
    """String key-value storage; `set` returns False when the value was not stored."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> bool: ...


class MemoryStore:
    """In-process store; nothing survives the process."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self._values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> bool:
        self._values[key] = str(value)
        return True


class JsonFileStore:
    """Stores string values in a single JSON object on disk."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path is not None else self._default_path()

    @staticmethod
    def _default_path() -> Path:
        return Path.home() / PREFERENCES_DIR_NAME / PREFERENCES_FILE_NAME

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceError(f"Cannot read preferences from {self._path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise PersistenceError(f"Preferences file {self._path} does not contain an object")
        return {str(key): str(value) for key, value in payload.items()}

    def get(self, key: str) -> str | None:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> bool:
        try:
            values = self._read_all()
        except PersistenceError:
            # A corrupt file is replaced rather than blocking every later write.
            values = {}
        values[key] = str(value)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                json.dump(values, handle, indent=2)
        except OSError as exc:
            raise PersistenceError(f"Cannot write preferences to {self._path}: {exc}") from exc
        return True
