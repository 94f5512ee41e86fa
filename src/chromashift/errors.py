"""Exception hierarchy shared by the engine, the catalog and the progress layer."""
from __future__ import annotations


class ChromaShiftError(Exception):
    """Base class for engine errors."""


class PreconditionViolation(ChromaShiftError, ValueError):
    """Malformed grid or palette, dimension mismatch, or out-of-range index.

    Signals a programming or data bug; never a user-recoverable condition.
    """


class CatalogError(PreconditionViolation):
    """Static level data failed validation."""


class LevelNotFoundError(ChromaShiftError, LookupError):
    """No catalog entry and not eligible for procedural generation."""

    def __init__(self, level: int, reason: str | None = None) -> None:
        self.level = level
        self.reason = reason or "not_found"
        super().__init__(f"Level data not found for level {level}")


class PersistenceError(ChromaShiftError):
    """Reading or writing the preference store failed."""
