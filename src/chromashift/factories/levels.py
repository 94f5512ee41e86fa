"""Static level catalog: loading and validation of ``data/levels.json``."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Mapping

from chromashift.components.palette import Palette
from chromashift.components.puzzle import Grid, Puzzle, make_grid
from chromashift.constants import MAX_GRID_SIZE, MAX_PALETTE_SIZE, MIN_GRID_SIZE, MIN_PALETTE_SIZE
from chromashift.errors import CatalogError, PreconditionViolation
from chromashift.systems.shift_ops import validate_grid
from chromashift.systems.solver import is_reachable

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "data" / "levels.json"


@dataclass(frozen=True)
class LevelSpec:
    level: int
    grid_size: int
    palette: Palette
    initial_grid: Grid
    target_grid: Grid

    def to_puzzle(self) -> Puzzle:
        return Puzzle(
            level=self.level,
            size=self.grid_size,
            palette=self.palette,
            initial_grid=self.initial_grid,
            target_grid=self.target_grid,
            procedural=False,
        )


def parse_level_spec(entry: Mapping[str, Any]) -> LevelSpec:
    """Build a validated LevelSpec from one catalog entry (JSON field names)."""
    try:
        level = int(entry["level"])
        grid_size = int(entry["gridSize"])
        colors = list(entry["colors"])
        initial_raw = entry["initialGrid"]
        target_raw = entry["targetGrid"]
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed level entry {entry!r}: {exc}") from exc
    if level < 1:
        raise CatalogError(f"Level ids must be positive, got {level}")
    if not MIN_GRID_SIZE <= grid_size <= MAX_GRID_SIZE:
        raise CatalogError(f"Level {level}: grid size {grid_size} outside [{MIN_GRID_SIZE}, {MAX_GRID_SIZE}]")
    if not MIN_PALETTE_SIZE <= len(colors) <= MAX_PALETTE_SIZE:
        raise CatalogError(
            f"Level {level}: palette size {len(colors)} outside [{MIN_PALETTE_SIZE}, {MAX_PALETTE_SIZE}]"
        )
    try:
        palette = Palette.of(colors)
        initial_grid = make_grid(initial_raw)
        target_grid = make_grid(target_raw)
        for name, grid in (("initialGrid", initial_grid), ("targetGrid", target_grid)):
            if validate_grid(grid, palette) != grid_size:
                raise CatalogError(f"Level {level}: {name} is not {grid_size}x{grid_size}")
    except CatalogError:
        raise
    except (PreconditionViolation, TypeError) as exc:
        raise CatalogError(f"Level {level}: {exc}") from exc
    if not is_reachable(initial_grid, target_grid, palette):
        raise CatalogError(f"Level {level}: target grid is not reachable from the initial grid")
    return LevelSpec(
        level=level,
        grid_size=grid_size,
        palette=palette,
        initial_grid=initial_grid,
        target_grid=target_grid,
    )


class LevelCatalog:
    """Read-only mapping of level id -> LevelSpec."""

    def __init__(self, specs: Iterable[LevelSpec]) -> None:
        self._specs: Dict[int, LevelSpec] = {}
        for spec in specs:
            if spec.level in self._specs:
                raise CatalogError(f"Duplicate level id {spec.level}")
            self._specs[spec.level] = spec

    @classmethod
    def from_entries(cls, entries: Iterable[Mapping[str, Any]]) -> "LevelCatalog":
        return cls(parse_level_spec(entry) for entry in entries)

    def __contains__(self, level: object) -> bool:
        return level in self._specs

    def __iter__(self) -> Iterator[LevelSpec]:
        return iter(self._specs[level] for level in sorted(self._specs))

    def __len__(self) -> int:
        return len(self._specs)

    def get(self, level: int) -> LevelSpec | None:
        return self._specs.get(level)


def load_catalog(path: Path | str | None = None) -> LevelCatalog:
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        with catalog_path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Level catalog {catalog_path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise CatalogError(f"Level catalog {catalog_path} must contain a list of levels")
    catalog = LevelCatalog.from_entries(payload)
    logger.debug("Loaded %d catalog levels from %s", len(catalog), catalog_path)
    return catalog
