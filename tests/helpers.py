from __future__ import annotations

from typing import Sequence


def level_entry(level: int, initial, target, colors: Sequence[str] = ("red", "blue", "yellow")) -> dict:
    """Build a catalog entry using the JSON field names."""
    return {
        "level": level,
        "gridSize": len(initial),
        "colors": list(colors),
        "initialGrid": [list(row) for row in initial],
        "targetGrid": [list(row) for row in target],
    }


SOLVED_3X3 = [["red", "blue", "yellow"], ["blue", "yellow", "red"], ["yellow", "red", "blue"]]
# SOLVED_3X3 with row 0 shifted once.
ONE_MOVE_TARGET = [["blue", "yellow", "red"], ["blue", "yellow", "red"], ["yellow", "red", "blue"]]
