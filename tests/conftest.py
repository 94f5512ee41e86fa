import sys, os

import pytest

# Ensure src and the test helpers are on path for test imports
ROOT = os.path.dirname(os.path.dirname(__file__))
SRC = os.path.join(ROOT, 'src')
TESTS = os.path.dirname(__file__)
for path in (SRC, TESTS):
    if path not in sys.path:
        sys.path.insert(0, path)

from chromashift.factories.levels import LevelCatalog
from helpers import ONE_MOVE_TARGET, SOLVED_3X3, level_entry


@pytest.fixture
def small_catalog():
    """Levels 1, 2 and 4 (3 missing). Level 2 starts already equal to its target."""
    return LevelCatalog.from_entries([
        level_entry(1, SOLVED_3X3, ONE_MOVE_TARGET),
        level_entry(2, SOLVED_3X3, SOLVED_3X3),
        level_entry(4, SOLVED_3X3, ONE_MOVE_TARGET),
    ])
