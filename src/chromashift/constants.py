# Grid bounds accepted by the engine (square grids only).
MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 8

# Palette bounds.
MIN_PALETTE_SIZE = 3
MAX_PALETTE_SIZE = 6

# Base colors in successor order. Catalog palettes and procedural palettes are
# prefixes of this ordering.
BASE_COLORS = {
    'red':    (239, 68, 68),     # #EF4444
    'blue':   (59, 130, 246),    # #3B82F6
    'yellow': (250, 204, 21),    # #FACC15
    'green':  (34, 197, 94),     # #22C55E
    'purple': (168, 85, 247),    # #A855F7
    'orange': (249, 115, 22),    # #F97316
}
BASE_COLOR_ORDER = list(BASE_COLORS.keys())

# Level progression.
FIRST_LEVEL = 1
# Levels at or beyond this id are synthesized instead of read from the catalog.
PROCEDURAL_LEVEL_START = 51
PROCEDURAL_GRID_SIZE = 6
PROCEDURAL_COLOR_COUNT = 6
PROCEDURAL_SCRAMBLE_MOVES = 10

# Preference keys understood by the progress layer.
PREF_KEY_LEVEL = "level"
PREF_KEY_COMPLETED_LEVELS = "completedLevels"
PREFERENCES_DIR_NAME = ".chromatic_shift"
PREFERENCES_FILE_NAME = "preferences.json"

# Window and layout geometry for the arcade shell.
WINDOW_WIDTH = 800
WINDOW_HEIGHT = 600
WINDOW_TITLE = "Chromatic Shift"
HUD_HEIGHT = 48
BOTTOM_MARGIN = 48
# Board may consume at most this share of the window.
BOARD_MAX_WIDTH_PCT = 0.55
BOARD_MAX_HEIGHT_PCT = 0.70
# Arrow strip width (left of rows, above columns) relative to one cell.
ARROW_STRIP_RATIO = 0.6
# Target preview is drawn at this scale of the main board.
TARGET_PREVIEW_SCALE = 0.5
TARGET_GAP = 40
CELL_PADDING = 2
MIN_CELL_SIZE = 12
# Palette legend swatches, centered above the footer line.
LEGEND_SWATCH_SIZE = 16
LEGEND_GAP = 10
LEGEND_BOTTOM = 24
