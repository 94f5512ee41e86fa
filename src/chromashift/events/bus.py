from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of unreferenced systems connected.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_KEY_PRESS = "key_press"              # payload: symbol, modifiers
EVENT_TARGET_TOGGLE_REQUEST = "target_toggle_request"  # payload: None


# ============================================================================
# SHIFTS
# ============================================================================
EVENT_SHIFT_REQUEST = "shift_request"      # payload: kind=ShiftKind, index=int
EVENT_SHIFT_APPLIED = "shift_applied"      # payload: kind=ShiftKind, index=int, move_count=int
EVENT_SHIFT_REJECTED = "shift_rejected"    # payload: kind=ShiftKind, index=int, reason=str
EVENT_HINT_REQUEST = "hint_request"        # payload: None
EVENT_HINT_READY = "hint_ready"            # payload: move=ShiftMove|None


# ============================================================================
# LEVEL FLOW
# ============================================================================
EVENT_LEVEL_NEXT_REQUEST = "level_next_request"            # payload: None
EVENT_LEVEL_PREVIOUS_REQUEST = "level_previous_request"    # payload: None
EVENT_LEVEL_RESET_REQUEST = "level_reset_request"          # payload: regenerate=bool (optional)
EVENT_LEVEL_JUMP_REQUEST = "level_jump_request"            # payload: level=int
EVENT_LEVEL_LOADED = "level_loaded"                        # payload: level=int, size=int, procedural=bool, par=int|None
EVENT_LEVEL_LOAD_FAILED = "level_load_failed"              # payload: level=int, reason=str
EVENT_LEVEL_COMPLETED = "level_completed"                  # payload: level=int, move_count=int, completed_levels=frozenset[int]


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"              # payload: previous_mode=GameMode|None, new_mode=GameMode


# ============================================================================
# PROGRESS
# ============================================================================
EVENT_PROGRESS_RESTORED = "progress_restored"              # payload: level=int, completed_levels=frozenset[int]
