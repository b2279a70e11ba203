from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                                # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_POINTER_DOWN = "pointer_down"                # payload: x, y
EVENT_POINTER_MOVE = "pointer_move"                # payload: x, y
EVENT_POINTER_UP = "pointer_up"                    # payload: x, y
EVENT_POINTER_CANCEL = "pointer_cancel"            # payload: x, y
EVENT_INPUT_STATE_CHANGED = "input_state_changed"  # payload: accepting=bool


# ============================================================================
# SWAPS
# ============================================================================
EVENT_SWAP_REQUEST = "swap_request"                # payload: src=(r,c), dst=(r,c)
EVENT_SWAP_VALID = "swap_valid"                    # payload: src=(r,c), dst=(r,c)
EVENT_SWAP_INVALID = "swap_invalid"                # payload: src=(r,c), dst=(r,c)


# ============================================================================
# MATCHES & BOARD MECHANICS
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: rows=list[Match], columns=list[Match], positions=[(r,c),...], count=int, combo=int (before this pass)
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], count=int, reason=str
EVENT_MATCH_PASS = "match_pass"                    # payload: count=int (0 resets the combo)
EVENT_CHAIN_TRIGGERED = "chain_triggered"          # payload: positions=[(r,c),...], count=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: count=int
EVENT_TOKENS_LANDED = "tokens_landed"              # payload: None
EVENT_STALEMATE = "stalemate"                      # payload: positions=[(r,c),...]
EVENT_BOARD_STABLE = "board_stable"                # payload: None


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=AnimationKind, entity=int, positions=[(r,c),...]
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=AnimationKind, entity=int, animation=Animation


# ============================================================================
# SCORE
# ============================================================================
EVENT_COMBO_CHANGED = "combo_changed"              # payload: combo=int, previous=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int, combo=int
