from typing import Callable, Dict

from blinker import Signal


class EventBus:
    """Named blinker signals that frontends subscribe to for re-rendering."""

    def __init__(self) -> None:
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn: Callable[..., object]) -> None:
        sig = self._signals.setdefault(name, Signal(name))
        # Strong reference so lambdas and bound methods stay connected.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload: object) -> None:
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# BOARD LIFECYCLE
# ============================================================================
EVENT_BOARD_REBUILT = "board_rebuilt"        # payload: board, dimensions
EVENT_LEVEL_CAPPED = "level_capped"          # payload: level, note


# ============================================================================
# PLAY
# ============================================================================
EVENT_TILE_MOVED = "tile_moved"              # payload: src=(r,c), dst=(r,c), moves=int
EVENT_PUZZLE_SOLVED = "puzzle_solved"        # payload: moves=int, elapsed=int


# ============================================================================
# SHUFFLE & RESET
# ============================================================================
EVENT_SHUFFLE_STARTED = "shuffle_started"    # payload: moves=int
EVENT_BOARD_CHANGED = "board_changed"        # payload: reason=str
EVENT_SHUFFLE_COMPLETE = "shuffle_complete"  # payload: board
