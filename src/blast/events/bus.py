from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems that are not stored anywhere alive.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float


# ============================================================================
# INPUT
# ============================================================================
EVENT_TILE_CLICK = "tile_click"            # payload: x, y
EVENT_BOARD_CHANGED = "board_changed"      # payload: reason=str (tile colors edited outside the controller)


# ============================================================================
# TILE LIFECYCLE (presentation notifications)
# ============================================================================
EVENT_TILE_CREATED = "tile_created"        # payload: tile=int, color=int, position=(x,y), animated=bool, source=str, spawn_offset=int, duration=float
EVENT_TILE_REMOVED = "tile_removed"        # payload: tile=int, position=(x,y), animated=bool, reason=str
EVENT_TILE_MOVED = "tile_moved"            # payload: tile=int, src=(x,y), dst=(x,y), duration=float
EVENT_TIER_CHANGED = "tier_changed"        # payload: tile=int, tier=MatchTier, position=(x,y)


# ============================================================================
# BOARD FLOW
# ============================================================================
EVENT_MATCH_CLEARED = "match_cleared"      # payload: positions=[(x,y),...], size=int, color=int
EVENT_BOARD_DEADLOCKED = "board_deadlocked"  # payload: attempt=int
EVENT_BOARD_SETTLED = "board_settled"      # payload: horizontal=bool, vertical=bool
EVENT_PHASE_CHANGED = "phase_changed"      # payload: previous=BoardPhase|None, phase=BoardPhase
