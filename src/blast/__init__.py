"""Board-state engine for a tile-blast puzzle.

The board lives in an esper ``World``; presentation layers listen on the
``EventBus`` and drive time through ``tick`` events.
"""
from blast.config import BoardConfig, PhaseTimings
from blast.world import create_world

__all__ = ["BoardConfig", "PhaseTimings", "create_world"]
