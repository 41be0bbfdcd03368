"""Phase bookkeeping for the board state machine."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class BoardPhase(Enum):
    """Named phases the board controller moves through."""
    EVALUATE = auto()
    SETTLE = auto()
    AWAIT_INPUT = auto()
    REMOVE = auto()
    COMPACT = auto()
    REFILL = auto()
    RECREATE = auto()


@dataclass(slots=True)
class BoardPhaseState:
    """Singleton component on the board entity. Written only by BoardController."""
    phase: Optional[BoardPhase] = None
    elapsed: float = 0.0
    input_allowed: bool = False
    recreate_attempts: int = 0
