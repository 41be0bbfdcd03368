"""Exceptions raised by the board engine.

Configuration problems surface while building a ``BoardConfig``; invariant
violations point at a bug in the caller's phase sequencing. Neither is meant
to be caught and retried.
"""


class BoardError(Exception):
    """Base class for board engine errors."""


class BoardConfigError(BoardError, ValueError):
    """Raised when a board configuration is rejected."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid board configuration: " + "; ".join(errors))


class BoardInvariantError(BoardError, RuntimeError):
    """Raised when internal board invariants are violated."""


class EmptySeedError(BoardInvariantError):
    def __init__(self, x: int, y: int):
        self.position = (x, y)
        super().__init__(f"Flood fill seeded from empty cell ({x}, {y})")


class UnknownTierError(BoardInvariantError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown match tier {value!r}")
