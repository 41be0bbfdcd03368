from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Cached grid location of a live tile; mirrors ``Board.cells``."""
    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)
