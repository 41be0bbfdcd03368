from dataclasses import dataclass, field
from typing import List, Optional

@dataclass(slots=True)
class Board:
    """Fixed-size grid of tile entity ids.

    ``cells[x][y]`` is the entity occupying cell ``(x, y)`` or ``None`` when empty.
    ``x`` runs over ``rows`` and ``y`` over ``cols``; ``y == 0`` is the bottom.
    """
    rows: int
    cols: int
    cells: List[List[Optional[int]]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[None] * self.cols for _ in range(self.rows)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.rows and 0 <= y < self.cols
