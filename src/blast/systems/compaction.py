from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Tuple

from esper import World

from blast.systems.board_ops import create_tile, get_board, random_color, set_cell

Position = Tuple[int, int]


@dataclass(slots=True)
class TileMove:
    tile: int
    source: Position
    target: Position

    @property
    def distance(self) -> int:
        return abs(self.source[1] - self.target[1])


@dataclass(slots=True)
class RefilledTile:
    tile: int
    position: Position
    color: int
    # Cells above its final cell where the tile starts falling from.
    spawn_offset: int


def compact(world: World) -> List[TileMove]:
    """Let tiles fall toward ``y == 0`` so each column's empties collect at the top.

    One pass per column: a tile drops by the number of gaps seen below it.
    """
    board = get_board(world)
    moves: List[TileMove] = []
    for x in range(board.rows):
        gaps = 0
        for y in range(board.cols):
            entity = board.cells[x][y]
            if entity is None:
                gaps += 1
                continue
            if not gaps:
                continue
            target_y = y - gaps
            set_cell(world, x, y, None)
            set_cell(world, x, target_y, entity)
            moves.append(TileMove(tile=entity, source=(x, y), target=(x, target_y)))
    return moves


def refill(world: World, color_count: int, rng: random.Random) -> List[RefilledTile]:
    """Give every empty cell a new random tile, each column bottom to top."""
    board = get_board(world)
    spawned: List[RefilledTile] = []
    for x in range(board.rows):
        for y in range(board.cols):
            if board.cells[x][y] is not None:
                continue
            color = random_color(rng, color_count)
            entity = create_tile(world, x, y, color)
            spawned.append(
                RefilledTile(
                    tile=entity,
                    position=(x, y),
                    color=color,
                    spawn_offset=(board.cols - y) + board.cols // 2,
                )
            )
    return spawned
