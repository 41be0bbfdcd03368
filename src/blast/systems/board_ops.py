from __future__ import annotations

import random
from typing import Iterator, List, Optional, Tuple

from esper import World

from blast.components.board import Board
from blast.components.board_position import BoardPosition
from blast.components.match_tier import TileTier
from blast.components.tile import TileColor
from blast.errors import BoardInvariantError

Position = Tuple[int, int]


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise BoardInvariantError("Board not found")


def get_board_entity(world: World) -> int | None:
    for entity, _ in world.get_component(Board):
        return entity
    return None


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def get_tile_at(world: World, x: int, y: int) -> int | None:
    """Entity at ``(x, y)``; ``None`` for empty or out-of-range cells."""
    board = get_board(world)
    if not board.in_bounds(x, y):
        return None
    return board.cells[x][y]


def set_cell(world: World, x: int, y: int, entity: Optional[int]) -> None:
    """Place ``entity`` (or nothing) at ``(x, y)`` and keep its position cache in sync."""
    board = get_board(world)
    if not board.in_bounds(x, y):
        raise IndexError(f"Cell ({x}, {y}) outside {board.rows}x{board.cols} board")
    board.cells[x][y] = entity
    if entity is not None:
        position = world.component_for_entity(entity, BoardPosition)
        position.x = x
        position.y = y


def color_of(world: World, entity: int) -> int:
    return world.component_for_entity(entity, TileColor).color


def position_of(world: World, entity: int) -> Position:
    return world.component_for_entity(entity, BoardPosition).as_tuple()


def iter_tiles(world: World) -> Iterator[Tuple[int, int, int]]:
    """Yield ``(x, y, entity)`` for every occupied cell, column by column."""
    board = get_board(world)
    for x in range(board.rows):
        for y in range(board.cols):
            entity = board.cells[x][y]
            if entity is not None:
                yield x, y, entity


def empty_cells(world: World) -> List[Position]:
    board = get_board(world)
    return [
        (x, y)
        for x in range(board.rows)
        for y in range(board.cols)
        if board.cells[x][y] is None
    ]


def create_tile(world: World, x: int, y: int, color: int) -> int:
    if get_tile_at(world, x, y) is not None:
        raise BoardInvariantError(f"Cell ({x}, {y}) is already occupied")
    entity = world.create_entity(TileColor(color=color), BoardPosition(x=x, y=y), TileTier())
    set_cell(world, x, y, entity)
    return entity


def destroy_tile(world: World, x: int, y: int) -> int | None:
    """Remove the tile at ``(x, y)`` from the grid and delete its entity."""
    entity = get_tile_at(world, x, y)
    if entity is None:
        return None
    set_cell(world, x, y, None)
    world.delete_entity(entity, immediate=True)
    return entity


def random_color(rng: random.Random, color_count: int) -> int:
    return rng.randrange(color_count)


def create_full_board(world: World, color_count: int, rng: random.Random) -> List[int]:
    """Fill every cell with a fresh random tile. The board must be empty."""
    board = get_board(world)
    created: List[int] = []
    for x in range(board.rows):
        for y in range(board.cols):
            created.append(create_tile(world, x, y, random_color(rng, color_count)))
    return created


def clear_board(world: World) -> List[Tuple[int, Position]]:
    """Destroy every live tile regardless of color. Returns ``(entity, position)`` pairs."""
    removed: List[Tuple[int, Position]] = []
    for x, y, entity in list(iter_tiles(world)):
        destroy_tile(world, x, y)
        removed.append((entity, (x, y)))
    return removed


def color_layout(world: World) -> List[List[int | None]]:
    """Snapshot of colors indexed ``[x][y]``; empty cells are ``None``."""
    board = get_board(world)
    return [
        [None if entity is None else color_of(world, entity) for entity in column]
        for column in board.cells
    ]
