from __future__ import annotations

from typing import List, Set, Tuple

from esper import World

from blast.errors import EmptySeedError
from blast.systems.board_ops import color_of, get_tile_at, position_of

NEIGHBOUR_OFFSETS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, 1), (0, -1))


def flood_fill(world: World, x: int, y: int) -> Set[int]:
    """Return the same-color component containing the tile at ``(x, y)``.

    Adjacency is 4-directional. The component is returned whatever its size;
    callers decide whether it is big enough to matter. Seeding from an empty
    or out-of-range cell is a sequencing bug and raises ``EmptySeedError``.
    """
    seed = get_tile_at(world, x, y)
    if seed is None:
        raise EmptySeedError(x, y)
    color = color_of(world, seed)
    component: Set[int] = set()
    queued: Set[int] = {seed}
    worklist: List[int] = [seed]
    while worklist:
        current = worklist.pop()
        queued.discard(current)
        component.add(current)
        cx, cy = position_of(world, current)
        for dx, dy in NEIGHBOUR_OFFSETS:
            neighbour = get_tile_at(world, cx + dx, cy + dy)
            if neighbour is None:
                continue
            if neighbour in queued or neighbour in component:
                continue
            if color_of(world, neighbour) != color:
                continue
            queued.add(neighbour)
            worklist.append(neighbour)
    return component


def component_positions(world: World, component: Set[int]) -> List[Tuple[int, int]]:
    return sorted(position_of(world, entity) for entity in component)
