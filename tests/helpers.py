from __future__ import annotations

import random
from collections import defaultdict
from typing import Iterable, List, Optional, Sequence

from esper import World

from blast.components.board import Board
from blast.components.tile import TileColor
from blast.systems.board_ops import color_layout, create_tile, get_tile_at
from blast.world import create_world

Layout = Sequence[Sequence[Optional[int]]]

# Scenario layout indexed [x][y]: R=0, G=1.
R, G = 0, 1
SCENARIO_3X3 = [
    [R, R, G],
    [G, R, G],
    [G, G, R],
]


class ScriptedRandom(random.Random):
    """Random source that hands out queued values from ``randrange`` first."""

    def queue(self, values: Iterable[int]) -> "ScriptedRandom":
        self._script = list(values)
        return self

    def randrange(self, *args, **kwargs):
        script = getattr(self, "_script", None)
        if script:
            return script.pop(0)
        return super().randrange(*args, **kwargs)


def scripted_random(values: Iterable[int] = (), seed: int = 0) -> ScriptedRandom:
    return ScriptedRandom(seed).queue(values)


def flatten(layout: Layout) -> List[int]:
    return [color for column in layout for color in column]


def build_board(layout: Layout, rng: random.Random | None = None) -> World:
    """World holding a bare board with tiles placed per ``layout`` (``None`` = empty)."""
    world = create_world(rng or random.Random(0))
    world.create_entity(Board(rows=len(layout), cols=len(layout[0])))
    for x, column in enumerate(layout):
        for y, color in enumerate(column):
            if color is not None:
                create_tile(world, x, y, color)
    return world


def paint(world: World, layout: Layout) -> None:
    """Recolor the live tiles in place."""
    for x, column in enumerate(layout):
        for y, color in enumerate(column):
            entity = get_tile_at(world, x, y)
            assert entity is not None, f"no tile at {(x, y)}"
            world.component_for_entity(entity, TileColor).color = color


def random_layout(rng: random.Random, rows: int, cols: int, colors: int, holes: float = 0.0) -> List[List[Optional[int]]]:
    return [
        [None if holes and rng.random() < holes else rng.randrange(colors) for _ in range(cols)]
        for _ in range(rows)
    ]


def checkerboard(rows: int, cols: int) -> List[List[int]]:
    return [[(x + y) % 2 for y in range(cols)] for x in range(rows)]


def has_any_match(world: World, min_run: int = 2) -> bool:
    """True if any straight run of ``min_run`` equal colors exists. Leaves tiers alone."""
    layout = color_layout(world)
    rows, cols = len(layout), len(layout[0]) if layout else 0
    for x in range(rows):
        for y in range(cols):
            color = layout[x][y]
            if color is None:
                continue
            if x + min_run <= rows and all(layout[x + i][y] == color for i in range(min_run)):
                return True
            if y + min_run <= cols and all(layout[x][y + i] == color for i in range(min_run)):
                return True
    return False


class EventRecorder:
    """Collects payloads for the given event names."""

    def __init__(self, bus, *names: str):
        self.events: dict[str, list[dict]] = defaultdict(list)
        self.order: list[str] = []
        for name in names:
            bus.subscribe(name, self._handler(name))

    def _handler(self, name: str):
        def _record(sender, **payload):
            self.events[name].append(payload)
            self.order.append(name)
        return _record

    def of(self, name: str) -> list[dict]:
        return self.events[name]
