import random

import pytest

from blast.components.board_position import BoardPosition
from blast.systems.board_ops import color_layout, empty_cells, get_tile_at
from blast.systems.compaction import compact, refill
from tests.helpers import build_board, random_layout

L = 7  # any live color


def column_entities(world, x, cols):
    return [get_tile_at(world, x, y) for y in range(cols)]


def test_gapped_column_drops_toward_bottom_in_order():
    world = build_board([[L, None, L, None, L], [1, 2, 3, 4, 5]])
    before = [e for e in column_entities(world, 0, 5) if e is not None]
    moves = compact(world)
    after = column_entities(world, 0, 5)
    assert after[:3] == before
    assert after[3:] == [None, None]
    assert [(m.source, m.target, m.distance) for m in moves] == [
        ((0, 2), (0, 1), 1),
        ((0, 4), (0, 2), 2),
    ]


def test_full_columns_do_not_move():
    world = build_board([[0, 1, 2], [2, 1, 0]])
    assert compact(world) == []
    assert color_layout(world) == [[0, 1, 2], [2, 1, 0]]


def test_moved_tiles_keep_position_cache_in_sync():
    world = build_board([[None, None, 3], [4, None, 5]])
    compact(world)
    for x, y in [(0, 0), (1, 0), (1, 1)]:
        entity = get_tile_at(world, x, y)
        assert world.component_for_entity(entity, BoardPosition).as_tuple() == (x, y)
    assert color_layout(world) == [[3, None, None], [4, 5, None]]


@pytest.mark.parametrize("seed", range(10))
def test_compaction_preserves_order_and_gathers_empties_on_top(seed):
    rng = random.Random(seed)
    rows, cols = rng.randint(2, 10), rng.randint(2, 10)
    world = build_board(random_layout(rng, rows, cols, colors=3, holes=0.4))
    before = [[e for e in column_entities(world, x, cols) if e is not None] for x in range(rows)]
    compact(world)
    for x in range(rows):
        column = column_entities(world, x, cols)
        live = len(before[x])
        assert column[:live] == before[x]
        assert all(e is None for e in column[live:])


def test_refill_fills_every_empty_cell_bottom_to_top():
    world = build_board([[0, None, None], [1, 2, None], [None, None, None]])
    compact(world)
    holes = empty_cells(world)
    spawned = refill(world, 3, random.Random(5))
    assert [s.position for s in spawned] == holes
    assert not empty_cells(world)
    assert all(0 <= s.color < 3 for s in spawned)
    for s in spawned:
        assert get_tile_at(world, *s.position) == s.tile
        x, y = s.position
        assert s.spawn_offset == (3 - y) + 3 // 2


def test_refill_on_full_board_creates_nothing():
    world = build_board([[0, 1], [1, 0]])
    assert refill(world, 2, random.Random(0)) == []


def test_refill_colors_come_from_configured_range():
    world = build_board([[None] * 10 for _ in range(10)])
    spawned = refill(world, 6, random.Random(99))
    assert len(spawned) == 100
    assert {s.color for s in spawned} <= set(range(6))
    assert len({s.tile for s in spawned}) == 100
