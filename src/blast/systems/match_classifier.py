from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from esper import World

from blast.components.match_tier import MatchTier, TileTier
from blast.errors import UnknownTierError
from blast.systems.board_ops import color_of, get_board, iter_tiles
from blast.systems.connectivity import flood_fill

TierChange = Tuple[int, MatchTier]


@dataclass(slots=True)
class BoardEvaluation:
    horizontal_match: bool
    vertical_match: bool
    tier_changes: List[TierChange] = field(default_factory=list)

    @property
    def playable(self) -> bool:
        return self.horizontal_match or self.vertical_match


def tier_for_size(size: int, thresholds: Sequence[int]) -> MatchTier:
    """Highest tier whose threshold ``size`` strictly exceeds."""
    threshold_a, threshold_b, threshold_c = thresholds
    tier = MatchTier.DEFAULT
    if size > threshold_a:
        tier = MatchTier.A
        if size > threshold_b:
            tier = MatchTier.B
            if size > threshold_c:
                tier = MatchTier.C
    return tier


def apply_tier(world: World, entity: int, tier: MatchTier) -> bool:
    """Set a tile's tier. Returns True when the stored value changed."""
    if not isinstance(tier, MatchTier):
        raise UnknownTierError(tier)
    tile_tier = world.component_for_entity(entity, TileTier)
    if tile_tier.tier is tier:
        return False
    tile_tier.tier = tier
    return True


def _run_matches(world: World, x: int, y: int, dx: int, dy: int, min_run: int) -> bool:
    board = get_board(world)
    seed = board.cells[x][y]
    if seed is None:
        return False
    color = color_of(world, seed)
    for step in range(1, min_run):
        other = board.cells[x + dx * step][y + dy * step]
        if other is None or color_of(world, other) != color:
            return False
    return True


def _assign_component(world: World, x: int, y: int, thresholds: Sequence[int]) -> None:
    component = flood_fill(world, x, y)
    tier = tier_for_size(len(component), thresholds)
    for entity in component:
        apply_tier(world, entity, tier)


def horizontal_pass(world: World, min_run: int, thresholds: Sequence[int]) -> bool:
    """Scan runs along x; every visited seed is reset to DEFAULT before its run test."""
    board = get_board(world)
    any_match = False
    for y in range(board.cols):
        for x in range(board.rows - min_run + 1):
            seed = board.cells[x][y]
            if seed is None:
                continue
            apply_tier(world, seed, MatchTier.DEFAULT)
            if not _run_matches(world, x, y, 1, 0, min_run):
                continue
            any_match = True
            _assign_component(world, x, y, thresholds)
    return any_match


def vertical_pass(world: World, min_run: int, thresholds: Sequence[int]) -> bool:
    """Scan runs along y. Seeds are not reset here, so horizontal results survive
    wherever this pass finds nothing."""
    board = get_board(world)
    any_match = False
    for x in range(board.rows):
        for y in range(board.cols - min_run + 1):
            if not _run_matches(world, x, y, 0, 1, min_run):
                continue
            any_match = True
            _assign_component(world, x, y, thresholds)
    return any_match


def tier_snapshot(world: World) -> Dict[int, MatchTier]:
    return {
        entity: world.component_for_entity(entity, TileTier).tier
        for _, _, entity in iter_tiles(world)
    }


def evaluate_board(world: World, min_run: int, thresholds: Sequence[int]) -> BoardEvaluation:
    """Run the horizontal then the vertical pass and report what changed.

    The vertical pass overwrites tiers written by the horizontal one.
    """
    before = tier_snapshot(world)
    horizontal = horizontal_pass(world, min_run, thresholds)
    vertical = vertical_pass(world, min_run, thresholds)
    after = tier_snapshot(world)
    changes = [
        (entity, tier)
        for entity, tier in after.items()
        if before.get(entity) is not tier
    ]
    return BoardEvaluation(horizontal_match=horizontal, vertical_match=vertical, tier_changes=changes)
