from dataclasses import dataclass
from enum import IntEnum


class MatchTier(IntEnum):
    """Cosmetic size class of the group a tile currently belongs to."""
    DEFAULT = 0
    A = 1
    B = 2
    C = 3


@dataclass(slots=True)
class TileTier:
    tier: MatchTier = MatchTier.DEFAULT
