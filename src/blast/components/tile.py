from dataclasses import dataclass

@dataclass(slots=True)
class TileColor:
    """Color index of a tile, ``0 <= color < color_count``."""
    color: int
