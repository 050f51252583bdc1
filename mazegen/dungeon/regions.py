"""Region id allocation and destructive merging.

Merging relabels by scanning the whole grid. The number of merges is bounded
by the number of regions, which keeps this cheap at the grid sizes we target.
"""
from __future__ import annotations

from .grid import Grid
from .tiles import NO_REGION

MAIN_REGION = 0


class RegionCounter:
    """Monotone region id source. ``current`` is the id handed out last."""

    def __init__(self):
        self.next_region = 0
        self.current = NO_REGION

    def allocate(self) -> int:
        self.current = self.next_region
        self.next_region += 1
        return self.current

    @property
    def allocated(self) -> int:
        return self.next_region


def relabel(grid: Grid, old: int, new: int) -> int:
    """Rewrite every tile carrying region ``old`` to ``new``; returns tiles touched."""
    if old == new:
        return 0
    changed = 0
    for column in grid.tiles:
        for tile in column:
            if tile.region == old:
                tile.region = new
                changed += 1
    return changed


__all__ = ["MAIN_REGION", "RegionCounter", "relabel"]
