"""Dead-end pruning (stage 4).

Repeats full interior scans, culling every FLOOR tile that has exactly one
FLOOR neighbour, until a pass culls nothing. Tiles are culled in place during
the scan, so a corridor can shrink by more than one tile per pass.
"""
from __future__ import annotations

from typing import Optional, Tuple

from .grid import Grid
from .tiles import CULLED, FLOOR, NO_REGION
from .visualizer import HL_CULL, ProgressEvent, Visualizer


def prune_pass(grid: Grid) -> int:
    """Run one interior scan; returns the number of tiles culled."""
    tiles = grid.tiles
    culled = 0
    for x in range(1, grid.width - 1):
        left, column, right = tiles[x - 1], tiles[x], tiles[x + 1]
        for y in range(1, grid.height - 1):
            t = column[y]
            if t.kind != FLOOR:
                continue
            n = (
                (left[y].kind == FLOOR)
                + (right[y].kind == FLOOR)
                + (column[y - 1].kind == FLOOR)
                + (column[y + 1].kind == FLOOR)
            )
            if n == 1:
                t.kind = CULLED
                t.region = NO_REGION
                # A door whose far side was a pendant corridor goes with it
                t.door = False
                culled += 1
    return culled


def remove_dead_ends(grid: Grid, visualizer: Optional[Visualizer] = None) -> Tuple[int, int]:
    """Prune until no dead end remains; returns (tiles culled, passes run)."""
    total = 0
    passes = 0
    while True:
        culled = prune_pass(grid)
        passes += 1
        total += culled
        if visualizer is not None:
            visualizer.notify(ProgressEvent("prune", "pass", 1, 1, grid.width - 2, grid.height - 2, HL_CULL))
        if culled == 0:
            return total, passes


__all__ = ["prune_pass", "remove_dead_ends"]
