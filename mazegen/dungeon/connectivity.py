"""Region connection (stage 3).

Finds every wall tile that separates two different regions along one axis,
then repeatedly opens a random connector touching the main region and absorbs
the region on the other side, until nothing borders the main region any more.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .grid import Grid
from .regions import MAIN_REGION, relabel
from .rng import RandomSource
from .tiles import CONNECTOR, FLOOR, WALL
from .visualizer import HL_CHOSEN, ProgressEvent, Visualizer


@dataclass
class Connector:
    x: int
    y: int
    low: int
    high: int


def find_connectors(grid: Grid) -> List[Connector]:
    """Return candidate connectors; each candidate tile is marked CONNECTOR.

    A tile qualifies when its left/right neighbours carry two different
    non-negative regions, or failing that its up/down neighbours do. The
    horizontal test wins when both match.
    """
    tiles = grid.tiles
    connectors: List[Connector] = []
    for x in range(1, grid.width - 1):
        for y in range(1, grid.height - 1):
            t = tiles[x][y]
            if t.kind != WALL:
                continue
            a = tiles[x - 1][y].region
            b = tiles[x + 1][y].region
            if not (a >= 0 and b >= 0 and a != b):
                a = tiles[x][y - 1].region
                b = tiles[x][y + 1].region
                if not (a >= 0 and b >= 0 and a != b):
                    continue
            t.kind = CONNECTOR
            connectors.append(Connector(x, y, min(a, b), max(a, b)))
    return connectors


def connect_regions(
    grid: Grid,
    rng: RandomSource,
    visualizer: Optional[Visualizer] = None,
    stats: Optional[dict] = None,
) -> List[Tuple[int, int]]:
    """Merge every region into the main region; returns the opened doors in order."""
    connectors = find_connectors(grid)
    # _absorb drops collapsed entries, so remember every marked tile up front
    marked = [(c.x, c.y) for c in connectors]
    if stats is not None:
        stats["connectors_found"] = len(connectors)
    tiles = grid.tiles
    doors: List[Tuple[int, int]] = []
    while True:
        candidates = [c for c in connectors if c.low == MAIN_REGION]
        if not candidates:
            break
        chosen = rng.choice(candidates)
        partner = chosen.high
        door = tiles[chosen.x][chosen.y]
        door.kind = FLOOR
        door.region = MAIN_REGION
        door.door = True
        doors.append((chosen.x, chosen.y))
        relabel(grid, partner, MAIN_REGION)
        _absorb(connectors, partner)
        if visualizer is not None:
            visualizer.notify(ProgressEvent.tile("connect", "merge", chosen.x, chosen.y, HL_CHOSEN))
    # Connectors nobody picked go back to plain wall
    for x, y in marked:
        t = tiles[x][y]
        if t.kind == CONNECTOR:
            t.kind = WALL
    return doors


def _absorb(connectors: List[Connector], partner: int) -> None:
    # Walk backwards so swap-with-last never skips an unvisited entry
    for i in range(len(connectors) - 1, -1, -1):
        c = connectors[i]
        if c.high == partner:
            c.low, c.high = MAIN_REGION, c.low
        if c.low == partner:
            c.low = MAIN_REGION
        if c.low == c.high:
            connectors[i] = connectors[-1]
            connectors.pop()


__all__ = ["Connector", "find_connectors", "connect_regions"]
