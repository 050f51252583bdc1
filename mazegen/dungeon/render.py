"""Text rendering and JSON-able export of a generated grid.

Shared by the HTTP endpoints, the CLI and the diagnostics script so they all
agree on the character mapping.
"""
from __future__ import annotations

import string
from typing import Any, Dict, List

from .grid import Grid
from .tiles import FLOOR

FLOOR_CHAR = "."
WALL_CHAR = "#"
DOOR_CHAR = "+"

# Region view: main region is '.', others cycle through digits and letters
_REGION_GLYPHS = string.digits[1:] + string.ascii_lowercase


def to_ascii(grid: Grid, floor: str = FLOOR_CHAR, wall: str = WALL_CHAR, door: str = DOOR_CHAR) -> List[str]:
    """Return the map as row strings (y outer), doors drawn distinctly."""
    rows = []
    for y in range(grid.height):
        chars = []
        for x in range(grid.width):
            t = grid.tiles[x][y]
            if t.kind != FLOOR:
                chars.append(wall)
            elif t.door:
                chars.append(door)
            else:
                chars.append(floor)
        rows.append("".join(chars))
    return rows


def to_region_map(grid: Grid) -> List[str]:
    """Return rows labelling each FLOOR tile by region (debug view)."""
    rows = []
    for y in range(grid.height):
        chars = []
        for x in range(grid.width):
            t = grid.tiles[x][y]
            if t.kind != FLOOR or t.region < 0:
                chars.append(WALL_CHAR)
            elif t.region == 0:
                chars.append(FLOOR_CHAR)
            else:
                chars.append(_REGION_GLYPHS[(t.region - 1) % len(_REGION_GLYPHS)])
        rows.append("".join(chars))
    return rows


def char_to_type(ch: str) -> str:
    if ch == FLOOR_CHAR:
        return "floor"
    if ch == DOOR_CHAR:
        return "door"
    return "wall"


def kinds(grid: Grid) -> List[List[str]]:
    """Visible kind per cell, column-major (CULLED / CONNECTOR read as WALL)."""
    return [[t.visible_kind for t in column] for column in grid.tiles]


def to_dict(dungeon) -> Dict[str, Any]:
    grid = dungeon.grid
    return {
        "seed": dungeon.seed,
        "width": grid.width,
        "height": grid.height,
        "rows": to_ascii(grid),
        "rooms": [list(r.as_tuple()) for r in dungeon.rooms],
        "doors": [[x, y] for x in range(grid.width) for y in range(grid.height) if grid.tiles[x][y].door],
        "metrics": dict(dungeon.metrics),
        "stages": list(dungeon.completed_stages),
        "legend": {"floor": FLOOR_CHAR, "wall": WALL_CHAR, "door": DOOR_CHAR},
    }


__all__ = ["to_ascii", "to_region_map", "char_to_type", "kinds", "to_dict"]
