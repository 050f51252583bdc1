"""Structural checks for generated grids.

Each helper returns plain data (lists of offending coordinates / ids) rather
than raising, so the diagnostics script, the API and the tests can share them.
"""
from __future__ import annotations

from collections import deque
from typing import Any, Dict, List, Sequence, Set, Tuple

from .grid import ORTHOGONAL, Coord2D, Grid
from .rooms import Room
from .tiles import FLOOR, NO_ROOM


def floor_components(grid: Grid) -> List[Set[Coord2D]]:
    """Connected components of FLOOR tiles under 4-adjacency."""
    tiles = grid.tiles
    seen: Set[Coord2D] = set()
    components = []
    for x, y in grid.iter_coords():
        if tiles[x][y].kind != FLOOR or (x, y) in seen:
            continue
        comp = {(x, y)}
        q = deque([(x, y)])
        seen.add((x, y))
        while q:
            cx, cy = q.popleft()
            for dx, dy in ORTHOGONAL:
                nx, ny = cx + dx, cy + dy
                if grid.in_bounds(nx, ny) and (nx, ny) not in seen and tiles[nx][ny].kind == FLOOR:
                    seen.add((nx, ny))
                    comp.add((nx, ny))
                    q.append((nx, ny))
        components.append(comp)
    return components


def is_connected(grid: Grid) -> bool:
    return len(floor_components(grid)) <= 1


def border_violations(grid: Grid) -> List[Coord2D]:
    bad = []
    for x, y in grid.iter_coords():
        on_border = x in (0, grid.width - 1) or y in (0, grid.height - 1)
        if on_border and grid.tiles[x][y].kind == FLOOR:
            bad.append((x, y))
    return bad


def overlapping_rooms(rooms: Sequence[Room]) -> List[Tuple[int, int]]:
    pairs = []
    for i in range(len(rooms)):
        for j in range(i + 1, len(rooms)):
            if rooms[i].overlaps(rooms[j]):
                pairs.append((i, j))
    return pairs


def bad_room_parity(rooms: Sequence[Room]) -> List[int]:
    bad = []
    for i, r in enumerate(rooms):
        if r.w % 2 == 0 or r.h % 2 == 0 or any(v % 2 for v in r.as_tuple()):
            bad.append(i)
    return bad


def parity_violations(grid: Grid) -> List[Coord2D]:
    """Corridor FLOOR tiles sitting at (even, even).

    Maze cells live on odd/odd; the tiles carved between two of them (and
    doors) have exactly one even coordinate. Nothing outside a room may be
    even/even.
    """
    bad = []
    for x, y in grid.iter_coords():
        t = grid.tiles[x][y]
        if t.kind == FLOOR and t.room == NO_ROOM and x % 2 == 0 and y % 2 == 0:
            bad.append((x, y))
    return bad


def dead_ends(grid: Grid) -> List[Coord2D]:
    return [
        (x, y)
        for x, y in grid.iter_coords()
        if grid.tiles[x][y].kind == FLOOR and grid.floor_neighbours(x, y) == 1
    ]


def incoherent_doors(grid: Grid) -> List[Coord2D]:
    """Doors that are not FLOOR or have fewer than two FLOOR neighbours."""
    bad = []
    for x, y in grid.iter_coords():
        t = grid.tiles[x][y]
        if t.door and (t.kind != FLOOR or grid.floor_neighbours(x, y) < 2):
            bad.append((x, y))
    return bad


def region_labels_consistent(grid: Grid) -> bool:
    """Two FLOOR tiles share a region id iff they are connected."""
    seen_ids: Set[int] = set()
    for comp in floor_components(grid):
        ids = {grid.tiles[x][y].region for x, y in comp}
        if len(ids) != 1:
            return False
        rid = ids.pop()
        if rid < 0 or rid in seen_ids:
            return False
        seen_ids.add(rid)
    return True


def imperfect_maze_regions(grid: Grid) -> List[int]:
    """Maze regions (corridor tiles only) that are not trees or contain a 2x2 FLOOR block."""
    tiles = grid.tiles
    cells: Dict[int, int] = {}
    edges: Dict[int, int] = {}
    bad: Set[int] = set()
    for x, y in grid.iter_coords():
        t = tiles[x][y]
        if t.kind != FLOOR or t.room != NO_ROOM:
            continue
        cells[t.region] = cells.get(t.region, 0) + 1
        for nx, ny in ((x + 1, y), (x, y + 1)):
            if grid.in_bounds(nx, ny):
                n = tiles[nx][ny]
                if n.kind == FLOOR and n.room == NO_ROOM and n.region == t.region:
                    edges[t.region] = edges.get(t.region, 0) + 1
        if x + 1 < grid.width and y + 1 < grid.height:
            block = (tiles[x + 1][y], tiles[x][y + 1], tiles[x + 1][y + 1])
            if all(b.kind == FLOOR and b.room == NO_ROOM and b.region == t.region for b in block):
                bad.add(t.region)
    for region, count in cells.items():
        if edges.get(region, 0) != count - 1:
            bad.add(region)
    return sorted(bad)


def analyze(dungeon) -> Dict[str, Any]:
    """Run every check against a finished dungeon and summarise the result."""
    grid = dungeon.grid
    regions = {grid.tiles[x][y].region for x, y in grid.iter_coords() if grid.tiles[x][y].kind == FLOOR}
    result: Dict[str, Any] = {
        "components": len(floor_components(grid)),
        "border_violations": border_violations(grid),
        "overlapping_rooms": overlapping_rooms(dungeon.rooms),
        "bad_room_parity": bad_room_parity(dungeon.rooms),
        "parity_violations": parity_violations(grid),
        "dead_ends": dead_ends(grid),
        "incoherent_doors": incoherent_doors(grid),
        "regions": sorted(regions),
    }
    result["ok"] = (
        result["components"] <= 1
        and not result["border_violations"]
        and not result["overlapping_rooms"]
        and not result["bad_room_parity"]
        and not result["parity_violations"]
        and not result["dead_ends"]
        and not result["incoherent_doors"]
        and result["regions"] in ([], [0])
    )
    return result


__all__ = [
    "floor_components",
    "is_connected",
    "border_violations",
    "overlapping_rooms",
    "bad_room_parity",
    "parity_violations",
    "dead_ends",
    "incoherent_doors",
    "region_labels_consistent",
    "imperfect_maze_regions",
    "analyze",
]
