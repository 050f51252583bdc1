from __future__ import annotations

from typing import Iterator, List, Tuple

from .errors import InternalInvariantViolation
from .tiles import FLOOR, Tile

Coord2D = Tuple[int, int]

ORTHOGONAL = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    """Fixed-size tile storage, column-major (``tiles[x][y]``).

    Allocated once; ``reset`` returns every tile to WALL / no region / no room
    / no door so the same storage is reused across generations.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise InternalInvariantViolation(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.tiles: List[List[Tile]] = [[Tile() for _ in range(height)] for _ in range(width)]

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Tile:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InternalInvariantViolation(f"tile ({x},{y}) outside {self.width}x{self.height} grid")
        return self.tiles[x][y]

    def __getitem__(self, xy: Coord2D) -> Tile:
        return self.get(*xy)

    def reset(self) -> None:
        for column in self.tiles:
            for tile in column:
                tile.reset()

    def iter_coords(self) -> Iterator[Coord2D]:
        for x in range(self.width):
            for y in range(self.height):
                yield x, y

    def floor_neighbours(self, x: int, y: int) -> int:
        count = 0
        for dx, dy in ORTHOGONAL:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height and self.tiles[nx][ny].kind == FLOOR:
                count += 1
        return count

    def floor_count(self) -> int:
        return sum(1 for column in self.tiles for t in column if t.kind == FLOOR)

    def count_kind(self, kind: str) -> int:
        return sum(1 for column in self.tiles for t in column if t.kind == kind)

    def snapshot(self) -> List[List[tuple]]:
        """Return a comparable copy of every tile's state (kind, region, room, door)."""
        return [[(t.kind, t.region, t.room, t.door) for t in column] for column in self.tiles]


__all__ = ["Grid", "Coord2D", "ORTHOGONAL"]
