"""Hunt-and-kill maze growth through every unused odd cell (stage 2).

The walk ("kill") carves a random path two cells at a time until it boxes
itself in. The hunt scans odd cells column by column for an unused cell next
to the existing maze and stitches it on; only when no such cell exists does it
seed a new, disconnected component with a fresh region id. The result is a
perfect maze per component without keeping an explicit frontier.

The walk is written as a loop carrying ``(x, y, dx, dy)`` so its depth is not
bounded by the interpreter's recursion limit.
"""
from __future__ import annotations

from typing import Optional, Tuple

from .grid import Grid
from .regions import RegionCounter
from .rng import RandomSource
from .tiles import FLOOR, NO_ROOM, WALL
from .visualizer import HL_ACCEPT, HL_ACTIVE, ProgressEvent, Visualizer

STEPS = ((-2, 0), (2, 0), (0, -2), (0, 2))

Weights = Tuple[int, int, int]  # forward, left, right


class HuntAndKill:
    def __init__(
        self,
        grid: Grid,
        rng: RandomSource,
        regions: RegionCounter,
        visualizer: Optional[Visualizer] = None,
        weights: Weights = (1, 1, 1),
    ):
        self.grid = grid
        self.rng = rng
        self.regions = regions
        self.visualizer = visualizer
        self.forward_weight, self.left_weight, self.right_weight = weights
        self.components = 0
        self.cells_carved = 0

    def run(self) -> int:
        """Fill the grid's unused odd cells; returns the number of components started."""
        while True:
            start = self.hunt()
            if start is None:
                return self.components
            self.walk(*start)

    def _is_unused(self, x: int, y: int) -> bool:
        t = self.grid.tiles[x][y]
        return t.kind == WALL and t.room == NO_ROOM

    def _carve(self, x: int, y: int) -> None:
        t = self.grid.tiles[x][y]
        t.kind = FLOOR
        t.region = self.regions.current

    def _notify(self, action: str, x: int, y: int, highlight: str = HL_ACTIVE) -> None:
        if self.visualizer is not None:
            self.visualizer.notify(ProgressEvent.tile("maze", action, x, y, highlight))

    def direction_weight(self, sx: int, sy: int, dx: int, dy: int) -> int:
        if dx == 0 and dy == 0:
            return 1
        if (sx, sy) == (dx, dy):
            return self.forward_weight
        # y grows downwards, so turning right maps (dx, dy) -> (-dy, dx)
        if (sx, sy) == (-dy, dx):
            return self.right_weight
        if (sx, sy) == (dy, -dx):
            return self.left_weight
        return 1

    def walk(self, x: int, y: int) -> None:
        grid = self.grid
        dx = dy = 0
        while True:
            self._carve(x, y)
            self.cells_carved += 1
            self._notify("walk", x, y)
            options = []
            weights = []
            for sx, sy in STEPS:
                nx, ny = x + sx, y + sy
                if grid.in_bounds(nx, ny) and self._is_unused(nx, ny):
                    options.append((nx, ny))
                    weights.append(self.direction_weight(sx, sy, dx, dy))
            if not options:
                return
            nx, ny = self.rng.weighted_choice(options, weights)
            mx, my = (x + nx) // 2, (y + ny) // 2
            self._carve(mx, my)
            self._notify("carve", mx, my)
            dx, dy = nx - x, ny - y
            x, y = nx, ny

    def hunt(self) -> Optional[Tuple[int, int]]:
        grid = self.grid
        tiles = grid.tiles
        # First scan: grow the existing maze wherever possible
        for x in range(1, grid.width, 2):
            for y in range(1, grid.height, 2):
                if not self._is_unused(x, y):
                    continue
                neighbours = []
                for sx, sy in STEPS:
                    nx, ny = x + sx, y + sy
                    if grid.in_bounds(nx, ny):
                        nt = tiles[nx][ny]
                        if nt.kind == FLOOR and nt.room == NO_ROOM:
                            neighbours.append((nx, ny))
                if neighbours:
                    nx, ny = self.rng.choice(neighbours)
                    mx, my = (x + nx) // 2, (y + ny) // 2
                    self._carve(mx, my)
                    self._notify("stitch", mx, my, HL_ACCEPT)
                    return x, y
        # Second scan: nothing touches the maze, so seed a new component
        for x in range(1, grid.width, 2):
            for y in range(1, grid.height, 2):
                if self._is_unused(x, y):
                    self.regions.allocate()
                    self.components += 1
                    self._notify("seed", x, y, HL_ACCEPT)
                    return x, y
        return None


def carve_maze(
    grid: Grid,
    rng: RandomSource,
    regions: RegionCounter,
    visualizer: Optional[Visualizer] = None,
    weights: Weights = (1, 1, 1),
) -> int:
    """Run hunt-and-kill over ``grid``; returns the number of maze components."""
    return HuntAndKill(grid, rng, regions, visualizer, weights).run()


__all__ = ["HuntAndKill", "carve_maze", "STEPS"]
