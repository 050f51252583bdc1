from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .config import GeneratorConfig
from .errors import InternalInvariantViolation
from .grid import Grid
from .regions import RegionCounter
from .rng import RandomSource
from .tiles import FLOOR, NO_ROOM
from .visualizer import HL_ACCEPT, ProgressEvent, Visualizer


@dataclass(frozen=True)
class Room:
    """Axis-aligned room rectangle with inclusive bounds (border ring included)."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def w(self) -> int:
        return self.x1 - self.x0 + 1

    @property
    def h(self) -> int:
        return self.y1 - self.y0 + 1

    @property
    def center(self) -> Tuple[int, int]:
        return ((self.x0 + self.x1) // 2, (self.y0 + self.y1) // 2)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x0, self.x1 + 1):
            for iy in range(self.y0, self.y1 + 1):
                yield ix, iy

    def interior(self) -> Iterator[Tuple[int, int]]:
        for ix in range(self.x0 + 1, self.x1):
            for iy in range(self.y0 + 1, self.y1):
                yield ix, iy

    def contains(self, x: int, y: int) -> bool:
        return self.x0 <= x <= self.x1 and self.y0 <= y <= self.y1

    def overlaps(self, other: "Room") -> bool:
        return not (
            self.x1 < other.x0 or other.x1 < self.x0 or self.y1 < other.y0 or other.y1 < self.y0
        )

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x0, self.y0, self.x1, self.y1)


def place_rooms(
    grid: Grid,
    config: GeneratorConfig,
    rng: RandomSource,
    regions: RegionCounter,
    visualizer: Optional[Visualizer] = None,
    stats: Optional[dict] = None,
) -> List[Room]:
    """Scatter non-overlapping rooms onto the grid (stage 1).

    Gives up after ``config.max_tries`` consecutive rejections or once
    ``config.max_rooms`` rooms exist. Returns the rooms in placement order;
    room ``i`` stamps index ``i`` on its whole rectangle and owns one fresh
    region for its interior.
    """
    rooms: List[Room] = []
    tries = 0
    rejected = 0
    while tries < config.max_tries and len(rooms) < config.max_rooms:
        w = rng.odd_in(*config.room_width)
        h = rng.odd_in(*config.room_height)
        x0 = rng.even_in(0, grid.width - w)
        y0 = rng.even_in(0, grid.height - h)
        room = Room(x0, y0, x0 + w - 1, y0 + h - 1)
        if room.x1 % 2 or room.y1 % 2:
            raise InternalInvariantViolation(f"room {room.as_tuple()} has odd far corner")
        if _collides(grid, room):
            tries += 1
            rejected += 1
            continue
        _stamp_room(grid, room, len(rooms), regions.allocate())
        rooms.append(room)
        tries = 0
        if visualizer is not None:
            visualizer.notify(ProgressEvent("rooms", "room_placed", *room.as_tuple(), HL_ACCEPT))
    if stats is not None:
        stats["room_attempts_rejected"] = rejected
    return rooms


def _collides(grid: Grid, room: Room) -> bool:
    # Claimed means FLOOR or owned by an earlier room (its border ring included)
    tiles = grid.tiles
    for ix in range(room.x0, room.x1 + 1):
        column = tiles[ix]
        for iy in range(room.y0, room.y1 + 1):
            t = column[iy]
            if t.kind == FLOOR or t.room != NO_ROOM:
                return True
    return False


def _stamp_room(grid: Grid, room: Room, index: int, region: int) -> None:
    tiles = grid.tiles
    for ix, iy in room.cells():
        tiles[ix][iy].room = index
    for ix, iy in room.interior():
        t = tiles[ix][iy]
        t.kind = FLOOR
        t.region = region


__all__ = ["Room", "place_rooms"]
