# Tile kind constants centralized for modular imports
WALL = "W"
FLOOR = "F"
CONNECTOR = "C"  # candidate door while the region connector runs
CULLED = "X"  # removed by dead-end pruning; reads as WALL from outside

NO_REGION = -1
NO_ROOM = -1


class Tile:
    """Lightweight container for one grid cell."""

    __slots__ = ("kind", "region", "room", "door")

    def __init__(self, kind: str = WALL, region: int = NO_REGION, room: int = NO_ROOM, door: bool = False):
        self.kind = kind
        self.region = region
        self.room = room
        self.door = door

    def reset(self):
        self.kind = WALL
        self.region = NO_REGION
        self.room = NO_ROOM
        self.door = False

    @property
    def is_floor(self) -> bool:
        return self.kind == FLOOR

    @property
    def visible_kind(self) -> str:
        # CONNECTOR and CULLED are internal states; hosts only ever see WALL or FLOOR
        return FLOOR if self.kind == FLOOR else WALL

    def to_dict(self):
        return {"kind": self.visible_kind, "region": self.region, "room": self.room, "door": self.door}

    def __repr__(self) -> str:
        return f"Tile(kind={self.kind!r}, region={self.region}, room={self.room}, door={self.door})"


__all__ = ["WALL", "FLOOR", "CONNECTOR", "CULLED", "NO_REGION", "NO_ROOM", "Tile"]
