"""Public dungeon package interface.

Rooms-and-corridors generator: rooms, hunt-and-kill maze, region connection,
dead-end pruning. ``Dungeon`` runs the whole pipeline; the stage functions are
exported for hosts that want to drive or inspect a single stage.
"""

from .config import GeneratorConfig
from .connectivity import Connector, connect_regions, find_connectors
from .errors import ConfigurationError, InternalInvariantViolation, MazeGenError, RngExhausted
from .grid import Grid
from .maze import HuntAndKill, carve_maze
from .pipeline import STAGES, Dungeon
from .pruning import remove_dead_ends
from .regions import MAIN_REGION, RegionCounter, relabel
from .rng import RandomSource
from .rooms import Room, place_rooms
from .tiles import CONNECTOR, CULLED, FLOOR, WALL, Tile
from .visualizer import (
    LoggingVisualizer,
    NullVisualizer,
    ProgressEvent,
    RecordingVisualizer,
    Visualizer,
)  # noqa: F401

__all__ = [
    "Dungeon",
    "GeneratorConfig",
    "STAGES",
    "Grid",
    "Tile",
    "Room",
    "Connector",
    "RegionCounter",
    "RandomSource",
    "HuntAndKill",
    "place_rooms",
    "carve_maze",
    "find_connectors",
    "connect_regions",
    "remove_dead_ends",
    "relabel",
    "MAIN_REGION",
    "WALL",
    "FLOOR",
    "CONNECTOR",
    "CULLED",
    "MazeGenError",
    "ConfigurationError",
    "RngExhausted",
    "InternalInvariantViolation",
    "ProgressEvent",
    "Visualizer",
    "NullVisualizer",
    "RecordingVisualizer",
    "LoggingVisualizer",
]
