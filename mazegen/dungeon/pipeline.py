"""Pipeline orchestration for maze-dungeon generation.

Provides the public Dungeon class used by the HTTP layer, the CLI and the
diagnostics script. Stages run to completion in a fixed order, each leaving the
grid in a stronger state than it found it:

    rooms    -> non-overlapping rooms on the even/odd lattice
    maze     -> hunt-and-kill corridors through every unused odd cell
    connect  -> connectors opened until everything is region 0
    prune    -> corridor dead ends removed
"""
from __future__ import annotations

import random
import time
from dataclasses import replace
from typing import Any, Dict, Iterator, List, Optional, Tuple

from mazegen.logging_utils import get_logger

from .config import GeneratorConfig
from .connectivity import connect_regions
from .errors import ConfigurationError, MazeGenError
from .grid import Grid
from .maze import carve_maze
from .metrics import init_metrics
from .pruning import remove_dead_ends
from .regions import RegionCounter
from .rng import RandomSource
from .rooms import Room, place_rooms
from .tiles import FLOOR
from .visualizer import Visualizer

STAGES = ("rooms", "maze", "connect", "prune")

log = get_logger("mazegen.dungeon")


class Dungeon:
    def __init__(
        self,
        config: GeneratorConfig | None = None,
        *,
        seed: int | None = None,
        size: Tuple[int, int] | None = None,
        rng=None,
        visualizer: Optional[Visualizer] = None,
        autorun: bool = True,
    ):
        # Accept either a config object or the (seed, size) shorthand
        config = replace(config) if config is not None else GeneratorConfig()
        if seed is not None:
            config.seed = seed
        if size is not None and len(size) >= 2:
            config.width, config.height = size[0], size[1]
        config.validate()
        if config.seed is None:
            config.seed = random.randint(0, 2**31 - 1)
        self.config = config
        self.seed = config.seed
        # Local RNG so external random usage does not affect generation.
        # An injected source is consumed as-is; a private one is reseeded per run.
        self._private_rng = rng is None
        self.rng = rng if isinstance(rng, RandomSource) else RandomSource(rng, seed=self.seed)
        self.visualizer = visualizer
        self.grid = Grid(config.width, config.height)
        self.rooms: List[Room] = []
        self.doors: List[Tuple[int, int]] = []
        self.regions = RegionCounter()
        self.metrics: Dict[str, Any] = {}
        self.completed_stages: List[str] = []
        if autorun:
            self.generate()

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def complete(self) -> bool:
        return len(self.completed_stages) == len(STAGES)

    def is_floor(self, x: int, y: int) -> bool:
        return self.grid.get(x, y).kind == FLOOR

    def is_door(self, x: int, y: int) -> bool:
        return self.grid.get(x, y).door

    def generate(self) -> "Dungeon":
        for _ in self.run_stages():
            pass
        return self

    def run_until(self, stage: str) -> "Dungeon":
        """Run stages up to and including ``stage``, leaving the grid at that point."""
        if stage not in STAGES:
            raise ConfigurationError(f"unknown stage {stage!r}; expected one of {', '.join(STAGES)}")
        stages = self.run_stages()
        for done in stages:
            if done == stage:
                break
        stages.close()
        return self

    def run_stages(self) -> Iterator[str]:
        """Run the pipeline one stage at a time, yielding each finished stage's name.

        A host may stop iterating between stages; the grid then holds the
        partial result of the last completed stage. If a stage raises, the grid
        is reset and the error propagates.
        """
        start = time.perf_counter()
        enabled = self.config.enable_metrics
        slog = log.bind(seed=self.seed)
        phase_times: Dict[str, int] = {}
        stats: Dict[str, Any] = {}

        def _phase(label, fn, *a, **k):
            ps = time.perf_counter()
            r = fn(*a, **k)
            phase_times[label] = int((time.perf_counter() - ps) * 1000)
            slog.debug(event="stage_done", stage=label, ms=phase_times[label])
            return r

        self.grid.reset()
        if self._private_rng:
            self.rng = RandomSource(seed=self.seed)
        self.rooms = []
        self.doors = []
        self.regions = RegionCounter()
        self.completed_stages = []
        self.metrics = init_metrics() if enabled else {}
        cfg = self.config
        try:
            self.rooms = _phase(
                "rooms", place_rooms, self.grid, cfg, self.rng, self.regions, self.visualizer, stats
            )
            self.completed_stages.append("rooms")
            yield "rooms"
            components = _phase(
                "maze",
                carve_maze,
                self.grid,
                self.rng,
                self.regions,
                self.visualizer,
                (cfg.forward_weight, cfg.left_weight, cfg.right_weight),
            )
            stats["maze_components"] = components
            self.completed_stages.append("maze")
            yield "maze"
            self.doors = _phase("connect", connect_regions, self.grid, self.rng, self.visualizer, stats)
            self.completed_stages.append("connect")
            yield "connect"
            culled, passes = _phase("prune", remove_dead_ends, self.grid, self.visualizer)
            stats["dead_ends_culled"] = culled
            stats["prune_passes"] = passes
            self.completed_stages.append("prune")
        except MazeGenError as exc:
            slog.error(event="generation_failed", error=type(exc).__name__, detail=str(exc))
            self.grid.reset()
            self.rooms = []
            self.doors = []
            self.completed_stages = []
            raise
        runtime_ms = int((time.perf_counter() - start) * 1000)
        if enabled:
            self.metrics.update(stats)
            self.metrics["rooms_placed"] = len(self.rooms)
            self.metrics["regions_created"] = self.regions.allocated
            self.metrics["doors_opened"] = len(self.doors)
            self.metrics["floor_tiles"] = self.grid.floor_count()
            self.metrics["runtime_ms"] = runtime_ms
            self.metrics["phase_ms"] = phase_times
        slog.debug(
            event="dungeon_generated",
            size=f"{cfg.width}x{cfg.height}",
            rooms=len(self.rooms),
            doors=len(self.doors),
            runtime_ms=runtime_ms,
        )
        yield "prune"


__all__ = ["Dungeon", "STAGES"]
