import os
import time

import pytest

from mazegen.dungeon import Dungeon, GeneratorConfig
from mazegen.dungeon.checks import dead_ends, is_connected


def _runs(default: int) -> int:
    return int(os.environ.get("MAZEGEN_STRESS_RUNS", default))


def test_default_config_sample():
    for seed in range(_runs(25)):
        d = Dungeon(GeneratorConfig(seed=seed))
        assert is_connected(d.grid), f"seed {seed} disconnected"
        assert dead_ends(d.grid) == [], f"seed {seed} has dead ends"


@pytest.mark.stress
def test_default_config_thousand_runs():
    for seed in range(_runs(1000)):
        d = Dungeon(GeneratorConfig(seed=seed))
        assert is_connected(d.grid), f"seed {seed} disconnected"
        assert dead_ends(d.grid) == [], f"seed {seed} has dead ends"


# Simple performance guardrail. Not a strict micro-benchmark; aims to catch large regressions.
@pytest.mark.performance
def test_generation_time_default_size():
    seeds = [10101, 20202, 30303]
    max_seconds_per = 1.5  # generous threshold; tune as needed
    for s in seeds:
        start = time.perf_counter()
        d = Dungeon(GeneratorConfig(seed=s))
        elapsed = time.perf_counter() - start
        assert d.complete
        assert elapsed < max_seconds_per, f"Seed {s} took {elapsed:.3f}s (> {max_seconds_per}s)"
