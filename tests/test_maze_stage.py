"""Hunt-and-kill stage: coverage and tree shape before regions are joined."""

from mazegen.dungeon import (
    FLOOR,
    Dungeon,
    GeneratorConfig,
    Grid,
    HuntAndKill,
    RandomSource,
    RecordingVisualizer,
    RegionCounter,
)
from mazegen.dungeon.checks import imperfect_maze_regions, is_connected, region_labels_consistent
from tests.dungeon_test_utils import small_config


def _stop_after(dungeon, stage):
    for done in dungeon.run_stages():
        if done == stage:
            break
    return dungeon


def _unused_odd_cells_filled(grid):
    for x in range(1, grid.width, 2):
        for y in range(1, grid.height, 2):
            t = grid.tiles[x][y]
            if t.room == -1 and t.kind != FLOOR:
                return False
    return True


def test_maze_fills_every_odd_cell_outside_rooms():
    for seed in range(8):
        d = _stop_after(Dungeon(small_config(seed=seed), autorun=False), "maze")
        assert d.completed_stages == ["rooms", "maze"]
        assert _unused_odd_cells_filled(d.grid)


def test_maze_regions_are_perfect():
    for seed in range(8):
        d = _stop_after(Dungeon(small_config(seed=seed), autorun=False), "maze")
        assert imperfect_maze_regions(d.grid) == []
        assert region_labels_consistent(d.grid)


def test_no_rooms_single_region_maze():
    # 5x5 with no rooms: four odd cells, one component, region 0
    d = _stop_after(Dungeon(GeneratorConfig(width=5, height=5, max_rooms=0, seed=0), autorun=False), "maze")
    regions = {d.grid.tiles[x][y].region for x, y in d.grid.iter_coords() if d.grid.tiles[x][y].kind == FLOOR}
    assert regions == {0}
    assert d.grid.floor_count() == 7
    assert imperfect_maze_regions(d.grid) == []
    d.generate()
    assert is_connected(d.grid)


def test_hunt_and_kill_direct():
    grid = Grid(15, 9)
    regions = RegionCounter()
    viz = RecordingVisualizer()
    hk = HuntAndKill(grid, RandomSource(seed=4), regions, viz)
    assert hk.run() == 1
    assert hk.components == 1 and regions.allocated == 1
    # 7 x 4 odd cells -> 28 cells, tree has 27 passages
    assert grid.floor_count() == 28 + 27
    assert hk.cells_carved == 28
    assert viz.actions("maze").count("seed") == 1


def test_direction_weights():
    hk = HuntAndKill(Grid(5, 5), RandomSource(seed=1), RegionCounter(), weights=(5, 3, 7))
    # First step has no direction memory
    assert hk.direction_weight(2, 0, 0, 0) == 1
    # Heading east (dx=2): forward east, right is south (y grows down), left is north
    assert hk.direction_weight(2, 0, 2, 0) == 5
    assert hk.direction_weight(0, 2, 2, 0) == 7
    assert hk.direction_weight(0, -2, 2, 0) == 3
    assert hk.direction_weight(-2, 0, 2, 0) == 1


def test_straight_bias_still_covers_grid():
    cfg = small_config(seed=9, forward_weight=20)
    d = _stop_after(Dungeon(cfg, autorun=False), "maze")
    assert _unused_odd_cells_filled(d.grid)
    assert imperfect_maze_regions(d.grid) == []
