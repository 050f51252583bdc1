from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'rooms_placed': 0,
        'room_attempts_rejected': 0,
        'maze_components': 0,
        'regions_created': 0,
        'connectors_found': 0,
        'doors_opened': 0,
        'dead_ends_culled': 0,
        'prune_passes': 0,
        'floor_tiles': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
