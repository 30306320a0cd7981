from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'open_tiles': 0,
        'blocked_tiles': 0,
        'rooms': 0,
        'regions_before': 0,
        'tunnels_carved': 0,
        'connected': True,
        'runtime_ms': 0.0,
    }
