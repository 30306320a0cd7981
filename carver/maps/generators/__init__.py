"""Generator registry.

Requests select a strategy by its string tag; every class here is registered
under its ``name``.
"""
from typing import Dict, Type

from ..errors import InvalidGeneratorError
from .base import MapGenerator
from .border_only import BorderOnlyGenerator, make_border_only
from .bsp_tree import BSPTreeGenerator
from .cave import CaveGenerator
from .cellular_automata import CellularAutomataGenerator
from .city import CityGenerator
from .dfs_maze import DFSMazeGenerator
from .drunkards_walk import DrunkardsWalkGenerator
from .tunneling_maze import TunnelingMazeGenerator
from .tunneling_rooms import TunnelingRoomsGenerator

REGISTRY: Dict[str, Type[MapGenerator]] = {
    cls.name: cls
    for cls in (
        BorderOnlyGenerator,
        BSPTreeGenerator,
        CityGenerator,
        CellularAutomataGenerator,
        CaveGenerator,
        DFSMazeGenerator,
        TunnelingMazeGenerator,
        DrunkardsWalkGenerator,
        TunnelingRoomsGenerator,
    )
}


def get_generator_class(algorithm: str) -> Type[MapGenerator]:
    try:
        return REGISTRY[algorithm]
    except KeyError:
        raise InvalidGeneratorError(f"unknown algorithm {algorithm!r}") from None


def algorithm_defaults() -> Dict[str, Dict[str, object]]:
    """Default parameter set for every registered algorithm."""
    return {name: cls.config_cls().params() for name, cls in REGISTRY.items()}


__all__ = [
    "REGISTRY",
    "MapGenerator",
    "BorderOnlyGenerator",
    "BSPTreeGenerator",
    "CityGenerator",
    "CellularAutomataGenerator",
    "CaveGenerator",
    "DFSMazeGenerator",
    "TunnelingMazeGenerator",
    "DrunkardsWalkGenerator",
    "TunnelingRoomsGenerator",
    "get_generator_class",
    "algorithm_defaults",
    "make_border_only",
]
