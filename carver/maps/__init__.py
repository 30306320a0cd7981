"""Public map package interface."""

from .config import MapConfig, build_config, check_work_limit  # noqa: F401
from .errors import ConfigError, InvalidGeneratorError, MapGenerationError  # noqa: F401
from .factory import build_generator, config_from_params, create_map, generate  # noqa: F401
from .generators import REGISTRY, MapGenerator, algorithm_defaults, get_generator_class  # noqa: F401
from .grid import Grid  # noqa: F401
from .tiles import BLOCKED_CHAR, OPEN_CHAR, Tile  # noqa: F401

__all__ = [
    "MapConfig",
    "build_config",
    "check_work_limit",
    "ConfigError",
    "InvalidGeneratorError",
    "MapGenerationError",
    "build_generator",
    "config_from_params",
    "create_map",
    "generate",
    "REGISTRY",
    "MapGenerator",
    "algorithm_defaults",
    "get_generator_class",
    "Grid",
    "Tile",
    "OPEN_CHAR",
    "BLOCKED_CHAR",
]
