"""Facade: run a generator, or look one up by name and run it."""
from __future__ import annotations

import random
from typing import Any, Mapping, Optional

from .config import MapConfig, build_config
from .errors import InvalidGeneratorError
from .generators import MapGenerator, get_generator_class
from .grid import Grid


def create_map(generator: Optional[MapGenerator]) -> Grid:
    if generator is None:
        raise InvalidGeneratorError("a map generator is required")
    return generator.create_map()


def config_from_params(algorithm: str, params: Mapping[str, Any]) -> MapConfig:
    """Validated config for ``algorithm`` from loose values (query args, CLI pairs)."""
    return build_config(get_generator_class(algorithm).config_cls, params)


def build_generator(
    algorithm: str,
    params: Optional[Mapping[str, Any]] = None,
    rng: Optional[random.Random] = None,
) -> MapGenerator:
    cls = get_generator_class(algorithm)
    return cls(config_from_params(algorithm, params or {}), rng)


def generate(
    algorithm: str,
    width: int = 25,
    height: int = 25,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
    **params: Any,
) -> Grid:
    """One-shot generation, e.g. ``generate("dfs_maze", 31, 21, seed=7)``."""
    params = dict(params, width=width, height=height, seed=seed)
    return create_map(build_generator(algorithm, params, rng))


__all__ = ["create_map", "config_from_params", "build_generator", "generate"]
