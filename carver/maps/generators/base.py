"""Common generator contract.

A generator is built from its config and an RNG and exposes a single
operation, ``create_map()``, returning a freshly built ``Grid``. Subclasses
implement ``_generate``; the base class validates the config, times the run
and fills the tile counts in ``metrics``.
"""
from __future__ import annotations

import random
import time
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional, Type

from ...logging_utils import get_logger
from ..config import MapConfig
from ..grid import Grid
from ..metrics import init_metrics
from ..rng import resolve_rng
from ..tiles import Tile

log = get_logger("carver.maps")


class MapGenerator(ABC):
    name: ClassVar[str] = ""
    config_cls: ClassVar[Type[MapConfig]] = MapConfig

    def __init__(self, config: Optional[MapConfig] = None, rng: Optional[random.Random] = None):
        if config is None:
            config = self.config_cls()
        config.validate()
        self.config = config
        self.width = config.width
        self.height = config.height
        self.rng = resolve_rng(rng, config.seed)
        self.metrics: Dict[str, Any] = init_metrics()

    def create_map(self) -> Grid:
        self.metrics = init_metrics()
        start = time.perf_counter()
        grid = self._generate()
        self.metrics['runtime_ms'] = round((time.perf_counter() - start) * 1000, 3)
        self.metrics['open_tiles'] = grid.count(Tile.OPEN)
        self.metrics['blocked_tiles'] = grid.count(Tile.BLOCKED)
        log.debug(
            event="map_generated",
            algorithm=self.name,
            width=self.width,
            height=self.height,
            seed=self.config.seed,
            open_tiles=self.metrics['open_tiles'],
            runtime_ms=self.metrics['runtime_ms'],
        )
        return grid

    def _new_grid(self, tile: Tile) -> Grid:
        return Grid.filled(self.width, self.height, tile)

    @abstractmethod
    def _generate(self) -> Grid:
        raise NotImplementedError


__all__ = ["MapGenerator"]
