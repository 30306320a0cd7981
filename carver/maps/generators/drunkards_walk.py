"""Drunkard's walk with a pull toward the centre and toward the last step.

See http://www.roguebasin.com/index.php?title=Random_Walk_Cave_Generation
"""
from __future__ import annotations

from typing import Optional, Tuple

from ..config import DrunkardsWalkConfig
from ..grid import Grid
from ..tiles import Tile
from .base import MapGenerator

NORTH = (0, -1)
SOUTH = (0, 1)
EAST = (1, 0)
WEST = (-1, 0)

# draw order for the weighted pick
WALK_DIRECTIONS = (NORTH, SOUTH, EAST, WEST)

# cap is never below this many steps per tile
STEPS_PER_TILE = 10


class DrunkardsWalkGenerator(MapGenerator):
    name = "drunkards_walk"
    config_cls = DrunkardsWalkConfig

    def _generate(self) -> Grid:
        cfg = self.config
        self.grid = self._new_grid(Tile.BLOCKED)
        x = self.rng.randrange(2, self.width - 2)
        y = self.rng.randrange(2, self.height - 2)
        goal = cfg.percent_goal * self.width * self.height
        cap = max(cfg.walk_iterations, STEPS_PER_TILE * self.width * self.height)

        self.grid.set(x, y, Tile.OPEN)
        filled = 1
        previous: Optional[Tuple[int, int]] = None
        for _ in range(cap):
            if filled >= goal:
                break
            direction = self.choose_direction(x, y, previous)
            nx, ny = x + direction[0], y + direction[1]
            if 0 < nx < self.width - 1 and 0 < ny < self.height - 1:
                x, y = nx, ny
                if self.grid.is_blocked(x, y):
                    self.grid.set(x, y, Tile.OPEN)
                    filled += 1
                previous = direction
        return self.grid

    def choose_direction(self, x: int, y: int, previous: Optional[Tuple[int, int]]) -> Tuple[int, int]:
        cfg = self.config
        weights = {d: 1.0 for d in WALK_DIRECTIONS}

        # nudge back toward the centre from the outer quarter of the map
        if x < self.width * 0.25:
            weights[EAST] += cfg.weight_toward_center
        elif x > self.width * 0.75:
            weights[WEST] += cfg.weight_toward_center
        if y < self.height * 0.25:
            weights[SOUTH] += cfg.weight_toward_center
        elif y > self.height * 0.75:
            weights[NORTH] += cfg.weight_toward_center

        if previous is not None:
            weights[previous] += cfg.weight_toward_previous

        total = sum(weights.values())
        pick = self.rng.random()
        cumulative = 0.0
        for d in WALK_DIRECTIONS:
            cumulative += weights[d] / total
            if pick < cumulative:
                return d
        return WALK_DIRECTIONS[-1]
