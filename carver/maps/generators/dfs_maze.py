"""Perfect maze by randomized depth-first carving.

A cell is opened only while it has at most one open 4-neighbour, so every
opened cell hangs off exactly one earlier cell and the open area is a tree.
"""
from __future__ import annotations

from typing import Iterator, List

from ..config import DFSMazeConfig
from ..directions import FOUR_DIRECTIONS
from ..grid import Coord2D, Grid
from ..tiles import Tile
from .base import MapGenerator


class DFSMazeGenerator(MapGenerator):
    name = "dfs_maze"
    config_cls = DFSMazeConfig

    def _generate(self) -> Grid:
        self.grid = self._new_grid(Tile.BLOCKED)
        self.metrics['tunnels_carved'] = self.carve(1, 1)
        return self.grid

    def _can_open(self, x: int, y: int) -> bool:
        grid = self.grid
        if x < 1 or y < 1 or x >= self.width - 1 or y >= self.height - 1:
            return False
        if grid.is_open(x, y):
            return False
        open_neighbours = sum(1 for dx, dy in FOUR_DIRECTIONS if grid.is_open(x + dx, y + dy))
        return open_neighbours <= 1

    def carve(self, x: int, y: int) -> int:
        """Carve from (x, y); returns the number of cells opened.

        Each stack frame holds the pending neighbours of one opened cell, so
        cells are visited in the same order a recursive walk would use.
        """
        opened = 0
        stack: List[Iterator[Coord2D]] = [iter([(x, y)])]
        while stack:
            try:
                cx, cy = next(stack[-1])
            except StopIteration:
                stack.pop()
                continue
            if not self._can_open(cx, cy):
                continue
            self.grid.set(cx, cy, Tile.OPEN)
            opened += 1
            order = list(range(len(FOUR_DIRECTIONS)))
            self.rng.shuffle(order)
            stack.append(iter([(cx + FOUR_DIRECTIONS[i][0], cy + FOUR_DIRECTIONS[i][1]) for i in order]))
        return opened
