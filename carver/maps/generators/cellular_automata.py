"""Cellular automata caves.

Random fill, then a number of smoothing generations. The first
``big_area_cutoff`` generations also open up large solid areas (the "4-5 with
big area" rule); later ones only apply the nearest-neighbour rule. Each
generation reads the previous one and writes a clone. Isolated caves are
stitched together at the end.
See http://www.roguebasin.com/index.php?title=Cellular_Automata_Method_for_Generating_Random_Cave-Like_Levels
"""
from __future__ import annotations

from ..config import CellularAutomataConfig
from ..connectivity import connect_regions, find_regions
from ..grid import Grid
from ..tiles import Tile
from .base import MapGenerator


def count_walls_near(grid: Grid, x: int, y: int, distance: int) -> int:
    """Solid cells in the square of ``distance`` around (x, y), centre excluded."""
    count = 0
    for (nx, ny), tile in grid.tiles_in_square(x, y, distance):
        if nx == x and ny == y:
            continue
        if tile is Tile.BLOCKED:
            count += 1
    return count


def big_area_step(grid: Grid) -> Grid:
    updated = grid.clone()
    for (x, y), _ in grid.all_tiles():
        if grid.is_border(x, y):
            continue
        if count_walls_near(grid, x, y, 1) >= 5 or count_walls_near(grid, x, y, 2) <= 2:
            updated.set(x, y, Tile.BLOCKED)
        else:
            updated.set(x, y, Tile.OPEN)
    return updated


def nearest_neighbours_step(grid: Grid) -> Grid:
    updated = grid.clone()
    for (x, y), _ in grid.all_tiles():
        if grid.is_border(x, y):
            continue
        if count_walls_near(grid, x, y, 1) >= 5:
            updated.set(x, y, Tile.BLOCKED)
        else:
            updated.set(x, y, Tile.OPEN)
    return updated


class CellularAutomataGenerator(MapGenerator):
    name = "cellular_automata"
    config_cls = CellularAutomataConfig

    def _random_fill(self, grid: Grid) -> None:
        fill = self.config.fill_probability
        for (x, y), _ in grid.all_tiles():
            if grid.is_border(x, y):
                continue
            if self.rng.randrange(1, 100) < fill:
                grid.set(x, y, Tile.OPEN)

    def _generate(self) -> Grid:
        cfg = self.config
        grid = self._new_grid(Tile.BLOCKED)
        self._random_fill(grid)
        for i in range(cfg.total_iterations):
            if i < cfg.big_area_cutoff:
                grid = big_area_step(grid)
            else:
                grid = nearest_neighbours_step(grid)
        regions = find_regions(grid)
        self.metrics['regions_before'] = len(regions)
        self.metrics['tunnels_carved'] = connect_regions(grid, regions)
        return grid
