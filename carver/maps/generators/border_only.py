from __future__ import annotations

from ..config import BorderOnlyConfig
from ..grid import Grid
from ..tiles import Tile
from .base import MapGenerator


def make_border_only(width: int, height: int) -> Grid:
    """Open map with a solid outer ring."""
    grid = Grid.filled(width, height, Tile.OPEN)
    for (x, y), _ in list(grid.tiles_in_rows(0, height - 1)):
        grid.set(x, y, Tile.BLOCKED)
    for (x, y), _ in list(grid.tiles_in_columns(0, width - 1)):
        grid.set(x, y, Tile.BLOCKED)
    return grid


class BorderOnlyGenerator(MapGenerator):
    name = "border_only"
    config_cls = BorderOnlyConfig

    def _generate(self) -> Grid:
        return make_border_only(self.width, self.height)
