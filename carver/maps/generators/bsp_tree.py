"""Rooms and halls over a binary space partition.

The grid starts solid, the partition tree is split to its fixed point, each
terminal leaf gets one room and sibling subtrees are joined by L-shaped halls.
See http://www.roguebasin.com/index.php?title=Basic_BSP_Dungeon_generation
"""
from __future__ import annotations

from ..config import BSPTreeConfig
from ..grid import Grid
from ..leaf import Leaf, build_tree
from ..rng import coin_flip
from ..rooms import Rect
from ..tiles import Tile
from .base import MapGenerator


def carve_horizontal_tunnel(grid: Grid, x_start: int, x_end: int, y: int) -> None:
    """Open a row segment; the outer ring is never dug."""
    y = grid.clamp_y(y)
    for x in range(grid.clamp_x(min(x_start, x_end)), grid.clamp_x(max(x_start, x_end)) + 1):
        if not grid.is_border(x, y):
            grid.set(x, y, Tile.OPEN)


def carve_vertical_tunnel(grid: Grid, y_start: int, y_end: int, x: int) -> None:
    x = grid.clamp_x(x)
    for y in range(grid.clamp_y(min(y_start, y_end)), grid.clamp_y(max(y_start, y_end)) + 1):
        if not grid.is_border(x, y):
            grid.set(x, y, Tile.OPEN)


def carve_l_tunnel(grid: Grid, start, end, horizontal_first: bool) -> None:
    (x1, y1), (x2, y2) = start, end
    if horizontal_first:
        carve_horizontal_tunnel(grid, x1, x2, y1)
        carve_vertical_tunnel(grid, y1, y2, x2)
    else:
        carve_vertical_tunnel(grid, y1, y2, x1)
        carve_horizontal_tunnel(grid, x1, x2, y2)


class BSPTreeGenerator(MapGenerator):
    name = "bsp_tree"
    config_cls = BSPTreeConfig

    def _root_leaf(self) -> Leaf:
        return Leaf(0, 0, self.width, self.height)

    def _fill_tile(self) -> Tile:
        return Tile.BLOCKED

    def _generate(self) -> Grid:
        cfg = self.config
        self.grid = self._new_grid(self._fill_tile())
        self.rooms = []
        root = self._root_leaf()
        build_tree(root, cfg.max_leaf_size, cfg.min_leaf_size, self.rng)
        root.create_rooms(self, cfg.room_min_size, cfg.room_max_size, self.rng)
        self._finish()
        self.metrics['rooms'] = len(self.rooms)
        return self.grid

    def _finish(self) -> None:
        pass

    # -- RoomCarver ---------------------------------------------------------

    def carve_room(self, room: Rect) -> None:
        self.rooms.append(room)
        for x, y in room.interior():
            if self.grid.in_bounds(x, y) and not self.grid.is_border(x, y):
                self.grid.set(x, y, Tile.OPEN)

    def carve_hall(self, room1: Rect, room2: Rect) -> None:
        horizontal_first = coin_flip(self.rng)
        carve_l_tunnel(self.grid, room1.center, room2.center, horizontal_first)
