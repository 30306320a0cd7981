"""City walls: BSP partitioned buildings on open ground.

Same tree as the BSP generator, but the grid starts open, rooms are hollow
rectangles and every building gets exactly one door.
"""
from __future__ import annotations

from ..config import CityConfig
from ..directions import Cardinal
from ..leaf import Leaf
from ..rooms import Rect
from ..tiles import Tile
from .bsp_tree import BSPTreeGenerator


def door_position(room: Rect, side: Cardinal):
    cx, cy = room.center
    if side is Cardinal.NORTH:
        return (cx, room.bottom)
    if side is Cardinal.SOUTH:
        return (cx, room.y)
    if side is Cardinal.EAST:
        return (room.x, cy)
    return (room.right, cy)


class CityGenerator(BSPTreeGenerator):
    name = "city"
    config_cls = CityConfig

    def _root_leaf(self) -> Leaf:
        return Leaf(1, 1, self.width - 1, self.height - 1)

    def _fill_tile(self) -> Tile:
        return Tile.OPEN

    def carve_room(self, room: Rect) -> None:
        if room not in self.rooms:
            self.rooms.append(room)
        grid = self.grid
        for y in range(room.y, room.bottom + 1):
            for x in range(room.x, room.right + 1):
                if grid.in_bounds(x, y):
                    grid.set(x, y, Tile.BLOCKED)
        for x, y in room.interior():
            if grid.in_bounds(x, y):
                grid.set(x, y, Tile.OPEN)

    def carve_hall(self, room1: Rect, room2: Rect) -> None:
        # buildings are reached through their doors, nothing to dig
        for room in (room1, room2):
            if room not in self.rooms:
                self.rooms.append(room)

    def _finish(self) -> None:
        self.doors = []
        for room in self.rooms:
            side = Cardinal(self.rng.randrange(len(Cardinal)))
            x, y = door_position(room, side)
            x, y = self.grid.clamp_x(x), self.grid.clamp_y(y)
            self.grid.set(x, y, Tile.OPEN)
            self.doors.append((x, y))
