"""Randomly placed rooms joined in placement order.

See http://www.roguebasin.com/index.php?title=Complete_Roguelike_Tutorial,_using_python%2Blibtcod,_part_3
"""
from __future__ import annotations

from typing import List, Tuple

from ..config import TunnelingRoomsConfig
from ..grid import Grid
from ..rng import coin_flip, next_int
from ..rooms import Rect
from ..tiles import Tile
from .base import MapGenerator
from .bsp_tree import carve_l_tunnel


def room_center(room: Rect) -> Tuple[int, int]:
    """Truncated centre, unlike ``Rect.center`` which rounds up."""
    return (room.x + room.w // 2, room.y + room.h // 2)


class TunnelingRoomsGenerator(MapGenerator):
    name = "tunneling_rooms"
    config_cls = TunnelingRoomsConfig

    def _generate(self) -> Grid:
        cfg = self.config
        self.grid = self._new_grid(Tile.BLOCKED)
        self.rooms: List[Rect] = []
        for _ in range(cfg.max_rooms):
            w = next_int(self.rng, cfg.room_min_size, cfg.room_max_size)
            h = next_int(self.rng, cfg.room_min_size, cfg.room_max_size)
            # rooms wider than the map are clamped so they still fit
            w = min(w, self.width - 1)
            h = min(h, self.height - 1)
            x = next_int(self.rng, 0, self.width - w)
            y = next_int(self.rng, 0, self.height - h)
            room = Rect(x, y, w, h)
            if any(room.overlaps(other) for other in self.rooms):
                continue
            self.carve_room(room)
            if self.rooms:
                carve_l_tunnel(self.grid, room_center(self.rooms[-1]), room_center(room), coin_flip(self.rng))
                self.metrics['tunnels_carved'] += 1
            self.rooms.append(room)
        self.metrics['rooms'] = len(self.rooms)
        return self.grid

    def carve_room(self, room: Rect) -> None:
        for x, y in room.interior():
            if self.grid.in_bounds(x, y) and not self.grid.is_border(x, y):
                self.grid.set(x, y, Tile.OPEN)
