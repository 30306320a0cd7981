"""Maze grown over a lattice of cells two tiles apart.

From the lattice cell nearest the centre, each step tries a random direction.
An unvisited neighbour is linked (the tiles between are opened) and becomes
the current cell; otherwise the walk jumps to a random visited cell. Finishes
once every lattice cell is visited.
"""
from __future__ import annotations

from typing import List, Set, Tuple

from ..config import TunnelingMazeConfig
from ..directions import FOUR_DIRECTIONS
from ..grid import Grid
from ..tiles import Tile
from .base import MapGenerator

JUMP = 2

LatticeCell = Tuple[int, int]


class TunnelingMazeGenerator(MapGenerator):
    name = "tunneling_maze"
    config_cls = TunnelingMazeConfig

    def lattice_range(self, extent: int) -> range:
        # lattice index i maps to tile i * JUMP, kept strictly inside (2, extent - 2)
        return range(2 // JUMP + 1, (extent - 3) // JUMP + 1)

    def _generate(self) -> Grid:
        self.grid = self._new_grid(Tile.BLOCKED)
        xs = self.lattice_range(self.width)
        ys = self.lattice_range(self.height)
        total = len(xs) * len(ys)
        if total == 0:
            return self.grid

        current = (
            min(max(self.width // JUMP // 2, xs.start), xs.stop - 1),
            min(max(self.height // JUMP // 2, ys.start), ys.stop - 1),
        )
        visited: Set[LatticeCell] = {current}
        order: List[LatticeCell] = [current]
        self._open_cell(current)

        steps = 0
        while len(visited) < total:
            steps += 1
            if steps < self.config.flush_iterations:
                self._flush(order)
            dx, dy = FOUR_DIRECTIONS[self.rng.randrange(len(FOUR_DIRECTIONS))]
            neighbour = (current[0] + dx, current[1] + dy)
            if neighbour[0] in xs and neighbour[1] in ys and neighbour not in visited:
                self.link_cells(current, neighbour)
                visited.add(neighbour)
                order.append(neighbour)
                self._open_cell(neighbour)
                self.metrics['tunnels_carved'] += 1
                current = neighbour
            else:
                current = order[self.rng.randrange(len(order))]
        self._flush(order)
        return self.grid

    def _open_cell(self, cell: LatticeCell) -> None:
        self.grid.set(cell[0] * JUMP, cell[1] * JUMP, Tile.OPEN)

    def _flush(self, cells: List[LatticeCell]) -> None:
        for cell in cells:
            self._open_cell(cell)

    def link_cells(self, a: LatticeCell, b: LatticeCell) -> None:
        """Open the straight run of tiles between two lattice cells."""
        x, y = a[0] * JUMP, a[1] * JUMP
        tx, ty = b[0] * JUMP, b[1] * JUMP
        while (x, y) != (tx, ty):
            if x != tx:
                x += 1 if tx > x else -1
            else:
                y += 1 if ty > y else -1
            if self.grid.in_bounds(x, y) and not self.grid.is_border(x, y):
                self.grid.set(x, y, Tile.OPEN)
