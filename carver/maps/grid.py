"""Rectangular tile grid.

(0, 0) is the upper left corner; x grows to the right and y grows downward.
Storage is row-major (``_cells[y][x]``). Iteration helpers yield
``((x, y), tile)`` pairs so callers always know where a tile came from.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .tiles import BLOCKED_CHAR, OPEN_CHAR, Tile

Coord2D = Tuple[int, int]
TileInfo = Tuple[Coord2D, Tile]


class Grid:
    __slots__ = ("width", "height", "_cells")

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        # Allocated but undefined until clear()/set() is called
        self._cells: List[List[Optional[Tile]]] = [[None] * width for _ in range(height)]

    @classmethod
    def filled(cls, width: int, height: int, tile: Tile) -> "Grid":
        grid = cls(width, height)
        grid.clear(tile)
        return grid

    @classmethod
    def from_rows(cls, rows: Sequence[str], open_char: str = OPEN_CHAR) -> "Grid":
        if not rows:
            raise ValueError("at least one row is required")
        width = len(rows[0])
        grid = cls(width, len(rows))
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {y} has length {len(row)}, expected {width}")
            for x, ch in enumerate(row):
                grid._cells[y][x] = Tile.OPEN if ch == open_char else Tile.BLOCKED
        return grid

    # -- single cell access -------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Tile:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        return self._cells[y][x]

    def get_or_none(self, x: int, y: int) -> Optional[Tile]:
        """Bounds-safe lookup used by neighbour lookups at the edge."""
        if not self.in_bounds(x, y):
            return None
        return self._cells[y][x]

    # Name used by consumers that only classify tiles
    tile_at = get

    def set(self, x: int, y: int, tile: Tile) -> None:
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) outside {self.width}x{self.height} grid")
        self._cells[y][x] = tile

    def is_open(self, x: int, y: int) -> bool:
        return self.get_or_none(x, y) is Tile.OPEN

    def is_blocked(self, x: int, y: int) -> bool:
        return self.get_or_none(x, y) is Tile.BLOCKED

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    def clamp_x(self, x: int) -> int:
        return 0 if x < 0 else self.width - 1 if x > self.width - 1 else x

    def clamp_y(self, y: int) -> int:
        return 0 if y < 0 else self.height - 1 if y > self.height - 1 else y

    # -- bulk operations ----------------------------------------------------

    def clear(self, tile: Tile) -> None:
        for row in self._cells:
            for x in range(self.width):
                row[x] = tile

    def count(self, tile: Tile) -> int:
        return sum(row.count(tile) for row in self._cells)

    def clone(self) -> "Grid":
        copy = Grid(self.width, self.height)
        copy._cells = [list(row) for row in self._cells]
        return copy

    # -- iteration ----------------------------------------------------------

    def all_tiles(self) -> Iterator[TileInfo]:
        for y in range(self.height):
            row = self._cells[y]
            for x in range(self.width):
                yield (x, y), row[x]

    def tiles_in_rows(self, *rows: int) -> Iterator[TileInfo]:
        for y in rows:
            for x in range(self.width):
                yield (x, y), self._cells[y][x]

    def tiles_in_columns(self, *columns: int) -> Iterator[TileInfo]:
        for x in columns:
            for y in range(self.height):
                yield (x, y), self._cells[y][x]

    def tiles_in_square(self, cx: int, cy: int, distance: int) -> Iterator[TileInfo]:
        x_min = max(0, cx - distance)
        x_max = min(self.width - 1, cx + distance)
        y_min = max(0, cy - distance)
        y_max = min(self.height - 1, cy + distance)
        for y in range(y_min, y_max + 1):
            for x in range(x_min, x_max + 1):
                yield (x, y), self._cells[y][x]

    def cells_along_line(self, x0: int, y0: int, x1: int, y1: int) -> Iterator[TileInfo]:
        """Bresenham walk from origin to destination, both ends included.

        Endpoints are clamped into the grid first, so the walk always ends.
        """
        x0, y0 = self.clamp_x(x0), self.clamp_y(y0)
        x1, y1 = self.clamp_x(x1), self.clamp_y(y1)
        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy
        while True:
            yield (x0, y0), self._cells[y0][x0]
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                x0 += sx
            if e2 < dx:
                err += dx
                y0 += sy

    def fill_cells(self, coords: Iterable[Coord2D], tile: Tile) -> None:
        for x, y in coords:
            self._cells[y][x] = tile

    # -- encoding -----------------------------------------------------------

    def to_rows(self, open_char: str = OPEN_CHAR, blocked_char: str = BLOCKED_CHAR) -> List[str]:
        return [
            "".join(open_char if t is Tile.OPEN else blocked_char for t in row)
            for row in self._cells
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.width, self.height) == (other.width, other.height) and self._cells == other._cells

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, open={self.count(Tile.OPEN)})"


__all__ = ["Grid", "Coord2D", "TileInfo"]
