"""Region analysis and connectivity repair.

Flood fill splits the grid into maximal open regions; a union-find tracks
which regions have been joined while straight tunnels are carved between
nearest unconnected neighbours until a single component remains.
"""
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from .directions import FLOOD_OFFSETS
from .grid import Coord2D, Grid
from .rooms import Rect
from .tiles import Tile


class Region:
    """Connected set of same-class tiles with an incrementally tracked bounding box."""

    __slots__ = ("tiles", "_left", "_top", "_right", "_bottom")

    def __init__(self):
        self.tiles: Set[Coord2D] = set()
        self._left: Optional[int] = None
        self._top: Optional[int] = None
        self._right: Optional[int] = None
        self._bottom: Optional[int] = None

    def add_tile(self, x: int, y: int) -> None:
        self.tiles.add((x, y))
        if self._left is None:
            self._left = self._right = x
            self._top = self._bottom = y
            return
        if x < self._left:
            self._left = x
        if x > self._right:
            self._right = x
        if y < self._top:
            self._top = y
        if y > self._bottom:
            self._bottom = y

    def __len__(self) -> int:
        return len(self.tiles)

    def __contains__(self, coord) -> bool:
        return coord in self.tiles

    @property
    def bounds(self) -> Rect:
        if self._left is None:
            return Rect(0, 0, 0, 0)
        return Rect(self._left, self._top, self._right - self._left + 1, self._bottom - self._top + 1)

    @property
    def center(self) -> Tuple[int, int]:
        b = self.bounds
        return (b.x + b.w // 2, b.y + b.h // 2)

    @property
    def anchor(self) -> Tuple[int, int]:
        """Member tile closest to the bounds centre.

        The centre itself may lie outside a concave region, so tunnels start
        and end here instead.
        """
        cx, cy = self.center
        if (cx, cy) in self.tiles:
            return (cx, cy)
        return min(self.tiles, key=lambda t: (abs(t[0] - cx) + abs(t[1] - cy), t[1], t[0]))

    def __repr__(self) -> str:
        return f"Region(size={len(self.tiles)}, bounds={self.bounds})"


class UnionFind:
    """Disjoint sets over ``0..n-1``."""

    def __init__(self, n: int):
        self.parent = list(range(n))
        self.size = [1] * n
        self.count = n

    def find(self, a: int) -> int:
        parent = self.parent
        while parent[a] != a:
            parent[a] = parent[parent[a]]
            a = parent[a]
        return a

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def union(self, a: int, b: int) -> bool:
        """Merge the sets holding ``a`` and ``b``; False when already joined."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        if self.size[ra] < self.size[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        self.size[ra] += self.size[rb]
        self.count -= 1
        return True


def find_regions(grid: Grid, tile: Tile = Tile.OPEN) -> List[Region]:
    """Flood fill every unvisited ``tile`` cell (row-major) into Regions.

    Uses an explicit stack so large grids do not hit the recursion limit.
    """
    width, height = grid.width, grid.height
    visited = [[False] * width for _ in range(height)]
    regions: List[Region] = []
    for (sx, sy), start_tile in grid.all_tiles():
        if visited[sy][sx] or start_tile is not tile:
            continue
        region = Region()
        stack = [(sx, sy)]
        while stack:
            x, y = stack.pop()
            if visited[y][x] or grid.get_or_none(x, y) is not tile:
                continue
            visited[y][x] = True
            region.add_tile(x, y)
            for dx, dy in FLOOD_OFFSETS:
                nx, ny = x + dx, y + dy
                neighbour = grid.get_or_none(nx, ny)
                if neighbour is tile and not visited[ny][nx]:
                    stack.append((nx, ny))
        if region.tiles:
            regions.append(region)
    return regions


def _distance(a: Region, b: Region) -> int:
    (ax, ay), (bx, by) = a.center, b.center
    return abs(ax - bx) + abs(ay - by)


def find_nearest_region(regions: List[Region], index: int, uf: UnionFind) -> int:
    """Index of the closest region not yet joined to ``regions[index]``.

    Returns ``index`` itself when every other region is already connected.
    Ties go to the lowest index.
    """
    start = regions[index]
    closest = index
    best = None
    for i, other in enumerate(regions):
        if i == index or uf.connected(i, index):
            continue
        d = _distance(start, other)
        if best is None or d < best:
            best = d
            closest = i
    return closest


def carve_line(grid: Grid, start: Coord2D, end: Coord2D, tile: Tile = Tile.OPEN) -> int:
    """Set every cell on the straight line start -> end; returns cells touched.

    Diagonal Bresenham steps also fill the corner cell so the tunnel is
    4-connected (flood fill does not walk diagonals).
    """
    cells: List[Coord2D] = []
    prev = None
    for pos, _ in grid.cells_along_line(start[0], start[1], end[0], end[1]):
        if prev is not None and pos[0] != prev[0] and pos[1] != prev[1]:
            cells.append((pos[0], prev[1]))
        cells.append(pos)
        prev = pos
    grid.fill_cells(cells, tile)
    return len(cells)


def connect_regions(grid: Grid, regions: Optional[List[Region]] = None) -> int:
    """Join all open regions with straight tunnels; returns tunnels carved."""
    if regions is None:
        regions = find_regions(grid)
    if len(regions) < 2:
        return 0
    uf = UnionFind(len(regions))
    tunnels = 0
    while uf.count > 1:
        for i in range(len(regions)):
            j = find_nearest_region(regions, i, uf)
            if j == i:
                continue
            carve_line(grid, regions[i].anchor, regions[j].anchor)
            uf.union(i, j)
            tunnels += 1
    return tunnels


def is_fully_connected(grid: Grid) -> bool:
    return len(find_regions(grid)) <= 1


__all__ = [
    "Region",
    "UnionFind",
    "find_regions",
    "find_nearest_region",
    "carve_line",
    "connect_regions",
    "is_fully_connected",
]
