"""Cave systems joined by directed corridors.

Built in three phases:

1. Seed random open cells, run a batch of single cell "flip if too many open
   neighbours" updates, then smooth rough edges and fill small holes.
2. Flood fill the caves (4-neighbour) and re-block the ones whose size falls
   outside ``(lower_limit, upper_limit]``.
3. Starting from one random cave, repeatedly walk a corridor outward from the
   edge of a connected cave (or from an existing corridor) with a bounded
   number of turns. A walk that reaches a cave not yet connected is written to
   the grid and that cave joins the connected set. The loop gives up after
   ``break_out`` attempts, so a reported failure leaves a partially connected
   map.

See https://www.evilscience.co.uk/a-c-algorithm-to-build-roguelike-cave-systems-part-1/
"""
from __future__ import annotations

from typing import List, Optional, Set, Tuple

from ...logging_utils import get_logger
from ..config import CaveConfig
from ..directions import FLOOD_OFFSETS, FOUR_DIRECTIONS, NINE_DIRECTIONS, reverse
from ..grid import Coord2D, Grid
from ..rng import next_int
from ..tiles import Tile
from .base import MapGenerator

log = get_logger("carver.maps.cave")

# random restarts allowed when looking for a place to start a corridor
EDGE_SEARCH_ATTEMPTS = 100

Direction = Tuple[int, int]


class Cave:
    __slots__ = ("cells", "members")

    def __init__(self, cells: List[Coord2D]):
        self.cells = cells
        self.members: Set[Coord2D] = set(cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, coord) -> bool:
        return coord in self.members


class CaveGenerator(MapGenerator):
    name = "cave"
    config_cls = CaveConfig

    def _generate(self) -> Grid:
        self.grid = self._new_grid(Tile.BLOCKED)
        self.caves: List[Cave] = []
        self.corridors: List[Coord2D] = []
        self.build_caves()
        self.find_caves()
        self.metrics['regions_before'] = len(self.caves)
        connected = self.connect_caves()
        self.metrics['connected'] = connected
        if not connected:
            log.warn(
                event="cave_connect_failed",
                caves=len(self.caves),
                seed=self.config.seed,
                break_out=self.config.break_out,
            )
        return self.grid

    # -- helpers ------------------------------------------------------------

    def _inside(self, x: int, y: int) -> bool:
        """In bounds and off the outer ring."""
        return 0 < x < self.width - 1 and 0 < y < self.height - 1

    def _neighbours(self, x: int, y: int, offsets) -> List[Coord2D]:
        return [(x + dx, y + dy) for dx, dy in offsets if self.grid.in_bounds(x + dx, y + dy)]

    def _random_direction(self) -> Direction:
        return FOUR_DIRECTIONS[self.rng.randrange(len(FOUR_DIRECTIONS))]

    def _turn(self, current: Direction, exclude: Optional[Direction] = None) -> Direction:
        """Random direction that does not reverse ``current`` (or ``exclude``)."""
        while True:
            candidate = self._random_direction()
            back = reverse(candidate)
            if back != current and back != exclude:
                return candidate

    # -- phase 1 ------------------------------------------------------------

    def build_caves(self) -> None:
        cfg = self.config
        grid = self.grid
        for (x, y), _ in grid.all_tiles():
            if grid.is_border(x, y):
                continue
            if self.rng.randrange(100) < cfg.close_tile_prob:
                grid.set(x, y, Tile.OPEN)

        for _ in range(cfg.iterations + 1):
            x = self.rng.randrange(self.width)
            y = self.rng.randrange(self.height)
            if grid.is_border(x, y):
                continue
            open_count = sum(1 for nx, ny in self._neighbours(x, y, NINE_DIRECTIONS) if grid.is_open(nx, ny))
            grid.set(x, y, Tile.OPEN if open_count > cfg.neighbours else Tile.BLOCKED)

        # smooth rough edges and single cells
        for _ in range(5):
            for (x, y), tile in grid.all_tiles():
                if grid.is_border(x, y) or not grid.is_open(x, y):
                    continue
                solid = sum(1 for nx, ny in self._neighbours(x, y, FOUR_DIRECTIONS) if grid.is_blocked(nx, ny))
                if solid >= cfg.empty_neighbours:
                    grid.set(x, y, Tile.BLOCKED)

        # fill holes inside caves
        for (x, y), _ in grid.all_tiles():
            if grid.is_border(x, y) or not grid.is_blocked(x, y):
                continue
            empty = sum(1 for nx, ny in self._neighbours(x, y, FOUR_DIRECTIONS) if grid.is_open(nx, ny))
            if empty >= cfg.empty_tile_neighbours:
                grid.set(x, y, Tile.OPEN)

    # -- phase 2 ------------------------------------------------------------

    def _locate_cave(self, start: Coord2D, seen: Set[Coord2D]) -> List[Coord2D]:
        cells = []
        stack = [start]
        seen.add(start)
        while stack:
            x, y = stack.pop()
            cells.append((x, y))
            for dx, dy in FLOOD_OFFSETS:
                n = (x + dx, y + dy)
                if n not in seen and self.grid.is_open(*n):
                    seen.add(n)
                    stack.append(n)
        return cells

    def find_caves(self) -> List[Cave]:
        cfg = self.config
        seen: Set[Coord2D] = set()
        self.caves = []
        for (x, y), tile in self.grid.all_tiles():
            if self.grid.is_border(x, y) or tile is not Tile.OPEN or (x, y) in seen:
                continue
            cells = self._locate_cave((x, y), seen)
            if len(cells) <= cfg.lower_limit or len(cells) > cfg.upper_limit:
                self.grid.fill_cells(cells, Tile.BLOCKED)
            else:
                self.caves.append(Cave(cells))
        return self.caves

    # -- phase 3 ------------------------------------------------------------

    def cave_edge(self, cave: Cave) -> Optional[Tuple[Coord2D, Direction]]:
        """First solid cell reached walking straight out of a random cave cell."""
        for _ in range(EDGE_SEARCH_ATTEMPTS):
            x, y = cave.cells[self.rng.randrange(len(cave))]
            direction = self._random_direction()
            while True:
                x += direction[0]
                y += direction[1]
                if not self.grid.in_bounds(x, y):
                    break
                if self.grid.is_blocked(x, y):
                    if self._inside(x, y):
                        return (x, y), direction
                    break
        return None

    def corridor_edge(self) -> Optional[Tuple[Coord2D, Direction]]:
        """Solid cell next to a random existing corridor point (never the first one)."""
        for _ in range(EDGE_SEARCH_ATTEMPTS):
            index = next_int(self.rng, 1, len(self.corridors)) if len(self.corridors) > 1 else 0
            x, y = self.corridors[index]
            valid = [
                (dx, dy)
                for dx, dy in FOUR_DIRECTIONS
                if self.grid.in_bounds(x + dx, y + dy) and self.grid.is_blocked(x + dx, y + dy)
            ]
            if not valid:
                continue
            dx, dy = valid[self.rng.randrange(len(valid))]
            if self._inside(x + dx, y + dy):
                return (x + dx, y + dy), (dx, dy)
        return None

    def corridor_point_ok(self, point: Coord2D, direction: Direction) -> bool:
        """Lateral clearance: ``corridor_space`` cells either side must be solid."""
        space = self.config.corridor_space
        x, y = point
        for r in range(-space, space + 1):
            if direction[0] == 0:
                side = (x + r, y)
            else:
                side = (x, y + r)
            if self.grid.in_bounds(*side) and self.grid.is_open(*side):
                return False
        return True

    def corridor_attempt(
        self, start: Coord2D, direction: Direction, prevent_backtracking: bool = True
    ) -> Optional[List[Coord2D]]:
        """Walk a corridor; returns its points ending on the open cell it struck, else None."""
        cfg = self.config
        path = [start]
        x, y = start
        start_direction = direction
        turns = cfg.corridor_max_turns
        while turns >= 0:
            turns -= 1
            length = next_int(self.rng, cfg.corridor_min, cfg.corridor_max)
            while length > 0:
                length -= 1
                x += direction[0]
                y += direction[1]
                if not self._inside(x, y):
                    return None
                if self.grid.is_open(x, y):
                    path.append((x, y))
                    return path
                if not self.corridor_point_ok((x, y), direction):
                    return None
                path.append((x, y))
            if turns > 1:
                direction = self._turn(direction, start_direction if prevent_backtracking else None)
        return None

    def connect_caves(self) -> bool:
        """Join every cave; False when there is nothing to join or ``break_out`` is hit."""
        cfg = self.config
        if not self.caves:
            return False
        unconnected = list(self.caves)
        connected = [unconnected.pop(self.rng.randrange(len(unconnected)))]
        attempts = 0
        while unconnected:
            if not self.corridors or self.rng.randrange(100) >= cfg.corridor_branch_chance:
                source = connected[self.rng.randrange(len(connected))]
                edge = self.cave_edge(source)
            else:
                edge = self.corridor_edge()

            if edge is not None:
                corridor = self.corridor_attempt(edge[0], edge[1], True)
                if corridor is not None:
                    end = corridor[-1]
                    for i, cave in enumerate(unconnected):
                        if end in cave:
                            corridor.pop()
                            self.corridors.extend(corridor)
                            self.grid.fill_cells(corridor, Tile.OPEN)
                            connected.append(unconnected.pop(i))
                            self.metrics['tunnels_carved'] += 1
                            break

            if attempts > cfg.break_out:
                self.caves = connected + unconnected
                return False
            attempts += 1

        self.caves = connected
        return True
