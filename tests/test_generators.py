import random

import pytest

from carver.maps import REGISTRY, generate
from carver.maps.config import (
    BorderOnlyConfig,
    BSPTreeConfig,
    CellularAutomataConfig,
    CityConfig,
    DFSMazeConfig,
    DrunkardsWalkConfig,
    TunnelingMazeConfig,
    TunnelingRoomsConfig,
)
from carver.maps.generators import (
    BorderOnlyGenerator,
    BSPTreeGenerator,
    CellularAutomataGenerator,
    CityGenerator,
    DFSMazeGenerator,
    DrunkardsWalkGenerator,
    TunnelingMazeGenerator,
    TunnelingRoomsGenerator,
)
from carver.maps.generators.cellular_automata import count_walls_near
from carver.maps.grid import Grid
from carver.maps.tiles import Tile
from map_test_utils import border_is_solid, count_open_regions, open_adjacency_edges

SEEDS = [1, 7, 42, 1234, 99999]


def test_registry_names():
    assert set(REGISTRY) == {
        "border_only",
        "bsp_tree",
        "city",
        "cellular_automata",
        "cave",
        "dfs_maze",
        "tunneling_maze",
        "drunkards_walk",
        "tunneling_rooms",
    }


@pytest.mark.parametrize("name", sorted(REGISTRY))
def test_same_seed_same_map(name):
    kwargs = {"iterations": 5000, "break_out": 2000} if name == "cave" else {}
    a = generate(name, 40, 30, seed=2024, **kwargs)
    b = generate(name, 40, 30, seed=2024, **kwargs)
    assert a == b
    assert (a.width, a.height) == (40, 30)
    assert all(t in (Tile.OPEN, Tile.BLOCKED) for _, t in a.all_tiles())


def test_border_only_shape():
    g = BorderOnlyGenerator(BorderOnlyConfig(width=6, height=4)).create_map()
    assert g.to_rows() == ["######", "#....#", "#....#", "######"]


def test_border_only_minimum_grid():
    g = generate("border_only", 3, 3)
    assert g.to_rows() == ["###", "#.#", "###"]


@pytest.mark.parametrize("seed", SEEDS)
def test_bsp_tree_rooms_are_connected(seed):
    gen = BSPTreeGenerator(BSPTreeConfig(width=80, height=50), random.Random(seed))
    g = gen.create_map()
    assert border_is_solid(g)
    assert count_open_regions(g) == 1
    assert gen.metrics["rooms"] == len(gen.rooms) > 1
    for room in gen.rooms:
        for x, y in room.interior():
            if g.in_bounds(x, y) and not g.is_border(x, y):
                assert g.is_open(x, y)


@pytest.mark.parametrize("seed", SEEDS)
def test_city_one_door_per_building(seed):
    gen = CityGenerator(CityConfig(width=80, height=60), random.Random(seed))
    g = gen.create_map()
    assert len(gen.doors) == len(gen.rooms)
    for (x, y), room in zip(gen.doors, gen.rooms):
        assert g.is_open(x, y)
        on_wall = x in (room.x, room.right) or y in (room.y, room.bottom)
        assert on_wall
    # every building interior is open
    for room in gen.rooms:
        assert all(g.is_open(x, y) for x, y in room.interior() if g.in_bounds(x, y))


def test_city_street_ring_stays_open_away_from_buildings():
    gen = CityGenerator(CityConfig(width=60, height=40), random.Random(3))
    g = gen.create_map()
    walls = set()
    for room in gen.rooms:
        for y in range(room.y, room.bottom + 1):
            for x in range(room.x, room.right + 1):
                walls.add((x, y))
    for (x, y), t in g.all_tiles():
        if g.is_border(x, y) and (x, y) not in walls:
            assert t is Tile.OPEN


@pytest.mark.parametrize("seed", SEEDS)
def test_cellular_automata_single_region(seed):
    gen = CellularAutomataGenerator(CellularAutomataConfig(width=60, height=40), random.Random(seed))
    g = gen.create_map()
    assert border_is_solid(g)
    assert count_open_regions(g) <= 1
    assert gen.metrics["open_tiles"] == g.count(Tile.OPEN)


def test_cellular_automata_zero_fill_stays_solid():
    g = CellularAutomataGenerator(
        CellularAutomataConfig(width=20, height=20, fill_probability=0, total_iterations=0)
    ).create_map()
    assert g.count(Tile.OPEN) == 0


def test_count_walls_near_excludes_centre():
    g = Grid.filled(5, 5, Tile.BLOCKED)
    assert count_walls_near(g, 2, 2, 1) == 8
    assert count_walls_near(g, 0, 0, 1) == 3
    assert count_walls_near(g, 2, 2, 2) == 24


@pytest.mark.parametrize("seed", SEEDS)
def test_dfs_maze_is_perfect(seed):
    g = DFSMazeGenerator(DFSMazeConfig(width=41, height=31), random.Random(seed)).create_map()
    assert border_is_solid(g)
    assert g.is_open(1, 1)
    assert count_open_regions(g) == 1
    # a spanning tree: one fewer adjacency than open cells
    assert open_adjacency_edges(g) == g.count(Tile.OPEN) - 1


def test_dfs_maze_large_grid_has_no_recursion_limit():
    g = DFSMazeGenerator(DFSMazeConfig(width=201, height=201), random.Random(8)).create_map()
    assert g.count(Tile.OPEN) > 1000


@pytest.mark.parametrize("seed", SEEDS)
def test_tunneling_maze_visits_every_lattice_cell(seed):
    gen = TunnelingMazeGenerator(TunnelingMazeConfig(width=41, height=31), random.Random(seed))
    g = gen.create_map()
    xs = gen.lattice_range(41)
    ys = gen.lattice_range(31)
    for i in xs:
        for j in ys:
            assert g.is_open(i * 2, j * 2)
    assert count_open_regions(g) == 1
    assert open_adjacency_edges(g) == g.count(Tile.OPEN) - 1
    assert gen.metrics["tunnels_carved"] == len(xs) * len(ys) - 1
    assert border_is_solid(g)


def test_tunneling_maze_too_small_is_solid():
    g = generate("tunneling_maze", 6, 6, seed=1)
    assert g.count(Tile.OPEN) == 0


@pytest.mark.parametrize("seed", SEEDS)
def test_drunkards_walk_goal_and_shape(seed):
    cfg = DrunkardsWalkConfig(width=50, height=40)
    g = DrunkardsWalkGenerator(cfg, random.Random(seed)).create_map()
    assert border_is_solid(g)
    assert count_open_regions(g) == 1
    assert g.count(Tile.OPEN) >= cfg.percent_goal * 50 * 40


def test_drunkards_walk_stops_at_cap_when_goal_unreachable():
    cfg = DrunkardsWalkConfig(width=8, height=8, percent_goal=1.0, walk_iterations=10)
    g = DrunkardsWalkGenerator(cfg, random.Random(3)).create_map()
    assert border_is_solid(g)
    assert g.count(Tile.OPEN) <= 36


@pytest.mark.parametrize("seed", SEEDS)
def test_tunneling_rooms_connected_and_disjoint(seed):
    gen = TunnelingRoomsGenerator(TunnelingRoomsConfig(width=80, height=50), random.Random(seed))
    g = gen.create_map()
    assert border_is_solid(g)
    assert count_open_regions(g) == 1
    assert gen.metrics["rooms"] == len(gen.rooms) >= 1
    for i, a in enumerate(gen.rooms):
        for b in gen.rooms[i + 1:]:
            assert not a.overlaps(b)


def test_generators_never_touch_module_random(monkeypatch):
    def boom(*a, **k):
        raise AssertionError("module level random used")

    monkeypatch.setattr(random, "randrange", boom)
    monkeypatch.setattr(random, "random", boom)
    monkeypatch.setattr(random, "shuffle", boom)
    for name in REGISTRY:
        kwargs = {"iterations": 2000, "break_out": 2000} if name == "cave" else {}
        generate(name, 30, 30, seed=5, **kwargs)


def test_border_only_ten_by_six():
    g = generate("border_only", 10, 6, seed=1)
    for (x, y), t in g.all_tiles():
        assert t is (Tile.BLOCKED if g.is_border(x, y) else Tile.OPEN)
