import random

from carver.maps.config import CaveConfig
from carver.maps.generators.cave import Cave, CaveGenerator
from carver.maps.grid import Grid
from carver.maps.tiles import Tile
from map_test_utils import border_is_solid, count_open_regions


def make_generator(seed=1, **overrides):
    cfg = CaveConfig(width=60, height=45, iterations=20000, break_out=20000, **overrides)
    return CaveGenerator(cfg, random.Random(seed))


def test_cave_map_border_and_connection():
    for seed in (1, 2, 3):
        gen = make_generator(seed)
        g = gen.create_map()
        assert border_is_solid(g)
        if gen.metrics["connected"]:
            assert count_open_regions(g) == 1
            assert gen.metrics["tunnels_carved"] == gen.metrics["regions_before"] - 1


def test_caves_respect_size_limits():
    gen = make_generator(4, lower_limit=10, upper_limit=300)
    gen.grid = Grid.filled(gen.width, gen.height, Tile.BLOCKED)
    gen.build_caves()
    caves = gen.find_caves()
    for cave in caves:
        assert 10 < len(cave) <= 300
    # every surviving open cell belongs to exactly one cave
    members = [c for cave in caves for c in cave.cells]
    assert len(members) == len(set(members))
    assert set(members) == {(x, y) for (x, y), t in gen.grid.all_tiles() if t is Tile.OPEN}


def test_connect_without_caves_fails():
    gen = make_generator(1)
    gen.grid = Grid.filled(gen.width, gen.height, Tile.BLOCKED)
    gen.caves = []
    gen.corridors = []
    assert gen.connect_caves() is False


def two_room_generator(**overrides):
    rows = ["#" * 30] * 3 + ["###" + "." * 6 + "#" * 12 + "." * 6 + "###"] * 6 + ["#" * 30] * 3
    cfg = CaveConfig(width=30, height=12, lower_limit=5, **overrides)
    gen = CaveGenerator(cfg, random.Random(9))
    gen.grid = Grid.from_rows(rows)
    gen.corridors = []
    gen.find_caves()
    return gen


def test_connect_two_rooms_with_a_corridor():
    gen = two_room_generator(corridor_space=1)
    assert len(gen.caves) == 2
    assert gen.connect_caves() is True
    assert count_open_regions(gen.grid) == 1
    assert gen.corridors
    assert all(not gen.grid.is_border(x, y) for x, y in gen.corridors)
    assert gen.metrics["tunnels_carved"] == 1


def test_create_map_connects_two_rooms(monkeypatch):
    layout = two_room_generator().grid.to_rows()
    cfg = CaveConfig(width=30, height=12, lower_limit=5, corridor_space=1)
    gen = CaveGenerator(cfg, random.Random(9))
    monkeypatch.setattr(gen, "build_caves", lambda: setattr(gen, "grid", Grid.from_rows(layout)))
    g = gen.create_map()
    assert gen.metrics["connected"] is True
    assert gen.metrics["regions_before"] == 2
    assert gen.metrics["tunnels_carved"] == 1
    assert count_open_regions(g) == 1
    assert border_is_solid(g)


def test_connect_gives_up_after_break_out():
    # single step corridors can never cross the twelve tile gap
    gen = two_room_generator(break_out=0, corridor_max_turns=0, corridor_min=1, corridor_max=1)
    before = gen.grid.clone()
    assert gen.connect_caves() is False
    assert gen.grid == before


def test_failed_connection_is_reported(monkeypatch):
    gen = make_generator(5)
    warnings = []
    monkeypatch.setattr("carver.maps.generators.cave.log.warn", lambda **kw: warnings.append(kw))
    monkeypatch.setattr(gen, "connect_caves", lambda: False)
    g = gen.create_map()
    assert gen.metrics["connected"] is False
    assert warnings and warnings[0]["event"] == "cave_connect_failed"
    assert border_is_solid(g)


def test_corridor_point_checks_lateral_space():
    gen = make_generator(1, corridor_space=2)
    gen.grid = Grid.filled(gen.width, gen.height, Tile.BLOCKED)
    assert gen.corridor_point_ok((10, 10), (0, 1))
    gen.grid.set(12, 10, Tile.OPEN)
    assert not gen.corridor_point_ok((10, 10), (0, 1))
    # moving along x only checks the column
    assert gen.corridor_point_ok((10, 10), (1, 0))


def test_turn_never_reverses():
    gen = make_generator(1)
    for _ in range(200):
        d = gen._turn((0, 1), (1, 0))
        assert d != (0, -1) and d != (-1, 0)


def test_cave_membership():
    cave = Cave([(1, 1), (1, 2)])
    assert (1, 2) in cave
    assert (2, 2) not in cave
    assert len(cave) == 2
