import random
import unittest

import pytest

from carver.maps import (
    ConfigError,
    InvalidGeneratorError,
    MapGenerationError,
    algorithm_defaults,
    build_generator,
    config_from_params,
    create_map,
    generate,
    get_generator_class,
)
from carver.maps.config import BSPTreeConfig, CaveConfig, DrunkardsWalkConfig, build_config, check_work_limit
from carver.maps.generators import BSPTreeGenerator
from carver.maps.rng import coin_flip, next_int


def test_create_map_requires_generator():
    with pytest.raises(InvalidGeneratorError):
        create_map(None)


def test_error_hierarchy():
    assert issubclass(InvalidGeneratorError, MapGenerationError)
    assert issubclass(ConfigError, MapGenerationError)
    assert issubclass(MapGenerationError, ValueError)


def test_unknown_algorithm():
    with pytest.raises(InvalidGeneratorError):
        get_generator_class("labyrinth")
    with pytest.raises(InvalidGeneratorError):
        generate("labyrinth", 10, 10)


def test_create_map_runs_generator():
    gen = BSPTreeGenerator(BSPTreeConfig(width=50, height=40), random.Random(1))
    g = create_map(gen)
    assert (g.width, g.height) == (50, 40)
    assert gen.metrics["open_tiles"] + gen.metrics["blocked_tiles"] == 50 * 40
    assert gen.metrics["runtime_ms"] >= 0


def test_explicit_rng_wins_over_seed():
    a = generate("dfs_maze", 21, 21, seed=1, rng=random.Random(77))
    b = generate("dfs_maze", 21, 21, seed=2, rng=random.Random(77))
    assert a == b


def test_algorithm_defaults_lists_parameters():
    defaults = algorithm_defaults()
    assert defaults["border_only"] == {}
    assert defaults["bsp_tree"] == {
        "max_leaf_size": 24,
        "min_leaf_size": 10,
        "room_max_size": 15,
        "room_min_size": 6,
    }
    assert defaults["cave"]["corridor_branch_chance"] == 50
    assert defaults["tunneling_maze"] == {"flush_iterations": 666}


class BuildConfigTests(unittest.TestCase):
    def test_strings_are_coerced(self):
        cfg = config_from_params("drunkards_walk", {"width": "30", "height": "20", "percent_goal": "0.5"})
        self.assertIsInstance(cfg, DrunkardsWalkConfig)
        self.assertEqual(cfg.width, 30)
        self.assertEqual(cfg.percent_goal, 0.5)

    def test_unknown_keys_rejected(self):
        with self.assertRaises(ConfigError) as ctx:
            build_config(BSPTreeConfig, {"rooms": 3})
        self.assertEqual(ctx.exception.field, "rooms")

    def test_bad_values_rejected(self):
        with self.assertRaises(ConfigError):
            build_config(BSPTreeConfig, {"width": "wide"})
        with self.assertRaises(ConfigError):
            build_config(BSPTreeConfig, {"width": 2})
        with self.assertRaises(ConfigError):
            build_config(BSPTreeConfig, {"width": 10.5})
        with self.assertRaises(ConfigError):
            build_config(BSPTreeConfig, {"width": True})
        with self.assertRaises(ConfigError):
            build_config(CaveConfig, {"close_tile_prob": 101})
        with self.assertRaises(ConfigError):
            build_config(BSPTreeConfig, {"room_min_size": 10, "room_max_size": 5})

    def test_none_values_use_defaults(self):
        cfg = build_config(BSPTreeConfig, {"width": None, "seed": 5})
        self.assertEqual(cfg.width, 25)
        self.assertEqual(cfg.seed, 5)

    def test_drunkards_walk_needs_room_to_start(self):
        with self.assertRaises(ConfigError):
            build_config(DrunkardsWalkConfig, {"width": 4, "height": 10})

    def test_generator_validates_direct_config(self):
        with self.assertRaises(ConfigError):
            BSPTreeGenerator(BSPTreeConfig(width=1, height=20))


def test_build_generator_uses_registry():
    gen = build_generator("city", {"width": 40, "height": 30, "seed": 3})
    assert gen.name == "city"
    assert gen.config.width == 40


def test_next_int_and_coin_flip():
    rng = random.Random(4)
    assert next_int(rng, 5, 5) == 5
    assert next_int(rng, 5, 2) == 5
    values = {next_int(rng, 0, 3) for _ in range(200)}
    assert values == {0, 1, 2}
    flips = {coin_flip(rng) for _ in range(50)}
    assert flips == {True, False}


def test_work_limit_covers_iteration_fields():
    cave = CaveConfig(iterations=600, break_out=50)
    with pytest.raises(ConfigError) as exc:
        check_work_limit(cave, 500)
    assert exc.value.field == "iterations"
    check_work_limit(cave, 600)
    # no limit configured
    check_work_limit(cave, None)
    # size fields are governed by the area guard, not the iteration limit
    check_work_limit(BSPTreeConfig(width=900, height=900), 10)
    assert DrunkardsWalkConfig.work_fields == ("walk_iterations",)
