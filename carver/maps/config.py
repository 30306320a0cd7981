"""Generator parameter sets.

Defaults follow the values the map tool shipped with. Every config validates
itself before a generator touches the grid so bad input fails fast with a
``ConfigError`` instead of an obscure ``randrange`` error mid-generation.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Type

from .errors import ConfigError


@dataclass
class MapConfig:
    width: int = 25
    height: int = 25
    seed: Optional[int] = None

    # smallest map any generator can work with (border ring + one cell)
    min_dimension = 3
    # fields whose value scales generation time rather than map size
    work_fields = ()

    def validate(self) -> None:
        for name in ("width", "height"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ConfigError(name, "must be an integer")
            if value < self.min_dimension:
                raise ConfigError(name, f"must be at least {self.min_dimension}")

    def params(self) -> Dict[str, Any]:
        """Algorithm specific fields (everything but width/height/seed)."""
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name not in ("width", "height", "seed")}


def _require_range(cfg, name: str, low=None, high=None) -> None:
    value = getattr(cfg, name)
    if low is not None and value < low:
        raise ConfigError(name, f"must be >= {low}")
    if high is not None and value > high:
        raise ConfigError(name, f"must be <= {high}")


@dataclass
class BorderOnlyConfig(MapConfig):
    pass


@dataclass
class BSPTreeConfig(MapConfig):
    max_leaf_size: int = 24
    min_leaf_size: int = 10
    room_max_size: int = 15
    room_min_size: int = 6

    def validate(self) -> None:
        super().validate()
        _require_range(self, "min_leaf_size", low=1)
        _require_range(self, "max_leaf_size", low=self.min_leaf_size)
        _require_range(self, "room_min_size", low=1)
        _require_range(self, "room_max_size", low=self.room_min_size)


@dataclass
class CityConfig(BSPTreeConfig):
    max_leaf_size: int = 30
    min_leaf_size: int = 8
    room_max_size: int = 16
    room_min_size: int = 8


@dataclass
class CellularAutomataConfig(MapConfig):
    fill_probability: int = 50
    total_iterations: int = 3
    big_area_cutoff: int = 3

    work_fields = ("total_iterations",)

    def validate(self) -> None:
        super().validate()
        _require_range(self, "fill_probability", low=0, high=100)
        _require_range(self, "total_iterations", low=0)
        _require_range(self, "big_area_cutoff", low=0)


@dataclass
class CaveConfig(MapConfig):
    neighbours: int = 4
    iterations: int = 50000
    close_tile_prob: int = 45
    lower_limit: int = 16
    upper_limit: int = 500
    empty_neighbours: int = 3
    empty_tile_neighbours: int = 4
    corridor_space: int = 2
    corridor_max_turns: int = 10
    corridor_min: int = 2
    corridor_max: int = 5
    break_out: int = 100000
    corridor_branch_chance: int = 50

    work_fields = ("iterations", "break_out")

    def validate(self) -> None:
        super().validate()
        _require_range(self, "neighbours", low=0, high=9)
        _require_range(self, "iterations", low=0)
        _require_range(self, "close_tile_prob", low=0, high=100)
        _require_range(self, "lower_limit", low=0)
        _require_range(self, "upper_limit", low=self.lower_limit)
        _require_range(self, "empty_neighbours", low=0, high=4)
        _require_range(self, "empty_tile_neighbours", low=0, high=4)
        _require_range(self, "corridor_space", low=0)
        _require_range(self, "corridor_max_turns", low=0)
        _require_range(self, "corridor_min", low=1)
        _require_range(self, "corridor_max", low=self.corridor_min)
        _require_range(self, "break_out", low=0)
        _require_range(self, "corridor_branch_chance", low=0, high=100)


@dataclass
class DFSMazeConfig(MapConfig):
    pass


@dataclass
class TunnelingMazeConfig(MapConfig):
    flush_iterations: int = 666

    work_fields = ("flush_iterations",)

    def validate(self) -> None:
        super().validate()
        _require_range(self, "flush_iterations", low=0)


@dataclass
class DrunkardsWalkConfig(MapConfig):
    percent_goal: float = 0.3
    walk_iterations: int = 50000
    weight_toward_center: float = 0.15
    weight_toward_previous: float = 0.7

    # the walker starts in [2, size - 2)
    min_dimension = 5
    work_fields = ("walk_iterations",)

    def validate(self) -> None:
        super().validate()
        _require_range(self, "percent_goal", low=0.0, high=1.0)
        _require_range(self, "walk_iterations", low=0)
        _require_range(self, "weight_toward_center", low=0.0)
        _require_range(self, "weight_toward_previous", low=0.0)


@dataclass
class TunnelingRoomsConfig(MapConfig):
    max_rooms: int = 30
    room_max_size: int = 15
    room_min_size: int = 6

    def validate(self) -> None:
        super().validate()
        _require_range(self, "max_rooms", low=0)
        _require_range(self, "room_min_size", low=1)
        _require_range(self, "room_max_size", low=self.room_min_size)


def _coerce(name: str, raw: Any, target: Any) -> Any:
    # dataclass field types are strings under postponed annotations
    kind = float if "float" in str(target) else int
    if isinstance(raw, bool):
        raise ConfigError(name, f"expected {kind.__name__}")
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        if kind is int and isinstance(raw, float) and not raw.is_integer():
            raise ConfigError(name, "expected int")
        return kind(raw)
    if isinstance(raw, str):
        s = raw.strip()
        try:
            return kind(s) if kind is float else int(s, 10)
        except ValueError:
            raise ConfigError(name, f"expected {kind.__name__}, got {raw!r}") from None
    raise ConfigError(name, f"expected {kind.__name__}")


def build_config(config_cls: Type[MapConfig], params: Mapping[str, Any]) -> MapConfig:
    """Create and validate ``config_cls`` from a loose mapping (query args, CLI pairs)."""
    known = {f.name: f.type for f in fields(config_cls)}
    unknown = sorted(k for k in params if k not in known)
    if unknown:
        raise ConfigError(unknown[0], f"unknown parameter(s): {', '.join(unknown)}")
    kwargs: Dict[str, Any] = {}
    for name, raw in params.items():
        if raw is None:
            continue
        if name == "seed":
            kwargs[name] = raw
            continue
        kwargs[name] = _coerce(name, raw, known[name])
    cfg = config_cls(**kwargs)
    cfg.validate()
    return cfg


__all__ = [
    "MapConfig",
    "BorderOnlyConfig",
    "BSPTreeConfig",
    "CityConfig",
    "CellularAutomataConfig",
    "CaveConfig",
    "DFSMazeConfig",
    "TunnelingMazeConfig",
    "DrunkardsWalkConfig",
    "TunnelingRoomsConfig",
    "build_config",
]


def check_work_limit(cfg: MapConfig, limit: Optional[int]) -> None:
    """Reject configs whose iteration counts exceed ``limit`` (no-op when unset)."""
    if not limit:
        return
    for name in cfg.work_fields:
        _require_range(cfg, name, high=limit)
