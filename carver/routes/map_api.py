"""
project: Dungeon Carver
module: map_api.py
License: MIT

Map generation API routes.

GET /api/maps/algorithms       registered algorithms with parameter defaults
GET /api/maps/<algorithm>      generate one map from query parameters
GET /api/maps                  same, using the configured default algorithm

Every request builds its own ``random.Random`` from the coerced seed, so the
same query always returns the same map.
"""

import random

from flask import Blueprint, current_app, jsonify, request

from carver.logging_utils import get_logger
from carver.maps import (
    REGISTRY,
    ConfigError,
    InvalidGeneratorError,
    algorithm_defaults,
    build_generator,
    check_work_limit,
)
from carver.utils import coerce_seed, compress_rows

bp_maps = Blueprint("maps", __name__)

log = get_logger("carver.api")

# query keys that are not generator parameters
RESERVED_ARGS = ("width", "height", "seed", "format")


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(name, f"expected int, got {raw!r}") from None


@bp_maps.route("/api/maps/algorithms", methods=["GET"])
def list_algorithms():
    return jsonify({"algorithms": algorithm_defaults()})


@bp_maps.route("/api/maps", methods=["GET"], defaults={"algorithm": None})
@bp_maps.route("/api/maps/<algorithm>", methods=["GET"])
def generate_map(algorithm):
    """Generate a map.

    Query (all optional): width, height, seed (int or text), any parameter of
    the chosen algorithm, and ``format=compact`` for run-length encoded rows.

    Response: { algorithm, width, height, seed, rows | tiles, open_tiles, metrics }
    """
    algorithm = algorithm or current_app.config.get("DEFAULT_ALGORITHM", "bsp_tree")
    if algorithm not in REGISTRY:
        return jsonify({"error": f"unknown algorithm {algorithm!r}"}), 404

    try:
        defaults = REGISTRY[algorithm].config_cls()
        width = _int_arg("width", defaults.width)
        height = _int_arg("height", defaults.height)
        max_area = current_app.config.get("MAX_MAP_AREA")
        if max_area and width * height > max_area:
            raise ConfigError("width", f"map area {width * height} exceeds limit {max_area}")
        seed = coerce_seed(request.args.get("seed"))
        params = {k: v for k, v in request.args.items() if k not in RESERVED_ARGS}
        params.update(width=width, height=height, seed=seed)
        generator = build_generator(algorithm, params, random.Random(seed))
        check_work_limit(generator.config, current_app.config.get("MAX_ITERATIONS"))
    except (ConfigError, InvalidGeneratorError, ValueError) as e:
        log.warn(event="map_request_rejected", algorithm=algorithm, error=str(e))
        return jsonify({"error": str(e)}), 400

    grid = generator.create_map()
    rows = grid.to_rows()
    payload = {
        "algorithm": algorithm,
        "width": grid.width,
        "height": grid.height,
        "seed": seed,
    }
    if request.args.get("format") == "compact":
        payload["tiles"] = compress_rows(rows)
    else:
        payload["rows"] = rows
    payload["open_tiles"] = generator.metrics["open_tiles"]
    payload["metrics"] = generator.metrics
    log.info(event="map_served", algorithm=algorithm, width=grid.width, height=grid.height, seed=seed)
    return jsonify(payload)
