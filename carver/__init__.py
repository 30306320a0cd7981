"""
project: Dungeon Carver
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally loaded from a
``.env`` file) with defaults suitable for local development. The ``instance/``
directory holds the rotating server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so HOST, PORT, CARVER_* can be supplied without
# exporting shell variables during development.
load_dotenv()

DEFAULT_MAX_MAP_AREA = 250_000
DEFAULT_ALGORITHM = "bsp_tree"
DEFAULT_MAX_ITERATIONS = 1_000_000


def create_app(overrides=None) -> Flask:
    """Build the Flask app with the map API registered.

    ``overrides`` is applied on top of the environment derived config, which
    is how tests shrink ``MAX_MAP_AREA`` or ``MAX_ITERATIONS`` or switch on
    ``TESTING``.
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # read-only checkouts still serve maps, only the file log is lost
        pass

    app.config.update(
        MAX_MAP_AREA=int(os.getenv("CARVER_MAX_MAP_AREA", str(DEFAULT_MAX_MAP_AREA))),
        MAX_ITERATIONS=int(os.getenv("CARVER_MAX_ITERATIONS", str(DEFAULT_MAX_ITERATIONS))),
        DEFAULT_ALGORITHM=os.getenv("CARVER_DEFAULT_ALGORITHM", DEFAULT_ALGORITHM),
    )
    if overrides:
        app.config.update(overrides)

    from carver.routes import register_blueprints

    register_blueprints(app)

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.getLogger("carver").exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


__all__ = ["create_app"]
