"""
project: Dungeon Carver
module: server.py
License: MIT

Server bootstrap: logging setup and the development HTTP server.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from flask import Flask

from carver import create_app

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(app: Flask) -> str:
    """Configure logging to both console and a rotating file in instance/.

    The file path is instance/carver.log with a few backups. Existing root
    handlers are replaced, so calling this twice does not duplicate output.
    Returns the log file path.
    """
    log_dir = app.instance_path
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "carver.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging and serve until interrupted."""
    app = create_app()
    configure_logging(app)
    try:
        print(f"[INFO] Starting map server on {host}:{port}")
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        print("\n[INFO] Server stopped by user (Ctrl+C)")
        sys.exit(0)
