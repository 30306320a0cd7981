"""Minimal structured logging helper.

Emits key=value pairs (or one JSON object per line) with a timestamp and
level, so generation runs can be grepped and parsed without a log pipeline.

Usage:
    from carver.logging_utils import get_logger
    log = get_logger("carver.maps")
    log.info(event="map_generated", algorithm="bsp_tree", width=80)

Threshold comes from CARVER_LOG_LEVEL (debug/info/warn/error, default info);
CARVER_LOG_JSON=1 switches to JSON lines. Reserved keys: level, ts.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("CARVER_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("CARVER_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def set_level(level: str) -> None:
    global CURRENT_LEVEL
    CURRENT_LEVEL = LEVELS[level]


def _format(level: str, **fields):
    if JSON_MODE:
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            s = str(v).replace(" ", "_")
            parts.append(f"{k}={s}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "carver"

    def _log(self, lvl: str, **fields):
        if LEVELS[lvl] < CURRENT_LEVEL:
            return
        if "logger" not in fields:
            fields["logger"] = self.name
        print(_format(lvl, **fields), file=sys.stderr if LEVELS[lvl] >= LEVELS["warn"] else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE = {}


def get_logger(name: str):
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("carver")
