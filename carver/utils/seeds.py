"""Seed normalisation shared by the CLI and the HTTP API."""
from __future__ import annotations

import hashlib
import random
from typing import Any, Optional

MAX_SEED = 9223372036854775807


def coerce_seed(value: Any, rng: Optional[random.Random] = None) -> int:
    """Convert a provided seed (int or str) into a bounded 64-bit signed int.

    Missing or blank seeds get a random one in ``[1, 1_000_000]``. Digit
    strings are taken literally; any other text is hashed so a word such as
    ``"crypt"`` always maps to the same map.
    """
    rng = rng or random.Random()
    if value is None:
        return rng.randint(1, 1_000_000)
    if isinstance(value, bool):
        raise ValueError("seed must be an integer or string")
    if isinstance(value, int):
        return value % MAX_SEED
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return rng.randint(1, 1_000_000)
        if s.isdigit():
            return int(s) % MAX_SEED
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % MAX_SEED
    raise ValueError("seed must be an integer or string")


__all__ = ["coerce_seed", "MAX_SEED"]
