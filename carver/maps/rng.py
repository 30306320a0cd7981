"""RNG helpers.

Every generator receives a ``random.Random`` instance; nothing in the map
package touches the module level ``random`` functions.
"""
from __future__ import annotations

import random
from typing import Optional, Union

SeedLike = Union[int, str, None]


def make_rng(seed: SeedLike = None) -> random.Random:
    return random.Random(seed)


def next_int(rng: random.Random, low: int, high: int) -> int:
    """Uniform int in ``[low, high)``; returns ``low`` when the range is empty.

    Room and corridor size ranges are clamped this way instead of failing.
    """
    if high <= low:
        return low
    return rng.randrange(low, high)


def coin_flip(rng: random.Random) -> bool:
    return rng.randrange(2) == 1


def resolve_rng(rng: Optional[random.Random], seed: SeedLike) -> random.Random:
    if rng is not None:
        return rng
    return make_rng(seed)


__all__ = ["make_rng", "next_int", "coin_flip", "resolve_rng", "SeedLike"]
