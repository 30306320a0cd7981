"""Neighbour offset tables.

Ordering matters: generators index into these lists with RNG draws, so
changing the order changes every seeded map.
"""
from enum import IntEnum
from typing import List, Tuple

Offset = Tuple[int, int]


class Cardinal(IntEnum):
    NORTH = 0
    EAST = 1
    WEST = 2
    SOUTH = 3


# north, south, east, west (y grows downward, so "north" here is +y)
FOUR_DIRECTIONS: List[Offset] = [(0, 1), (0, -1), (1, 0), (-1, 0)]

# 8 neighbours followed by the centre cell
NINE_DIRECTIONS: List[Offset] = [
    (0, -1),
    (0, 1),
    (1, 0),
    (-1, 0),
    (1, -1),
    (-1, -1),
    (-1, 1),
    (1, 1),
    (0, 0),
]

# flood fill visiting order: up, left, right, down
FLOOD_OFFSETS: List[Offset] = [(0, -1), (-1, 0), (1, 0), (0, 1)]


def reverse(direction: Offset) -> Offset:
    return (-direction[0], -direction[1])


__all__ = [
    "Cardinal",
    "FOUR_DIRECTIONS",
    "NINE_DIRECTIONS",
    "FLOOD_OFFSETS",
    "reverse",
]
