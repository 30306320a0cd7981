"""Tile states shared by every generator."""
from enum import Enum


class Tile(Enum):
    BLOCKED = 0
    OPEN = 1

    @property
    def walkable(self) -> bool:
        return self is Tile.OPEN


# Characters used by the text row encoding (CLI / HTTP payloads)
OPEN_CHAR = "."
BLOCKED_CHAR = "#"

__all__ = ["Tile", "OPEN_CHAR", "BLOCKED_CHAR"]
