from dataclasses import dataclass
from typing import Iterator, Tuple


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle used for rooms and BSP leaf bounds.

    ``right`` and ``bottom`` are exclusive edges (``x + w`` / ``y + h``). Room
    carvers treat them as the wall line, so a room of width ``w`` spans
    ``w + 1`` columns including both walls.
    """

    x: int
    y: int
    w: int
    h: int

    @property
    def right(self) -> int:
        return self.x + self.w

    @property
    def bottom(self) -> int:
        return self.y + self.h

    @property
    def center(self) -> Tuple[int, int]:
        # ceil of the float centre
        return (self.x + (self.w + 1) // 2, self.y + (self.h + 1) // 2)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for iy in range(self.y, self.y + self.h):
            for ix in range(self.x, self.x + self.w):
                yield ix, iy

    def interior(self) -> Iterator[Tuple[int, int]]:
        """Cells strictly between the wall lines."""
        for iy in range(self.y + 1, self.bottom):
            for ix in range(self.x + 1, self.right):
                yield ix, iy

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.x < other.right
            and self.right > other.x
            and self.y < other.bottom
            and self.bottom > other.y
        )


__all__ = ["Rect"]
