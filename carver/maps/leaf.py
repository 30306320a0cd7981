"""Binary space partition tree used by the room based generators."""
from __future__ import annotations

import random
from typing import List, Optional, Protocol

from .rng import coin_flip, next_int
from .rooms import Rect

# a leaf whose aspect ratio reaches this is always cut across its long side
SPLIT_RATIO = 1.25


class RoomCarver(Protocol):
    def carve_room(self, room: Rect) -> None: ...

    def carve_hall(self, room1: Rect, room2: Rect) -> None: ...


class Leaf:
    __slots__ = ("rect", "left", "right", "room")

    def __init__(self, x: int, y: int, width: int, height: int):
        self.rect = Rect(x, y, width, height)
        self.left: Optional[Leaf] = None
        self.right: Optional[Leaf] = None
        self.room: Optional[Rect] = None

    @property
    def width(self) -> int:
        return self.rect.w

    @property
    def height(self) -> int:
        return self.rect.h

    @property
    def is_terminal(self) -> bool:
        return self.left is None and self.right is None

    def split(self, min_leaf_size: int, rng: random.Random) -> bool:
        """Cut this leaf in two. False when it already has children or is too small."""
        if not self.is_terminal:
            return False
        # drawn unconditionally so RNG consumption does not depend on shape
        split_horizontally = coin_flip(rng)
        if self.width / self.height >= SPLIT_RATIO:
            split_horizontally = False
        elif self.height / self.width >= SPLIT_RATIO:
            split_horizontally = True

        extent = self.height if split_horizontally else self.width
        max_offset = extent - min_leaf_size
        if max_offset <= min_leaf_size:
            return False
        offset = rng.randrange(min_leaf_size, max_offset)

        x, y, w, h = self.rect.x, self.rect.y, self.rect.w, self.rect.h
        if split_horizontally:
            self.left = Leaf(x, y, w, offset)
            self.right = Leaf(x, y + offset, w, h - offset)
        else:
            self.left = Leaf(x, y, offset, h)
            self.right = Leaf(x + offset, y, w - offset, h)
        return True

    def create_rooms(self, carver: RoomCarver, room_min: int, room_max: int, rng: random.Random) -> None:
        if not self.is_terminal:
            if self.left is not None:
                self.left.create_rooms(carver, room_min, room_max, rng)
            if self.right is not None:
                self.right.create_rooms(carver, room_min, room_max, rng)
            if self.left is not None and self.right is not None:
                room1 = self.left.get_room(rng)
                room2 = self.right.get_room(rng)
                if room1 is not None and room2 is not None:
                    carver.carve_hall(room1, room2)
            return

        x0, y0, lw, lh = self.rect.x, self.rect.y, self.rect.w, self.rect.h
        w = next_int(rng, room_min, min(room_max, lw - 1))
        h = next_int(rng, room_min, min(room_max, lh - 1))
        x = next_int(rng, x0, x0 + (lw - 1) - w)
        y = next_int(rng, y0, y0 + (lh - 1) - h)
        self.room = Rect(x, y, w, h)
        carver.carve_room(self.room)

    def get_room(self, rng: random.Random) -> Optional[Rect]:
        """This leaf's room, or a representative room from its subtree."""
        if self.room is not None:
            return self.room
        if self.is_terminal:
            return None
        room1 = self.left.get_room(rng) if self.left is not None else None
        room2 = self.right.get_room(rng) if self.right is not None else None
        if room2 is None:
            return room1
        if room1 is None:
            return room2
        return room1 if coin_flip(rng) else room2

    def leaves(self) -> List["Leaf"]:
        """Terminal leaves of this subtree, left to right."""
        if self.is_terminal:
            return [self]
        out: List[Leaf] = []
        for child in (self.left, self.right):
            if child is not None:
                out.extend(child.leaves())
        return out

    def __repr__(self) -> str:
        return f"Leaf({self.rect}, terminal={self.is_terminal})"


def build_tree(root: Leaf, max_leaf_size: int, min_leaf_size: int, rng: random.Random) -> List[Leaf]:
    """Split leaves until a full pass produces no successful split.

    Returns every node created (root first), in creation order.
    """
    nodes = [root]
    split_any = True
    while split_any:
        split_any = False
        # nodes appended during the pass are visited in the same pass
        i = 0
        while i < len(nodes):
            leaf = nodes[i]
            if leaf.is_terminal and (leaf.width > max_leaf_size or leaf.height > max_leaf_size):
                if leaf.split(min_leaf_size, rng):
                    nodes.append(leaf.left)
                    nodes.append(leaf.right)
                    split_any = True
            i += 1
    return nodes


__all__ = ["Leaf", "RoomCarver", "build_tree", "SPLIT_RATIO"]
