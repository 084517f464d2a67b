"""Cell - a single hex in cube coordinates."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from hexboard.types import CubeCoord

if TYPE_CHECKING:
    from hexboard.tile import Tile


class Cell:
    """One hex at cube coordinate (q, r, s), with q + r + s == 0.

    A cell's grid identity is its coordinate triple. Two Cell objects with
    equal coordinates occupy the same grid slot. ``tile`` is a back-reference
    to the visual tile bound to this cell; the Board owns tiles.

    The ``cost``, ``priority``, ``visited`` and ``parent`` fields are scratch
    state for the pathfinder and are only meaningful during a search.
    """

    def __init__(
        self,
        q: int = 0,
        r: int = 0,
        s: int = 0,
        h: int = 1,
        user_data: Any = None,
    ) -> None:
        self.q = q
        self.r = r
        self.s = s
        self.h = h
        self.walkable = True
        self.user_data = user_data if user_data is not None else {}
        self.tile: Tile | None = None

        self.cost = 0.0
        self.priority = 0.0
        self.visited = False
        self.parent: Cell | None = None

    @property
    def coords(self) -> CubeCoord:
        return (self.q, self.r, self.s)

    def set(self, q: int, r: int, s: int) -> Cell:
        self.q = q
        self.r = r
        self.s = s
        return self

    def copy(self, other: Cell) -> Cell:
        """Copy coordinates, height, walkable and user data from ``other``.

        The tile link is re-pointed at ``other.tile``; tile ownership does
        not move. User data is shared, not cloned.
        """
        self.q = other.q
        self.r = other.r
        self.s = other.s
        self.h = other.h
        self.tile = other.tile
        self.user_data = other.user_data if other.user_data is not None else {}
        self.walkable = other.walkable
        return self

    def add(self, other: Cell) -> Cell:
        self.q += other.q
        self.r += other.r
        self.s += other.s
        return self

    def equals(self, other: Cell) -> bool:
        return self.q == other.q and self.r == other.r and self.s == other.s

    def clone(self) -> Cell:
        return Cell().copy(self)

    def reset_path(self) -> None:
        self.cost = 0.0
        self.priority = 0.0
        self.parent = None
        self.visited = False

    def __repr__(self) -> str:
        return f"Cell(q={self.q}, r={self.r}, s={self.s}, h={self.h})"
