"""Tile - the physical representation bound one-to-one with a cell."""
from __future__ import annotations

import math
import random
import uuid
from typing import TYPE_CHECKING, Any

from hexboard.types import HexPrism, Material, TileConfigError, Vec3

if TYPE_CHECKING:
    from hexboard.cell import Cell
    from hexboard.types import Placeable

HIGHLIGHT = 0x0084CC


def randomize_grey(base: int = 30, spread: int = 13, rng: random.Random | None = None) -> int:
    """Return a 0xRRGGBB grey shifted from ``base`` by up to +/-``spread``."""
    rng = rng or random
    channel = min(max(base + rng.randint(-spread, spread), 0), 255)
    return (channel << 16) | (channel << 8) | channel


class Tile:
    """A tile standing on exactly one cell.

    Constructing a tile claims ``cell.tile``; a different tile already bound
    to that cell is disposed first. The Board owns tiles.
    """

    def __init__(
        self,
        cell: Cell | None,
        geometry: HexPrism | None,
        material: Material | None = None,
        scale: float = 1.0,
        rng: random.Random | None = None,
    ) -> None:
        if cell is None or geometry is None:
            raise TileConfigError("Tile requires both a cell and a geometry")

        self.cell: Cell | None = cell
        if cell.tile is not None and cell.tile is not self:
            cell.tile.dispose()
        cell.tile = self

        self.unique_id = uuid.uuid4().hex
        self.geometry: HexPrism | None = geometry
        self.material: Material | None = (
            material if material is not None else Material(color=randomize_grey(rng=rng))
        )
        self.scale = scale

        self.entity: Placeable | None = None
        self.user_data: dict[str, Any] = {}
        self.selected = False
        self.highlight = HIGHLIGHT

        self.position = Vec3()
        # Rotated to face up in a Y-up world.
        self.rotation = Vec3(x=-math.pi / 2)
        self._emissive = self.material.emissive

    @property
    def disposed(self) -> bool:
        return self.geometry is None

    def select(self) -> Tile:
        if self.material is not None and self.material.emissive is not None:
            self.material.emissive = self.highlight
        self.selected = True
        return self

    def deselect(self) -> Tile:
        if (
            self._emissive is not None
            and self.material is not None
            and self.material.emissive is not None
        ):
            self.material.emissive = self._emissive
        self.selected = False
        return self

    def toggle(self) -> Tile:
        if self.selected:
            return self.deselect()
        return self.select()

    def dispose(self) -> None:
        if self.cell is not None and self.cell.tile is self:
            self.cell.tile = None
        if self.entity is not None and self.entity.tile is self:
            self.entity.tile = None
        self.cell = None
        self.entity = None
        self.geometry = None
        self.material = None
        self.user_data = {}
        self._emissive = None

    def __repr__(self) -> str:
        return f"Tile(cell={self.cell!r}, selected={self.selected})"
