"""Shared types, errors and protocols for hexboard."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Protocol

if TYPE_CHECKING:
    from hexboard.cell import Cell
    from hexboard.hexgrid import HexGrid
    from hexboard.tile import Tile

CubeCoord = tuple[int, int, int]

Heuristic = Callable[["Cell", "Cell"], float]
NeighborFilter = Callable[["Cell", "Cell"], bool]


class GridFormatError(ValueError):
    """Raised when a persisted grid document is missing a field or is malformed."""

    def __init__(self, field_name: str, message: str) -> None:
        self.field_name = field_name
        super().__init__(message)


class TileConfigError(ValueError):
    """Raised when a Tile is built without its required cell or geometry."""


class GridDisposedError(RuntimeError):
    """Raised when operating on a HexGrid after dispose()."""


@dataclass
class Vec3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def copy(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)


@dataclass
class Material:
    """Opaque render material description handed to the renderer.

    Attributes:
        color: 0xRRGGBB base colour.
        emissive: 0xRRGGBB emissive colour, or None if the material has none.
    """

    color: int = 0x1E1E1E
    emissive: int | None = 0x000000


@dataclass(frozen=True)
class ExtrudeSettings:
    """Extrusion parameters for tile geometry.

    Attributes:
        amount: Extrusion depth. Overridden per height when tiles are built.
        bevel_enabled: Whether the extruded edges are bevelled.
        bevel_segments: Number of bevel subdivisions.
        steps: Number of subdivisions along the extrusion depth.
        bevel_size: Bevel distance from the shape outline.
        bevel_thickness: Bevel depth into the extrusion.
    """

    amount: float = 1
    bevel_enabled: bool = True
    bevel_segments: int = 1
    steps: int = 1
    bevel_size: float = 0.5
    bevel_thickness: float = 0.5

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"amount must be >= 0, got {self.amount}")
        if self.bevel_segments < 0:
            raise ValueError(f"bevel_segments must be >= 0, got {self.bevel_segments}")
        if self.steps < 1:
            raise ValueError(f"steps must be >= 1, got {self.steps}")
        if self.bevel_size < 0 or self.bevel_thickness < 0:
            raise ValueError("bevel_size and bevel_thickness must be >= 0")

    def to_json(self) -> dict[str, Any]:
        return {
            "amount": self.amount,
            "bevelEnabled": self.bevel_enabled,
            "bevelSegments": self.bevel_segments,
            "steps": self.steps,
            "bevelSize": self.bevel_size,
            "bevelThickness": self.bevel_thickness,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> ExtrudeSettings:
        defaults = cls()
        return cls(
            amount=data.get("amount", defaults.amount),
            bevel_enabled=data.get("bevelEnabled", defaults.bevel_enabled),
            bevel_segments=data.get("bevelSegments", defaults.bevel_segments),
            steps=data.get("steps", defaults.steps),
            bevel_size=data.get("bevelSize", defaults.bevel_size),
            bevel_thickness=data.get("bevelThickness", defaults.bevel_thickness),
        )


@dataclass(frozen=True)
class HexPrism:
    """Immutable extruded hexagon geometry shared by all tiles of one height.

    Attributes:
        corners: The 6 outline points of the base hexagon in its local XY plane.
        depth: Extrusion depth (the tile height).
        settings: Extrusion parameters the prism was built with.
    """

    corners: tuple[tuple[float, float], ...]
    depth: float
    settings: ExtrudeSettings = field(default_factory=ExtrudeSettings)


class Placeable(Protocol):
    """An entity that can stand on a tile. Owned by game code, not the board."""

    position: Vec3
    tile: Tile | None
    height_offset: float


class Pathfinder(Protocol):
    def find_path(
        self,
        start: Cell,
        end: Cell,
        heuristic: Heuristic | None,
        grid: HexGrid,
    ) -> list[Cell] | None: ...
