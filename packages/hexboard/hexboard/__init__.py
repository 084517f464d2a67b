"""hexboard - cube-coordinate hex grids, tiles and pathfinding for board games."""
from __future__ import annotations

from hexboard.types import (
    CubeCoord,
    ExtrudeSettings,
    GridDisposedError,
    GridFormatError,
    HexPrism,
    Material,
    Pathfinder,
    Placeable,
    TileConfigError,
    Vec3,
)
from hexboard.cell import Cell
from hexboard.tile import Tile
from hexboard.hexgrid import DIAGONALS, DIRECTIONS, HexGrid, cube_round, hex_distance
from hexboard.pathfind import AStarFinder
from hexboard.board import Board

__all__ = [
    "CubeCoord",
    "ExtrudeSettings",
    "GridDisposedError",
    "GridFormatError",
    "HexPrism",
    "Material",
    "Pathfinder",
    "Placeable",
    "TileConfigError",
    "Vec3",
    "Cell",
    "Tile",
    "DIAGONALS",
    "DIRECTIONS",
    "HexGrid",
    "cube_round",
    "hex_distance",
    "AStarFinder",
    "Board",
]
