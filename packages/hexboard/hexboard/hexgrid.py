"""HexGrid - hexagonal grid in cube coordinates (flat-top, Y-up world)."""
from __future__ import annotations

import dataclasses
import json
import logging
import math
import random
from itertools import islice
from pathlib import Path
from typing import Any, Callable, Iterator

from hexboard.cell import Cell
from hexboard.tile import Tile
from hexboard.types import (
    CubeCoord,
    ExtrudeSettings,
    GridDisposedError,
    GridFormatError,
    HexPrism,
    Material,
    NeighborFilter,
    Vec3,
)

logger = logging.getLogger(__name__)

SQRT3 = math.sqrt(3.0)
_TWO_THIRDS = 2.0 / 3.0

DIRECTIONS: tuple[CubeCoord, ...] = (
    (1, -1, 0), (1, 0, -1), (0, 1, -1), (-1, 1, 0), (-1, 0, 1), (0, -1, 1),
)
DIAGONALS: tuple[CubeCoord, ...] = (
    (2, -1, -1), (1, 1, -2), (-1, 2, -1), (-2, 1, 1), (-1, -1, 2), (1, -2, 1),
)

_REQUIRED_FIELDS = ("size", "cellSize", "extrudeSettings", "autogenerated", "cells")
_REQUIRED_CELL_FIELDS = ("q", "r", "s", "h", "walkable")


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def cube_round(q: float, r: float, s: float) -> CubeCoord:
    """Snap a fractional cube coordinate to the nearest hex.

    Each component is rounded on its own (halves toward +inf), then the
    component with the largest rounding error is rebuilt from the other two
    so that q + r + s == 0 holds exactly.
    """
    rq = _round_half_up(q)
    rr = _round_half_up(r)
    rs = _round_half_up(s)

    dq = abs(rq - q)
    dr = abs(rr - r)
    ds = abs(rs - s)

    if dq > dr and dq > ds:
        rq = -rr - rs
    elif dr >= ds:
        rr = -rq - rs
    else:
        rs = -rq - rr
    return (rq, rr, rs)


def hex_distance(a: Cell, b: Cell) -> int:
    return max(abs(a.q - b.q), abs(a.r - b.r), abs(a.s - b.s))


def hexagon_coords(size: int) -> Iterator[CubeCoord]:
    """Yield every cube coordinate within ``size`` steps of the origin."""
    for x in range(-size, size + 1):
        for y in range(-size, size + 1):
            z = -x - y
            if abs(z) <= size:
                yield (x, y, z)


class HexGrid:
    """Set of live hex cells plus every coordinate transform between them
    and world space.

    Cells are stored by their (q, r, s) triple. The first cell added at a
    coordinate keeps the slot; later adds at the same coordinate are ignored.

    World space is Y-up: ``cell_to_pixel`` puts the hex on the XZ plane and
    uses the cell height as Y.
    """

    def __init__(
        self,
        cell_size: float = 10.0,
        size: int = 5,
        rng: random.Random | None = None,
    ) -> None:
        self.size = size
        self.extrude_settings: ExtrudeSettings | None = None
        self.autogenerated = False
        self._cells: dict[CubeCoord, Cell] = {}
        self._geo_cache: dict[int, HexPrism] = {}
        self._rng = rng if rng is not None else random.Random()
        self._disposed = False
        self.cell_size = cell_size

    # --- Properties ---

    @property
    def cell_size(self) -> float:
        return self._cell_size

    @cell_size.setter
    def cell_size(self, value: float) -> None:
        if value <= 0:
            raise ValueError(f"cell_size must be > 0, got {value}")
        self._cell_size = value
        self._cell_width = value * 2
        self._cell_length = (SQRT3 * 0.5) * self._cell_width
        # Outline and prisms follow the cell size.
        self._corners = self._build_corners(value)
        self._geo_cache.clear()

    @property
    def cell_width(self) -> float:
        return self._cell_width

    @property
    def cell_length(self) -> float:
        return self._cell_length

    @property
    def num_cells(self) -> int:
        return len(self._cells)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _require_live(self) -> None:
        if self._disposed:
            raise GridDisposedError("HexGrid has been disposed")

    # --- Coordinate transforms ---

    def cell_to_pixel(self, cell: Cell) -> Vec3:
        self._require_live()
        return Vec3(
            cell.q * self._cell_width * 0.75,
            cell.h,
            -((cell.s - cell.r) * self._cell_length * 0.5),
        )

    def _frac_cell(self, pos: Any) -> tuple[float, float, float]:
        q = pos.x * (_TWO_THIRDS / self._cell_size)
        r = ((-pos.x / 3) + (SQRT3 / 3) * pos.z) / self._cell_size
        return q, r, -q - r

    def pixel_to_cell(self, pos: Any) -> Cell:
        """Return a new Cell at the hex containing world position ``pos``.

        Only ``pos.x`` and ``pos.z`` are read. The result is not looked up in
        the grid; use ``get_cell_at`` for that.
        """
        self._require_live()
        return Cell(*cube_round(*self._frac_cell(pos)))

    def cube_round(self, cell: Cell) -> Cell:
        return Cell(*cube_round(cell.q, cell.r, cell.s))

    def cell_to_hash(self, cell: Cell) -> str:
        return f"{cell.q}.{cell.r}.{cell.s}"

    def distance(self, a: Cell, b: Cell) -> float:
        """Cube distance from ``a`` to ``b`` plus the height change ``b.h - a.h``."""
        return hex_distance(a, b) + (b.h - a.h)

    # --- Lookup ---

    def get_cell(self, q: int, r: int, s: int) -> Cell | None:
        self._require_live()
        return self._cells.get((q, r, s))

    def get_cell_at(self, pos: Any) -> Cell | None:
        self._require_live()
        return self._cells.get(cube_round(*self._frac_cell(pos)))

    def get_neighbors(
        self,
        cell: Cell,
        include_diagonals: bool = False,
        filter: NeighborFilter | None = None,
    ) -> list[Cell]:
        """Return the existing neighbors of ``cell``.

        The six orthogonal neighbors come first in direction order, then the
        six diagonals when ``include_diagonals`` is set. ``filter(cell, n)``
        is applied to both passes; neighbors it rejects are skipped.
        A new list is returned on every call.
        """
        self._require_live()
        offsets = DIRECTIONS + DIAGONALS if include_diagonals else DIRECTIONS
        result: list[Cell] = []
        for dq, dr, ds in offsets:
            n = self._cells.get((cell.q + dq, cell.r + dr, cell.s + ds))
            if n is None or (filter is not None and not filter(cell, n)):
                continue
            result.append(n)
        return result

    def get_random_cell(self) -> Cell | None:
        self._require_live()
        if not self._cells:
            return None
        index = self._rng.randrange(len(self._cells))
        return next(islice(self._cells.values(), index, None))

    # --- Mutation ---

    def add(self, cell: Cell) -> Cell | None:
        self._require_live()
        key = cell.coords
        if key in self._cells:
            logger.debug("add ignored, %s already occupied", self.cell_to_hash(cell))
            return None
        self._cells[key] = cell
        return cell

    def remove(self, cell: Cell) -> None:
        self._require_live()
        self._cells.pop(cell.coords, None)

    def clear_path(self) -> None:
        self._require_live()
        for cell in self._cells.values():
            cell.reset_path()

    def traverse(self, fn: Callable[[Cell], Any]) -> None:
        self._require_live()
        for cell in list(self._cells.values()):
            fn(cell)

    # --- Generation ---

    def generate(self, size: int | None = None) -> None:
        """Fill a hexagon of radius ``size`` (defaults to ``self.size``)."""
        self._require_live()
        if size is not None:
            if size < 0:
                raise ValueError(f"size must be >= 0, got {size}")
            self.size = size
        for q, r, s in hexagon_coords(self.size):
            self.add(Cell(q, r, s))
        logger.debug("generated hexagon of size %d, %d cells", self.size, self.num_cells)

    def generate_overlay(self, size: int) -> list[Vec3]:
        """World positions of every hex within ``size`` of the origin.

        Positions are produced for the whole hexagon whether or not a cell
        is stored there; the renderer outlines them.
        """
        self._require_live()
        return [self.cell_to_pixel(Cell(q, r, s)) for q, r, s in hexagon_coords(size)]

    def corners(self) -> tuple[tuple[float, float], ...]:
        return self._corners

    @staticmethod
    def _build_corners(cell_size: float) -> tuple[tuple[float, float], ...]:
        corners = []
        for i in range(6):
            angle = (math.tau / 6) * i
            corners.append((cell_size * math.cos(angle), cell_size * math.sin(angle)))
        return tuple(corners)

    def _geometry_for(self, height: int) -> HexPrism:
        # Cleared only when the cell size or extrusion settings change.
        geo = self._geo_cache.get(height)
        if geo is None:
            settings = self.extrude_settings or ExtrudeSettings()
            settings = dataclasses.replace(settings, amount=height)
            geo = HexPrism(corners=self._corners, depth=height, settings=settings)
            self._geo_cache[height] = geo
        return geo

    def generate_tile(
        self,
        cell: Cell,
        scale: float,
        material: Material | None = None,
    ) -> Tile:
        self._require_live()
        height = max(abs(cell.h), 1)
        return Tile(
            cell,
            self._geometry_for(height),
            material=material,
            scale=scale,
            rng=self._rng,
        )

    def generate_tiles(
        self,
        tile_scale: float = 0.95,
        cell_size: float | None = None,
        material: Material | None = None,
        extrude_settings: ExtrudeSettings | None = None,
    ) -> list[Tile]:
        """Build a tile for every stored cell.

        This also rewrites the grid's cell size (and so every later
        coordinate transform), sets ``extrude_settings`` and marks the grid
        as autogenerated. Tiles sit at their cell position with y = 0.
        """
        self._require_live()
        if tile_scale <= 0:
            raise ValueError(f"tile_scale must be > 0, got {tile_scale}")
        if cell_size is not None:
            self.cell_size = cell_size
        self.autogenerated = True
        settings = extrude_settings or ExtrudeSettings()
        if settings != self.extrude_settings:
            self._geo_cache.clear()
        self.extrude_settings = settings

        tiles: list[Tile] = []
        for cell in self._cells.values():
            tile = self.generate_tile(cell, tile_scale, material)
            tile.position = self.cell_to_pixel(cell)
            tile.position.y = 0
            tiles.append(tile)
        logger.debug(
            "generated %d tiles, %d cached geometries", len(tiles), len(self._geo_cache)
        )
        return tiles

    # --- Lifecycle ---

    def dispose(self) -> None:
        """Release every cell and cached geometry. The grid is unusable afterwards."""
        if self._disposed:
            return
        self._cells.clear()
        self._geo_cache.clear()
        self._disposed = True
        logger.debug("grid disposed")

    # --- Persistence ---

    def to_json(self) -> dict[str, Any]:
        self._require_live()
        cells = [
            {
                "q": c.q,
                "r": c.r,
                "s": c.s,
                "h": c.h,
                "walkable": c.walkable,
                "userData": c.user_data,
            }
            for c in self._cells.values()
        ]
        return {
            "size": self.size,
            "cellSize": self.cell_size,
            "extrudeSettings": (
                self.extrude_settings.to_json() if self.extrude_settings is not None else None
            ),
            "autogenerated": self.autogenerated,
            "cells": cells,
        }

    def from_json(self, data: dict[str, Any]) -> None:
        """Replace the whole grid with the contents of a persisted document.

        The document is validated before anything is changed.

        Raises:
            GridFormatError: A field is missing, has the wrong type or an invalid
                value. The grid is left unchanged.
        """
        self._require_live()
        if not isinstance(data, dict):
            raise GridFormatError("document", "grid document must be a JSON object")
        for name in _REQUIRED_FIELDS:
            if name not in data:
                raise GridFormatError(name, f"grid document is missing '{name}'")

        size = data["size"]
        if isinstance(size, bool) or not isinstance(size, int) or size < 0:
            raise GridFormatError("size", f"size must be an int >= 0, got {size!r}")
        cell_size = data["cellSize"]
        if isinstance(cell_size, bool) or not isinstance(cell_size, (int, float)) or cell_size <= 0:
            raise GridFormatError("cellSize", f"cellSize must be a number > 0, got {cell_size!r}")

        extrude = data["extrudeSettings"]
        if extrude is not None and not isinstance(extrude, dict):
            raise GridFormatError("extrudeSettings", "extrudeSettings must be an object or null")
        try:
            extrude_settings = ExtrudeSettings.from_json(extrude) if extrude is not None else None
        except (TypeError, ValueError) as exc:
            raise GridFormatError("extrudeSettings", f"invalid extrudeSettings: {exc}") from exc

        records = data["cells"]
        if not isinstance(records, list):
            raise GridFormatError("cells", "cells must be a list of cell records")
        cells: list[Cell] = []
        for i, record in enumerate(records):
            if not isinstance(record, dict):
                raise GridFormatError("cells", f"cell record {i} is not an object")
            for name in _REQUIRED_CELL_FIELDS:
                if name not in record:
                    raise GridFormatError(name, f"cell record {i} is missing '{name}'")
            try:
                q, r, s, h = (int(record[k]) for k in ("q", "r", "s", "h"))
            except (TypeError, ValueError) as exc:
                raise GridFormatError("cells", f"cell record {i} has a non-integer coordinate") from exc
            if q + r + s != 0:
                raise GridFormatError(
                    "cells", f"cell record {i} ({q}, {r}, {s}) violates q + r + s == 0"
                )
            if h < 1:
                raise GridFormatError("h", f"cell record {i} has height {h}, must be >= 1")
            cell = Cell(q, r, s, h=h, user_data=record.get("userData"))
            cell.walkable = bool(record["walkable"])
            cells.append(cell)

        self.size = size
        self.cell_size = cell_size
        self.extrude_settings = extrude_settings
        self.autogenerated = bool(data["autogenerated"])

        self._cells = {}
        for cell in cells:
            self.add(cell)
        logger.debug("loaded %d cells from %d records", self.num_cells, len(cells))

    def save(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_json()), encoding="utf-8")

    def load(self, path: str | Path) -> None:
        self.from_json(json.loads(Path(path).read_text(encoding="utf-8")))

    # --- Container protocol ---

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        self._require_live()
        return iter(list(self._cells.values()))

    def __contains__(self, cell: object) -> bool:
        if not isinstance(cell, Cell):
            return False
        return cell.coords in self._cells
