"""Board - ties a HexGrid, its tiles and a pathfinder together."""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Any

from hexboard.pathfind import AStarFinder
from hexboard.types import TileConfigError, Vec3

if TYPE_CHECKING:
    from hexboard.cell import Cell
    from hexboard.hexgrid import HexGrid
    from hexboard.tile import Tile
    from hexboard.types import Heuristic, Pathfinder, Placeable

logger = logging.getLogger(__name__)


class Board:
    """Owns one grid and the tiles standing on it.

    The grid owns cells, the board owns tiles and game code owns entities.
    The board keeps the links between them consistent: every board tile is
    bound to a cell stored in the grid, each cell has at most one tile and
    each tile carries at most one entity.
    """

    def __init__(
        self,
        grid: HexGrid,
        finder: Pathfinder | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.finder: Pathfinder = finder if finder is not None else AStarFinder()
        self.tiles: list[Tile] = []
        self.overlay: list[Vec3] = []
        self.grid: HexGrid | None = None
        self._rng = rng if rng is not None else random.Random()
        self.set_grid(grid)

    def set_grid(self, new_grid: HexGrid) -> None:
        """Adopt ``new_grid``, disposing the current tiles and grid first."""
        if new_grid is self.grid:
            return
        if self.grid is not None:
            for tile in self.tiles:
                if tile.cell is not None:
                    self.grid.remove(tile.cell)
                tile.dispose()
            self.grid.dispose()
        self.grid = new_grid
        self.tiles = []
        self.overlay = []

    # --- Tiles ---

    def add_tile(self, tile: Tile) -> None:
        if tile in self.tiles:
            return
        if tile.cell is None:
            raise TileConfigError("Cannot add a disposed tile to the board")

        cell = tile.cell
        stored = self.grid.add(cell) or self.grid.get_cell(cell.q, cell.r, cell.s)
        if stored is not cell:
            # The grid already holds a cell at this coordinate; bind to it.
            if cell.tile is tile:
                cell.tile = None
            tile.cell = stored
        previous = stored.tile
        if previous is not None and previous is not tile:
            self._drop(previous)
        stored.tile = tile

        # A Tile built on an already tiled cell disposes the old tile itself.
        self.tiles = [t for t in self.tiles if not t.disposed]
        self.tiles.append(tile)
        self.snap_tile_to_grid(tile)
        tile.position.y = 0

    def remove_tile(self, tile: Tile | None) -> None:
        if tile is None or tile not in self.tiles:
            return
        if tile.cell is not None:
            self.grid.remove(tile.cell)
        self.tiles.remove(tile)
        tile.dispose()

    def _drop(self, tile: Tile) -> None:
        if tile in self.tiles:
            self.tiles.remove(tile)
        tile.dispose()

    def reset(self) -> None:
        """Dispose every tile but leave the grid and its cells intact."""
        for tile in self.tiles:
            tile.dispose()
        self.tiles = []

    def generate_tilemap(self, **config: Any) -> list[Tile]:
        """Replace the board's tiles with one per grid cell.

        ``config`` is passed to ``HexGrid.generate_tiles``.
        """
        self.reset()
        self.tiles = self.grid.generate_tiles(**config)
        logger.debug("tilemap generated with %d tiles", len(self.tiles))
        return self.tiles

    def get_tile_at_cell(self, cell: Cell) -> Tile | None:
        if cell.tile is not None:
            return cell.tile
        stored = self.grid.get_cell(cell.q, cell.r, cell.s)
        return stored.tile if stored is not None else None

    def get_random_tile(self) -> Tile | None:
        if not self.tiles:
            return None
        return self._rng.choice(self.tiles)

    # --- Positioning ---

    def snap_to_grid(self, pos: Vec3) -> Vec3:
        """Return the world position of the hex centre nearest to ``pos``."""
        return self.grid.cell_to_pixel(self.grid.pixel_to_cell(pos))

    def snap_tile_to_grid(self, tile: Tile) -> Tile:
        if tile.cell is not None:
            tile.position = self.grid.cell_to_pixel(tile.cell)
        else:
            tile.position = self.snap_to_grid(tile.position)
        return tile

    def set_entity_on_tile(self, entity: Placeable, tile: Tile) -> None:
        """Move ``entity`` onto ``tile``, detaching it from its old tile.

        An entity already standing on ``tile`` is detached from it.
        """
        if tile.cell is None:
            raise TileConfigError("Cannot place an entity on a disposed tile")
        pos = self.grid.cell_to_pixel(tile.cell)
        pos.y += getattr(entity, "height_offset", 0) or 0
        entity.position = pos

        if entity.tile is not None and entity.tile is not tile:
            entity.tile.entity = None
        if tile.entity is not None and tile.entity is not entity:
            tile.entity.tile = None
        entity.tile = tile
        tile.entity = entity

    def generate_overlay(self, size: int) -> list[Vec3]:
        self.overlay = self.grid.generate_overlay(size)
        return self.overlay

    # --- Pathfinding ---

    def find_path(
        self,
        start_tile: Tile,
        end_tile: Tile,
        heuristic: Heuristic | None = None,
    ) -> list[Cell] | None:
        return self.finder.find_path(start_tile.cell, end_tile.cell, heuristic, self.grid)
