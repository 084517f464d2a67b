"""Basics -- build a board, look around it and walk across it.

Demonstrates:
- Generating a hexagon-shaped grid
- Converting between cells and world positions
- Neighbor queries with and without diagonals
- Generating tiles, placing an entity and finding a path
- JSON round trip of the grid

Run: python -m examples.basics
"""

import json
import random
from dataclasses import dataclass, field

from hexboard import Board, HexGrid, Tile, Vec3


@dataclass
class Scout:
    name: str
    position: Vec3 = field(default_factory=Vec3)
    tile: Tile | None = None
    height_offset: float = 0.5


def main() -> None:
    print("=== hexboard basics ===\n")

    grid = HexGrid(cell_size=10, rng=random.Random(42))
    grid.generate(3)
    print(f"Generated {grid.num_cells} cells (radius {grid.size}).")

    # A ridge across the middle, with one gap.
    for q in range(-3, 4):
        cell = grid.get_cell(q, 0, -q)
        if cell is not None and q != 2:
            cell.h = 4

    centre = grid.get_cell(0, 0, 0)
    pos = grid.cell_to_pixel(centre)
    print(f"Centre {centre} sits at ({pos.x:.1f}, {pos.y:.1f}, {pos.z:.1f}).")
    print(f"Clicking at (14, 0, -8) hits {grid.pixel_to_cell(Vec3(14, 0, -8))}.")

    print(f"Orthogonal neighbors of the centre: {len(grid.get_neighbors(centre))}")
    print(f"With diagonals: {len(grid.get_neighbors(centre, True))}")

    board = Board(grid, rng=random.Random(7))
    board.generate_tilemap()
    print(f"\nBoard has {len(board.tiles)} tiles.")

    start = grid.get_cell(-2, 3, -1).tile
    goal = grid.get_cell(1, -3, 2).tile
    scout = Scout("scout")
    board.set_entity_on_tile(scout, start)
    print(f"{scout.name} stands on {start.cell} at y={scout.position.y:.1f}")

    path = board.find_path(start, goal)
    if path is None:
        print("No path.")
    else:
        print(f"Path of {len(path) - 1} steps:")
        for cell in path:
            print(f"  {cell}")
        board.set_entity_on_tile(scout, path[-1].tile)

    doc = json.dumps(grid.to_json())
    copy = HexGrid()
    copy.from_json(json.loads(doc))
    print(f"\nJSON document: {len(doc)} bytes, reloaded {copy.num_cells} cells.")


if __name__ == "__main__":
    main()
