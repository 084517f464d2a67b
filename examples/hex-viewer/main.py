"""
Hex Viewer — hexboard Pygame Demo

Generates a hexagon-shaped board, draws every tile from the grid's world
positions and lets you pick tiles and path between them.

Left click = select tile   Right click = path from selection
H = raise hovered tile      W = toggle walkable
S = save board.json         L = load board.json
R = regenerate              Esc = quit
"""
from __future__ import annotations

import random
import sys
from pathlib import Path

import pygame

from hexboard import Board, HexGrid, Tile, Vec3

TITLE = "Hex Viewer — hexboard"
WIDTH, HEIGHT = 960, 720
FPS = 60
BOARD_SIZE = 6
CELL_SIZE = 28.0
SAVE_PATH = Path("board.json")

BG_COLOR = (18, 22, 30)
HUD_COLOR = (200, 200, 220)
OUTLINE_COLOR = (60, 66, 80)
BLOCKED_COLOR = (90, 30, 30)
PATH_COLOR = (230, 200, 60)
SELECT_COLOR = (0, 132, 204)
HEIGHT_SHADE = 18


class ViewerState:
    def __init__(self, seed: int = 42) -> None:
        self.rng = random.Random(seed)
        grid = HexGrid(cell_size=CELL_SIZE, size=BOARD_SIZE, rng=self.rng)
        grid.generate()
        for cell in grid:
            cell.h = self.rng.choice([1, 1, 1, 2, 3])
        self.board = Board(grid, rng=self.rng)
        self.board.generate_tilemap(tile_scale=0.95)
        self.selected: Tile | None = None
        self.path: list = []

    @property
    def grid(self) -> HexGrid:
        return self.board.grid


def _to_screen(pos: Vec3) -> tuple[float, float]:
    return WIDTH / 2 + pos.x, HEIGHT / 2 + pos.z


def _to_world(mx: int, my: int) -> Vec3:
    return Vec3(mx - WIDTH / 2, 0.0, my - HEIGHT / 2)


def _tile_color(tile: Tile) -> tuple[int, int, int]:
    if not tile.cell.walkable:
        return BLOCKED_COLOR
    base = tile.material.color & 0xFF
    shade = min(base + HEIGHT_SHADE * tile.cell.h, 255)
    return (shade, min(shade + 10, 255), shade)


def _draw_board(screen: pygame.Surface, state: ViewerState) -> None:
    corners = state.grid.corners()
    path_cells = {id(c) for c in state.path}
    for tile in state.board.tiles:
        cx, cy = _to_screen(tile.position)
        points = [(cx + x * tile.scale, cy + y * tile.scale) for x, y in corners]
        color = _tile_color(tile)
        if id(tile.cell) in path_cells:
            color = PATH_COLOR
        if tile.selected:
            color = SELECT_COLOR
        pygame.draw.polygon(screen, color, points)
        pygame.draw.polygon(screen, OUTLINE_COLOR, points, 1)


def _draw_hud(screen: pygame.Surface, font: pygame.font.Font, state: ViewerState) -> None:
    steps = max(len(state.path) - 1, 0)
    lines = [
        f"Cells: {state.grid.num_cells}   Tiles: {len(state.board.tiles)}   Path: {steps} steps",
        "LMB=Select  RMB=Path  H=Raise  W=Walkable  S=Save  L=Load  R=Reset  Esc=Quit",
    ]
    for i, line in enumerate(lines):
        surf = font.render(line, True, HUD_COLOR)
        screen.blit(surf, (10, 8 + i * 20))


def _tile_under_mouse(state: ViewerState) -> Tile | None:
    cell = state.grid.get_cell_at(_to_world(*pygame.mouse.get_pos()))
    return cell.tile if cell is not None else None


def main() -> None:
    pygame.init()
    screen = pygame.display.set_mode((WIDTH, HEIGHT))
    pygame.display.set_caption(TITLE)
    pg_clock = pygame.time.Clock()
    font = pygame.font.SysFont("monospace", 14)

    state = ViewerState()
    running = True

    while running:
        pg_clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                tile = _tile_under_mouse(state)
                if tile is None:
                    continue
                if event.button == 1:
                    if state.selected is not None:
                        state.selected.deselect()
                    state.selected = tile.select()
                    state.path = []
                elif event.button == 3 and state.selected is not None:
                    state.path = state.board.find_path(state.selected, tile) or []
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_h:
                    tile = _tile_under_mouse(state)
                    if tile is not None:
                        tile.cell.h = tile.cell.h % 5 + 1
                elif event.key == pygame.K_w:
                    tile = _tile_under_mouse(state)
                    if tile is not None:
                        tile.cell.walkable = not tile.cell.walkable
                elif event.key == pygame.K_s:
                    state.grid.save(SAVE_PATH)
                elif event.key == pygame.K_l and SAVE_PATH.exists():
                    grid = HexGrid(cell_size=CELL_SIZE, rng=state.rng)
                    grid.load(SAVE_PATH)
                    state.board.set_grid(grid)
                    state.board.generate_tilemap()
                    state.selected = None
                    state.path = []
                elif event.key == pygame.K_r:
                    state = ViewerState(seed=state.rng.randrange(1 << 30))

        screen.fill(BG_COLOR)
        _draw_board(screen, state)
        _draw_hud(screen, font, state)
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
    sys.exit(0)
