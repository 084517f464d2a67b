"""A* pathfinding over a HexGrid."""
from __future__ import annotations

import heapq
import logging
from typing import TYPE_CHECKING

from hexboard.types import Heuristic, NeighborFilter

if TYPE_CHECKING:
    from hexboard.cell import Cell
    from hexboard.hexgrid import HexGrid

logger = logging.getLogger(__name__)


class AStarFinder:
    """A* search that only talks to the grid through its public API.

    Uses ``get_neighbors``, ``distance``, ``cell_to_hash`` and ``clear_path``,
    and the cells' own scratch fields (cost, priority, visited, parent).
    Non-walkable cells are never entered.
    """

    def __init__(
        self,
        allow_diagonal: bool = False,
        heuristic_filter: NeighborFilter | None = None,
        weight: float = 1.0,
    ) -> None:
        if weight < 0:
            raise ValueError(f"weight must be >= 0, got {weight}")
        self.allow_diagonal = allow_diagonal
        self.heuristic_filter = heuristic_filter
        self.weight = weight

    def _accept(self, origin: Cell, candidate: Cell) -> bool:
        if not candidate.walkable:
            return False
        if self.heuristic_filter is not None:
            return self.heuristic_filter(origin, candidate)
        return True

    def find_path(
        self,
        start: Cell,
        end: Cell,
        heuristic: Heuristic | None,
        grid: HexGrid,
    ) -> list[Cell] | None:
        """Return the cells from ``start`` to ``end`` inclusive, or None."""
        if heuristic is None:
            heuristic = grid.distance
        if start.equals(end):
            return [start]
        if not end.walkable:
            return None

        grid.clear_path()
        start.reset_path()
        goal = grid.cell_to_hash(end)
        closed: set[str] = set()
        open_set: list[tuple[float, int, Cell]] = [(0.0, 0, start)]
        counter = 1
        start.visited = True

        while open_set:
            _, _, current = heapq.heappop(open_set)
            key = grid.cell_to_hash(current)
            if key in closed:
                continue
            closed.add(key)
            if key == goal:
                path: list[Cell] = [current]
                while current.parent is not None:
                    current = current.parent
                    path.append(current)
                path.reverse()
                logger.debug("path found, %d steps", len(path) - 1)
                return path

            for neighbor in grid.get_neighbors(current, self.allow_diagonal, self._accept):
                if grid.cell_to_hash(neighbor) in closed:
                    continue
                step_cost = max(grid.distance(current, neighbor), 0.0)
                tentative = current.cost + step_cost
                if not neighbor.visited or tentative < neighbor.cost:
                    neighbor.visited = True
                    neighbor.parent = current
                    neighbor.cost = tentative
                    neighbor.priority = tentative + self.weight * heuristic(neighbor, end)
                    heapq.heappush(open_set, (neighbor.priority, counter, neighbor))
                    counter += 1

        logger.debug("no path from %s to %s", grid.cell_to_hash(start), goal)
        return None
