# A* shortest-path search over the free cells of the grid.
from __future__ import annotations

import heapq
import itertools
from typing import AbstractSet

try:
    from .grid import Cell, GridModel, manhattan
except ImportError:
    from grid import Cell, GridModel, manhattan


def find_path(
    grid: GridModel,
    start: Cell,
    target: Cell,
    occupied: AbstractSet[Cell],
) -> list[Cell] | None:
    """
    Shortest 4-connected path from `start` to `target` avoiding `occupied`.

    Returns the cells from start to target inclusive, or None when the target
    is blocked or unreachable. The start cell may itself be occupied (it is
    normally the snake's head). Nodes with equal f = g + h are expanded in
    the order they were pushed, so results are reproducible.
    """
    if not grid.in_bounds(target) or target in occupied:
        return None
    if start == target:
        return [start]

    counter = itertools.count()
    open_heap: list[tuple[int, int, Cell]] = [(manhattan(start, target), next(counter), start)]
    g_score: dict[Cell, int] = {start: 0}
    came_from: dict[Cell, Cell] = {}
    closed: set[Cell] = set()

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current in closed:
            # Stale entry left behind by a later, cheaper push.
            continue
        if current == target:
            return _reconstruct(came_from, current)
        closed.add(current)

        next_g = g_score[current] + 1
        for neighbor in grid.neighbors(current):
            if neighbor in occupied or neighbor in closed:
                continue
            if next_g < g_score.get(neighbor, next_g + 1):
                came_from[neighbor] = current
                g_score[neighbor] = next_g
                f_score = next_g + manhattan(neighbor, target)
                heapq.heappush(open_heap, (f_score, next(counter), neighbor))

    return None


def _reconstruct(came_from: dict[Cell, Cell], current: Cell) -> list[Cell]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path
