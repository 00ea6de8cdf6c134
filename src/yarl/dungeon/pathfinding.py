from collections import deque
from typing import Optional, Set, Tuple

from .grid import Grid

Cell = Tuple[int, int]


def find_path_bfs(grid: Grid, start: Cell, goal: Cell) -> Optional[int]:
    """Breadth-first search shortest path length over walkable tiles; returns steps or None.

    Uses 4-directional movement.
    """
    if not grid.is_walkable(*start) or not grid.is_walkable(*goal):
        return None

    q = deque([(start, 0)])
    seen = {start}
    while q:
        (x, y), d = q.popleft()
        if (x, y) == goal:
            return d
        for n in grid.neighbors4(x, y):
            if n not in seen and grid[n].is_walkable:
                seen.add(n)
                q.append((n, d + 1))
    return None


def reachable_cells(grid: Grid, start: Cell) -> Set[Cell]:
    """Flood fill: every walkable cell 4-connected to start (start included)."""
    if not grid.is_walkable(*start):
        return set()
    seen = {start}
    q = deque([start])
    while q:
        x, y = q.popleft()
        for n in grid.neighbors4(x, y):
            if n not in seen and grid[n].is_walkable:
                seen.add(n)
                q.append(n)
    return seen
