from __future__ import annotations

import logging
from typing import Generator, Iterator, List, Optional, Tuple

from .bresenham import BresenhamLine
from .tiles import RenderHint, Tile, TileKind

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

_NEIGHBOR_OFFSETS = ((0, -1), (0, 1), (-1, 0), (1, 0))


class Grid:
    """Dense row-major tile grid addressed as (x, y) == (column, row).

    Two access styles are provided on purpose:

    - ``get(x, y)`` is the probing accessor. It never raises and returns None
      for anything outside the grid, negative coordinates included.
    - ``grid[x, y]`` is direct indexing for loops whose ranges already
      guarantee bounds. Out-of-range access raises IndexError instead of
      clamping or wrapping around like plain list indexing would.
    """

    __slots__ = ("_w", "_h", "_tiles")

    def __init__(self, width: int, height: int, fill_kind: TileKind = TileKind.WALL) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("Grid dimensions must be positive")
        self._w = int(width)
        self._h = int(height)
        # tiles[y][x]
        self._tiles: List[List[Tile]] = [[Tile(fill_kind) for _ in range(self._w)] for _ in range(self._h)]
        logger.debug("Initialized Grid %dx%d filled with %s", self._w, self._h, fill_kind.name)

    @property
    def width(self) -> int:
        return self._w

    @property
    def height(self) -> int:
        return self._h

    # ---- Access ----------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._w and 0 <= y < self._h

    def get(self, x: int, y: int) -> Optional[Tile]:
        """Return the tile at (x, y), or None when out of bounds.

        The returned Tile is the stored object, so callers may mutate it.
        """
        if not self.in_bounds(x, y):
            return None
        return self._tiles[y][x]

    def __getitem__(self, cell: Cell) -> Tile:
        x, y = cell
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell out of bounds: ({x}, {y}) for grid {self._w}x{self._h}")
        return self._tiles[y][x]

    def __setitem__(self, cell: Cell, tile: Tile) -> None:
        if not isinstance(tile, Tile):
            raise TypeError("tile must be a Tile instance")
        x, y = cell
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell out of bounds: ({x}, {y}) for grid {self._w}x{self._h}")
        self._tiles[y][x] = tile

    def set_kind(self, x: int, y: int, kind: TileKind, render_hint: Optional[RenderHint] = None) -> None:
        """Change the kind (and optionally the render hint) of an existing tile."""
        tile = self[x, y]
        tile.kind = kind
        if render_hint is not None:
            tile.render_hint = render_hint

    def kind_at(self, x: int, y: int) -> Optional[TileKind]:
        tile = self.get(x, y)
        return tile.kind if tile is not None else None

    def is_walkable(self, x: int, y: int) -> bool:
        tile = self.get(x, y)
        return tile is not None and tile.is_walkable

    # ---- Iteration -------------------------------------------------------
    def cells(self) -> Iterator[Cell]:
        for y in range(self._h):
            for x in range(self._w):
                yield (x, y)

    def neighbors4(self, x: int, y: int) -> Generator[Cell, None, None]:
        """Yield the in-bounds axis-aligned neighbors of (x, y)."""
        for dx, dy in _NEIGHBOR_OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield (nx, ny)

    def count(self, kind: TileKind) -> int:
        return sum(1 for row in self._tiles for tile in row if tile.kind is kind)

    # ---- Queries ---------------------------------------------------------
    def is_wall_between(self, a: Cell, b: Cell) -> bool:
        """True if any cell on the 4-connected line from a to b (ends included) is a wall.

        Cells of the line that fall outside the grid are skipped.
        """
        for x, y in BresenhamLine(a[0], a[1], b[0], b[1], diagonal_allowed=False):
            tile = self.get(x, y)
            if tile is not None and tile.kind is TileKind.WALL:
                return True
        return False

    # ---- Post-processing -------------------------------------------------
    def prune_walls(self) -> int:
        """Turn every wall without a 4-adjacent floor into EMPTY.

        Border cells only look at the neighbors that exist. Returns the number
        of pruned walls.
        """
        pruned: List[Cell] = []
        for x, y in self.cells():
            if self._tiles[y][x].kind is not TileKind.WALL:
                continue
            if any(self._tiles[ny][nx].kind is TileKind.FLOOR for nx, ny in self.neighbors4(x, y)):
                continue
            pruned.append((x, y))
        # Decide on the unmodified field, then apply, so the order of the scan never matters.
        for x, y in pruned:
            self._tiles[y][x].kind = TileKind.EMPTY
        logger.debug("Pruned %d walls without adjacent floor", len(pruned))
        return len(pruned)

    def strands_wall(self, x: int, y: int) -> bool:
        """True if some wall next to (x, y) has (x, y) as its only floor neighbor."""
        for nx, ny in self.neighbors4(x, y):
            if self._tiles[ny][nx].kind is not TileKind.WALL:
                continue
            floors = [n for n in self.neighbors4(nx, ny) if self[n].kind is TileKind.FLOOR]
            if floors == [(x, y)]:
                return True
        return False

    def prune_walls_around(self, x: int, y: int) -> int:
        """Empty the walls next to (x, y) that no longer touch a floor."""
        pruned = 0
        for nx, ny in list(self.neighbors4(x, y)):
            tile = self._tiles[ny][nx]
            if tile.kind is TileKind.WALL and not any(
                self[n].kind is TileKind.FLOOR for n in self.neighbors4(nx, ny)
            ):
                tile.kind = TileKind.EMPTY
                pruned += 1
        return pruned

    # ---- Export / Compare ------------------------------------------------
    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Deterministic, hashable snapshot of the tile kinds for equality tests."""
        return tuple(tuple(tile.kind.value for tile in row) for row in self._tiles)

    def copy(self) -> "Grid":
        clone = Grid.__new__(Grid)
        clone._w = self._w
        clone._h = self._h
        clone._tiles = [[Tile(t.kind, t.render_hint) for t in row] for row in self._tiles]
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._w == other._w and self._h == other._h and self._tiles == other._tiles

    def __repr__(self) -> str:
        return f"Grid(width={self._w}, height={self._h})"
