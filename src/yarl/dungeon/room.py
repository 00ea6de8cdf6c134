from __future__ import annotations

from typing import Iterator, Tuple

from ..core.random import RandomSource
from .bresenham import BresenhamLine
from .grid import Grid
from .tiles import RenderHint, TileKind

Cell = Tuple[int, int]


class Room:
    """Axis-aligned rectangle used while carving a floor.

    The nominal rectangle spans x1..x2 and y1..y2 inclusive. Only the open
    interior (x1+1 .. x2-1, y1+1 .. y2-1) becomes floor, so every room keeps a
    one-cell wall border. Rooms are not stored on the finished map.
    """

    __slots__ = ("x1", "y1", "x2", "y2", "center")

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Room size must be positive, got {width}x{height}")
        self.x1 = x
        self.y1 = y
        self.x2 = x + width
        self.y2 = y + height
        self.center: Cell = ((self.x1 + self.x2) // 2, (self.y1 + self.y2) // 2)

    @property
    def width(self) -> int:
        return self.x2 - self.x1

    @property
    def height(self) -> int:
        return self.y2 - self.y1

    def inner(self) -> Tuple[range, range]:
        """Column and row ranges of the open interior."""
        return range(self.x1 + 1, self.x2), range(self.y1 + 1, self.y2)

    def interior_cells(self) -> Iterator[Cell]:
        xs, ys = self.inner()
        for x in xs:
            for y in ys:
                yield (x, y)

    def contains_interior(self, cell: Cell) -> bool:
        return self.x1 < cell[0] < self.x2 and self.y1 < cell[1] < self.y2

    def random_interior_cell(self, rng: RandomSource) -> Cell:
        """Uniform cell of the open interior; x is drawn before y."""
        x = rng.randrange(self.x1 + 1, self.x2)
        y = rng.randrange(self.y1 + 1, self.y2)
        return (x, y)

    def fill_grid(self, grid: Grid) -> None:
        for x, y in self.interior_cells():
            grid.set_kind(x, y, TileKind.FLOOR, RenderHint.ROOM_FLOOR)

    def intersects(self, other: "Room") -> bool:
        """True if the outer rectangles overlap, shared border lines included.

        Two accepted rooms therefore never share even a wall cell.
        """
        # Strict comparisons: a shared border line counts as overlap.
        return not (
            self.x2 < other.x1  # self is left of other
            or other.x2 < self.x1  # other is left of self
            or self.y2 < other.y1  # self is above other
            or other.y2 < self.y1  # other is above self
        )

    def create_tunnel(self, grid: Grid, other: "Room", rng: RandomSource) -> Cell:
        """Carve an L-shaped corridor from this room's center to other's center.

        A fresh coin flip picks horizontal-then-vertical or vertical-then-
        horizontal routing. Returns the elbow cell.
        """
        (cx1, cy1), (cx2, cy2) = self.center, other.center
        if rng.coin_flip():
            corner = (cx2, cy1)
        else:
            corner = (cx1, cy2)

        for start, end in ((self.center, corner), (corner, other.center)):
            for x, y in BresenhamLine(start[0], start[1], end[0], end[1], diagonal_allowed=True):
                grid.set_kind(x, y, TileKind.FLOOR)
        return corner

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Room):
            return NotImplemented
        return (self.x1, self.y1, self.x2, self.y2) == (other.x1, other.y1, other.x2, other.y2)

    def __hash__(self) -> int:
        return hash((self.x1, self.y1, self.x2, self.y2))

    def __repr__(self) -> str:
        return f"Room(x1={self.x1}, y1={self.y1}, x2={self.x2}, y2={self.y2})"
