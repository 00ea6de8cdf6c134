from __future__ import annotations

from typing import Iterator, List, Tuple

Cell = Tuple[int, int]


class BresenhamLine:
    """Lazy rasterization of the segment (x0, y0) -> (x1, y1), both ends inclusive.

    With ``diagonal_allowed`` the classic Bresenham walk is produced and a step
    may change both coordinates. Without it, a diagonal step is split so that
    consecutive cells always differ by one unit on exactly one axis; corridors
    stay walkable with 4-directional movement and sight checks cannot slip
    through the corner gap between two walls.

    Every instance walks its own line once; build a new one to walk it again.
    """

    __slots__ = ("_x", "_y", "_x1", "_y1", "_dx", "_dy", "_sx", "_sy", "_err", "_diagonal", "_finished")

    def __init__(self, x0: int, y0: int, x1: int, y1: int, diagonal_allowed: bool = True) -> None:
        self._x = x0
        self._y = y0
        self._x1 = x1
        self._y1 = y1
        self._dx = abs(x1 - x0)
        self._dy = -abs(y1 - y0)
        self._sx = 1 if x0 < x1 else -1
        self._sy = 1 if y0 < y1 else -1
        self._err = self._dx + self._dy
        self._diagonal = diagonal_allowed
        self._finished = False

    def __iter__(self) -> Iterator[Cell]:
        return self

    def __next__(self) -> Cell:
        if self._finished:
            raise StopIteration

        current = (self._x, self._y)
        if self._x == self._x1 and self._y == self._y1:
            self._finished = True
            return current

        e2 = 2 * self._err
        stepped_x = False
        if e2 > self._dy:
            self._err += self._dy
            self._x += self._sx
            stepped_x = True

        if self._diagonal or not stepped_x:
            if e2 < self._dx:
                self._err += self._dx
                self._y += self._sy

        return current

    def __repr__(self) -> str:
        return (
            f"BresenhamLine(at=({self._x}, {self._y}), end=({self._x1}, {self._y1}), "
            f"diagonal_allowed={self._diagonal})"
        )


def line_cells(start: Cell, end: Cell, diagonal_allowed: bool = True) -> List[Cell]:
    """Materialize a line as a list of cells."""
    return list(BresenhamLine(start[0], start[1], end[0], end[1], diagonal_allowed))
