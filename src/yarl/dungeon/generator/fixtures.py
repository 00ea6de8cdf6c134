"""
Small deterministic generators.

They are not meant for play; they pin down grid, room and tunnel behavior in
isolation for regression tests and debugging.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from ...core.random import RandomSource
from ...exceptions import ConfigurationError
from ..grid import Grid
from ..map import GameMap
from ..room import Room
from ..tiles import TileKind
from .base import DungeonGenerator, grid_center

logger = logging.getLogger(__name__)

# x, y, width, height of the two fixed rooms.
FIRST_ROOM: Tuple[int, int, int, int] = (20, 15, 10, 15)
SECOND_ROOM: Tuple[int, int, int, int] = (35, 15, 10, 15)


class UniformFillGenerator(DungeonGenerator):
    """Whole grid of one kind, player at the grid center."""

    def __init__(self, width: int, height: int, kind: TileKind = TileKind.FLOOR) -> None:
        self.width = width
        self.height = height
        self.kind = kind

    def generate(self) -> GameMap:
        grid = Grid(self.width, self.height, self.kind)
        center = grid_center(self.width, self.height)
        return GameMap(grid=grid, player_spawn=center, center=center)


class TwoRoomGenerator(DungeonGenerator):
    """Two hardcoded rooms side by side, optionally joined by a tunnel."""

    def __init__(
        self,
        width: int,
        height: int,
        connect: bool = True,
        rng: Optional[RandomSource] = None,
    ) -> None:
        needed_w = max(r[0] + r[2] for r in (FIRST_ROOM, SECOND_ROOM)) + 1
        needed_h = max(r[1] + r[3] for r in (FIRST_ROOM, SECOND_ROOM)) + 1
        if width < needed_w or height < needed_h:
            raise ConfigurationError(f"TwoRoomGenerator needs at least {needed_w}x{needed_h}, got {width}x{height}")
        self.width = width
        self.height = height
        self.connect = connect
        self.rng = rng or RandomSource()

    def generate(self) -> GameMap:
        grid = Grid(self.width, self.height, TileKind.WALL)
        first = Room(*FIRST_ROOM)
        second = Room(*SECOND_ROOM)
        first.fill_grid(grid)
        second.fill_grid(grid)
        if self.connect:
            first.create_tunnel(grid, second, self.rng)
        logger.debug("Two-room fixture (connect=%s)", self.connect)
        return GameMap(
            grid=grid,
            player_spawn=first.center,
            center=grid_center(self.width, self.height),
        )
