from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from ...config import MAX_ITEMS_PER_ROOM, MAX_MONSTERS_PER_ROOM, MAX_ROOMS, ROOM_MAX_SIZE, ROOM_MIN_SIZE
from ...core.random import RandomSource
from ...exceptions import ConfigurationError
from ..bresenham import BresenhamLine
from ..grid import Grid
from ..map import GameMap
from ..population import (
    DEFAULT_ITEM_TABLE,
    DEFAULT_MONSTER_TABLE,
    ItemKind,
    MonsterKind,
    SpawnTable,
    place_items,
    place_monsters,
)
from ..room import Room
from ..tiles import TileKind
from .base import DungeonGenerator, grid_center

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class RoomsGenerator(DungeonGenerator):
    """Random room packing joined into a chain of L-shaped tunnels.

    Algorithm:
    - ``max_rooms`` attempts. Each draws a size in [room_min_size, room_max_size]
      and a top-left corner that keeps the room one cell away from the right
      and bottom edges. A candidate touching or overlapping an accepted room is
      dropped; the attempt is spent either way, so crowded grids simply end up
      with fewer rooms.
    - Every accepted room after the first is tunneled to the room accepted just
      before it. The first room's center is the player spawn.
    - Monsters are scattered over all rooms, then items.
    - An optional entry cell (the staircase cell of the floor above) replaces
      the spawn and is tunneled to the first room.
    - Walls without an adjacent floor are pruned.
    - One interior cell of a random non-spawn room becomes the staircase down.
      Cells next to the room border are avoided when the room is large enough;
      in tiny rooms any wall it leaves without a floor neighbor is emptied.

    All randomness comes from ``rng`` in that order.
    """

    def __init__(
        self,
        width: int,
        height: int,
        max_rooms: int = MAX_ROOMS,
        room_min_size: int = ROOM_MIN_SIZE,
        room_max_size: int = ROOM_MAX_SIZE,
        max_monsters_per_room: int = MAX_MONSTERS_PER_ROOM,
        max_items_per_room: int = MAX_ITEMS_PER_ROOM,
        monster_table: SpawnTable[MonsterKind] = DEFAULT_MONSTER_TABLE,
        item_table: SpawnTable[ItemKind] = DEFAULT_ITEM_TABLE,
        rng: Optional[RandomSource] = None,
        entry: Optional[Cell] = None,
        place_stairs: bool = True,
    ) -> None:
        if room_min_size < 2:
            raise ConfigurationError("room_min_size must be at least 2 so rooms have an interior")
        if room_min_size > room_max_size:
            raise ConfigurationError(f"room_min_size ({room_min_size}) exceeds room_max_size ({room_max_size})")
        if width - room_max_size - 1 < 1 or height - room_max_size - 1 < 1:
            raise ConfigurationError(
                f"A {room_max_size}x{room_max_size} room does not fit a {width}x{height} grid with its margin"
            )
        if max_rooms < 0 or max_monsters_per_room < 0 or max_items_per_room < 0:
            raise ConfigurationError("Room and spawn budgets must be non-negative")
        if entry is not None and not (0 <= entry[0] < width and 0 <= entry[1] < height):
            raise ConfigurationError(f"Entry cell {entry} is outside the {width}x{height} grid")

        self.width = width
        self.height = height
        self.max_rooms = max_rooms
        self.room_min_size = room_min_size
        self.room_max_size = room_max_size
        self.max_monsters_per_room = max_monsters_per_room
        self.max_items_per_room = max_items_per_room
        self.monster_table = monster_table
        self.item_table = item_table
        self.rng = rng or RandomSource()
        self.entry = entry
        self.place_stairs = place_stairs
        self.rooms: List[Room] = []

    def generate(self) -> GameMap:
        grid = Grid(self.width, self.height, TileKind.WALL)
        center = grid_center(self.width, self.height)

        rooms = self._place_rooms(grid)
        spawn = rooms[0].center if rooms else center

        monsters = place_monsters(rooms, self.max_monsters_per_room, self.rng, self.monster_table)
        items = place_items(rooms, self.max_items_per_room, self.rng, self.item_table)

        if self.entry is not None:
            target = rooms[0].center if rooms else self.entry
            self._carve_entry(grid, self.entry, target)
            spawn = self.entry

        grid.prune_walls()

        stairs: Optional[Cell] = None
        if self.place_stairs:
            stairs = self._place_stairs(grid, rooms, spawn)

        self.rooms = rooms
        logger.info(
            "Generated rooms floor %dx%d: %d/%d rooms, %d monsters, %d items, stairs=%s",
            self.width,
            self.height,
            len(rooms),
            self.max_rooms,
            len(monsters),
            len(items),
            stairs,
        )
        return GameMap(
            grid=grid,
            player_spawn=spawn,
            center=center,
            monsters=monsters,
            items=items,
            stairs_down=stairs,
        )

    def _place_rooms(self, grid: Grid) -> List[Room]:
        rooms: List[Room] = []
        for attempt in range(self.max_rooms):
            w = self.rng.randint(self.room_min_size, self.room_max_size)
            h = self.rng.randint(self.room_min_size, self.room_max_size)
            x = self.rng.randrange(0, self.width - w - 1)
            y = self.rng.randrange(0, self.height - h - 1)
            candidate = Room(x, y, w, h)

            if any(other.intersects(candidate) for other in rooms):
                logger.debug("Attempt %d: rejected %r", attempt, candidate)
                continue

            candidate.fill_grid(grid)
            if rooms:
                candidate.create_tunnel(grid, rooms[-1], self.rng)
            rooms.append(candidate)
        return rooms

    @staticmethod
    def _carve_entry(grid: Grid, entry: Cell, target: Cell) -> None:
        for x, y in BresenhamLine(entry[0], entry[1], target[0], target[1], diagonal_allowed=False):
            if not grid[x, y].is_walkable:
                grid.set_kind(x, y, TileKind.FLOOR)

    def _place_stairs(self, grid: Grid, rooms: List[Room], spawn: Cell) -> Optional[Cell]:
        candidates = rooms[1:] or rooms
        if not candidates:
            logger.warning("No rooms to place a staircase in")
            return None
        room = self.rng.choice(candidates)
        # Walls were pruned already; the staircase must not take the last floor
        # neighbor of a wall. Inset cells have no wall neighbor at all.
        cells = [c for c in _inset_cells(room) if c != spawn]
        if not cells:
            interior = [c for c in room.interior_cells() if c != spawn]
            cells = [c for c in interior if not grid.strands_wall(*c)] or interior
        if not cells:
            logger.warning("Room %r has no free cell for a staircase", room)
            return None
        stairs = self.rng.choice(cells)
        grid.set_kind(stairs[0], stairs[1], TileKind.STAIRCASE_DOWN)
        stranded = grid.prune_walls_around(*stairs)
        if stranded:
            logger.debug("Emptied %d walls left without floor by the staircase at %s", stranded, stairs)
        return stairs


def _inset_cells(room: Room) -> List[Cell]:
    return [
        (x, y)
        for x, y in room.interior_cells()
        if room.x1 + 1 < x < room.x2 - 1 and room.y1 + 1 < y < room.y2 - 1
    ]
