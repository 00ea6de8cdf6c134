from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from ..core.vector import Vec3
from .codec import MapTextCodec
from .grid import Grid
from .pathfinding import reachable_cells
from .population import ItemSpawn, MonsterSpawn
from .tiles import Tile, TileKind

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

# Edge length of one grid cell in world units.
TILE_SIZE = 4.0
# Step length of the continuous sight ray, in world units.
SIGHT_STEP = 0.5


@dataclass
class GameMap:
    """One generated floor: the tile grid plus everything spawned on it.

    ``center`` is the cell that sits at the world origin. It is fixed when the
    map is built and both coordinate transforms depend on it.
    """

    grid: Grid
    player_spawn: Cell
    center: Cell
    monsters: List[MonsterSpawn] = field(default_factory=list)
    items: List[ItemSpawn] = field(default_factory=list)
    stairs_down: Optional[Cell] = None

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    # ---- Coordinate transforms -------------------------------------------
    def grid_to_world(self, x: int, y: int) -> Vec3:
        return Vec3(
            (x - self.center[0]) * TILE_SIZE,
            0.0,
            (y - self.center[1]) * TILE_SIZE,
        )

    def world_to_grid(self, position: Vec3) -> Cell:
        """Map a world position to a cell.

        Half a tile is added before truncating, so a cell owns the square of
        side TILE_SIZE centered on its ``grid_to_world`` point. Truncation is
        toward zero, so the band up to one tile beyond the left or top edge
        still maps to column or row 0 (as an unsigned cast would). Only
        positions further out yield negative cells, which the probing
        accessors treat as out of bounds.
        """
        x = int((position.x + 0.5 * TILE_SIZE) / TILE_SIZE + self.center[0])
        y = int((position.z + 0.5 * TILE_SIZE) / TILE_SIZE + self.center[1])
        return (x, y)

    # ---- Spatial queries ---------------------------------------------------
    def tile_at(self, position: Vec3) -> Optional[Tile]:
        return self.grid.get(*self.world_to_grid(position))

    def is_wall_at(self, position: Vec3) -> bool:
        tile = self.tile_at(position)
        return tile is not None and tile.kind is TileKind.WALL

    def collide_with_wall(self, position: Vec3, probe_distance: float) -> bool:
        """Probe +-probe_distance along x and z; True if any probe lands on a wall.

        Probes that leave the grid count as a collision.
        """
        probes = (
            Vec3(0.0, 0.0, -probe_distance),
            Vec3(0.0, 0.0, probe_distance),
            Vec3(-probe_distance, 0.0, 0.0),
            Vec3(probe_distance, 0.0, 0.0),
        )
        for offset in probes:
            tile = self.tile_at(position + offset)
            if tile is None or tile.kind is TileKind.WALL:
                return True
        return False

    def has_line_of_sight(self, start: Vec3, end: Vec3) -> bool:
        """Walk from start toward end in SIGHT_STEP increments looking for walls.

        Each sample is snapped to its cell; the walk stops once it has covered
        the straight-line distance, so the end point itself is not sampled.
        This is independent of ``is_wall_between`` and the two may disagree
        right at cell boundaries.
        """
        total = start.distance(end)
        direction = (end - start).normalized()
        travelled = 0.0
        current = start
        while travelled < total:
            tile = self.tile_at(current)
            if tile is None or tile.kind is TileKind.WALL:
                return False
            current = current + direction * SIGHT_STEP
            travelled += SIGHT_STEP
        return True

    def is_wall_between(self, a: Cell, b: Cell) -> bool:
        return self.grid.is_wall_between(a, b)

    def is_walkable(self, cell: Cell) -> bool:
        return self.grid.is_walkable(*cell)

    def reachable_floor(self) -> Set[Cell]:
        """Walkable cells reachable from the player spawn with 4-directional moves."""
        return reachable_cells(self.grid, self.player_spawn)

    def to_text(self, player: Optional[Cell] = None, with_spawns: bool = True) -> str:
        """Serialize the floor; player defaults to the spawn cell."""
        codec = MapTextCodec()
        return codec.serialize(
            self.grid,
            player=player if player is not None else self.player_spawn,
            items=self.items if with_spawns else (),
            monsters=self.monsters if with_spawns else (),
        )

    def render_window(self, origin: Cell, size: Tuple[int, int], player: Optional[Cell] = None) -> str:
        """Text dump of a clipped viewport, e.g. the area around the player."""
        return MapTextCodec().render_window(self.grid, origin, size, player=player)

    def __repr__(self) -> str:
        return (
            f"GameMap({self.width}x{self.height}, spawn={self.player_spawn}, "
            f"monsters={len(self.monsters)}, items={len(self.items)}, stairs={self.stairs_down})"
        )
