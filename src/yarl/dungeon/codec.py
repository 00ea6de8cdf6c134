"""
Text encoding of floors.

One character per cell, one line per row. The same table is used to read a
hand-written or saved level and to dump the live state of a floor:

    #  wall            .  floor          >  staircase down
    @  player          !  heal potion    ?  lightning scroll
    o  orc             T  troll          (space) empty

Items, monsters and the player are overlays: they are drawn on top of the
terrain when writing, and stand on floor when reading.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple, Union

from ..core.vector import Vec3
from ..exceptions import EmptyInputError, MalformedMapError, UnknownGlyphError
from .grid import Grid
from .population import ItemKind, ItemSpawn, MonsterKind, MonsterSpawn
from .tiles import Tile, TileKind

if TYPE_CHECKING:  # pragma: no cover
    from .map import GameMap

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class Marker(Enum):
    PLAYER = "player"


GlyphKind = Union[TileKind, ItemKind, MonsterKind, Marker]

DEFAULT_GLYPHS: Dict[GlyphKind, str] = {
    TileKind.WALL: "#",
    TileKind.FLOOR: ".",
    TileKind.STAIRCASE_DOWN: ">",
    TileKind.EMPTY: " ",
    Marker.PLAYER: "@",
    ItemKind.HEAL_POTION: "!",
    ItemKind.LIGHTNING: "?",
    MonsterKind.ORC: "o",
    MonsterKind.TROLL: "T",
}


@dataclass
class ParsedText:
    grid: Grid
    player: Cell
    stairs_down: Optional[Cell] = None
    monsters: List[MonsterSpawn] = field(default_factory=list)
    items: List[ItemSpawn] = field(default_factory=list)


class MapTextCodec:
    """Bidirectional glyph table plus the parse/serialize routines built on it."""

    def __init__(self, glyphs: Optional[Dict[GlyphKind, str]] = None) -> None:
        table = dict(glyphs or DEFAULT_GLYPHS)
        reverse: Dict[str, GlyphKind] = {}
        for kind, glyph in table.items():
            if len(glyph) != 1:
                raise ValueError(f"Glyph for {kind} must be a single character, got {glyph!r}")
            if glyph in reverse:
                raise ValueError(f"Glyph {glyph!r} used for both {reverse[glyph]} and {kind}")
            reverse[glyph] = kind
        self._to_glyph = table
        self._from_glyph = reverse

    def glyph_for(self, kind: GlyphKind) -> str:
        return self._to_glyph[kind]

    def kind_for(self, glyph: str) -> GlyphKind:
        try:
            return self._from_glyph[glyph]
        except KeyError:
            raise UnknownGlyphError(glyph) from None

    # ---- Reading -------------------------------------------------------------
    def parse(self, text: str) -> ParsedText:
        """Build a grid from text.

        Raises EmptyInputError for text without any content, UnknownGlyphError
        for characters outside the table and MalformedMapError for ragged rows
        or anything other than exactly one player marker.
        """
        lines = text.splitlines()
        if not lines or not any(lines):
            raise EmptyInputError("Text map has no lines")

        width = len(lines[0])
        for i, row in enumerate(lines):
            if len(row) != width:
                raise MalformedMapError(f"All rows must have equal width; row 0 has {width}, row {i} has {len(row)}")

        grid = Grid(width, len(lines), TileKind.EMPTY)
        players: List[Cell] = []
        stairs: Optional[Cell] = None
        monsters: List[MonsterSpawn] = []
        items: List[ItemSpawn] = []

        for y, row in enumerate(lines):
            for x, ch in enumerate(row):
                kind = self.kind_for(ch)
                if isinstance(kind, TileKind):
                    grid[x, y] = Tile(kind)
                    if kind is TileKind.STAIRCASE_DOWN and stairs is None:
                        stairs = (x, y)
                    continue
                # Overlays stand on floor.
                grid[x, y] = Tile(TileKind.FLOOR)
                if kind is Marker.PLAYER:
                    players.append((x, y))
                elif isinstance(kind, MonsterKind):
                    monsters.append(MonsterSpawn((x, y), kind))
                else:
                    items.append(ItemSpawn((x, y), kind))

        if len(players) != 1:
            raise MalformedMapError(f"Expected exactly one player marker, found {len(players)}")

        logger.debug("Parsed %dx%d text map, player at %s", width, len(lines), players[0])
        return ParsedText(grid=grid, player=players[0], stairs_down=stairs, monsters=monsters, items=items)

    # ---- Writing -------------------------------------------------------------
    def _terrain_rows(self, grid: Grid) -> List[List[str]]:
        return [[self.glyph_for(grid[x, y].kind) for x in range(grid.width)] for y in range(grid.height)]

    @staticmethod
    def _overlay(rows: List[List[str]], cell: Cell, glyph: str) -> None:
        x, y = cell
        if not (0 <= y < len(rows) and 0 <= x < len(rows[y])):
            raise IndexError(f"Overlay position out of bounds: ({x}, {y})")
        rows[y][x] = glyph

    def serialize(
        self,
        grid: Grid,
        player: Optional[Cell] = None,
        items: Iterable[ItemSpawn] = (),
        monsters: Iterable[MonsterSpawn] = (),
    ) -> str:
        """Render terrain, then items, then monsters, then the player on top."""
        rows = self._terrain_rows(grid)
        for item in items:
            self._overlay(rows, item.position, self.glyph_for(item.kind))
        for monster in monsters:
            self._overlay(rows, monster.position, self.glyph_for(monster.kind))
        if player is not None:
            self._overlay(rows, player, self.glyph_for(Marker.PLAYER))
        return "\n".join("".join(row) for row in rows)

    def render_window(self, grid: Grid, origin: Cell, size: Tuple[int, int], player: Optional[Cell] = None) -> str:
        """Render the width x height window whose top-left cell is origin.

        The window is clipped to the grid.
        """
        ox, oy = origin
        w, h = size
        x0, y0 = max(0, ox), max(0, oy)
        x1, y1 = min(grid.width, ox + w), min(grid.height, oy + h)
        lines = []
        for y in range(y0, y1):
            row = []
            for x in range(x0, x1):
                if player == (x, y):
                    row.append(self.glyph_for(Marker.PLAYER))
                else:
                    row.append(self.glyph_for(grid[x, y].kind))
            lines.append("".join(row))
        return "\n".join(lines)


class MapWriter:
    """Dump a live floor to text, taking occupant positions in world space."""

    def __init__(self, codec: Optional[MapTextCodec] = None) -> None:
        self.codec = codec or MapTextCodec()

    def write(
        self,
        game_map: "GameMap",
        player: Vec3,
        items: Iterable[Tuple[Vec3, ItemKind]] = (),
        monsters: Iterable[Tuple[Vec3, MonsterKind]] = (),
    ) -> str:
        item_spawns = [ItemSpawn(game_map.world_to_grid(pos), kind) for pos, kind in items]
        monster_spawns = [MonsterSpawn(game_map.world_to_grid(pos), kind) for pos, kind in monsters]
        return self.codec.serialize(
            game_map.grid,
            player=game_map.world_to_grid(player),
            items=item_spawns,
            monsters=monster_spawns,
        )
