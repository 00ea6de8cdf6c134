"""Floor generation and grid spatial reasoning."""
from .bresenham import BresenhamLine, line_cells
from .codec import MapTextCodec, MapWriter, ParsedText
from .difficulty import FloorTables, FloorTier, load_floor_tables
from .factory import DungeonFactory
from .grid import Grid
from .map import TILE_SIZE, GameMap
from .population import ItemKind, ItemSpawn, MonsterKind, MonsterSpawn
from .room import Room
from .tiles import RenderHint, Tile, TileKind

__all__ = [
    "BresenhamLine",
    "DungeonFactory",
    "FloorTables",
    "FloorTier",
    "GameMap",
    "Grid",
    "ItemKind",
    "ItemSpawn",
    "MapTextCodec",
    "MapWriter",
    "MonsterKind",
    "MonsterSpawn",
    "ParsedText",
    "RenderHint",
    "Room",
    "TILE_SIZE",
    "Tile",
    "TileKind",
    "line_cells",
    "load_floor_tables",
]
