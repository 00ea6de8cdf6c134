from .base import DungeonGenerator
from .fixtures import TwoRoomGenerator, UniformFillGenerator
from .rooms import RoomsGenerator
from .text import TextMapGenerator

__all__ = [
    "DungeonGenerator",
    "RoomsGenerator",
    "TextMapGenerator",
    "TwoRoomGenerator",
    "UniformFillGenerator",
]
