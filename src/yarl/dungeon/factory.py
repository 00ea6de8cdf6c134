from __future__ import annotations

import logging
from typing import Optional, Tuple

from ..config import GenerationSettings
from ..core.random import RandomSource
from ..rng import RNGManager
from .difficulty import FloorTables, load_floor_tables
from .generator import (
    DungeonGenerator,
    RoomsGenerator,
    TextMapGenerator,
    TwoRoomGenerator,
    UniformFillGenerator,
)
from .map import GameMap

logger = logging.getLogger(__name__)


class DungeonFactory:
    """Factory to produce floors using the selected algorithm.

    Usage:
      settings = GenerationSettings.from_env()
      game_map = DungeonFactory.generate(settings)
    """

    @staticmethod
    def build_generator(
        settings: GenerationSettings,
        rng: Optional[RandomSource] = None,
        tables: Optional[FloorTables] = None,
        entry: Optional[Tuple[int, int]] = None,
    ) -> DungeonGenerator:
        algo = (settings.algorithm or "rooms").lower()
        if rng is None:
            rng = RNGManager(settings.seed).floor_rng(settings.floor)

        if algo == "text":
            logger.info("DungeonFactory: using TextMapGenerator")
            return TextMapGenerator(settings.text or "")
        if algo == "uniform":
            logger.info("DungeonFactory: using UniformFillGenerator")
            return UniformFillGenerator(settings.width, settings.height)
        if algo in ("two_rooms", "two_rooms_open"):
            connect = algo == "two_rooms"
            logger.info("DungeonFactory: using TwoRoomGenerator (connect=%s)", connect)
            return TwoRoomGenerator(settings.width, settings.height, connect=connect, rng=rng)
        if algo != "rooms":
            logger.warning("Unknown algorithm '%s', falling back to RoomsGenerator", algo)

        if tables is None:
            tables = load_floor_tables(settings.tables_path)
        tier = tables.tier_for(settings.floor)
        max_monsters = settings.max_monsters_per_room
        max_items = settings.max_items_per_room
        logger.info("DungeonFactory: using RoomsGenerator (floor=%d, tier=%d)", settings.floor, tier.floor)
        return RoomsGenerator(
            settings.width,
            settings.height,
            max_rooms=settings.max_rooms,
            room_min_size=settings.room_min_size,
            room_max_size=settings.room_max_size,
            max_monsters_per_room=tier.max_monsters_per_room if max_monsters is None else max_monsters,
            max_items_per_room=tier.max_items_per_room if max_items is None else max_items,
            monster_table=tables.monster_table(settings.floor),
            item_table=tables.item_table(settings.floor),
            rng=rng,
            entry=entry,
        )

    @staticmethod
    def generate(settings: GenerationSettings, rng: Optional[RandomSource] = None) -> GameMap:
        gen = DungeonFactory.build_generator(settings, rng=rng)
        return gen.generate()
