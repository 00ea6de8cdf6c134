from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple

from .config import GenerationSettings
from .dungeon.difficulty import FloorTables, load_floor_tables
from .dungeon.factory import DungeonFactory
from .dungeon.generator import DungeonGenerator
from .dungeon.map import GameMap
from .rng import RNGManager

logger = logging.getLogger(__name__)


class DungeonRun:
    """A descent through consecutive floors.

    Owns the current GameMap and floor number. Each floor draws from its own
    RandomSource derived from the master seed, so a floor's layout depends
    only on the seed, the floor number and the cell the player entered at.
    Descending replaces the map wholesale; the staircase cell of the floor
    above becomes the entry cell of the next one.
    """

    def __init__(self, settings: GenerationSettings, tables: Optional[FloorTables] = None) -> None:
        self.settings = settings.validate()
        self.rngm = RNGManager(settings.seed)
        self.tables = tables if tables is not None else load_floor_tables(settings.tables_path)
        self.floor = settings.floor
        self.current_map: Optional[GameMap] = None
        self.generator: Optional[DungeonGenerator] = None

    def generate_floor(self, entry: Optional[Tuple[int, int]] = None) -> GameMap:
        settings = replace(self.settings, floor=self.floor)
        rng = self.rngm.floor_rng(self.floor)
        self.generator = DungeonFactory.build_generator(settings, rng=rng, tables=self.tables, entry=entry)
        self.current_map = self.generator.generate()
        logger.info("Floor %d ready: %r", self.floor, self.current_map)
        return self.current_map

    def start(self) -> GameMap:
        return self.generate_floor()

    def descend(self) -> GameMap:
        """Move to the next floor; the old map is discarded."""
        if self.current_map is None:
            return self.start()
        entry = self.current_map.stairs_down
        if entry is None:
            logger.warning("Floor %d has no staircase; next floor uses its own spawn", self.floor)
        self.floor += 1
        logger.info("Descending to floor %d (entry=%s)", self.floor, entry)
        return self.generate_floor(entry=entry)

    def summary(self) -> Dict[str, Any]:
        """JSON-serialisable description of the current floor."""
        game_map = self.current_map if self.current_map is not None else self.start()
        return {
            "seed_hex": self.rngm.get_master_seed_hex(),
            "floor": self.floor,
            "algorithm": self.settings.algorithm,
            "width": game_map.width,
            "height": game_map.height,
            "player_spawn": list(game_map.player_spawn),
            "stairs_down": list(game_map.stairs_down) if game_map.stairs_down is not None else None,
            "monsters": [{"position": list(m.position), "kind": m.kind.value} for m in game_map.monsters],
            "items": [{"position": list(i.position), "kind": i.kind.value} for i in game_map.items],
            "reachable_cells": len(game_map.reachable_floor()),
        }


def generate_floor(settings: GenerationSettings, floor: int) -> Dict[str, Any]:
    """High-level API: build one floor deterministically and return its summary."""
    run = DungeonRun(replace(settings, floor=floor))
    run.start()
    return run.summary()
