from __future__ import annotations

import logging
from typing import Optional

from ..codec import MapTextCodec
from ..map import GameMap
from .base import DungeonGenerator, grid_center

logger = logging.getLogger(__name__)


class TextMapGenerator(DungeonGenerator):
    """Build a floor from a literal text map (hand-written level or restored save).

    The player marker becomes the spawn cell and is stored as floor. Item and
    monster glyphs are read as floor too; population is not taken from text.
    Raises EmptyInputError when the text has no lines.
    """

    def __init__(self, text: str, codec: Optional[MapTextCodec] = None) -> None:
        self.text = text
        self.codec = codec or MapTextCodec()

    def generate(self) -> GameMap:
        parsed = self.codec.parse(self.text)
        if parsed.monsters or parsed.items:
            logger.debug(
                "Ignoring %d monster and %d item glyphs in text map",
                len(parsed.monsters),
                len(parsed.items),
            )
        grid = parsed.grid
        game_map = GameMap(
            grid=grid,
            player_spawn=parsed.player,
            center=grid_center(grid.width, grid.height),
            stairs_down=parsed.stairs_down,
        )
        logger.info("Loaded text floor %dx%d", grid.width, grid.height)
        return game_map
