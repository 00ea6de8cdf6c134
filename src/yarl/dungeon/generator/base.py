from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Tuple

from ..map import GameMap


class DungeonGenerator(ABC):
    """Abstract base for floor generators.

    A generator builds a complete GameMap in one call; callers never see a
    partially built floor.
    """

    @abstractmethod
    def generate(self) -> GameMap:
        """Generate a floor."""
        raise NotImplementedError


def grid_center(width: int, height: int) -> Tuple[int, int]:
    """The cell placed at the world origin for a width x height floor."""
    return (width // 2, height // 2)
