from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet


class TileKind(Enum):
    """Basic dungeon tile kinds.

    - EMPTY: unused space, never rendered (pruned walls end up here)
    - WALL: non-walkable obstacle, blocks sight
    - FLOOR: walkable open tile
    - STAIRCASE_DOWN: walkable tile that triggers floor descent
    """

    EMPTY = 0
    WALL = 1
    FLOOR = 2
    STAIRCASE_DOWN = 3

    @property
    def is_walkable(self) -> bool:
        return self in WALKABLE_KINDS


class RenderHint(Enum):
    """How the renderer should dress a tile. Room interiors get their own floor mesh."""

    EMPTY = 0
    ROOM_FLOOR = 1


WALKABLE_KINDS: FrozenSet[TileKind] = frozenset({TileKind.FLOOR, TileKind.STAIRCASE_DOWN})


@dataclass
class Tile:
    kind: TileKind = TileKind.EMPTY
    render_hint: RenderHint = RenderHint.EMPTY

    @property
    def is_walkable(self) -> bool:
        return self.kind.is_walkable
