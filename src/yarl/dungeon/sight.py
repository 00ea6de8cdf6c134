from __future__ import annotations

from enum import Enum

from ..core.vector import Vec3
from .map import GameMap

VISION_RANGE = 10.0
ATTACK_RANGE = 2.0


class MonsterAIState(Enum):
    IDLE = "idle"
    PURSUING = "pursuing"
    ATTACKING = "attacking"


def perceive(
    game_map: GameMap,
    monster: Vec3,
    player: Vec3,
    vision_range: float = VISION_RANGE,
    attack_range: float = ATTACK_RANGE,
) -> MonsterAIState:
    """Decide what a monster does this tick from what it can see.

    Out of vision range or behind a wall the monster idles; otherwise it
    attacks when close enough and pursues when not.
    """
    distance = monster.distance(player)
    if distance > vision_range:
        return MonsterAIState.IDLE
    if not game_map.has_line_of_sight(monster, player):
        return MonsterAIState.IDLE
    if distance <= attack_range:
        return MonsterAIState.ATTACKING
    return MonsterAIState.PURSUING
