from __future__ import annotations

from typing import Iterable

from ..core.vector import Vec3
from .map import GameMap

# Half-width of a moving body, in world units.
BODY_RADIUS = 0.5


def step_without_colliding(
    game_map: GameMap,
    position: Vec3,
    move: Vec3,
    probe_distance: float = BODY_RADIUS,
    occupants: Iterable[Vec3] = (),
    occupant_radius: float = BODY_RADIUS,
) -> Vec3:
    """
    Attempt to move from position by move. Returns the new position, or the
    old one when the body would touch a wall (see GameMap.collide_with_wall)
    or come within two radii of another occupant.
    """
    target = position + move
    if game_map.collide_with_wall(target, probe_distance):
        return position
    for other in occupants:
        if target.distance(other) <= occupant_radius * 2.0:
            return position
    return target
