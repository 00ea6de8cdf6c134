from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Sequence, Tuple, TypeVar

from ..core.random import RandomSource
from .room import Room

logger = logging.getLogger(__name__)

K = TypeVar("K")
S = TypeVar("S")
Cell = Tuple[int, int]


class MonsterKind(Enum):
    ORC = "orc"
    TROLL = "troll"


class ItemKind(Enum):
    HEAL_POTION = "heal_potion"
    LIGHTNING = "lightning"


@dataclass(frozen=True)
class MonsterSpawn:
    position: Cell
    kind: MonsterKind


@dataclass(frozen=True)
class ItemSpawn:
    position: Cell
    kind: ItemKind


# (kind, weight) pairs; weights are relative and need not sum to 1.
SpawnTable = Sequence[Tuple[K, float]]

DEFAULT_MONSTER_TABLE: Tuple[Tuple[MonsterKind, float], ...] = (
    (MonsterKind.ORC, 0.8),
    (MonsterKind.TROLL, 0.2),
)
DEFAULT_ITEM_TABLE: Tuple[Tuple[ItemKind, float], ...] = (
    (ItemKind.HEAL_POTION, 0.6),
    (ItemKind.LIGHTNING, 0.4),
)


def _scatter(
    rooms: Sequence[Room],
    max_per_room: int,
    table: SpawnTable[K],
    rng: RandomSource,
    make: Callable[[Cell, K], S],
) -> List[S]:
    spawns: List[S] = []
    for room in rooms:
        count = rng.randint(0, max_per_room)
        for _ in range(count):
            position = room.random_interior_cell(rng)
            kind = rng.weighted_choice(table)
            spawns.append(make(position, kind))
    return spawns


def place_monsters(
    rooms: Sequence[Room],
    max_per_room: int,
    rng: RandomSource,
    table: SpawnTable[MonsterKind] = DEFAULT_MONSTER_TABLE,
) -> List[MonsterSpawn]:
    """Scatter 0..max_per_room monsters in every room, spawn room included."""
    monsters = _scatter(rooms, max_per_room, table, rng, MonsterSpawn)
    logger.debug("Placed %d monsters in %d rooms", len(monsters), len(rooms))
    return monsters


def place_items(
    rooms: Sequence[Room],
    max_per_room: int,
    rng: RandomSource,
    table: SpawnTable[ItemKind] = DEFAULT_ITEM_TABLE,
) -> List[ItemSpawn]:
    """Scatter 0..max_per_room items in every room, spawn room included."""
    items = _scatter(rooms, max_per_room, table, rng, ItemSpawn)
    logger.debug("Placed %d items in %d rooms", len(items), len(rooms))
    return items
