from __future__ import annotations

import logging
from importlib.resources import files as resource_files
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..exceptions import ConfigurationError
from .population import ItemKind, MonsterKind

logger = logging.getLogger(__name__)


def _check_weights(weights: Dict) -> Dict:
    if not weights:
        raise ValueError("weight table must not be empty")
    for kind, weight in weights.items():
        if weight < 0:
            raise ValueError(f"weight for {kind} must be non-negative, got {weight}")
    if sum(weights.values()) == 0:
        raise ValueError("weight table must contain at least one positive weight")
    return weights


class FloorTier(BaseModel):
    """Spawn budget and weights that apply from ``floor`` onwards."""

    floor: int = Field(..., ge=1, description="First floor this tier applies to")
    max_monsters_per_room: int = Field(..., ge=0)
    max_items_per_room: int = Field(..., ge=0)
    monsters: Dict[MonsterKind, float] = Field(..., description="Relative monster weights")
    items: Dict[ItemKind, float] = Field(..., description="Relative item weights")

    @field_validator("monsters", "items")
    @classmethod
    def weights_usable(cls, v: Dict) -> Dict:
        return _check_weights(v)


class FloorTables(BaseModel):
    """Difficulty curve: tiers sorted by their starting floor."""

    tiers: List[FloorTier] = Field(..., min_length=1)

    @model_validator(mode="after")
    def tiers_ordered(self) -> "FloorTables":
        self.tiers.sort(key=lambda t: t.floor)
        floors = [t.floor for t in self.tiers]
        if len(set(floors)) != len(floors):
            raise ValueError(f"duplicate tier floors: {floors}")
        if floors[0] != 1:
            raise ValueError("the first tier must start at floor 1")
        return self

    def tier_for(self, floor: int) -> FloorTier:
        """Return the deepest tier whose starting floor is <= floor."""
        if floor < 1:
            raise ConfigurationError(f"Floors start at 1, got {floor}")
        chosen = self.tiers[0]
        for tier in self.tiers:
            if tier.floor <= floor:
                chosen = tier
            else:
                break
        return chosen

    def monster_table(self, floor: int) -> List[Tuple[MonsterKind, float]]:
        return list(self.tier_for(floor).monsters.items())

    def item_table(self, floor: int) -> List[Tuple[ItemKind, float]]:
        return list(self.tier_for(floor).items.items())


def load_floor_tables(path: Optional[Path] = None) -> FloorTables:
    """Load the difficulty curve from YAML.

    If path is None, loads the embedded default resource at
    yarl/dungeon/data/floor_tables.yaml.
    """
    if path is None:
        data = resource_files("yarl.dungeon.data").joinpath("floor_tables.yaml").read_text(encoding="utf-8")
        logger.debug("Loaded embedded floor tables resource")
    else:
        with open(path, "r", encoding="utf-8") as f:
            data = f.read()
        logger.debug("Loaded floor tables from path: %s", path)

    raw = yaml.safe_load(data) or {}
    try:
        tables = FloorTables.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid floor tables: {exc}") from exc
    logger.info("Floor tables: %d tiers starting at floors %s", len(tables.tiers), [t.floor for t in tables.tiers])
    return tables
