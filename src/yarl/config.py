from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

MAP_WIDTH = 80
MAP_HEIGHT = 45
MAX_ROOMS = 30
ROOM_MIN_SIZE = 6
ROOM_MAX_SIZE = 10
MAX_MONSTERS_PER_ROOM = 2
MAX_ITEMS_PER_ROOM = 2

ALGORITHMS = ("rooms", "text", "uniform", "two_rooms", "two_rooms_open")

ENV_PREFIX = "YARL_"

Seed = Union[int, str, None]


def _parse_seed(raw: Optional[str]) -> Seed:
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return raw


@dataclass
class GenerationSettings:
    """Everything needed to pick a generator and build one floor.

    - algorithm: "rooms" (random room packing), "text" (parse ``text``),
      "uniform" (all floor), "two_rooms" / "two_rooms_open" (fixed rooms with
      and without a connecting tunnel).
    - max_monsters_per_room / max_items_per_room: None means "take the
      budget from the floor tables for the current floor".
    """

    algorithm: str = "rooms"
    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT
    seed: Seed = None
    floor: int = 1
    max_rooms: int = MAX_ROOMS
    room_min_size: int = ROOM_MIN_SIZE
    room_max_size: int = ROOM_MAX_SIZE
    max_monsters_per_room: Optional[int] = None
    max_items_per_room: Optional[int] = None
    tables_path: Optional[Path] = None
    text: Optional[str] = None

    def validate(self) -> "GenerationSettings":
        if self.algorithm not in ALGORITHMS:
            raise ConfigurationError(f"Unknown algorithm {self.algorithm!r}; expected one of {ALGORITHMS}")
        if self.algorithm == "text" and self.text is None:
            raise ConfigurationError("The text algorithm needs map text")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"Map size must be positive, got {self.width}x{self.height}")
        if self.floor < 1:
            raise ConfigurationError(f"Floors start at 1, got {self.floor}")
        if self.max_rooms < 0:
            raise ConfigurationError("max_rooms must be non-negative")
        if not 2 <= self.room_min_size <= self.room_max_size:
            raise ConfigurationError(
                f"Room sizes must satisfy 2 <= min <= max, got {self.room_min_size}..{self.room_max_size}"
            )
        for name in ("max_monsters_per_room", "max_items_per_room"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ConfigurationError(f"{name} must be non-negative, got {value}")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GenerationSettings":
        """Build settings from YARL_* environment variables; unset ones keep defaults."""
        env = os.environ if environ is None else environ

        def _int(name: str, default: Optional[int]) -> Optional[int]:
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw == "":
                return default
            try:
                return int(raw)
            except ValueError:
                raise ConfigurationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None

        tables = env.get(ENV_PREFIX + "TABLES")
        settings = cls(
            algorithm=env.get(ENV_PREFIX + "ALGORITHM", "rooms").lower(),
            width=_int("WIDTH", MAP_WIDTH),
            height=_int("HEIGHT", MAP_HEIGHT),
            seed=_parse_seed(env.get(ENV_PREFIX + "SEED")),
            floor=_int("FLOOR", 1),
            max_rooms=_int("MAX_ROOMS", MAX_ROOMS),
            room_min_size=_int("ROOM_MIN_SIZE", ROOM_MIN_SIZE),
            room_max_size=_int("ROOM_MAX_SIZE", ROOM_MAX_SIZE),
            max_monsters_per_room=_int("MAX_MONSTERS_PER_ROOM", None),
            max_items_per_room=_int("MAX_ITEMS_PER_ROOM", None),
            tables_path=Path(tables) if tables else None,
        )
        logger.debug("Settings from environment: %s", settings)
        return settings


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="yarl", description="Generate roguelike dungeon floors as text.")
    parser.add_argument("--algorithm", choices=ALGORITHMS, help="Generation strategy (default: rooms)")
    parser.add_argument("--width", type=int, help="Map width in cells")
    parser.add_argument("--height", type=int, help="Map height in cells")
    parser.add_argument("--seed", help="Master seed (int or string)")
    parser.add_argument("--floor", type=int, help="Floor number to start on")
    parser.add_argument("--max-rooms", type=int, dest="max_rooms")
    parser.add_argument("--room-min-size", type=int, dest="room_min_size")
    parser.add_argument("--room-max-size", type=int, dest="room_max_size")
    parser.add_argument("--tables", type=Path, help="YAML floor tables overriding the built-in ones")
    parser.add_argument("--text", type=Path, help="Load the floor from a text map file")
    parser.add_argument("--descend", type=int, default=0, help="Descend this many floors after generating")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of the map")
    parser.add_argument("--save", action="store_true", help="Write the final floor to a text file")
    parser.add_argument("--out-dir", type=Path, dest="out_dir", help="Directory for --save (default: user data dir)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace, environ: Optional[Mapping[str, str]] = None) -> GenerationSettings:
    """Environment first, then explicit command line flags on top."""
    settings = GenerationSettings.from_env(environ)
    for name in ("algorithm", "width", "height", "floor", "max_rooms", "room_min_size", "room_max_size"):
        value = getattr(args, name, None)
        if value is not None:
            setattr(settings, name, value)
    if getattr(args, "seed", None) is not None:
        settings.seed = _parse_seed(args.seed)
    if getattr(args, "tables", None) is not None:
        settings.tables_path = args.tables
    if getattr(args, "text", None) is not None:
        settings.text = Path(args.text).read_text(encoding="utf-8")
        settings.algorithm = "text"
    return settings.validate()
