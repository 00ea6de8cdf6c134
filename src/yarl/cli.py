from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

from platformdirs import PlatformDirs

from .config import build_settings, parse_args
from .exceptions import YarlError
from .game import DungeonRun
from .utils.fs import atomic_write_text

logger = logging.getLogger(__name__)

APP_NAME = "yarl"


def default_out_dir() -> Path:
    return Path(PlatformDirs(appname=APP_NAME, appauthor=False).user_data_dir) / "floors"


def save_floor(text: str, floor: int, out_dir: Optional[Path] = None) -> Path:
    target = (out_dir or default_out_dir()) / f"floor-{floor:03d}.txt"
    atomic_write_text(target, text + "\n")
    logger.info("Saved floor %d to %s", floor, target)
    return target


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = build_settings(args)
        run = DungeonRun(settings)
        game_map = run.start()
        for _ in range(max(0, args.descend)):
            game_map = run.descend()
    except (YarlError, OSError) as exc:
        logger.error("%s", exc)
        return 2

    text = game_map.to_text()
    if args.save:
        save_floor(text, run.floor, args.out_dir)

    if args.json:
        # Sorted keys so runs can be diffed
        print(json.dumps(run.summary(), indent=2, sort_keys=True))
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
