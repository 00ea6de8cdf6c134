from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_dir(path: Path, *, mode: int = 0o755) -> None:
    path.mkdir(parents=True, exist_ok=True)
    try:
        os.chmod(path, mode)
    except OSError:  # Platform may not support
        logger.debug("Could not chmod directory: %s", path, exc_info=True)


def atomic_write_text(path: Path, text: str) -> None:
    """Write text through a temporary file and replace, so readers never see a partial floor."""
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=path.name, dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
