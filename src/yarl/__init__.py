"""
yarl package root.

Procedural dungeon generation and grid spatial queries for a 3D roguelike.
Engine specifics (meshes, cameras, input) stay outside of these modules; the
game layer only reads the generated map and calls its query helpers.
"""
from importlib.metadata import version, PackageNotFoundError

__all__ = ["__version__"]

try:
    __version__ = version("yarl-dungeon")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
