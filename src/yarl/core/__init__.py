from .random import RandomSource
from .vector import Vec3

__all__ = [
    "RandomSource",
    "Vec3",
]
