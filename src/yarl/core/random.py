from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling so generation never touches the global generator
    - support deterministic seeding for tests and reproducible floors
    - provide the weighted choice used by the spawn tables
    """

    seed: int | None = None

    def __post_init__(self) -> None:
        if self.seed is not None:
            self._rng = random.Random(self.seed)
            logger.debug("Initialized RandomSource with deterministic seed=%s", self.seed)
        else:
            # Non-deterministic seed using system random state
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")

    def randint(self, a: int, b: int) -> int:
        """Return an integer in the inclusive range [a, b]."""
        return self._rng.randint(a, b)

    def randrange(self, start: int, stop: int) -> int:
        """Return an integer in the half-open range [start, stop)."""
        return self._rng.randrange(start, stop)

    def random(self) -> float:
        return self._rng.random()

    def coin_flip(self) -> bool:
        return self._rng.random() < 0.5

    def choice(self, seq: Iterable[T]) -> T:
        seq_list = list(seq)
        if not seq_list:
            raise ValueError("RandomSource.choice() received an empty sequence")
        idx = self._rng.randrange(0, len(seq_list))
        return seq_list[idx]

    def weighted_choice(self, entries: Sequence[Tuple[T, float]]) -> T:
        """
        Select a value from ``(value, weight)`` pairs.

        Weights are normalized by their total, so they need not sum to 1. One
        uniform draw in [0, 1) is compared against the running cumulative
        probability; if float rounding leaves a residual the last entry wins.
        """
        if not entries:
            raise ValueError("weighted_choice requires at least one entry")

        total = 0.0
        for value, weight in entries:
            if weight < 0:
                raise ValueError(f"Weight for {value!r} must be non-negative, got {weight}")
            total += weight
        if total == 0:
            raise ValueError("All weights are zero; cannot make a weighted choice")

        r = self._rng.random()
        cumulative = 0.0
        for value, weight in entries:
            cumulative += weight / total
            if r < cumulative:
                return value
        return entries[-1][0]

    def getstate(self) -> Any:
        return self._rng.getstate()

    def setstate(self, state: Any) -> None:
        self._rng.setstate(state)


__all__ = ["RandomSource"]
