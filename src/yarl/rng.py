from __future__ import annotations

import hashlib
import json
import logging
import secrets
from dataclasses import dataclass, field
from typing import Any, Union

from .core.random import RandomSource

logger = logging.getLogger(__name__)

MasterSeed = Union[int, str, bytes, None]

FLOOR_LAYOUT = "floor_layout"


def seed_bytes(seed: MasterSeed) -> bytes:
    """Canonical byte form of a master seed.

    Ints and "0x.." strings become minimal big-endian bytes (so 16 and "0x10"
    name the same run), other strings their UTF-8 encoding. None yields b"".
    """
    if seed is None:
        return b""
    if isinstance(seed, bytes):
        return seed
    if isinstance(seed, str):
        text = seed.strip()
        if not text.startswith("0x"):
            return text.encode("utf-8")
        try:
            seed = int(text, 16)
        except ValueError:
            return text.encode("utf-8")
    if isinstance(seed, int):
        if seed < 0:
            raise ValueError(f"Master seed must be non-negative, got {seed}")
        return seed.to_bytes((seed.bit_length() + 7) // 8 or 1, "big")
    raise TypeError("Unsupported seed type: %r" % (type(seed),))


@dataclass(frozen=True)
class RNGManager:
    """Derives independent random sources from one master seed.

    Usage:
        rngm = RNGManager(master_seed)
        rng = rngm.context_rng("floor_layout", floor)

    Each derived source depends only on the master seed, the domain and the
    identifiers, never on how many sources were handed out before. A missing
    master seed is replaced by 16 random bytes, logged so the run can be
    replayed.
    """

    master_seed: MasterSeed
    _seed: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        raw = seed_bytes(self.master_seed)
        if self.master_seed is None:
            raw = secrets.token_bytes(16)
            logger.info("No master seed provided; generated random seed: %s", raw.hex())
        object.__setattr__(self, "_seed", raw)

    def derive_seed(self, domain: str, *identifiers: Any) -> int:
        """64-bit BLAKE2b digest of the master seed, domain and identifiers."""
        payload = json.dumps(
            {"master": self._seed.hex(), "domain": domain, "ids": identifiers},
            sort_keys=True,
            separators=(",", ":"),
        ).encode("utf-8")
        derived = int.from_bytes(hashlib.blake2b(payload, digest_size=8).digest(), "big")
        logger.debug("Derived seed for %s%s -> %d", domain, identifiers, derived)
        return derived

    def context_rng(self, domain: str, *identifiers: Any) -> RandomSource:
        return RandomSource(self.derive_seed(domain, *identifiers))

    def floor_rng(self, floor: int) -> RandomSource:
        return self.context_rng(FLOOR_LAYOUT, floor)

    def get_master_seed_hex(self) -> str:
        return self._seed.hex()
