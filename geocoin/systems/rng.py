"""Deterministic string-keyed randomness using xxhash.

The whole cache layout is a pure function of cell coordinates:
Luck = (xxh64(Key, Seed) >> 11) / 2**53, the top 53 bits of the hash
scaled into [0, 1). Nothing depends on the clock or the session.
"""

from __future__ import annotations

import xxhash


class DeterministicRNG:
    """Stateless keyed pseudo-random number generator.

    Each call is a pure function of (seed, key), so the same key yields the
    same value across runs and processes.
    """

    __slots__ = ("_seed",)

    _MAX_UINT64 = (1 << 64) - 1
    _FLOAT_BITS = 53

    def __init__(self, seed: int = 0) -> None:
        self._seed = seed

    @property
    def seed(self) -> int:
        return self._seed

    def _hash(self, key: str) -> int:
        return xxhash.xxh64(key.encode("utf-8"), seed=self._seed & self._MAX_UINT64).intdigest()

    def luck(self, key: str) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        # Top 53 bits only: a full 64-bit quotient can round up to 1.0.
        return (self._hash(key) >> (64 - self._FLOAT_BITS)) / (1 << self._FLOAT_BITS)

    def next_bool(self, key: str, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.luck(key) < probability


_DEFAULT = DeterministicRNG()


def luck(key: str) -> float:
    """Seed-0 ``DeterministicRNG.luck``."""
    return _DEFAULT.luck(key)
