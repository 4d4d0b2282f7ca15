"""Deterministic string-seeded RNG using xxhash.

The Golden Rule: a cell's contents depend ONLY on WorldSeed + the cell's
seed string. Reloading the game must regenerate exactly the same world.

Formula: RNG_Value = xxh64(SeedString, seed=WorldSeed) / 2**64
"""

from __future__ import annotations

import xxhash


class DeterministicRNG:
    """Stateless string-seeded pseudo-random number generator.

    Each call is a pure function of (world_seed, seed) with no internal
    mutable state, therefore fully thread-safe. Python's builtin ``hash``
    is salted per process and is never used here.
    """

    __slots__ = ("_world_seed",)

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, world_seed: int = 0) -> None:
        self._world_seed = world_seed

    @property
    def world_seed(self) -> int:
        return self._world_seed

    def _hash(self, seed: str) -> int:
        return xxhash.xxh64(seed.encode("utf-8"), seed=self._world_seed).intdigest()

    def next_float(self, seed: str) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(seed) / (self._MAX_UINT64 + 1)

    def next_bool(self, seed: str, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(seed) < probability


_DEFAULT_RNG = DeterministicRNG()


def luck(seed: str) -> float:
    """Float in [0, 1) for *seed* under the default world seed."""
    return _DEFAULT_RNG.next_float(seed)
