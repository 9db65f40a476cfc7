"""
Random source for tile spawns.

The engine draws exactly two kinds of random values: a uniform index into the
list of empty cells, and a biased coin for the spawned tile's value. Anything
providing those two draws can drive a game, so tests can script them.
"""

import random
from typing import Optional, Protocol


class TileRandom(Protocol):
    """Randomness needed to spawn tiles."""

    def uniform_index(self, n: int) -> int:
        """Return an integer in [0, n) with uniform probability."""
        ...

    def chance(self, probability: float) -> bool:
        """Return True with the given probability."""
        ...


class SeededRandom:
    """
    Default spawn randomness backed by ``random.Random``.

    Args:
        seed: Seed for reproducible games. ``None`` seeds from the OS.
    """

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._rng = random.Random(seed)

    def uniform_index(self, n: int) -> int:
        return self._rng.randrange(n)

    def chance(self, probability: float) -> bool:
        return self._rng.random() < probability

    def __repr__(self) -> str:
        return f"SeededRandom(seed={self._seed})"
