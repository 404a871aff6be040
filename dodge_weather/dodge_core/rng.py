"""
RNG - Random Source
===================

All randomness in the game goes through a RandomSource so tests can swap in
a seeded or scripted sequence. The game itself runs unseeded.
"""

from __future__ import annotations

import random
from typing import Iterable, List, Optional


class RandomSource:
    """
    Uniform integer draws with inclusive bounds.

    Wraps a private random.Random so the game never touches the global
    generator.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random source.

        Args:
            seed: Random seed for reproducibility. Random if None.
        """
        self._rng = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends included."""
        return self._rng.randint(low, high)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Re-seed the source.

        Args:
            seed: New random seed. Fresh entropy if None.
        """
        self._rng = random.Random(seed)


class ScriptedRandom(RandomSource):
    """
    Replays a fixed list of values, clamped into the requested range.

    Once the script runs out it keeps returning the lower bound. Used by
    tests that need exact spawn positions.
    """

    def __init__(self, values: Iterable[int]):
        super().__init__(seed=0)
        self._values: List[int] = list(values)
        self._index = 0
        self.calls: List[tuple] = []

    def randint(self, low: int, high: int) -> int:
        if low > high:
            raise ValueError(f"empty range for randint ({low}, {high})")
        self.calls.append((low, high))
        if self._index >= len(self._values):
            return low
        value = self._values[self._index]
        self._index += 1
        return max(low, min(high, value))

    def reset(self, seed: Optional[int] = None) -> None:
        self._index = 0
        self.calls.clear()
