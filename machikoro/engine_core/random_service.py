"""
Randomness Service - seeded dice and shuffles for one match.

Each match owns exactly one service. Replaying the same moves against a
service with the same seed reproduces the same rolls and shuffles.
"""

from __future__ import annotations
import random
from typing import Sequence, TypeVar

T = TypeVar("T")


class RandomService:
    """Uniform die values and permutations from a per-match seed."""

    def __init__(self, seed: int | str | None = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def die(self, sides: int = 6) -> int:
        """Roll one die."""
        return self._rng.randint(1, sides)

    def dice(self, n: int, sides: int = 6) -> tuple[int, ...]:
        """Roll `n` dice."""
        return tuple(self.die(sides) for _ in range(n))

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a shuffled copy."""
        result = list(items)
        self._rng.shuffle(result)
        return result

    def getstate(self) -> object:
        return self._rng.getstate()

    def setstate(self, state: object) -> None:
        self._rng.setstate(state)


class FixedDice(RandomService):
    """
    Service that returns preset die values in order, for tests.

    Shuffles still use the seeded generator. Once the preset values run
    out, dice fall back to the seeded generator too.
    """

    def __init__(self, values: Sequence[int], seed: int | str | None = 0):
        super().__init__(seed)
        self._values = list(values)

    def die(self, sides: int = 6) -> int:
        if self._values:
            return self._values.pop(0)
        return super().die(sides)
