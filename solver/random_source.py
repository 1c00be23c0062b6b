# solver/random_source.py
import random
from typing import List, Optional, TypeVar

T = TypeVar("T")

# Linear-congruential constants; a seed reproduces the same stream forever.
LCG_A = 9301
LCG_C = 49297
LCG_M = 233280


class RandomSource:
    """Stream of floats in [0, 1). Seeded and ambient sources are interchangeable."""

    def next(self) -> float:
        raise NotImplementedError

    def shuffle(self, items: List[T]) -> None:
        """Fisher–Yates shuffle in place, drawing one value per swap."""
        for i in range(len(items) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]


class SeededRandom(RandomSource):
    def __init__(self, seed: int):
        self.seed = int(seed)

    def next(self) -> float:
        self.seed = (self.seed * LCG_A + LCG_C) % LCG_M
        return self.seed / LCG_M


class AmbientRandom(RandomSource):
    def __init__(self):
        try:
            self._rng = random.SystemRandom()
        except NotImplementedError:
            self._rng = random.Random()

    def next(self) -> float:
        return self._rng.random()


def make_random_source(seed: Optional[int] = None) -> RandomSource:
    if seed is None:
        return AmbientRandom()
    return SeededRandom(seed)
