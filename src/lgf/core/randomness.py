from __future__ import annotations

import hashlib
import math
import random
from typing import Any, Hashable, Mapping, Sequence, TypeVar

from lgf.contracts import RandomSource
from lgf.core.distributions import box_muller

T = TypeVar("T", bound=Hashable)


class SeededRandomSource(RandomSource):
    """Owned, seedable randomness source threaded through every generation call.

    The only primitive stream is MT19937 via ``random.Random.random()``, whose
    sequence for an integer seed is stable across Python releases. Every other
    draw is derived from that stream here so the derived sequences are stable too.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = random.Random(seed)
        self._spare_normal: float | None = None

    @property
    def seed(self) -> int | None:
        return self._seed

    def rand(self) -> float:
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError(f"randbelow bound must be positive, got {n}")
        return min(int(self.rand() * n), n - 1)

    def randint(self, a: int, b: int) -> int:
        if a > b:
            raise ValueError(f"randint range is empty: [{a}, {b}]")
        return a + self.randbelow(b - a + 1)

    def chance(self, probability: float) -> bool:
        return self.rand() < probability

    def standard_normal(self) -> float:
        if self._spare_normal is not None:
            spare = self._spare_normal
            self._spare_normal = None
            return spare
        u1 = self.rand()
        while u1 <= 1e-12:
            u1 = self.rand()
        z0, z1 = box_muller(u1, self.rand())
        self._spare_normal = z1
        return z0

    def weighted_choice(self, weights: Mapping[T, float]) -> T:
        if not weights:
            raise ValueError("weighted choice requires at least one outcome")
        if any(w < 0 or math.isnan(w) for w in weights.values()):
            raise ValueError("weights must be non-negative numbers")
        total = sum(weights.values())
        if total <= 0:
            raise ValueError("weights must not sum to zero")
        positive = [(outcome, weight) for outcome, weight in weights.items() if weight > 0]
        target = self.rand() * total
        cumulative = 0.0
        for outcome, weight in positive[:-1]:
            cumulative += weight
            if target < cumulative:
                return outcome
        # float accumulation can leave target >= the running sum
        return positive[-1][0]

    def choice(self, items: Sequence[Any]) -> Any:
        if not items:
            raise ValueError("choice items must not be empty")
        return items[self.randbelow(len(items))]

    def shuffle(self, items: list[Any]) -> None:
        for i in range(len(items) - 1, 0, -1):
            j = self.randbelow(i + 1)
            items[i], items[j] = items[j], items[i]

    def spawn(self, substream_id: str) -> RandomSource:
        seed = self._seed
        if seed is None:
            return SeededRandomSource(seed=None)
        digest = hashlib.sha256(f"{seed}:{substream_id}".encode("ascii", "ignore")).hexdigest()
        child_seed = int(digest[:16], 16)
        return SeededRandomSource(seed=child_seed)


def unseeded_random() -> SeededRandomSource:
    return SeededRandomSource(seed=None)


def seeded_random(seed: int) -> SeededRandomSource:
    return SeededRandomSource(seed=seed)
