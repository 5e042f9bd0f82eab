from __future__ import annotations

import random
from typing import MutableSequence, Optional, Protocol, TypeVar

T = TypeVar("T")

# Entropy and shuffling are always handed in explicitly; nothing in the engine
# reaches for a module-level generator.


class EntropySource(Protocol):
    def next_int(self, bound: int) -> int:
        """Return an integer drawn uniformly from [0, bound)."""


class Shuffler(Protocol):
    def shuffle_in_place(self, items: MutableSequence[T], entropy: EntropySource) -> None:
        ...


class _RandomEntropy:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    def next_int(self, bound: int) -> int:
        if bound <= 0:
            raise ValueError(f"Bound must be positive, got {bound}")
        return self._rng.randrange(bound)

    def next_int_between(self, low: int, high: int) -> int:
        if low >= high:
            raise ValueError(f"Empty range [{low}, {high})")
        return low + self.next_int(high - low)


class SecureRandom(_RandomEntropy):
    """Entropy backed by the operating system's CSPRNG."""

    def __init__(self) -> None:
        super().__init__(random.SystemRandom())


class SeededRandom(_RandomEntropy):
    """Reproducible entropy for tests and simulations."""

    def __init__(self, seed: Optional[int] = None) -> None:
        super().__init__(random.Random(seed))
        self.seed = seed


class FisherYatesShuffler:
    def shuffle_in_place(self, items: MutableSequence[T], entropy: EntropySource) -> None:
        for idx in range(len(items) - 1, 0, -1):
            swap = entropy.next_int(idx + 1)
            if not 0 <= swap <= idx:
                raise ValueError(f"Entropy source returned {swap} outside [0, {idx}]")
            items[idx], items[swap] = items[swap], items[idx]
