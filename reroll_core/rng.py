"""Injected random sources used by the sampler and extension policy."""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Optional, Protocol


class RandomSource(Protocol):
    """Capability that draws a uniform real number in ``[low, high)``."""

    def uniform(self, low: float, high: float) -> float:
        ...


class SeededRandomSource:
    """Random source backed by :class:`random.Random`."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def uniform(self, low: float, high: float) -> float:
        # random.Random.uniform may return ``high`` through rounding.
        return low + (high - low) * self.rng.random()


class ScriptedRandomSource:
    """Replays fractions of the requested range, for deterministic tests.

    Each scripted value ``f`` in ``[0, 1)`` yields ``low + (high - low) * f``.
    """

    def __init__(self, fractions: Iterable[float]) -> None:
        self._fractions = list(fractions)
        self._index = 0

    @property
    def consumed(self) -> int:
        return self._index

    def uniform(self, low: float, high: float) -> float:
        if self._index >= len(self._fractions):
            raise IndexError("Scripted random source exhausted.")
        fraction = self._fractions[self._index]
        self._index += 1
        return low + (high - low) * fraction
