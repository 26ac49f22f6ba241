"""Weighted buff draws and per-reroll slot activation."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Optional

from .data import BUFF_PERCENTS, SECOND_SLOT_PERCENT, THIRD_SLOT_PERCENT, Buff
from .errors import InvariantViolation
from .rng import RandomSource


class WeightedSampler:
    """Draw one buff from a candidate list in proportion to its weight."""

    def __init__(
        self,
        source: RandomSource,
        weights: Optional[Mapping[Buff, float]] = None,
    ) -> None:
        self.source = source
        self.weights = weights if weights is not None else BUFF_PERCENTS

    def choose(self, candidates: Sequence[Buff]) -> Buff:
        """Return a candidate chosen with probability proportional to its weight.

        A single uniform draw ``r`` on ``[0, total)`` is matched against the
        running cumulative weight in candidate order; the first candidate with
        ``r < cumulative`` wins.

        Raises
        ------
        InvariantViolation
            If ``candidates`` is empty.
        """

        if not candidates:
            raise InvariantViolation("Cannot choose from an empty candidate set.")

        weights = self.weights
        total = sum(weights[buff] for buff in candidates)
        value = self.source.uniform(0.0, total)

        accum = 0.0
        for buff in candidates:
            accum += weights[buff]
            if value < accum:
                return buff
        # Only reachable through float accumulation error at the upper edge.
        return candidates[-1]


class SlotExtension(Enum):
    NONE = "none"
    SECOND_ONLY = "second_only"
    THIRD_ONLY = "third_only"
    BOTH = "both"

    @property
    def second(self) -> bool:
        return self in (SlotExtension.SECOND_ONLY, SlotExtension.BOTH)

    @property
    def third(self) -> bool:
        return self in (SlotExtension.THIRD_ONLY, SlotExtension.BOTH)

    @classmethod
    def from_flags(cls, second: bool, third: bool) -> SlotExtension:
        if second and third:
            return cls.BOTH
        if second:
            return cls.SECOND_ONLY
        if third:
            return cls.THIRD_ONLY
        return cls.NONE


class SlotExtensionPolicy:
    """Decide independently whether the second and third slots join a reroll."""

    def __init__(
        self,
        source: RandomSource,
        second_percent: float = SECOND_SLOT_PERCENT,
        third_percent: float = THIRD_SLOT_PERCENT,
    ) -> None:
        if not 0.0 <= second_percent <= 100.0 or not 0.0 <= third_percent <= 100.0:
            raise ValueError("Slot activation chances must be between 0 and 100.")
        self.source = source
        self.second_percent = second_percent
        self.third_percent = third_percent

    def decide(self) -> SlotExtension:
        second = self.source.uniform(0.0, 100.0) < self.second_percent
        third = self.source.uniform(0.0, 100.0) < self.third_percent
        return SlotExtension.from_flags(second, third)
