"""Dataclasses shared across panel, simulation, and reporting modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .data import Buff


class SlotStatus(Enum):
    EMPTY = "empty"
    FREE = "free"
    LOCKED = "locked"


@dataclass(frozen=True)
class SlotState:
    """Contents of one panel slot."""

    status: SlotStatus = SlotStatus.EMPTY
    buff: Optional[Buff] = None

    @classmethod
    def empty(cls) -> SlotState:
        return cls()

    @classmethod
    def free(cls, buff: Buff) -> SlotState:
        return cls(SlotStatus.FREE, buff)

    @classmethod
    def locked(cls, buff: Buff) -> SlotState:
        return cls(SlotStatus.LOCKED, buff)

    @property
    def is_empty(self) -> bool:
        return self.status is SlotStatus.EMPTY

    @property
    def is_free(self) -> bool:
        return self.status is SlotStatus.FREE

    @property
    def is_locked(self) -> bool:
        return self.status is SlotStatus.LOCKED


class LockPolicy(Enum):
    """How an experiment reacts to desired buffs appearing on the panel."""

    NO_LOCK = "no-lock"
    LOCK_ON_ACQUIRE = "lock-on-acquire"


@dataclass(frozen=True)
class SlotSeed:
    """Starting buff placed on a fresh panel before the first reroll."""

    position: int
    buff: Buff
    locked: bool = False


@dataclass(frozen=True)
class ExperimentConfig:
    """Parameters of one reroll-until-found experiment."""

    name: str
    target: frozenset[Buff]
    policy: LockPolicy = LockPolicy.NO_LOCK
    preset: tuple[SlotSeed, ...] = ()
    description: str = ""


@dataclass
class ExperimentSummary:
    """Aggregated Monte Carlo metrics for a reroll-until-found experiment."""

    mean: float
    stddev: float
    total_trials: int
    mean_attempts: float
    min_cost: int
    max_cost: int
    cost_histogram: dict[int, int] = field(default_factory=dict)


@dataclass
class SlotDistributionSummary:
    """Share of single rerolls that populated one, two, or three slots."""

    tally: list[int]
    total_trials: int

    @property
    def percentages(self) -> list[float]:
        if self.total_trials <= 0:
            return [0.0 for _ in self.tally]
        return [100.0 * count / self.total_trials for count in self.tally]


@dataclass
class HitRateSummary:
    """Share of single fresh rerolls that showed every wanted buff."""

    hits: int
    total_trials: int

    @property
    def probability(self) -> float:
        return self.hits / self.total_trials if self.total_trials > 0 else 0.0
