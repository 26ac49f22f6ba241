"""High-level entry points used by scripts and callers."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from time import perf_counter
from typing import Optional

from .cost import LOCK_BASE_COST, REROLL_BASE_COST, CostModel
from .data import DEFAULT_SEED, DEFAULT_TRIAL_COUNT, Buff
from .experiments import DEFAULT_HIT_RATE_TARGET
from .models import (
    ExperimentConfig,
    ExperimentSummary,
    HitRateSummary,
    SlotDistributionSummary,
)
from .simulation import ExperimentRunner

logger = logging.getLogger(__name__)


def make_cost_model(
    reroll_base: int = REROLL_BASE_COST, lock_base: int = LOCK_BASE_COST
) -> CostModel:
    """Factory helper that keeps callers decoupled from the cost class."""

    return CostModel(reroll_base=reroll_base, lock_base=lock_base)


@dataclass
class ExperimentResult:
    """Bundle containing an experiment config and its measured summary."""

    config: ExperimentConfig
    summary: ExperimentSummary
    seed: int
    compute_seconds: float


def run_experiment(
    config: ExperimentConfig,
    trial_count: int = DEFAULT_TRIAL_COUNT,
    simulation_seed: int = DEFAULT_SEED,
    cost_model: Optional[CostModel] = None,
    max_rerolls: Optional[int] = None,
) -> ExperimentResult:
    """Run one configured experiment on a freshly seeded runner.

    Parameters
    ----------
    config:
        Target buffs, lock policy, and optional starting slots.
    trial_count:
        Number of Monte Carlo trials.
    simulation_seed:
        Seed forwarded to the RNG used for the trials.
    cost_model:
        Optional override for the default custom module fees.
    max_rerolls:
        Optional per-trial reroll guard.

    Returns
    -------
    ExperimentResult
        The config with its summary and the wall-clock time spent.
    """

    runner = ExperimentRunner(seed=simulation_seed, cost_model=cost_model)
    start = perf_counter()
    summary = runner.run(
        config.target,
        config.policy,
        trial_count,
        preset=config.preset,
        max_rerolls=max_rerolls,
    )
    compute_seconds = perf_counter() - start
    logger.info("experiment %s finished in %.2fs", config.name, compute_seconds)
    return ExperimentResult(
        config=config,
        summary=summary,
        seed=simulation_seed,
        compute_seconds=compute_seconds,
    )


def run_experiments(
    configs: Sequence[ExperimentConfig],
    trial_count: int = DEFAULT_TRIAL_COUNT,
    simulation_seed: int = DEFAULT_SEED,
    cost_model: Optional[CostModel] = None,
) -> list[ExperimentResult]:
    """Run each experiment independently with the same seed."""

    return [
        run_experiment(config, trial_count, simulation_seed, cost_model)
        for config in configs
    ]


def slot_distribution(
    trial_count: int = DEFAULT_TRIAL_COUNT,
    simulation_seed: int = DEFAULT_SEED,
) -> SlotDistributionSummary:
    """Return the one/two/three populated-slot tally of single rerolls."""

    return ExperimentRunner(seed=simulation_seed).slot_distribution(trial_count)


def single_reroll_hit_rate(
    target_buffs: Optional[Iterable[Buff]] = None,
    trial_count: int = DEFAULT_TRIAL_COUNT,
    simulation_seed: int = DEFAULT_SEED,
) -> HitRateSummary:
    """Return how often one fresh reroll shows every target buff."""

    target = DEFAULT_HIT_RATE_TARGET if target_buffs is None else frozenset(target_buffs)
    return ExperimentRunner(seed=simulation_seed).single_reroll_hit_rate(target, trial_count)
