"""Monte Carlo experiment runner for the buff reroll panel."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Sequence
from typing import Optional

import numpy as np

from .cost import CostModel
from .data import DEFAULT_SEED, DEFAULT_TRIAL_COUNT, SLOT_COUNT, Buff
from .errors import RerollLimitExceeded
from .models import (
    ExperimentSummary,
    HitRateSummary,
    LockPolicy,
    SlotDistributionSummary,
    SlotSeed,
)
from .panel import Panel
from .rng import RandomSource, SeededRandomSource
from .statistics import RunningStatistics, StatisticsSink

logger = logging.getLogger(__name__)

PanelFactory = Callable[[], Panel]

_PROGRESS_INTERVAL = 10_000


def apply_preset(panel: Panel, preset: Iterable[SlotSeed]) -> None:
    """Place seeded buffs on a fresh panel, locking those marked ``locked``.

    Seeded locks go through :meth:`Panel.lock` and pay the usual lock fee.
    """

    seeds = list(preset)
    for seed in seeds:
        panel.set_buff(seed.position, seed.buff)
    for seed in seeds:
        if seed.locked:
            panel.lock(seed.position)


def lock_desired(panel: Panel, target: frozenset[Buff]) -> None:
    """Lock every free slot, in slot order, that shows a desired buff."""

    for position, slot in enumerate(panel.slots):
        if slot.is_free and slot.buff in target:
            panel.lock(position)


def reroll_until_found(
    panel: Panel,
    target: frozenset[Buff],
    policy: LockPolicy = LockPolicy.NO_LOCK,
    max_rerolls: Optional[int] = None,
) -> Panel:
    """Reroll ``panel`` until every buff in ``target`` is shown at once.

    Under ``LOCK_ON_ACQUIRE`` desired buffs are locked right after each
    reroll. An unreachable target never terminates unless ``max_rerolls`` is
    given.

    Raises
    ------
    RerollLimitExceeded
        If ``max_rerolls`` rerolls were spent without reaching the target.
    """

    lock_on_acquire = policy is LockPolicy.LOCK_ON_ACQUIRE
    rerolls = 0
    while True:
        if max_rerolls is not None and rerolls >= max_rerolls:
            raise RerollLimitExceeded(max_rerolls)
        panel.reroll()
        rerolls += 1
        if lock_on_acquire:
            lock_desired(panel, target)
        if panel.contains_all(target):
            return panel


class ExperimentRunner:
    """Drive fresh panels through repeated trials and aggregate their cost."""

    def __init__(
        self,
        source: Optional[RandomSource] = None,
        seed: int = DEFAULT_SEED,
        cost_model: Optional[CostModel] = None,
        panel_factory: Optional[PanelFactory] = None,
        sink_factory: Callable[[], RunningStatistics] = RunningStatistics,
    ) -> None:
        """Initialise the runner.

        Parameters
        ----------
        source:
            Random source shared by every panel; a seeded one is built from
            ``seed`` when omitted.
        seed:
            Seed forwarded to :class:`random.Random` when ``source`` is omitted.
        cost_model:
            Optional custom module fee override for each panel.
        panel_factory:
            Optional override that builds each trial's fresh panel.
        sink_factory:
            Builds the statistics sink for each call to :meth:`run`.
        """

        self.source = source if source is not None else SeededRandomSource(rng=random.Random(seed))
        self.cost_model = cost_model
        self._panel_factory = panel_factory
        self._sink_factory = sink_factory

    def new_panel(self) -> Panel:
        if self._panel_factory is not None:
            return self._panel_factory()
        return Panel.from_source(self.source, self.cost_model)

    def run_trial(
        self,
        target: frozenset[Buff],
        policy: LockPolicy = LockPolicy.NO_LOCK,
        preset: Sequence[SlotSeed] = (),
        max_rerolls: Optional[int] = None,
    ) -> Panel:
        """Run one trial on a fresh panel and return the finished panel."""

        panel = self.new_panel()
        apply_preset(panel, preset)
        return reroll_until_found(panel, target, policy, max_rerolls=max_rerolls)

    def run(
        self,
        target_buffs: Iterable[Buff],
        policy: LockPolicy = LockPolicy.NO_LOCK,
        trial_count: int = DEFAULT_TRIAL_COUNT,
        preset: Sequence[SlotSeed] = (),
        max_rerolls: Optional[int] = None,
        sink: Optional[StatisticsSink] = None,
    ) -> ExperimentSummary:
        """Estimate the custom modules needed to show every target buff.

        Parameters
        ----------
        target_buffs:
            Buffs that must be shown simultaneously to end a trial.
        policy:
            Whether desired buffs are locked as soon as they appear.
        trial_count:
            Number of independent trials to run.
        preset:
            Optional starting slots placed on each fresh panel.
        max_rerolls:
            Optional per-trial guard against unreachable targets.
        sink:
            Optional extra sink that also receives every terminal cost.

        Returns
        -------
        ExperimentSummary
            Mean and standard deviation of the terminal custom module count.

        Raises
        ------
        ValueError
            If ``trial_count`` is not positive.
        """

        if trial_count <= 0:
            raise ValueError("trial_count must be positive.")

        target = frozenset(target_buffs)
        terminal_costs = np.zeros(trial_count, dtype=np.int64)
        attempts = np.zeros(trial_count, dtype=np.int64)
        for trial in range(trial_count):
            panel = self.run_trial(target, policy, preset, max_rerolls=max_rerolls)
            terminal_costs[trial] = panel.custom_modules
            attempts[trial] = panel.attempts
            if sink is not None:
                sink.record(panel.custom_modules)
            if (trial + 1) % _PROGRESS_INTERVAL == 0:
                logger.debug(
                    "%d/%d trials, running mean %.3f",
                    trial + 1,
                    trial_count,
                    terminal_costs[: trial + 1].mean(),
                )

        costs = self._sink_factory()
        costs.record_many(terminal_costs)
        summary = ExperimentSummary(
            mean=costs.mean(),
            stddev=costs.stddev(),
            total_trials=trial_count,
            mean_attempts=float(attempts.mean()),
            min_cost=int(costs.minimum),
            max_cost=int(costs.maximum),
            cost_histogram=costs.sorted_histogram(),
        )
        logger.info(
            "policy=%s target=%s mean=%.3f stddev=%.3f over %d trials",
            policy.value,
            sorted(buff.value for buff in target),
            summary.mean,
            summary.stddev,
            trial_count,
        )
        return summary

    def slot_distribution(self, trial_count: int = DEFAULT_TRIAL_COUNT) -> SlotDistributionSummary:
        """Tally how many slots a single reroll of a fresh panel populates."""

        if trial_count <= 0:
            raise ValueError("trial_count must be positive.")

        tally = [0] * SLOT_COUNT
        for _ in range(trial_count):
            panel = self.new_panel()
            panel.reroll()
            tally[panel.populated_count - 1] += 1
        logger.info("slot distribution tally %s over %d trials", tally, trial_count)
        return SlotDistributionSummary(tally=tally, total_trials=trial_count)

    def single_reroll_hit_rate(
        self,
        target_buffs: Iterable[Buff],
        trial_count: int = DEFAULT_TRIAL_COUNT,
    ) -> HitRateSummary:
        """Count single fresh rerolls that show every target buff at once."""

        if trial_count <= 0:
            raise ValueError("trial_count must be positive.")

        target = frozenset(target_buffs)
        hits = 0
        for _ in range(trial_count):
            panel = self.new_panel()
            panel.reroll()
            if panel.contains_all(target):
                hits += 1
        logger.info("hit rate %d/%d for %s", hits, trial_count, sorted(b.value for b in target))
        return HitRateSummary(hits=hits, total_trials=trial_count)
