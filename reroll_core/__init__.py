"""Buff reroll panel model and Monte Carlo experiment runner."""

from .api import (
    ExperimentResult,
    make_cost_model,
    run_experiment,
    run_experiments,
    single_reroll_hit_rate,
    slot_distribution,
)
from .cost import DEFAULT_COST_MODEL, CostModel
from .data import (
    BUFF_CATALOG,
    BUFF_LABELS,
    BUFF_PERCENTS,
    DEFAULT_SEED,
    DEFAULT_TRIAL_COUNT,
    MAX_LOCK_COUNT,
    SLOT_COUNT,
    Buff,
    buff_names_to_buffs,
    format_buffs,
    load_experiment_presets,
)
from .errors import InvariantViolation, RerollLimitExceeded
from .experiments import (
    DEFAULT_EXPERIMENTS,
    ExperimentBuilder,
    adhoc_experiment,
    load_experiments,
    parse_lock_policy,
    select_experiments,
)
from .models import (
    ExperimentConfig,
    ExperimentSummary,
    HitRateSummary,
    LockPolicy,
    SlotDistributionSummary,
    SlotSeed,
    SlotState,
    SlotStatus,
)
from .panel import Panel
from .rng import RandomSource, ScriptedRandomSource, SeededRandomSource
from .sampling import SlotExtension, SlotExtensionPolicy, WeightedSampler
from .simulation import ExperimentRunner, reroll_until_found
from .statistics import RunningStatistics, StatisticsSink

__all__ = [
    "BUFF_CATALOG",
    "BUFF_LABELS",
    "BUFF_PERCENTS",
    "DEFAULT_COST_MODEL",
    "DEFAULT_EXPERIMENTS",
    "DEFAULT_SEED",
    "DEFAULT_TRIAL_COUNT",
    "MAX_LOCK_COUNT",
    "SLOT_COUNT",
    "Buff",
    "CostModel",
    "ExperimentBuilder",
    "ExperimentConfig",
    "ExperimentResult",
    "ExperimentRunner",
    "ExperimentSummary",
    "HitRateSummary",
    "InvariantViolation",
    "LockPolicy",
    "Panel",
    "RandomSource",
    "RerollLimitExceeded",
    "RunningStatistics",
    "ScriptedRandomSource",
    "SeededRandomSource",
    "SlotDistributionSummary",
    "SlotExtension",
    "SlotExtensionPolicy",
    "SlotSeed",
    "SlotState",
    "SlotStatus",
    "StatisticsSink",
    "WeightedSampler",
    "adhoc_experiment",
    "buff_names_to_buffs",
    "format_buffs",
    "load_experiment_presets",
    "load_experiments",
    "make_cost_model",
    "parse_lock_policy",
    "reroll_until_found",
    "run_experiment",
    "run_experiments",
    "select_experiments",
    "single_reroll_hit_rate",
    "slot_distribution",
]
