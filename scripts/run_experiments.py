"""Run the configured reroll experiments and print a summary table."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from reroll_core import (
    DEFAULT_SEED,
    DEFAULT_TRIAL_COUNT,
    ExperimentResult,
    adhoc_experiment,
    format_buffs,
    load_experiments,
    run_experiments,
    select_experiments,
    single_reroll_hit_rate,
    slot_distribution,
)


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--trials", type=int, default=DEFAULT_TRIAL_COUNT, help="Trials per experiment.")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Seed for the random source.")
    parser.add_argument(
        "--experiment",
        action="append",
        default=[],
        help="Name of a configured experiment to run (repeatable; default: all).",
    )
    parser.add_argument("--presets", type=Path, default=None, help="JSON file with extra experiments.")
    parser.add_argument(
        "--want",
        nargs="+",
        default=None,
        help="Run an ad-hoc experiment for these buff names instead of the configured ones.",
    )
    parser.add_argument(
        "--policy",
        default="no-lock",
        choices=("no-lock", "lock-on-acquire"),
        help="Lock policy for --want.",
    )
    parser.add_argument("--single-reroll", action="store_true", help="Also report single-reroll slot shares and hit rate.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def results_frame(results: Sequence[ExperimentResult]) -> pd.DataFrame:
    """Return one row per experiment result."""

    rows = [
        {
            "experiment": result.config.name,
            "target": format_buffs(result.config.target),
            "policy": result.config.policy.value,
            "trials": result.summary.total_trials,
            "mean_modules": round(result.summary.mean, 3),
            "stddev": round(result.summary.stddev, 3),
            "mean_rerolls": round(result.summary.mean_attempts, 3),
            "max_modules": result.summary.max_cost,
            "seconds": round(result.compute_seconds, 2),
        }
        for result in results
    ]
    return pd.DataFrame(rows)


def print_single_reroll_stats(trials: int, seed: int) -> None:
    distribution = slot_distribution(trials, seed)
    shares = ", ".join(
        f"{count} slot{'s' if count > 1 else ''}: {share:.2f}%"
        for count, share in enumerate(distribution.percentages, start=1)
    )
    print(f"Slots shown over {distribution.total_trials} rerolls -> {shares}")

    hit_rate = single_reroll_hit_rate(trial_count=trials, simulation_seed=seed)
    print(
        f"Out of {hit_rate.total_trials} rerolls, {hit_rate.hits} showed the wanted buffs "
        f"({hit_rate.probability * 100:.3f}%)."
    )


def main(argv: Sequence[str]) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.want:
            configs = [adhoc_experiment(args.want, args.policy)]
        else:
            configs = select_experiments(load_experiments(args.presets), args.experiment)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    if args.trials <= 0:
        raise SystemExit("--trials must be positive.")

    if args.single_reroll:
        print_single_reroll_stats(args.trials, args.seed)

    results = run_experiments(configs, trial_count=args.trials, simulation_seed=args.seed)
    with pd.option_context("display.width", 160, "display.max_columns", None):
        print(results_frame(results).to_string(index=False))


if __name__ == "__main__":
    main(sys.argv[1:])
