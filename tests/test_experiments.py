"""
Unit tests for experiments.py and api.py - experiment configs and entry points.
"""
import importlib.util
import json
from pathlib import Path

import pytest

from reroll_core import (
    DEFAULT_EXPERIMENTS,
    Buff,
    ExperimentBuilder,
    LockPolicy,
    SlotSeed,
    adhoc_experiment,
    load_experiments,
    make_cost_model,
    parse_lock_policy,
    run_experiment,
    run_experiments,
    select_experiments,
    single_reroll_hit_rate,
    slot_distribution,
)

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "run_experiments.py"


class TestExperimentTable:
    """Tests for the built-in experiment configurations."""

    def test_default_names(self):
        assert set(DEFAULT_EXPERIMENTS) == {
            "attack-max-ammo",
            "attack-max-ammo-locking",
            "attack-locked-start",
        }

    def test_locked_start_preset(self):
        config = DEFAULT_EXPERIMENTS["attack-locked-start"]
        assert config.policy is LockPolicy.LOCK_ON_ACQUIRE
        assert config.preset == (SlotSeed(position=0, buff=Buff.ATTACK, locked=True),)
        assert config.target == frozenset({Buff.ATTACK, Buff.ELEMENTAL, Buff.MAX_AMMO})

    def test_builder_requires_target(self):
        with pytest.raises(ValueError):
            ExperimentBuilder("empty").build()

    def test_parse_lock_policy(self):
        assert parse_lock_policy("lock-on-acquire") is LockPolicy.LOCK_ON_ACQUIRE
        with pytest.raises(ValueError, match="Unknown lock policy"):
            parse_lock_policy("sometimes")

    def test_select_experiments(self):
        assert len(select_experiments(DEFAULT_EXPERIMENTS, None)) == len(DEFAULT_EXPERIMENTS)
        (config,) = select_experiments(DEFAULT_EXPERIMENTS, ["attack-max-ammo"])
        assert config.name == "attack-max-ammo"
        with pytest.raises(ValueError, match="Unknown experiment"):
            select_experiments(DEFAULT_EXPERIMENTS, ["nope"])

    def test_adhoc_experiment(self):
        config = adhoc_experiment(["CritRate", "HitRate"], "no-lock")
        assert config.target == frozenset({Buff.CRIT_RATE, Buff.HIT_RATE})
        assert config.policy is LockPolicy.NO_LOCK

    def test_load_experiments_merges_presets(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text(
            json.dumps({"defense": {"target": ["Defense"], "policy": "lock-on-acquire"}}),
            encoding="utf-8",
        )
        experiments = load_experiments(path)
        assert "attack-max-ammo" in experiments
        assert experiments["defense"].target == frozenset({Buff.DEFENSE})
        assert experiments["defense"].policy is LockPolicy.LOCK_ON_ACQUIRE

    def test_load_experiments_rejects_bad_policy(self, tmp_path):
        path = tmp_path / "presets.json"
        path.write_text(json.dumps({"odd": {"target": ["Defense"], "policy": "maybe"}}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_experiments(path)


class TestApi:
    """Tests for the high-level entry points."""

    def test_run_experiment(self):
        result = run_experiment(DEFAULT_EXPERIMENTS["attack-max-ammo"], trial_count=200, simulation_seed=5)
        assert result.summary.total_trials == 200
        assert result.seed == 5
        assert result.compute_seconds >= 0.0

    def test_run_experiments_with_cost_model(self):
        cheap = make_cost_model(reroll_base=1, lock_base=0)
        configs = [DEFAULT_EXPERIMENTS["attack-max-ammo-locking"]]
        (default,) = run_experiments(configs, trial_count=200, simulation_seed=2)
        (discounted,) = run_experiments(configs, trial_count=200, simulation_seed=2, cost_model=cheap)
        # Same seed, same draws: only the lock fees differ (2 + 3 vs 0 + 1).
        assert default.summary.mean - discounted.summary.mean == pytest.approx(4.0)

    def test_single_reroll_stats(self):
        distribution = slot_distribution(trial_count=1000, simulation_seed=1)
        assert sum(distribution.tally) == 1000
        hit_rate = single_reroll_hit_rate(trial_count=1000, simulation_seed=1)
        assert hit_rate.total_trials == 1000


class TestRunExperimentsScript:
    """Smoke tests for scripts/run_experiments.py."""

    @pytest.fixture
    def script(self):
        spec = importlib.util.spec_from_file_location("run_experiments", SCRIPT_PATH)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    def test_prints_table(self, script, capsys):
        script.main(["--trials", "50", "--experiment", "attack-max-ammo", "--single-reroll"])
        output = capsys.readouterr().out
        assert "attack-max-ammo" in output
        assert "mean_modules" in output
        assert "Slots shown" in output

    def test_adhoc_want(self, script, capsys):
        script.main(["--trials", "20", "--want", "Defense", "--policy", "lock-on-acquire"])
        assert "Defense/lock-on-acquire" in capsys.readouterr().out

    def test_unknown_experiment_exits(self, script):
        with pytest.raises(SystemExit):
            script.main(["--experiment", "nope"])
