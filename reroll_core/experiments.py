"""Named experiment configurations and a small builder for new ones."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Final

from .data import Buff, buff_names_to_buffs, load_experiment_presets
from .models import ExperimentConfig, LockPolicy, SlotSeed


def parse_lock_policy(name: str) -> LockPolicy:
    """Return the lock policy for ``"no-lock"`` or ``"lock-on-acquire"``.

    Raises
    ------
    ValueError
        If ``name`` is not a known policy.
    """

    try:
        return LockPolicy(name)
    except ValueError as exc:
        raise ValueError(f"Unknown lock policy '{name}'") from exc


class ExperimentBuilder:
    """Fluent builder for :class:`ExperimentConfig`."""

    def __init__(self, name: str) -> None:
        self._name = name
        self._target: list[Buff] = []
        self._policy = LockPolicy.NO_LOCK
        self._preset: list[SlotSeed] = []
        self._description = ""

    def want(self, *buffs: Buff) -> ExperimentBuilder:
        self._target.extend(buffs)
        return self

    def policy(self, policy: LockPolicy) -> ExperimentBuilder:
        self._policy = policy
        return self

    def with_locking(self) -> ExperimentBuilder:
        return self.policy(LockPolicy.LOCK_ON_ACQUIRE)

    def start_with(self, position: int, buff: Buff, locked: bool = False) -> ExperimentBuilder:
        self._preset.append(SlotSeed(position=position, buff=buff, locked=locked))
        return self

    def describe(self, description: str) -> ExperimentBuilder:
        self._description = description
        return self

    def build(self) -> ExperimentConfig:
        if not self._target:
            raise ValueError(f"Experiment '{self._name}' needs at least one target buff.")
        return ExperimentConfig(
            name=self._name,
            target=frozenset(self._target),
            policy=self._policy,
            preset=tuple(self._preset),
            description=self._description,
        )


DEFAULT_EXPERIMENTS: Final[dict[str, ExperimentConfig]] = {
    config.name: config
    for config in (
        ExperimentBuilder("attack-max-ammo")
        .want(Buff.ATTACK, Buff.MAX_AMMO)
        .describe("Reroll without locking until Attack and Max Ammo show together.")
        .build(),
        ExperimentBuilder("attack-max-ammo-locking")
        .want(Buff.ATTACK, Buff.MAX_AMMO)
        .with_locking()
        .describe("Lock Attack and Max Ammo as soon as each appears.")
        .build(),
        ExperimentBuilder("attack-locked-start")
        .want(Buff.ATTACK, Buff.ELEMENTAL, Buff.MAX_AMMO)
        .with_locking()
        .start_with(0, Buff.ATTACK, locked=True)
        .describe("Start with Attack locked in the first slot, then lock on acquire.")
        .build(),
    )
}

# Targets for the single-reroll hit rate.
DEFAULT_HIT_RATE_TARGET: Final[frozenset[Buff]] = frozenset({Buff.ATTACK, Buff.CHARGE_SPEED})


def configs_from_presets(raw_presets: Mapping[str, Mapping[str, object]]) -> dict[str, ExperimentConfig]:
    """Convert parsed preset entries into experiment configs.

    Raises
    ------
    ValueError
        If an entry names an unknown lock policy.
    """

    configs: dict[str, ExperimentConfig] = {}
    for name, entry in raw_presets.items():
        builder = ExperimentBuilder(name)
        builder.want(*entry["target"])  # type: ignore[misc]
        builder.policy(parse_lock_policy(str(entry.get("policy", LockPolicy.NO_LOCK.value))))
        for position, buff, locked in entry.get("preset", []):  # type: ignore[union-attr]
            builder.start_with(position, buff, locked=locked)
        configs[name] = builder.build()
    return configs


def load_experiments(preset_path: str | Path | None = None) -> dict[str, ExperimentConfig]:
    """Return the built-in experiments merged with presets from ``preset_path``."""

    experiments = dict(DEFAULT_EXPERIMENTS)
    experiments.update(configs_from_presets(load_experiment_presets(preset_path)))
    return experiments


def select_experiments(
    experiments: Mapping[str, ExperimentConfig],
    names: Iterable[str] | None,
) -> list[ExperimentConfig]:
    """Return the experiments called ``names``, or all of them when omitted.

    Raises
    ------
    ValueError
        If an unknown experiment name is supplied.
    """

    if not names:
        return list(experiments.values())
    selected: list[ExperimentConfig] = []
    for name in names:
        try:
            selected.append(experiments[name])
        except KeyError as exc:
            raise ValueError(f"Unknown experiment '{name}'") from exc
    return selected


def adhoc_experiment(buff_names: Iterable[str], policy_name: str) -> ExperimentConfig:
    """Build an unnamed experiment from buff names and a policy name."""

    buffs = buff_names_to_buffs(buff_names)
    policy = parse_lock_policy(policy_name)
    name = "+".join(buff.value for buff in buffs) + f"/{policy.value}"
    return ExperimentBuilder(name).want(*buffs).policy(policy).build()
