"""Buff catalog, panel constants, and preset helpers."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Final


class Buff(Enum):
    """Buff kinds a panel slot can hold, in catalog order."""

    ELEMENTAL = "Elemental"
    HIT_RATE = "HitRate"
    MAX_AMMO = "MaxAmmo"
    ATTACK = "Attack"
    CHARGE_DAMAGE = "ChargeDamage"
    CHARGE_SPEED = "ChargeSpeed"
    CRIT_RATE = "CritRate"
    CRIT_DAMAGE = "CritDamage"
    DEFENSE = "Defense"

    @property
    def percent(self) -> float:
        return BUFF_PERCENTS[self]


BUFF_PERCENTS: Final[dict[Buff, float]] = {
    Buff.ELEMENTAL: 10.0,
    Buff.HIT_RATE: 12.0,
    Buff.MAX_AMMO: 12.0,
    Buff.ATTACK: 10.0,
    Buff.CHARGE_DAMAGE: 12.0,
    Buff.CHARGE_SPEED: 12.0,
    Buff.CRIT_RATE: 12.0,
    Buff.CRIT_DAMAGE: 10.0,
    Buff.DEFENSE: 10.0,
}

BUFF_CATALOG: Final[tuple[Buff, ...]] = tuple(Buff)

BUFF_LABELS: Final[dict[Buff, str]] = {
    Buff.ELEMENTAL: "Elemental Damage",
    Buff.HIT_RATE: "Hit Rate",
    Buff.MAX_AMMO: "Max Ammo",
    Buff.ATTACK: "Attack",
    Buff.CHARGE_DAMAGE: "Charge Damage",
    Buff.CHARGE_SPEED: "Charge Speed",
    Buff.CRIT_RATE: "Crit Rate",
    Buff.CRIT_DAMAGE: "Crit Damage",
    Buff.DEFENSE: "Defense",
}

BUFF_NAME_TO_BUFF: Final[dict[str, Buff]] = {buff.value: buff for buff in Buff}

SLOT_COUNT: Final[int] = 3
MAX_LOCK_COUNT: Final[int] = 2

# Activation chances on the [0, 100) scale.
SECOND_SLOT_PERCENT: Final[float] = 50.0
THIRD_SLOT_PERCENT: Final[float] = 30.0

DEFAULT_TRIAL_COUNT: Final[int] = 100_000
DEFAULT_SEED: Final[int] = 42


def buff_names_to_buffs(names: Iterable[str]) -> list[Buff]:
    """Map catalog names (``"MaxAmmo"``) or enum names (``"MAX_AMMO"``) to buffs.

    Raises
    ------
    ValueError
        If an unknown buff name is supplied.
    """

    buffs: list[Buff] = []
    for name in names:
        buff = BUFF_NAME_TO_BUFF.get(name)
        if buff is None:
            try:
                buff = Buff[name]
            except KeyError as exc:
                raise ValueError(f"Unknown buff name '{name}'") from exc
        buffs.append(buff)
    return buffs


def format_buffs(buffs: Iterable[Buff]) -> str:
    """Return a stable, human-readable label for a set of buffs."""

    ordered = sorted(buffs, key=BUFF_CATALOG.index)
    return " + ".join(BUFF_LABELS[buff] for buff in ordered) if ordered else "(none)"


def _parse_buff_list(raw: object) -> list[Buff] | None:
    if not isinstance(raw, list) or not all(isinstance(name, str) for name in raw):
        return None
    try:
        return buff_names_to_buffs(raw)
    except ValueError:
        return None


def load_experiment_presets(
    preset_path: str | Path | None,
) -> dict[str, dict[str, object]]:
    """Load raw experiment presets from the given JSON file.

    The file holds an object keyed by experiment name. Each entry needs a
    ``"target"`` list of buff names and may carry ``"policy"`` and ``"preset"``
    (a list of ``{"position", "buff", "locked"}`` objects). Malformed entries
    are skipped and a missing file yields an empty mapping.
    """

    if not preset_path:
        return {}

    path = Path(preset_path)
    try:
        raw_data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return {}

    if not isinstance(raw_data, Mapping):
        return {}

    presets: dict[str, dict[str, object]] = {}
    for name, entry in raw_data.items():
        if not isinstance(name, str) or not isinstance(entry, Mapping):
            continue

        target = _parse_buff_list(entry.get("target"))
        if not target:
            continue

        policy = entry.get("policy", "no-lock")
        if not isinstance(policy, str):
            continue

        seeds: list[tuple[int, Buff, bool]] = []
        raw_seeds = entry.get("preset", [])
        if not isinstance(raw_seeds, list):
            continue
        for raw_seed in raw_seeds:
            if not isinstance(raw_seed, Mapping):
                continue
            position = raw_seed.get("position")
            buff_name = raw_seed.get("buff")
            if not isinstance(position, int) or not isinstance(buff_name, str):
                continue
            if not 0 <= position < SLOT_COUNT:
                continue
            try:
                (buff,) = buff_names_to_buffs([buff_name])
            except ValueError:
                continue
            seeds.append((position, buff, bool(raw_seed.get("locked", False))))

        presets[name] = {"target": target, "policy": policy, "preset": seeds}

    return presets
