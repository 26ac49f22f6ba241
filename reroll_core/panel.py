"""Three-slot buff panel with reroll, lock, and custom module accounting."""

from __future__ import annotations

from typing import Optional

from .cost import DEFAULT_COST_MODEL, CostModel
from .data import BUFF_CATALOG, MAX_LOCK_COUNT, SLOT_COUNT, Buff
from .errors import InvariantViolation
from .models import SlotState
from .rng import RandomSource
from .sampling import SlotExtensionPolicy, WeightedSampler


class Panel:
    """Buff panel state machine for a single experiment trial.

    Slots move ``Empty -> Free``, ``Free -> Free`` and ``Free -> Empty`` only
    inside :meth:`reroll`, and ``Free -> Locked`` only inside :meth:`lock`.
    Locked slots stay locked for the lifetime of the panel.
    """

    def __init__(
        self,
        sampler: WeightedSampler,
        extension_policy: SlotExtensionPolicy,
        cost_model: Optional[CostModel] = None,
    ) -> None:
        """Create an all-empty panel with zeroed counters.

        Parameters
        ----------
        sampler:
            Weighted sampler used for every buff draw.
        extension_policy:
            Decides per reroll whether slots 2 and 3 take part.
        cost_model:
            Custom module fees; defaults to reroll 1 and first lock 2.
        """

        self.sampler = sampler
        self.extension_policy = extension_policy
        self.cost = cost_model if cost_model is not None else DEFAULT_COST_MODEL
        self._slots: list[SlotState] = [SlotState.empty() for _ in range(SLOT_COUNT)]
        self._attempts = 0
        self._custom_modules = 0

    @classmethod
    def from_source(cls, source: RandomSource, cost_model: Optional[CostModel] = None) -> Panel:
        """Build a panel whose sampler and extension policy share ``source``."""

        return cls(WeightedSampler(source), SlotExtensionPolicy(source), cost_model)

    @property
    def slots(self) -> tuple[SlotState, ...]:
        return tuple(self._slots)

    @property
    def attempts(self) -> int:
        """Return the number of rerolls performed."""

        return self._attempts

    @property
    def custom_modules(self) -> int:
        """Return the cumulative custom modules spent on rerolls and locks."""

        return self._custom_modules

    @property
    def lock_count(self) -> int:
        return sum(1 for slot in self._slots if slot.is_locked)

    @property
    def populated_count(self) -> int:
        return sum(1 for slot in self._slots if not slot.is_empty)

    def slot(self, position: int) -> SlotState:
        self._check_position(position)
        return self._slots[position]

    def buffs(self) -> list[Buff]:
        """Return the buffs currently shown, in slot order."""

        return [slot.buff for slot in self._slots if slot.buff is not None]

    @staticmethod
    def _check_position(position: int) -> None:
        if not 0 <= position < SLOT_COUNT:
            raise InvariantViolation(
                f"Slot position must be in [0, {SLOT_COUNT}), received {position}"
            )

    def _draw_into(self, position: int, candidates: list[Buff]) -> None:
        buff = self.sampler.choose(candidates)
        candidates.remove(buff)
        self._slots[position] = SlotState.free(buff)

    def reroll(self) -> None:
        """Pay for and perform one reroll of every unlocked slot.

        Unlocked slots the extension policy leaves out are not shown this
        reroll and become empty.
        """

        lock_count = self.lock_count
        self._attempts += 1
        self._custom_modules += self.cost.reroll_cost(lock_count)

        locked_buffs = {slot.buff for slot in self._slots if slot.is_locked}
        candidates = [buff for buff in BUFF_CATALOG if buff not in locked_buffs]

        if not self._slots[0].is_locked:
            self._draw_into(0, candidates)

        extension = self.extension_policy.decide()
        for position, active in ((1, extension.second), (2, extension.third)):
            if self._slots[position].is_locked:
                continue
            if active:
                self._draw_into(position, candidates)
            else:
                self._slots[position] = SlotState.empty()

    def lock(self, position: int) -> None:
        """Lock the free slot at ``position`` and pay the escalating lock fee.

        Locking is a no-op when the slot is empty or already locked, or when
        ``MAX_LOCK_COUNT`` slots are already locked.

        Raises
        ------
        InvariantViolation
            If ``position`` is not a valid slot index.
        """

        self._check_position(position)
        slot = self._slots[position]
        if not slot.is_free:
            return
        lock_count = self.lock_count
        if lock_count >= MAX_LOCK_COUNT:
            return
        self._custom_modules += self.cost.lock_cost(lock_count)
        self._slots[position] = SlotState.locked(slot.buff)

    def set_buff(self, position: int, buff: Buff) -> None:
        """Force ``buff`` into ``position`` as a free slot without any charge.

        Used to seed a known starting condition; duplicate buffs across slots
        are the caller's responsibility.
        """

        self._check_position(position)
        self._slots[position] = SlotState.free(buff)

    def has_buff(self, buff: Buff) -> bool:
        return any(slot.buff == buff for slot in self._slots)

    def position_of(self, buff: Buff) -> Optional[int]:
        for position, slot in enumerate(self._slots):
            if slot.buff == buff:
                return position
        return None

    def contains_all(self, buffs: frozenset[Buff] | set[Buff]) -> bool:
        """Return True when every buff in ``buffs`` is shown on the panel."""

        return all(self.has_buff(buff) for buff in buffs)

    def __repr__(self) -> str:
        shown = ", ".join(
            "-" if slot.buff is None else f"{slot.buff.value}{'*' if slot.is_locked else ''}"
            for slot in self._slots
        )
        return (
            f"Panel([{shown}], attempts={self._attempts}, "
            f"custom_modules={self._custom_modules})"
        )
