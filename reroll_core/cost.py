"""Custom module cost modelling for rerolls and locks."""

from __future__ import annotations

from typing import Final

REROLL_BASE_COST: Final[int] = 1
LOCK_BASE_COST: Final[int] = 2


class CostModel:
    """Custom module fees charged by the panel.

    A reroll costs ``reroll_base`` plus one per locked slot. Locking a slot
    costs ``lock_base`` plus one per slot already locked, so with the defaults
    the first lock costs 2 and the second costs 3.
    """

    def __init__(self, reroll_base: int = REROLL_BASE_COST, lock_base: int = LOCK_BASE_COST) -> None:
        """Initialise the cost model with the base fees.

        Raises
        ------
        ValueError
            If either base fee is negative.
        """

        if reroll_base < 0 or lock_base < 0:
            raise ValueError("Custom module fees must be non-negative.")
        self.reroll_base = reroll_base
        self.lock_base = lock_base

    def reroll_cost(self, lock_count: int) -> int:
        """Return the fee for a reroll while ``lock_count`` slots are locked."""

        return self.reroll_base + lock_count

    def lock_cost(self, lock_count: int) -> int:
        """Return the fee for locking one more slot when ``lock_count`` are locked."""

        return self.lock_base + lock_count

    def __repr__(self) -> str:
        return f"CostModel(reroll_base={self.reroll_base}, lock_base={self.lock_base})"


DEFAULT_COST_MODEL: Final[CostModel] = CostModel()
