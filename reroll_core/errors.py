"""Exception types raised by the reroll core."""

from __future__ import annotations


class InvariantViolation(RuntimeError):
    """Raised when a caller breaks a precondition of the panel or sampler."""


class RerollLimitExceeded(RuntimeError):
    """Raised when a trial exceeds its caller-supplied reroll guard."""

    def __init__(self, max_rerolls: int) -> None:
        super().__init__(f"Target not reached within {max_rerolls} rerolls.")
        self.max_rerolls = max_rerolls
