"""Statistics sinks that aggregate per-trial simulation outcomes."""

from __future__ import annotations

import math
from collections import Counter
from typing import Protocol

import numpy as np


class StatisticsSink(Protocol):
    """Interface the runner records terminal trial values into."""

    def record(self, value: float) -> None:
        ...

    def mean(self) -> float:
        ...

    def stddev(self) -> float:
        ...


class RunningStatistics:
    """Count, sum, and sum-of-squares accumulator with an integer histogram.

    Sinks built from disjoint batches of trials combine with :meth:`merge`
    regardless of order.
    """

    def __init__(self) -> None:
        self.count = 0
        self.total = 0.0
        self.total_squares = 0.0
        self.minimum = math.inf
        self.maximum = -math.inf
        self.histogram: Counter[int] = Counter()

    def record(self, value: float) -> None:
        self.count += 1
        self.total += value
        self.total_squares += value * value
        self.minimum = min(self.minimum, value)
        self.maximum = max(self.maximum, value)
        self.histogram[int(round(value))] += 1

    def record_many(self, values: np.ndarray | list[float]) -> None:
        """Record a batch of values at once."""

        array = np.asarray(values, dtype=np.float64)
        if array.size == 0:
            return
        self.count += int(array.size)
        self.total += float(array.sum())
        self.total_squares += float(np.square(array).sum())
        self.minimum = min(self.minimum, float(array.min()))
        self.maximum = max(self.maximum, float(array.max()))
        self.histogram.update(int(v) for v in np.rint(array))

    def mean(self) -> float:
        """Return the sample mean, or NaN when nothing has been recorded."""

        if self.count == 0:
            return math.nan
        return self.total / self.count

    def variance(self) -> float:
        """Return the sample variance (``n - 1`` denominator)."""

        if self.count < 2:
            return 0.0 if self.count == 1 else math.nan
        mean = self.total / self.count
        spread = self.total_squares - self.count * mean * mean
        return max(spread, 0.0) / (self.count - 1)

    def stddev(self) -> float:
        return math.sqrt(self.variance())

    def merge(self, other: RunningStatistics) -> RunningStatistics:
        """Return a new sink holding the union of both recorded batches."""

        merged = RunningStatistics()
        merged.count = self.count + other.count
        merged.total = self.total + other.total
        merged.total_squares = self.total_squares + other.total_squares
        merged.minimum = min(self.minimum, other.minimum)
        merged.maximum = max(self.maximum, other.maximum)
        merged.histogram = self.histogram + other.histogram
        return merged

    def sorted_histogram(self) -> dict[int, int]:
        return dict(sorted(self.histogram.items()))
