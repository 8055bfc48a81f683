"""Robust summary statistics for a compact box plot."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np

from ._errors import EmptySample

logger = logging.getLogger(__name__)

WHISKER_FACTOR = 1.5
NOTCH_FACTOR = 1.57


@dataclass(frozen=True)
class RobustStats:
    """Quartiles, whiskers, notch and outliers of one sample.

    Everything except ``mean`` and ``median`` is ``None`` for a sample of
    size one, which signals callers to draw a single point. A whisker side
    is ``None`` when no value lies inside that fence.
    """

    n: int
    mean: float
    median: float
    quartiles: tuple[float, float, float] | None = None
    iqr: float | None = None
    whiskers: tuple[float | None, float | None] | None = None
    notch: tuple[float, float] | None = None
    outliers: np.ndarray = field(default_factory=lambda: np.empty(0))

    @property
    def is_single(self) -> bool:
        return self.quartiles is None

    @property
    def has_whiskers(self) -> bool:
        return (self.whiskers is not None
                and self.whiskers[0] is not None
                and self.whiskers[1] is not None)


def quartiles(sample: np.ndarray) -> tuple[float, float, float]:
    """Linear-interpolation (R-7) quartiles."""
    q1, q2, q3 = np.quantile(sample, [0.25, 0.5, 0.75])
    return float(q1), float(q2), float(q3)


def _whisker_bounds(sample, q1, q3, iqr):
    """Whisker ends: the most extreme values strictly inside the fences, or
    ``None`` on a side with no such value."""
    low_fence = q1 - WHISKER_FACTOR * iqr
    high_fence = q3 + WHISKER_FACTOR * iqr
    if iqr == 0:
        # fences coincide with the box; whiskers collapse onto it
        above = sample[sample >= low_fence]
        below = sample[sample <= high_fence]
    else:
        above = sample[sample > low_fence]
        below = sample[sample < high_fence]
    low = max(low_fence, float(above.min())) if above.size else None
    high = min(high_fence, float(below.max())) if below.size else None
    return low, high


def compute_stats(sample) -> RobustStats:
    """Compute :class:`RobustStats` for a NaN-free sample."""
    sample = np.asarray(sample, dtype=float).ravel()
    n = sample.size
    if n == 0:
        raise EmptySample("cannot compute statistics of an empty sample")
    mean = float(np.mean(sample))

    if n == 1:
        value = float(sample[0])
        return RobustStats(n=1, mean=value, median=value)

    q1, q2, q3 = quartiles(sample)
    iqr = q3 - q1
    low, high = _whisker_bounds(sample, q1, q3, iqr)

    beyond = np.zeros(n, dtype=bool)
    if low is not None:
        beyond |= sample < low
    if high is not None:
        beyond |= sample > high

    offset = NOTCH_FACTOR * iqr / np.sqrt(n)
    stats = RobustStats(
        n=n, mean=mean, median=q2,
        quartiles=(q1, q2, q3), iqr=iqr,
        whiskers=(low, high),
        notch=(q2 - offset, q2 + offset),
        outliers=sample[beyond],
    )
    logger.debug("stats n=%d q=(%g, %g, %g) whiskers=%s outliers=%d",
                 n, q1, q2, q3, stats.whiskers, stats.outliers.size)
    return stats
