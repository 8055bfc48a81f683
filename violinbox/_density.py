"""Gaussian kernel density estimate clipped to the observed data range."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from scipy import stats

from ._errors import EmptySample
from ._options import validate_positive

logger = logging.getLogger(__name__)

GRID_SIZE = 100
GRID_CUT = 3.0  # evaluation grid extends this many bandwidths past the data


@dataclass(frozen=True)
class DensityCurve:
    """Paired ``values`` (ascending) and ``densities`` of equal length.

    A curve with a single point is degenerate: every value of the sample
    was identical and its density is 1.
    """

    values: np.ndarray
    densities: np.ndarray
    bandwidth: float | None = None

    def __len__(self) -> int:
        return len(self.values)

    @property
    def is_degenerate(self) -> bool:
        return len(self.values) == 1

    @property
    def peak(self) -> float:
        return float(np.max(self.densities))

    def at(self, x) -> np.ndarray | float:
        """Linearly interpolate the density at *x*."""
        if self.is_degenerate:
            if np.ndim(x) == 0:
                return float(self.densities[0])
            return np.full(np.shape(x), self.densities[0], dtype=float)
        result = np.interp(x, self.values, self.densities)
        return float(result) if np.ndim(x) == 0 else result


def silverman_bandwidth(sample: np.ndarray) -> float:
    """Silverman's rule of thumb, ``std * (4 / 3n) ** (1/5)``."""
    n = len(sample)
    return float(np.std(sample, ddof=1) * (4.0 / (3.0 * n)) ** 0.2)


def check_bandwidth(bandwidth) -> float | None:
    if bandwidth is None:
        return None
    return validate_positive(bandwidth, "bandwidth")


def estimate_density(sample, bandwidth: float | None = None,
                     gridsize: int = GRID_SIZE) -> DensityCurve:
    """Estimate the density of *sample* on ``[min(sample), max(sample)]``.

    Parameters
    ----------
    sample : array-like
        NaN-free values, at least one.
    bandwidth : float, optional
        Kernel standard deviation in data units. Defaults to
        :func:`silverman_bandwidth`.
    gridsize : int
        Number of evaluation points before clipping.
    """
    bandwidth = check_bandwidth(bandwidth)
    sample = np.asarray(sample, dtype=float).ravel()
    if sample.size == 0:
        raise EmptySample("cannot estimate the density of an empty sample")

    lo, hi = float(sample.min()), float(sample.max())
    if lo == hi:
        return DensityCurve(np.array([lo]), np.array([1.0]), bandwidth)

    h = bandwidth if bandwidth is not None else silverman_bandwidth(sample)
    logger.debug("kde bandwidth=%g (%s)", h,
                 "given" if bandwidth is not None else "silverman")

    # gaussian_kde scales its factor by the sample standard deviation
    kde = stats.gaussian_kde(sample, bw_method=h / np.std(sample, ddof=1))
    grid = np.linspace(lo - GRID_CUT * h, hi + GRID_CUT * h, gridsize)
    inside = (grid >= lo) & (grid <= hi)
    if inside.sum() < 2:
        values = np.array([lo, hi])
        densities = kde(values)
    else:
        values = grid[inside]
        densities = kde(values)
        values[0] = lo
        values[-1] = hi
    return DensityCurve(values, densities, h)
