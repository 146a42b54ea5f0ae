"""
MCMC Diagnostics.

Sample-quality metrics for a single chain:
- autocorrelation: autocorrelation function of one dimension
- effective_sample_size: single-lag ESS approximation
- dimension_summary / summarize_chain: per-dimension summary statistics
"""

import logging
import math
from dataclasses import dataclass
from typing import List, NamedTuple

import numpy as np

logger = logging.getLogger('mcmc_engine')


class AutocorrelationPoint(NamedTuple):
    lag: int
    value: float


@dataclass(frozen=True)
class DimensionSummary:
    """Summary statistics of one chain dimension. Quantiles are nearest-rank."""
    mean: float
    variance: float
    std: float
    median: float
    min: float
    max: float
    q25: float
    q75: float


@dataclass(frozen=True)
class ChainSummary:
    total_samples: int
    dimensions: List[DimensionSummary]
    effective_sample_size: float


def _series(chain, dimension: int) -> np.ndarray:
    """Values of one dimension of a chain as a float array."""
    chain = np.asarray(chain, dtype=float)
    if chain.size == 0:
        return np.empty(0)
    if chain.ndim == 1:
        chain = chain[:, np.newaxis]
    if not 0 <= dimension < chain.shape[1]:
        raise IndexError(f"dimension {dimension} out of range for a {chain.shape[1]}D chain")
    return chain[:, dimension]


def autocorrelation(chain, dimension: int = 0, max_lag: int = 50) -> List[AutocorrelationPoint]:
    """
    Autocorrelation function of one chain dimension.

    For each lag L in [0, min(max_lag, n - 1)]:
        rho(L) = sum_i (x_i - mean)(x_{i+L} - mean) / ((n - L) * variance)
    with mean and population variance taken once over the whole series, so
    rho(0) == 1. A constant series (a stuck chain) is reported as perfectly
    correlated at every lag.

    Args:
        chain: (n, dim) array of samples
        dimension: Coordinate to analyse
        max_lag: Largest lag to compute, clipped to n - 1

    Returns:
        List of (lag, value) pairs; empty for an empty chain
    """
    if max_lag < 0:
        raise ValueError(f"max_lag must be >= 0, got {max_lag}")
    x = _series(chain, dimension)
    n = x.shape[0]
    if n == 0:
        return []

    last_lag = min(max_lag, n - 1)
    centered = x - np.mean(x)
    variance = np.mean(centered ** 2)
    if variance == 0:
        logger.warning(f"Dimension {dimension} has zero variance; chain appears stuck")
        return [AutocorrelationPoint(lag, 1.0) for lag in range(last_lag + 1)]

    return [
        AutocorrelationPoint(
            lag,
            float(np.dot(centered[:n - lag], centered[lag:]) / ((n - lag) * variance)),
        )
        for lag in range(last_lag + 1)
    ]


def autocorrelation_at(chain, dimension: int = 0, lag: int = 10) -> float:
    """Autocorrelation at a single lag; 0.0 when the chain has no pairs that far apart."""
    x = _series(chain, dimension)
    n = x.shape[0]
    if lag >= n:
        return 0.0
    return autocorrelation(x, 0, max_lag=lag)[lag].value


def effective_sample_size(chain, dimension: int = 0, reference_lag: int = 10) -> float:
    """
    Approximate effective sample size n / (1 + 2 * rho(reference_lag)).

    This is a single-lag estimate, not the summed-autocorrelation ESS: it
    reads the autocorrelation at one fixed lag regardless of chain length or
    how fast the correlation decays. Chains shorter than reference_lag count
    as uncorrelated. Returns inf when rho <= -0.5, where the formula breaks
    down.
    """
    x = _series(chain, dimension)
    n = x.shape[0]
    if n == 0:
        return 0.0
    denominator = 1 + 2 * autocorrelation_at(x, 0, reference_lag)
    if denominator <= 0:
        return math.inf
    return n / denominator


def dimension_summary(chain, dimension: int = 0) -> DimensionSummary:
    """Mean, population variance/std, and nearest-rank order statistics of one dimension."""
    x = _series(chain, dimension)
    n = x.shape[0]
    if n == 0:
        raise ValueError("Cannot summarize an empty chain")

    mean = float(np.mean(x))
    variance = float(np.mean((x - mean) ** 2))
    ordered = np.sort(x)
    return DimensionSummary(
        mean=mean,
        variance=variance,
        std=math.sqrt(variance),
        median=float(ordered[n // 2]),
        min=float(ordered[0]),
        max=float(ordered[-1]),
        q25=float(ordered[int(math.floor(n * 0.25))]),
        q75=float(ordered[int(math.floor(n * 0.75))]),
    )


def summarize_chain(chain, reference_lag: int = 10) -> ChainSummary:
    """Per-dimension summaries plus the ESS of the first dimension."""
    chain = np.asarray(chain, dtype=float)
    if chain.ndim == 1:
        chain = chain[:, np.newaxis]
    if chain.shape[0] == 0:
        raise ValueError("Cannot summarize an empty chain")
    return ChainSummary(
        total_samples=chain.shape[0],
        dimensions=[dimension_summary(chain, d) for d in range(chain.shape[1])],
        effective_sample_size=effective_sample_size(chain, 0, reference_lag),
    )
