"""
Pytest configuration and shared fixtures for mcmc_engine tests.
"""

import math

import numpy as np
import pytest

from mcmc_engine.dists import UniformDistribution


def standard_normal_pdf(x):
    """Normalized N(0, I) density on a state array."""
    x = np.asarray(x, dtype=float)
    return math.exp(-0.5 * float(x @ x)) / (2 * math.pi) ** (x.shape[0] / 2)


@pytest.fixture
def rng_seed():
    """Default RNG seed for reproducible tests."""
    return 42


@pytest.fixture
def standard_normal():
    """Plain-callable standard normal target (no analytic gradient)."""
    return standard_normal_pdf


@pytest.fixture
def uniform_target():
    """Uniform(-2, 2) in one dimension."""
    return UniformDistribution(-2.0, 2.0)


@pytest.fixture
def alternating_chain():
    """Chain of +1/-1 values: mean 0, variance 1, autocorrelation (-1)**lag."""
    return np.array([[1.0 if i % 2 == 0 else -1.0] for i in range(20)])
