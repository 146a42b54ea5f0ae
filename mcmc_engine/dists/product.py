import numpy as np
from typing import Optional, Sequence
from .base import DensityModel, as_density_model

class ProductDensity(DensityModel):
    """
    Joint density of independent 1D factors, one per coordinate.

    Used to build 3D targets from 1D densities: f(x) = f_0(x_0) * f_1(x_1) * ...
    Each factor receives a length-1 state.
    """

    def __init__(self, factors: Sequence):
        if len(factors) == 0:
            raise ValueError("ProductDensity needs at least one factor")
        self.factors = [as_density_model(f) for f in factors]
        self.dim = len(self.factors)

    @classmethod
    def repeated(cls, factor, dim: int) -> "ProductDensity":
        """Same 1D density on every coordinate."""
        return cls([factor] * dim)

    def __call__(self, x: np.ndarray) -> float:
        value = 1.0
        for factor, xi in zip(self.factors, x):
            value *= factor(np.array([xi]))
        return float(value)

    def grad_log_density(self, x: np.ndarray) -> Optional[np.ndarray]:
        """Concatenated factor gradients, or None if any factor lacks one."""
        grads = []
        for factor, xi in zip(self.factors, x):
            g = factor.grad_log_density(np.array([xi]))
            if g is None:
                return None
            grads.append(np.asarray(g, dtype=float)[0])
        return np.array(grads)
