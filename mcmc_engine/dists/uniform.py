import numpy as np
from .base import DensityModel

class UniformDistribution(DensityModel):
    """Uniform distribution on an axis-aligned box [low, high]^D."""

    def __init__(self, low=-2.0, high=2.0):
        """
        Args:
            low: Lower bound, scalar or one per dimension
            high: Upper bound, scalar or one per dimension
        """
        self.low = np.atleast_1d(np.asarray(low, dtype=float))
        self.high = np.atleast_1d(np.asarray(high, dtype=float))
        if self.low.shape != self.high.shape:
            raise ValueError("low and high must have the same shape")
        if np.any(self.high <= self.low):
            raise ValueError(f"Empty support: low={self.low}, high={self.high}")
        self.dim = len(self.low)
        self._height = 1.0 / np.prod(self.high - self.low)

    def __call__(self, x: np.ndarray) -> float:
        """Constant inside the box (bounds included), zero outside."""
        x = np.asarray(x, dtype=float)
        inside = np.all((x >= self.low) & (x <= self.high))
        return float(self._height) if inside else 0.0

    def grad_log_density(self, x: np.ndarray) -> np.ndarray:
        """Flat inside the support."""
        return np.zeros(self.dim)
