import numpy as np
from .base import DensityModel

class BananaDistribution(DensityModel):
    """Banana-shaped (curved Gaussian) 2D distribution."""

    def __init__(self, a: float = 2.0, b: float = 0.1):
        """
        Initialize banana distribution.

        Args:
            a: Standard deviation of x0
            b: Curvature of x1 around b * x0**2
        """
        if a <= 0:
            raise ValueError(f"Scale 'a' must be positive, got {a}")
        self.a = a
        self.b = b
        self.dim = 2

    def __call__(self, x: np.ndarray) -> float:
        """Evaluate the probability density function at x."""
        return np.exp(self.log_density(x))

    def log_density(self, x: np.ndarray) -> float:
        """Log of the probability density function."""
        z1 = x[0] / self.a
        z2 = x[1] - self.b * x[0] ** 2
        return -0.5 * (z1 ** 2 + z2 ** 2) - np.log(2 * np.pi * self.a)

    def grad_log_density(self, x: np.ndarray) -> np.ndarray:
        """Gradient of the log probability density function."""
        z2 = x[1] - self.b * x[0] ** 2
        return np.array([
            -x[0] / self.a ** 2 + 2 * self.b * x[0] * z2,
            -z2,
        ])
