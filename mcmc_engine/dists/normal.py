import numpy as np
from scipy import stats
from .base import DensityModel

class NormalDistribution(DensityModel):
    """Multivariate normal distribution."""

    def __init__(self, mean: np.ndarray = None, cov: np.ndarray = None):
        """
        Initialize normal distribution.

        Args:
            mean: Mean vector. If None, defaults to a 1D zero vector.
            cov: Covariance matrix. If None, defaults to identity matrix.
        """
        self.mean = np.atleast_1d(np.asarray(mean, dtype=float)) if mean is not None else np.zeros(1)
        self.cov = np.asarray(cov, dtype=float) if cov is not None else np.eye(len(self.mean))
        self.inv_cov = np.linalg.inv(self.cov)
        self.dim = len(self.mean)
        self._mvn = stats.multivariate_normal(mean=self.mean, cov=self.cov)

    def __call__(self, x: np.ndarray) -> float:
        """Evaluate the probability density function at x."""
        return float(self._mvn.pdf(x))

    def log_density(self, x: np.ndarray) -> float:
        """Log of the probability density function."""
        return float(self._mvn.logpdf(x))

    def grad_log_density(self, x: np.ndarray) -> np.ndarray:
        """Gradient of the log probability density function."""
        return -self.inv_cov @ (np.asarray(x, dtype=float) - self.mean)

    @classmethod
    def correlated_2d(
        cls,
        mean_x: float = 0.0,
        mean_y: float = 0.0,
        std_x: float = 1.0,
        std_y: float = 1.0,
        correlation: float = 0.0
    ) -> "NormalDistribution":
        """Bivariate normal parameterized by marginal stds and correlation."""
        if not -1.0 < correlation < 1.0:
            raise ValueError(f"correlation must be in (-1, 1), got {correlation}")
        off = correlation * std_x * std_y
        cov = np.array([[std_x ** 2, off], [off, std_y ** 2]])
        return cls(mean=np.array([mean_x, mean_y]), cov=cov)
