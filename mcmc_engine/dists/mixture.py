import numpy as np
from .base import DensityModel
from .normal import NormalDistribution

class MixtureDistribution(DensityModel):
    """Mixture of Gaussian distributions."""

    def __init__(
        self,
        means: list[np.ndarray],
        covs: list[np.ndarray],
        weights: list[float] = None
    ):
        """
        Initialize mixture distribution.

        Args:
            means: List of mean vectors for each component
            covs: List of covariance matrices for each component
            weights: Mixing weights. If None, defaults to uniform weights.
        """
        if len(means) == 0 or len(means) != len(covs):
            raise ValueError("Mixture needs one covariance per mean and at least one component")
        self.components = [
            NormalDistribution(mean, cov)
            for mean, cov in zip(means, covs)
        ]
        self.weights = (
            np.asarray(weights, dtype=float) if weights is not None
            else np.ones(len(means)) / len(means)
        )
        if len(self.weights) != len(self.components) or np.any(self.weights < 0):
            raise ValueError("Mixing weights must be non-negative, one per component")
        self.dim = self.components[0].dim

    @classmethod
    def bimodal(
        cls,
        mean1: float = -2.0,
        mean2: float = 2.0,
        std: float = 0.5,
        weight: float = 0.5
    ) -> "MixtureDistribution":
        """1D two-component mixture with a shared standard deviation."""
        return cls(
            means=[np.array([mean1]), np.array([mean2])],
            covs=[np.array([[std ** 2]]), np.array([[std ** 2]])],
            weights=[weight, 1 - weight]
        )

    def __call__(self, x: np.ndarray) -> float:
        """Evaluate the probability density function at x."""
        return float(np.sum([
            w * component(x)
            for w, component in zip(self.weights, self.components)
        ]))

    def grad_log_density(self, x: np.ndarray) -> np.ndarray:
        """Gradient of the log probability density function."""
        densities = np.array([component(x) for component in self.components])
        weighted_densities = self.weights * densities
        total_density = np.sum(weighted_densities)
        if total_density == 0:
            return np.zeros(self.dim)

        gradients = np.array([
            component.grad_log_density(x)
            for component in self.components
        ])

        # Responsibility-weighted component gradients
        return np.sum(
            weighted_densities[:, np.newaxis] * gradients,
            axis=0
        ) / total_density
