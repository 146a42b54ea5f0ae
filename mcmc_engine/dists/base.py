import numpy as np
from typing import Callable, Optional

from ..error_handling import DensityError


class DensityModel:
    """
    Base class for target densities that can be used with MCMC samplers.
    At minimum, must implement __call__ for density evaluation.
    Optionally can implement log_density and grad_log_density; samplers fall
    back to a numerical gradient when grad_log_density returns None.
    """
    def __call__(self, x: np.ndarray) -> float:
        """Evaluate the (possibly unnormalized) density at x."""
        raise NotImplementedError

    def log_density(self, x: np.ndarray) -> float:
        """Log of the density function."""
        return np.log(self(x))

    def grad_log_density(self, x: np.ndarray) -> Optional[np.ndarray]:
        """Gradient of the log density. None when no analytic form exists."""
        return None

    def evaluate(self, x: np.ndarray) -> float:
        """
        Evaluate the density and check it is finite and non-negative.

        Raises:
            DensityError: If the model returned a negative or non-finite value
        """
        value = float(self(x))
        if not np.isfinite(value) or value < 0:
            raise DensityError(
                f"{self.__class__.__name__} returned {value} at {x}; "
                "densities must be finite and non-negative"
            )
        return value


class FunctionDensity(DensityModel):
    """Density backed by a plain callable."""

    def __init__(
        self,
        pdf: Callable[..., float],
        grad_log_pdf: Optional[Callable[[np.ndarray], np.ndarray]] = None,
        unpack: bool = False
    ):
        """
        Args:
            pdf: Density function
            grad_log_pdf: Optional analytic gradient of the log density
            unpack: Call pdf(x0, x1, ...) instead of pdf(x)
        """
        self.pdf = pdf
        self.grad_log_pdf = grad_log_pdf
        self.unpack = unpack

    def __call__(self, x: np.ndarray) -> float:
        if self.unpack:
            return self.pdf(*x)
        return self.pdf(x)

    def grad_log_density(self, x: np.ndarray) -> Optional[np.ndarray]:
        if self.grad_log_pdf is None:
            return None
        return np.asarray(self.grad_log_pdf(x), dtype=float)


def as_density_model(
    target: Callable[..., float],
    unpack: bool = False
) -> DensityModel:
    """Return target unchanged if it is a DensityModel, otherwise wrap it."""
    if isinstance(target, DensityModel):
        return target
    if not callable(target):
        raise TypeError(f"Target density must be callable, got {type(target).__name__}")
    return FunctionDensity(target, unpack=unpack)
