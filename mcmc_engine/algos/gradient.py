import numpy as np
from typing import Callable

# Added to densities before taking logs so log(0) never occurs.
LOG_FLOOR = 1e-10


def numerical_gradient(
    density: Callable[[np.ndarray], float],
    position: np.ndarray,
    epsilon: float = 1e-5
) -> np.ndarray:
    """
    Central finite-difference gradient of log(density) at position.

    Each coordinate is perturbed by +/- epsilon on its own, with every other
    coordinate held at its value in position. Costs 2 * D density evaluations.
    A density that is zero around position gives a zero gradient through
    LOG_FLOOR.

    Args:
        density: Callable mapping a state to a non-negative density
        position: Point at which to differentiate
        epsilon: Half-width of the difference stencil

    Returns:
        Gradient with the same dimension as position
    """
    position = np.asarray(position, dtype=float)
    gradient = np.empty_like(position)

    for i in range(position.shape[0]):
        pos_plus = position.copy()
        pos_minus = position.copy()
        pos_plus[i] += epsilon
        pos_minus[i] -= epsilon

        gradient[i] = (
            np.log(density(pos_plus) + LOG_FLOOR) - np.log(density(pos_minus) + LOG_FLOOR)
        ) / (2 * epsilon)

    return gradient


class GradientEstimator:
    """Numerical grad-log-density of a fixed density, usable as State -> State."""

    def __init__(self, density: Callable[[np.ndarray], float], epsilon: float = 1e-5):
        if not epsilon > 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        self.density = density
        self.epsilon = epsilon

    def __call__(self, position: np.ndarray) -> np.ndarray:
        return numerical_gradient(self.density, position, self.epsilon)
