import math
import threading
import numpy as np
from typing import Callable, Optional, Tuple, Union

from .base import RunResult, Sampler, metropolis_accept
from .config import HMCConfig, SamplerType
from .gradient import LOG_FLOOR, GradientEstimator
from .proposal import ProposalSampler, RandomSource
from ..dists.base import DensityModel

GradientFn = Callable[[np.ndarray], np.ndarray]


def resolve_gradient(target: DensityModel, gradient: Optional[GradientFn] = None) -> GradientFn:
    """
    Pick the grad-log-density used by the leapfrog integrator.

    An explicit gradient wins; otherwise the target's analytic
    grad_log_density is used, falling back to finite differences wherever it
    returns None.
    """
    if gradient is not None:
        return gradient
    estimator = GradientEstimator(target)

    def grad_log_density(q: np.ndarray) -> np.ndarray:
        g = target.grad_log_density(q)
        if g is None:
            return estimator(q)
        return np.asarray(g, dtype=float)

    return grad_log_density


class HMCSampler(Sampler):
    """Hamiltonian Monte Carlo sampler."""
    sampler_type = SamplerType.HMC

    def __init__(
        self,
        target: Union[DensityModel, Callable[[np.ndarray], float]],
        config: HMCConfig = None,
        gradient: Optional[GradientFn] = None
    ):
        """
        Initialize the HMC sampler.

        Args:
            target: Target density
            config: Step size (epsilon), leapfrog steps (L) and iteration counts.
                Defaults to HMCConfig()
            gradient: Gradient of the log density, State -> State. If None, the
                target's grad_log_density or a numerical estimate is used
        """
        super().__init__(target, config if config is not None else HMCConfig())
        self.gradient = resolve_gradient(self.target, gradient)

    def _potential_energy(self, theta: np.ndarray) -> float:
        """U(theta) = -log(p(theta) + LOG_FLOOR)"""
        return -math.log(self.target.evaluate(theta) + LOG_FLOOR)

    @staticmethod
    def _kinetic_energy(r: np.ndarray) -> float:
        """K(r) = 0.5 * r.T @ r (identity mass matrix)"""
        return 0.5 * float(r @ r)

    def _compute_hamiltonian(self, theta: np.ndarray, r: np.ndarray) -> float:
        """Hamiltonian H(theta, r) = U(theta) + K(r)"""
        return self._potential_energy(theta) + self._kinetic_energy(r)

    def _leapfrog(
        self,
        theta_0: np.ndarray,
        r_0: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Leapfrog integrator for Hamiltonian dynamics.

        The gradient is evaluated afresh at every updated position. The final
        momentum is negated so the proposal is its own inverse.

        Args:
            theta_0: Initial position
            r_0: Initial momentum

        Returns:
            Final position and negated momentum after L steps
        """
        step_size = self.config.step_size
        n_steps = self.config.leapfrog_steps
        theta = theta_0.copy()
        r = r_0.copy()

        # Initial half step for momentum
        r = r + (step_size / 2) * self.gradient(theta)

        for step in range(n_steps):
            theta = theta + step_size * r

            # Full momentum update if not at the end
            if step < n_steps - 1:
                r = r + step_size * self.gradient(theta)

        # Final half step for momentum
        r = r + (step_size / 2) * self.gradient(theta)

        return theta, -r

    def _transition(
        self,
        current: np.ndarray,
        draws: ProposalSampler
    ) -> Tuple[np.ndarray, bool]:
        r_0 = draws.momentum(current.shape[0])
        theta_hat, r_hat = self._leapfrog(current, r_0)

        u = draws.uniform()
        # Diverged trajectories are rejected without evaluating the density
        if not (np.all(np.isfinite(theta_hat)) and np.all(np.isfinite(r_hat))):
            return current, False

        current_h = self._compute_hamiltonian(current, r_0)
        proposed_h = self._compute_hamiltonian(theta_hat, r_hat)
        log_accept_ratio = current_h - proposed_h
        if math.isnan(log_accept_ratio):
            return current, False

        ratio = 1.0 if log_accept_ratio >= 0 else math.exp(log_accept_ratio)
        if metropolis_accept(ratio, u):
            return theta_hat, True
        return current, False


def hamiltonian_monte_carlo(
    target: Union[DensityModel, Callable[[np.ndarray], float]],
    initial_state,
    step_size: float,
    num_iterations: int,
    burn_in: int = 0,
    leapfrog_steps: int = 10,
    gradient: Optional[GradientFn] = None,
    rng: RandomSource = None,
    cancel_event: Optional[threading.Event] = None
) -> RunResult:
    """Run HMC and return the chain with acceptance bookkeeping."""
    config = HMCConfig(
        step_size=step_size,
        num_iterations=num_iterations,
        burn_in=burn_in,
        leapfrog_steps=leapfrog_steps
    )
    return HMCSampler(target, config, gradient=gradient).run(
        initial_state, rng=rng, cancel_event=cancel_event
    )
