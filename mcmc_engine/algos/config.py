"""
Sampler selection and run parameters.

SamplerType is the closed set of algorithms the engine runs. Run parameters
are frozen dataclasses passed per call and validated on construction.
"""

from dataclasses import dataclass
from enum import IntEnum

from ..error_handling import validate_run_params


class SamplerType(IntEnum):
    """Enumeration of available samplers."""
    METROPOLIS_HASTINGS = 0  # MH with symmetric Gaussian proposal
    RANDOM_WALK = 1          # Same kernel as METROPOLIS_HASTINGS
    HMC = 2                  # Hamiltonian Monte Carlo, leapfrog integrator

    def __str__(self):
        return self.name.replace('_', ' ').title()

    @property
    def uses_gradient(self) -> bool:
        return self is SamplerType.HMC


@dataclass(frozen=True)
class MetropolisConfig:
    """Immutable run parameters for the Metropolis samplers."""
    step_size: float = 0.5
    num_iterations: int = 1000
    burn_in: int = 0

    def __post_init__(self):
        validate_run_params(self.step_size, self.num_iterations, self.burn_in)

    @property
    def total_iterations(self) -> int:
        return self.num_iterations + self.burn_in


@dataclass(frozen=True)
class HMCConfig:
    """Immutable run parameters for Hamiltonian Monte Carlo."""
    step_size: float = 0.05
    num_iterations: int = 1000
    burn_in: int = 0
    leapfrog_steps: int = 10

    def __post_init__(self):
        validate_run_params(
            self.step_size, self.num_iterations, self.burn_in, self.leapfrog_steps
        )

    @property
    def total_iterations(self) -> int:
        return self.num_iterations + self.burn_in

    @property
    def trajectory_length(self) -> float:
        """Integration time per iteration (step_size * leapfrog_steps)."""
        return self.step_size * self.leapfrog_steps
