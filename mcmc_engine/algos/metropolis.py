import numpy as np
from typing import Callable, Optional, Tuple, Union
import threading

from .base import RunResult, Sampler, metropolis_accept
from .config import MetropolisConfig, SamplerType
from .proposal import ProposalSampler, RandomSource
from ..dists.base import DensityModel


def acceptance_ratio(current_density: float, proposed_density: float) -> float:
    """
    Metropolis ratio min(1, f(proposed) / f(current)) for a symmetric proposal.

    A current state with zero density always accepts, so a chain started (or
    pushed) outside the support can walk back in instead of sticking there.
    """
    if current_density == 0:
        return 1.0
    return min(1.0, proposed_density / current_density)


class MetropolisSampler(Sampler):
    """Metropolis-Hastings sampler with a Gaussian random-walk proposal."""
    sampler_type = SamplerType.METROPOLIS_HASTINGS

    def __init__(
        self,
        target: Union[DensityModel, Callable[[np.ndarray], float]],
        config: MetropolisConfig = None,
        sampler_type: SamplerType = SamplerType.METROPOLIS_HASTINGS
    ):
        """
        Args:
            target: Target density
            config: Step size and iteration counts. Defaults to MetropolisConfig()
            sampler_type: METROPOLIS_HASTINGS or RANDOM_WALK; recorded on the
                result, the kernel is the same
        """
        if sampler_type not in (SamplerType.METROPOLIS_HASTINGS, SamplerType.RANDOM_WALK):
            raise ValueError(f"MetropolisSampler cannot run {sampler_type}")
        super().__init__(target, config if config is not None else MetropolisConfig())
        self.sampler_type = sampler_type

    def _transition(
        self,
        current: np.ndarray,
        draws: ProposalSampler
    ) -> Tuple[np.ndarray, bool]:
        proposed = draws.proposal(current, self.config.step_size)
        ratio = acceptance_ratio(
            self.target.evaluate(current), self.target.evaluate(proposed)
        )
        if metropolis_accept(ratio, draws.uniform()):
            return proposed, True
        return current, False


def metropolis_hastings(
    target: Union[DensityModel, Callable[[np.ndarray], float]],
    initial_state,
    step_size: float,
    num_iterations: int,
    burn_in: int = 0,
    rng: RandomSource = None,
    cancel_event: Optional[threading.Event] = None
) -> RunResult:
    """Run Metropolis-Hastings and return the chain with acceptance bookkeeping."""
    config = MetropolisConfig(step_size=step_size, num_iterations=num_iterations, burn_in=burn_in)
    return MetropolisSampler(target, config).run(initial_state, rng=rng, cancel_event=cancel_event)


def random_walk_metropolis(
    target: Union[DensityModel, Callable[[np.ndarray], float]],
    initial_state,
    step_size: float,
    num_iterations: int,
    burn_in: int = 0,
    rng: RandomSource = None,
    cancel_event: Optional[threading.Event] = None
) -> RunResult:
    """Random-walk Metropolis; identical to metropolis_hastings with a symmetric proposal."""
    config = MetropolisConfig(step_size=step_size, num_iterations=num_iterations, burn_in=burn_in)
    sampler = MetropolisSampler(target, config, sampler_type=SamplerType.RANDOM_WALK)
    return sampler.run(initial_state, rng=rng, cancel_event=cancel_event)
