import logging
import threading
import numpy as np
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from .config import HMCConfig, MetropolisConfig, SamplerType
from .proposal import ProposalSampler, RandomSource
from ..dists.base import DensityModel, as_density_model
from ..error_handling import SamplingCancelled, validate_state

logger = logging.getLogger('mcmc_engine')


@dataclass(frozen=True)
class RunResult:
    """
    Output of a single sampler run.

    chain: (num_iterations, dim) array of recorded states, read-only
    acceptance_rate: accepted / (num_iterations + burn_in)
    acceptance_history: running acceptance rate at each recorded iteration
    """
    chain: np.ndarray
    acceptance_rate: float
    acceptance_history: np.ndarray
    sampler_type: SamplerType

    def __len__(self) -> int:
        return self.chain.shape[0]

    @property
    def dim(self) -> int:
        return self.chain.shape[1]


def metropolis_accept(ratio: float, u: float) -> bool:
    """Accept iff a uniform draw u falls below the (capped) acceptance ratio."""
    return u < min(1.0, ratio)


class Sampler:
    """
    Base class for the samplers.

    Subclasses implement _transition, which proposes and accepts/rejects one
    move. run() drives the burn-in and sampling iterations and does the
    bookkeeping shared by all samplers.
    """
    sampler_type: SamplerType = None

    def __init__(
        self,
        target: Union[DensityModel, Callable[[np.ndarray], float]],
        config: Union[MetropolisConfig, HMCConfig]
    ):
        """
        Args:
            target: Target density, a DensityModel or a plain callable on states
            config: Immutable run parameters
        """
        self.target = as_density_model(target)
        self.config = config

    def _transition(
        self,
        current: np.ndarray,
        draws: ProposalSampler
    ) -> Tuple[np.ndarray, bool]:
        """One iteration: returns (next state, whether the proposal was accepted)."""
        raise NotImplementedError

    def run(
        self,
        initial_state,
        rng: RandomSource = None,
        cancel_event: Optional[threading.Event] = None
    ) -> RunResult:
        """
        Run burn-in and sampling iterations from initial_state.

        Args:
            initial_state: Starting point (sequence of floats, or a scalar in 1D)
            rng: Seed or numpy Generator owned by this run
            cancel_event: Checked once per iteration; when set the run stops

        Returns:
            RunResult with one chain row per post-burn-in iteration

        Raises:
            SamplingCancelled: If cancel_event was set during the run
        """
        current = validate_state(initial_state)
        draws = ProposalSampler(rng)
        burn_in = self.config.burn_in
        total = self.config.total_iterations

        chain = np.empty((self.config.num_iterations, current.shape[0]))
        acceptance_history = np.empty(self.config.num_iterations)
        accepted = 0

        logger.debug(f"{self.sampler_type} run: {self.config}, dim={current.shape[0]}")

        for i in range(total):
            if cancel_event is not None and cancel_event.is_set():
                logger.warning(f"{self.sampler_type} run cancelled at iteration {i}/{total}")
                raise SamplingCancelled(f"Run cancelled at iteration {i} of {total}")

            current, is_accepted = self._transition(current, draws)
            if is_accepted:
                accepted += 1

            if i >= burn_in:
                chain[i - burn_in] = current
                acceptance_history[i - burn_in] = accepted / (i + 1)

        # No iterations: report 0.0 rather than 0/0
        acceptance_rate = accepted / total if total > 0 else 0.0
        logger.info(f"{self.sampler_type} acceptance rate: {acceptance_rate:.2%}")

        chain.flags.writeable = False
        acceptance_history.flags.writeable = False
        return RunResult(
            chain=chain,
            acceptance_rate=acceptance_rate,
            acceptance_history=acceptance_history,
            sampler_type=self.sampler_type,
        )
