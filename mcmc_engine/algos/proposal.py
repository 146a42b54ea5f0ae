import numpy as np
from typing import Union

RandomSource = Union[None, int, np.random.SeedSequence, np.random.Generator]


class ProposalSampler:
    """
    Random draws for one sampler run.

    Wraps a numpy Generator owned by the run. Passing the same seed gives the
    same sequence of draws; a Generator passed in is used as-is and must not
    be shared with a concurrently running sampler.
    """

    def __init__(self, rng: RandomSource = None):
        self.rng = np.random.default_rng(rng)

    def normal(self, mean: float = 0.0, std: float = 1.0) -> float:
        """Single normal variate."""
        if std < 0:
            raise ValueError(f"std must be non-negative, got {std}")
        return float(self.rng.normal(mean, std))

    def uniform(self) -> float:
        """Uniform variate on [0, 1)."""
        return float(self.rng.random())

    def proposal(self, current: np.ndarray, step_size: float) -> np.ndarray:
        """Gaussian random-walk proposal: current + N(0, step_size) per coordinate."""
        if step_size < 0:
            raise ValueError(f"step_size must be non-negative, got {step_size}")
        return current + self.rng.normal(0.0, step_size, size=current.shape)

    def momentum(self, dim: int) -> np.ndarray:
        """Standard normal momentum, one draw per coordinate."""
        return self.rng.standard_normal(dim)
