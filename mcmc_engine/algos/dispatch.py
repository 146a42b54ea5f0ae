"""
Sampler dispatch.

Maps each SamplerType to the sampler class that runs it. The table is closed:
adding an algorithm means adding an enum value, a Sampler subclass, and an
entry here.
"""

import threading
from typing import Callable, Optional, Union

import numpy as np

from .base import RunResult
from .config import HMCConfig, MetropolisConfig, SamplerType
from .hmc import GradientFn, HMCSampler
from .metropolis import MetropolisSampler
from .proposal import RandomSource
from ..dists.base import DensityModel


def build_sampler(
    sampler_type: SamplerType,
    target: Union[DensityModel, Callable[[np.ndarray], float]],
    config: Union[MetropolisConfig, HMCConfig] = None,
    gradient: Optional[GradientFn] = None
):
    """
    Construct the sampler for sampler_type.

    Raises:
        TypeError: If config does not match the sampler, or a gradient is
            given to a sampler that does not use one
    """
    sampler_type = SamplerType(sampler_type)

    if sampler_type is SamplerType.HMC:
        if config is not None and not isinstance(config, HMCConfig):
            raise TypeError(f"{sampler_type} needs an HMCConfig, got {type(config).__name__}")
        return HMCSampler(target, config, gradient=gradient)

    if config is not None and not isinstance(config, MetropolisConfig):
        raise TypeError(f"{sampler_type} needs a MetropolisConfig, got {type(config).__name__}")
    if gradient is not None:
        raise TypeError(f"{sampler_type} does not use a gradient")
    return MetropolisSampler(target, config, sampler_type=sampler_type)


def run_sampler(
    sampler_type: SamplerType,
    target: Union[DensityModel, Callable[[np.ndarray], float]],
    initial_state,
    config: Union[MetropolisConfig, HMCConfig] = None,
    rng: RandomSource = None,
    gradient: Optional[GradientFn] = None,
    cancel_event: Optional[threading.Event] = None
) -> RunResult:
    """Build the sampler for sampler_type and run it once."""
    sampler = build_sampler(sampler_type, target, config, gradient)
    return sampler.run(initial_state, rng=rng, cancel_event=cancel_event)
