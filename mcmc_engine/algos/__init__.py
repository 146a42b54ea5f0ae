from .config import SamplerType, MetropolisConfig, HMCConfig
from .base import RunResult, Sampler, metropolis_accept
from .gradient import GradientEstimator, numerical_gradient, LOG_FLOOR
from .proposal import ProposalSampler
from .metropolis import (
    MetropolisSampler,
    acceptance_ratio,
    metropolis_hastings,
    random_walk_metropolis,
)
from .hmc import HMCSampler, hamiltonian_monte_carlo, resolve_gradient
from .dispatch import build_sampler, run_sampler
from .diagnostics import (
    AutocorrelationPoint,
    ChainSummary,
    DimensionSummary,
    autocorrelation,
    autocorrelation_at,
    dimension_summary,
    effective_sample_size,
    summarize_chain,
)

__all__ = [
    'SamplerType',
    'MetropolisConfig',
    'HMCConfig',
    'RunResult',
    'Sampler',
    'metropolis_accept',
    'GradientEstimator',
    'numerical_gradient',
    'LOG_FLOOR',
    'ProposalSampler',
    'MetropolisSampler',
    'acceptance_ratio',
    'metropolis_hastings',
    'random_walk_metropolis',
    'HMCSampler',
    'hamiltonian_monte_carlo',
    'resolve_gradient',
    'build_sampler',
    'run_sampler',
    'AutocorrelationPoint',
    'ChainSummary',
    'DimensionSummary',
    'autocorrelation',
    'autocorrelation_at',
    'dimension_summary',
    'effective_sample_size',
    'summarize_chain',
]
