"""
mcmc_engine - Markov Chain Monte Carlo sampling engine

Public API:
    Samplers:
        metropolis_hastings / random_walk_metropolis - Gaussian random-walk Metropolis
        hamiltonian_monte_carlo - Leapfrog HMC
        run_sampler - Run any SamplerType with a config dataclass
        MetropolisSampler, HMCSampler - Sampler classes

    Configuration:
        SamplerType - Enum of algorithms (METROPOLIS_HASTINGS, RANDOM_WALK, HMC)
        MetropolisConfig, HMCConfig - Frozen run parameters

    Gradients:
        numerical_gradient, GradientEstimator - Finite-difference grad log density

    Diagnostics:
        autocorrelation, effective_sample_size, dimension_summary, summarize_chain
        diagnose_run, log_diagnostics

    Densities:
        DensityModel, as_density_model and the providers in mcmc_engine.dists

Example:
    from mcmc_engine import hamiltonian_monte_carlo, autocorrelation
    from mcmc_engine.dists import NormalDistribution

    result = hamiltonian_monte_carlo(NormalDistribution(), [0.0], step_size=0.05,
                                     num_iterations=5000, burn_in=500, rng=42)
    acf = autocorrelation(result.chain, max_lag=50)
"""

from .algos import (
    SamplerType,
    MetropolisConfig,
    HMCConfig,
    RunResult,
    MetropolisSampler,
    HMCSampler,
    metropolis_hastings,
    random_walk_metropolis,
    hamiltonian_monte_carlo,
    build_sampler,
    run_sampler,
    GradientEstimator,
    numerical_gradient,
    ProposalSampler,
    AutocorrelationPoint,
    ChainSummary,
    DimensionSummary,
    autocorrelation,
    effective_sample_size,
    dimension_summary,
    summarize_chain,
)
from .dists import DensityModel, FunctionDensity, as_density_model
from .error_handling import (
    ConfigError,
    DensityError,
    SamplingCancelled,
    StateError,
    diagnose_run,
    log_diagnostics,
)

__version__ = "0.1.0"
