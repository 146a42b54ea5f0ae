import argparse
import logging
import numpy as np
from typing import List, Optional

from .algos import (
    GradientEstimator,
    HMCConfig,
    MetropolisConfig,
    RunResult,
    SamplerType,
    autocorrelation,
    run_sampler,
    summarize_chain,
)
from .dists import (
    BananaDistribution,
    DensityModel,
    MixtureDistribution,
    NormalDistribution,
    ProductDensity,
    UniformDistribution,
)
from .error_handling import ConfigError, diagnose_run, log_diagnostics

SAMPLERS = {
    "metropolis-hastings": SamplerType.METROPOLIS_HASTINGS,
    "random-walk": SamplerType.RANDOM_WALK,
    "hmc": SamplerType.HMC,
}

ONE_D_DISTRIBUTIONS = ["normal", "uniform", "bimodal"]
TWO_D_DISTRIBUTIONS = ["normal", "banana", "mixture"]


def create_target_distribution(name: str, dim: int, **kwargs) -> DensityModel:
    """
    Create a target distribution based on name and parameters.

    3D targets are products of the 1D distribution on each coordinate.
    """
    if dim not in (1, 2, 3):
        raise ValueError(f"Only 1, 2 or 3 dimensions are supported, got {dim}")
    if dim == 3:
        return ProductDensity.repeated(create_target_distribution(name, 1, **kwargs), 3)

    if dim == 1 and name not in ONE_D_DISTRIBUTIONS:
        raise ValueError(f"Unknown 1D distribution: {name} (choose from {', '.join(ONE_D_DISTRIBUTIONS)})")
    if dim == 2 and name not in TWO_D_DISTRIBUTIONS:
        raise ValueError(f"Unknown 2D distribution: {name} (choose from {', '.join(TWO_D_DISTRIBUTIONS)})")

    if name == "normal":
        if dim == 1:
            return NormalDistribution(mean=[kwargs.get("mean", 0.0)], cov=[[kwargs.get("std", 1.0) ** 2]])
        return NormalDistribution.correlated_2d(correlation=kwargs.get("correlation", 0.0))
    elif name == "uniform":
        return UniformDistribution(kwargs.get("low", -2.0), kwargs.get("high", 2.0))
    elif name == "bimodal":
        return MixtureDistribution.bimodal()
    elif name == "banana":
        return BananaDistribution(a=kwargs.get("a", 2.0), b=kwargs.get("b", 0.1))
    else:  # mixture
        means = [np.array([-2.0, -2.0]), np.array([2.0, 2.0])]
        covs = [np.eye(2) * 0.5, np.eye(2) * 0.5]
        return MixtureDistribution(means, covs)


def run_mcmc(
    target: DensityModel,
    initial_state: np.ndarray,
    sampler_type: SamplerType = SamplerType.METROPOLIS_HASTINGS,
    iterations: int = 1000,
    burn_in: int = 100,
    step_size: float = 0.5,
    hmc_step_size: Optional[float] = None,
    leapfrog_steps: int = 10,
    seed: Optional[int] = None
) -> RunResult:
    """
    Run MCMC sampling using either Metropolis or HMC.

    Args:
        target: Target distribution
        initial_state: Starting point
        sampler_type: Algorithm to run
        iterations: Number of recorded iterations
        burn_in: Number of discarded leading iterations
        step_size: Proposal scale for Metropolis
        hmc_step_size: Leapfrog step for HMC. Defaults to step_size / 10
        leapfrog_steps: Number of leapfrog steps for HMC
        seed: Seed for the run's random generator

    Returns:
        RunResult of the run
    """
    if sampler_type is SamplerType.HMC:
        config = HMCConfig(
            step_size=hmc_step_size if hmc_step_size is not None else step_size * 0.1,
            num_iterations=iterations,
            burn_in=burn_in,
            leapfrog_steps=leapfrog_steps
        )
        # Numerical gradient for every target, analytic or not
        return run_sampler(sampler_type, target, initial_state, config,
                           rng=seed, gradient=GradientEstimator(target))

    config = MetropolisConfig(step_size=step_size, num_iterations=iterations, burn_in=burn_in)
    return run_sampler(sampler_type, target, initial_state, config, rng=seed)


def format_summary(result: RunResult, max_lag: int = 0) -> List[str]:
    """Render acceptance rate, per-dimension statistics, ESS and optional ACF as text lines."""
    summary = summarize_chain(result.chain)
    labels = ["X", "Y", "Z"]
    lines = [
        "Summary Statistics:",
        f"Total Samples: {summary.total_samples}",
        f"Acceptance Rate: {result.acceptance_rate:.2%}",
        f"Effective Sample Size: {round(summary.effective_sample_size)}",
    ]
    for label, stats in zip(labels, summary.dimensions):
        lines.append(
            f"{label}: mean={stats.mean:.4f} std={stats.std:.4f} median={stats.median:.4f} "
            f"min={stats.min:.4f} max={stats.max:.4f} q25={stats.q25:.4f} q75={stats.q75:.4f}"
        )
    if max_lag > 0:
        lines.append("Autocorrelation (dimension X):")
        lines.extend(f"  lag {p.lag:3d}: {p.value:+.4f}" for p in autocorrelation(result.chain, 0, max_lag))
    return lines


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Run MCMC sampling")
    parser.add_argument("--distribution", type=str, default="normal",
                       choices=sorted(set(ONE_D_DISTRIBUTIONS + TWO_D_DISTRIBUTIONS)),
                       help="Target distribution to sample from")
    parser.add_argument("--dim", type=int, default=1, choices=[1, 2, 3],
                       help="Dimension of the probability space")
    parser.add_argument("--sampler", type=str, default="metropolis-hastings",
                       choices=sorted(SAMPLERS),
                       help="MCMC sampler to use")
    parser.add_argument("--iterations", type=int, default=1000,
                       help="Number of recorded MCMC iterations")
    parser.add_argument("--burn-in", type=int, default=100,
                       help="Number of discarded burn-in iterations")
    parser.add_argument("--step-size", type=float, default=0.5,
                       help="Proposal scale for Metropolis")
    parser.add_argument("--hmc-step-size", type=float, default=None,
                       help="Leapfrog step size for HMC (default: step size / 10)")
    parser.add_argument("--leapfrog-steps", type=int, default=10,
                       help="Number of leapfrog steps for HMC")
    parser.add_argument("--initial", type=float, nargs="+", default=None,
                       help="Initial state, one value per dimension (default: origin)")
    parser.add_argument("--seed", type=int, default=None,
                       help="Random seed")
    parser.add_argument("--max-lag", type=int, default=0,
                       help="Print the autocorrelation function up to this lag")
    parser.add_argument("--verbose", action="store_true",
                       help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        target = create_target_distribution(args.distribution, args.dim)
    except ValueError as exc:
        parser.error(str(exc))

    initial_state = np.zeros(args.dim) if args.initial is None else np.array(args.initial)
    if initial_state.shape != (args.dim,):
        parser.error(f"--initial needs {args.dim} value(s)")
    if args.iterations < 1:
        parser.error("--iterations must be >= 1")

    try:
        result = run_mcmc(
            target=target,
            initial_state=initial_state,
            sampler_type=SAMPLERS[args.sampler],
            iterations=args.iterations,
            burn_in=args.burn_in,
            step_size=args.step_size,
            hmc_step_size=args.hmc_step_size,
            leapfrog_steps=args.leapfrog_steps,
            seed=args.seed
        )
    except ConfigError as exc:
        parser.error(str(exc))

    log_diagnostics(diagnose_run(result))
    print("\n".join(format_summary(result, args.max_lag)))
    return result


if __name__ == "__main__":
    main()
