"""
Error Handling and Validation Utilities for the MCMC samplers

This module provides the exception types raised by the samplers, the
validation functions behind the run configurations, and diagnostic tools
for finished runs.
"""

from typing import Any, Dict, Iterable

import numpy as np

import logging
logger = logging.getLogger('mcmc_engine')


# Reference band for random-walk acceptance rates: 0.234 is optimal in high
# dimensions, 0.44 in one dimension.
OPTIMAL_ACCEPTANCE_BAND = (0.234, 0.44)


class ConfigError(ValueError):
    """Invalid sampler run parameters."""


class StateError(ValueError):
    """Invalid initial state."""


class DensityError(ValueError):
    """A density model returned a negative or non-finite value."""


class SamplingCancelled(RuntimeError):
    """A run was stopped through its cancellation event."""


def _is_finite_number(value: Any) -> bool:
    try:
        return bool(np.isfinite(float(value)))
    except (TypeError, ValueError):
        return False


def validate_run_params(
    step_size: float,
    num_iterations: int,
    burn_in: int,
    leapfrog_steps: int = None
) -> None:
    """
    Validates that sampler run parameters are sensible.

    Args:
        step_size: Proposal / integration step size
        num_iterations: Number of recorded iterations
        burn_in: Number of discarded leading iterations
        leapfrog_steps: Leapfrog steps per HMC iteration (None for Metropolis)

    Raises:
        ConfigError: Listing every invalid parameter
    """
    errors = []

    if not _is_finite_number(step_size):
        errors.append(f"step_size must be a finite number, got {step_size!r}")
    elif step_size <= 0:
        errors.append(f"step_size must be > 0, got {step_size}")

    for name, value in (('num_iterations', num_iterations), ('burn_in', burn_in)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            errors.append(f"{name} must be an integer, got {value!r}")
        elif value < 0:
            errors.append(f"{name} must be >= 0")

    if leapfrog_steps is not None:
        if isinstance(leapfrog_steps, bool) or not isinstance(leapfrog_steps, (int, np.integer)):
            errors.append(f"leapfrog_steps must be an integer, got {leapfrog_steps!r}")
        elif leapfrog_steps < 1:
            errors.append("leapfrog_steps must be >= 1")

    if errors:
        raise ConfigError("Invalid sampler configuration:\n  " + "\n  ".join(errors))


def validate_state(state: Iterable[float]) -> np.ndarray:
    """
    Convert an initial state to a fresh 1D float array.

    Scalars are promoted to one-dimensional states.

    Raises:
        StateError: If the state is empty, not one-dimensional or not finite
    """
    try:
        arr = np.array(state, dtype=float)
    except (TypeError, ValueError) as exc:
        raise StateError(f"Initial state is not numeric: {state!r}") from exc
    arr = np.atleast_1d(arr)
    if arr.ndim != 1:
        raise StateError(f"Initial state must be one-dimensional, got shape {arr.shape}")
    if arr.size == 0:
        raise StateError("Initial state must have at least one coordinate")
    if not np.all(np.isfinite(arr)):
        raise StateError(f"Initial state must be finite, got {arr}")
    return arr


def diagnose_run(result, sampler_type=None) -> Dict[str, Any]:
    """
    Analyzes a finished run to identify common issues.

    Args:
        result: RunResult from a sampler
        sampler_type: Override for result.sampler_type

    Returns:
        diagnostics: Dictionary with issues, warnings, and info
    """
    from .algos.config import SamplerType

    diagnostics = {
        'issues': [],
        'warnings': [],
        'info': []
    }
    chain = result.chain
    sampler_type = sampler_type if sampler_type is not None else result.sampler_type

    diagnostics['info'].append(f"Total samples: {chain.shape[0]}")
    diagnostics['info'].append(f"Acceptance rate: {result.acceptance_rate:.1%}")

    if chain.shape[0] == 0:
        diagnostics['warnings'].append("Chain is empty - no post-burn-in iterations were run")
        return diagnostics

    diagnostics['info'].append(f"Number of dimensions: {chain.shape[1]}")

    if not np.all(np.isfinite(chain)):
        diagnostics['issues'].append(
            "Chain contains NaN or Inf values - sampler became unstable"
        )

    stuck = np.flatnonzero(np.var(chain, axis=0) < 1e-10)
    if chain.shape[0] > 1 and stuck.size > 0:
        diagnostics['warnings'].append(
            f"Dimension(s) {', '.join(str(d) for d in stuck)} appear stuck (near-zero variance)"
        )

    low, high = OPTIMAL_ACCEPTANCE_BAND
    if sampler_type in (SamplerType.METROPOLIS_HASTINGS, SamplerType.RANDOM_WALK):
        if result.acceptance_rate < low:
            diagnostics['warnings'].append(
                f"Acceptance rate {result.acceptance_rate:.1%} is below {low:.1%} - consider a smaller step size"
            )
        elif result.acceptance_rate > high:
            diagnostics['warnings'].append(
                f"Acceptance rate {result.acceptance_rate:.1%} is above {high:.0%} - consider a larger step size"
            )

    return diagnostics


def log_diagnostics(diagnostics: Dict[str, Any]) -> None:
    """Log diagnostics from diagnose_run."""
    for issue in diagnostics['issues']:
        logger.error(f"  - {issue}")

    for warning in diagnostics['warnings']:
        logger.warning(f"  - {warning}")

    for info in diagnostics['info']:
        logger.info(f"  - {info}")

    if not diagnostics['issues'] and not diagnostics['warnings']:
        logger.info("No issues detected")
