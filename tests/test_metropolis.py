"""
Metropolis Tests - random-walk Metropolis-Hastings runs

Run with: pytest tests/test_metropolis.py -v
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from mcmc_engine import (
    DensityError,
    MetropolisConfig,
    MetropolisSampler,
    SamplerType,
    SamplingCancelled,
    StateError,
    metropolis_hastings,
    random_walk_metropolis,
)
from mcmc_engine.algos.metropolis import acceptance_ratio
from mcmc_engine.dists import NormalDistribution


class TestAcceptanceRatio:

    def test_capped_at_one(self):
        assert acceptance_ratio(0.1, 0.5) == 1.0

    def test_density_ratio(self):
        assert acceptance_ratio(0.4, 0.1) == pytest.approx(0.25)

    def test_zero_proposal_density_rejects(self):
        assert acceptance_ratio(0.4, 0.0) == 0.0

    def test_zero_current_density_always_accepts(self):
        """A chain sitting at zero density accepts any move instead of producing NaN."""
        assert acceptance_ratio(0.0, 0.0) == 1.0
        assert acceptance_ratio(0.0, 0.3) == 1.0


class TestMetropolisRun:

    def test_chain_length_excludes_burn_in(self, standard_normal, rng_seed):
        result = metropolis_hastings(standard_normal, [0.0], step_size=1.0,
                                     num_iterations=300, burn_in=100, rng=rng_seed)
        assert result.chain.shape == (300, 1)
        assert result.acceptance_history.shape == (300,)
        assert len(result) == 300

    def test_acceptance_rate_in_unit_interval(self, standard_normal, rng_seed):
        for step_size in (0.01, 1.0, 50.0):
            result = metropolis_hastings(standard_normal, [0.0], step_size=step_size,
                                         num_iterations=200, burn_in=20, rng=rng_seed)
            assert 0.0 <= result.acceptance_rate <= 1.0
            assert np.all((result.acceptance_history >= 0) & (result.acceptance_history <= 1))

    def test_acceptance_rate_counts_burn_in(self, standard_normal, rng_seed):
        """The final history entry is accepted / (i + 1) at the last iteration, i.e. the overall rate."""
        result = metropolis_hastings(standard_normal, [0.0], step_size=2.0,
                                     num_iterations=400, burn_in=100, rng=rng_seed)
        assert result.acceptance_history[-1] == pytest.approx(result.acceptance_rate)

    def test_tiny_step_nearly_always_accepts(self, standard_normal, rng_seed):
        result = metropolis_hastings(standard_normal, [0.0], step_size=1e-6,
                                     num_iterations=1000, rng=rng_seed)
        assert result.acceptance_rate > 0.95

    def test_samples_standard_normal(self, rng_seed):
        result = metropolis_hastings(NormalDistribution(), [0.0], step_size=2.5,
                                     num_iterations=5000, burn_in=500, rng=rng_seed)
        assert abs(result.chain[:, 0].mean()) < 0.2
        assert abs(result.chain[:, 0].std() - 1.0) < 0.2

    def test_uniform_support_is_respected(self, uniform_target):
        """Proposals outside [-2, 2] have zero density and are always rejected."""
        result = metropolis_hastings(uniform_target, [0.0], step_size=0.5,
                                     num_iterations=1000, burn_in=0, rng=0)
        assert np.all(result.chain >= -2.0)
        assert np.all(result.chain <= 2.0)
        assert result.acceptance_rate < 1.0

    def test_chain_started_outside_support_moves(self, uniform_target):
        """Zero density at the current state accepts the first proposal."""
        result = metropolis_hastings(uniform_target, [5.0], step_size=0.5,
                                     num_iterations=50, rng=3)
        assert result.acceptance_history[0] == 1.0
        assert result.chain[0, 0] != 5.0

    def test_multidimensional(self, standard_normal, rng_seed):
        result = metropolis_hastings(standard_normal, [0.0, 0.0, 0.0], step_size=0.8,
                                     num_iterations=100, rng=rng_seed)
        assert result.chain.shape == (100, 3)

    def test_scalar_initial_state(self, standard_normal, rng_seed):
        result = metropolis_hastings(standard_normal, 0.5, step_size=0.8,
                                     num_iterations=10, rng=rng_seed)
        assert result.chain.shape == (10, 1)

    def test_zero_iterations(self, standard_normal, rng_seed):
        """No iterations: empty chain and an acceptance rate of 0.0, not 0/0."""
        result = metropolis_hastings(standard_normal, [0.0], step_size=1.0,
                                     num_iterations=0, burn_in=0, rng=rng_seed)
        assert result.chain.shape == (0, 1)
        assert result.acceptance_history.shape == (0,)
        assert result.acceptance_rate == 0.0

    def test_burn_in_only(self, standard_normal, rng_seed):
        result = metropolis_hastings(standard_normal, [0.0], step_size=1.0,
                                     num_iterations=0, burn_in=50, rng=rng_seed)
        assert result.chain.shape == (0, 1)
        assert 0.0 <= result.acceptance_rate <= 1.0

    def test_chain_is_read_only(self, standard_normal, rng_seed):
        result = metropolis_hastings(standard_normal, [0.0], step_size=1.0,
                                     num_iterations=10, rng=rng_seed)
        with pytest.raises(ValueError):
            result.chain[0, 0] = 99.0

    def test_initial_state_not_modified(self, standard_normal, rng_seed):
        initial = np.array([0.25])
        metropolis_hastings(standard_normal, initial, step_size=1.0,
                            num_iterations=20, rng=rng_seed)
        np.testing.assert_array_equal(initial, [0.25])


class TestDeterminism:

    def test_same_seed_same_chain(self, standard_normal, rng_seed):
        a = metropolis_hastings(standard_normal, [0.0, 1.0], 0.7, 500, burn_in=50, rng=rng_seed)
        b = metropolis_hastings(standard_normal, [0.0, 1.0], 0.7, 500, burn_in=50, rng=rng_seed)
        np.testing.assert_array_equal(a.chain, b.chain)
        np.testing.assert_array_equal(a.acceptance_history, b.acceptance_history)
        assert a.acceptance_rate == b.acceptance_rate

    def test_different_seed_different_chain(self, standard_normal):
        a = metropolis_hastings(standard_normal, [0.0], 0.7, 200, rng=1)
        b = metropolis_hastings(standard_normal, [0.0], 0.7, 200, rng=2)
        assert not np.array_equal(a.chain, b.chain)

    def test_random_walk_is_same_kernel(self, standard_normal, rng_seed):
        a = metropolis_hastings(standard_normal, [0.0], 0.7, 300, rng=rng_seed)
        b = random_walk_metropolis(standard_normal, [0.0], 0.7, 300, rng=rng_seed)
        np.testing.assert_array_equal(a.chain, b.chain)
        assert a.sampler_type == SamplerType.METROPOLIS_HASTINGS
        assert b.sampler_type == SamplerType.RANDOM_WALK

    def test_concurrent_runs_are_independent(self, standard_normal):
        """Runs on worker threads own their generators and match sequential runs."""
        seeds = [11, 12, 13, 14]

        def run(seed):
            return metropolis_hastings(standard_normal, [0.0], 1.0, 300, burn_in=30, rng=seed)

        with ThreadPoolExecutor(max_workers=4) as pool:
            parallel = list(pool.map(run, seeds))
        for seed, result in zip(seeds, parallel):
            np.testing.assert_array_equal(result.chain, run(seed).chain)


class TestFailureModes:

    def test_negative_density_raises(self, rng_seed):
        with pytest.raises(DensityError):
            metropolis_hastings(lambda x: -1.0, [0.0], 1.0, 10, rng=rng_seed)

    def test_nan_density_raises(self, rng_seed):
        with pytest.raises(DensityError):
            metropolis_hastings(lambda x: float('nan'), [0.0], 1.0, 10, rng=rng_seed)

    def test_bad_initial_state_raises(self, standard_normal):
        with pytest.raises(StateError):
            metropolis_hastings(standard_normal, [], 1.0, 10)
        with pytest.raises(StateError):
            metropolis_hastings(standard_normal, [np.inf], 1.0, 10)

    def test_cancelled_run_raises(self, standard_normal):
        cancel = threading.Event()
        cancel.set()
        sampler = MetropolisSampler(standard_normal, MetropolisConfig(step_size=1.0, num_iterations=100))
        with pytest.raises(SamplingCancelled):
            sampler.run([0.0], rng=0, cancel_event=cancel)

    def test_cancel_mid_run(self):
        """Setting the event from inside the run stops it at the next iteration."""
        cancel = threading.Event()
        calls = []

        def density(x):
            calls.append(1)
            if len(calls) >= 20:
                cancel.set()
            return 1.0

        sampler = MetropolisSampler(density, MetropolisConfig(step_size=1.0, num_iterations=1000))
        with pytest.raises(SamplingCancelled):
            sampler.run([0.0], rng=0, cancel_event=cancel)
        assert len(calls) == 20

    def test_rejects_gradient_sampler_type(self, standard_normal):
        with pytest.raises(ValueError):
            MetropolisSampler(standard_normal, sampler_type=SamplerType.HMC)
