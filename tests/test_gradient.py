"""
Gradient Tests - finite-difference grad log density

Run with: pytest tests/test_gradient.py -v
"""

import numpy as np
import pytest

from mcmc_engine.algos.gradient import GradientEstimator, numerical_gradient, LOG_FLOOR
from mcmc_engine.dists import BananaDistribution, NormalDistribution


class TestNumericalGradient:
    """Central differences against analytic gradients."""

    @pytest.mark.parametrize("x", [-2.0, -1.0, 0.0, 1.0, 2.0])
    def test_standard_normal_gradient_is_minus_x(self, standard_normal, x):
        """grad log N(0,1) at x is -x."""
        grad = numerical_gradient(standard_normal, np.array([x]), epsilon=1e-5)
        assert grad.shape == (1,)
        assert abs(grad[0] - (-x)) < 1e-3

    def test_scipy_normal_matches_analytic(self):
        """Works on a DensityModel as well as a plain function."""
        target = NormalDistribution(mean=[1.0, -1.0], cov=[[2.0, 0.3], [0.3, 1.0]])
        x = np.array([0.5, 0.2])
        np.testing.assert_allclose(
            numerical_gradient(target, x), target.grad_log_density(x), atol=1e-4
        )

    def test_banana_matches_analytic(self):
        target = BananaDistribution(a=2.0, b=0.1)
        x = np.array([1.5, 0.4])
        np.testing.assert_allclose(
            numerical_gradient(target, x), target.grad_log_density(x), atol=1e-4
        )

    def test_perturbations_do_not_compound(self):
        """Each coordinate is perturbed alone: 2 evaluations per dimension."""
        calls = []

        def density(x):
            calls.append(x.copy())
            return 1.0

        position = np.array([1.0, 2.0, 3.0])
        numerical_gradient(density, position, epsilon=0.5)

        assert len(calls) == 6
        for i in range(3):
            plus, minus = calls[2 * i], calls[2 * i + 1]
            expected_plus = position.copy()
            expected_plus[i] += 0.5
            expected_minus = position.copy()
            expected_minus[i] -= 0.5
            np.testing.assert_array_equal(plus, expected_plus)
            np.testing.assert_array_equal(minus, expected_minus)

    def test_does_not_modify_position(self, standard_normal):
        position = np.array([0.3, -0.7])
        numerical_gradient(standard_normal, position)
        np.testing.assert_array_equal(position, [0.3, -0.7])

    def test_zero_density_gives_zero_gradient(self):
        """The log floor turns a flat zero density into a zero gradient, not NaN."""
        grad = numerical_gradient(lambda x: 0.0, np.array([5.0, -5.0]))
        np.testing.assert_array_equal(grad, [0.0, 0.0])
        assert LOG_FLOOR == 1e-10


class TestGradientEstimator:

    def test_callable_on_states(self, standard_normal):
        estimator = GradientEstimator(standard_normal)
        np.testing.assert_allclose(estimator(np.array([1.0, -2.0])), [-1.0, 2.0], atol=1e-3)

    def test_rejects_non_positive_epsilon(self, standard_normal):
        with pytest.raises(ValueError):
            GradientEstimator(standard_normal, epsilon=0.0)
