import numpy as np
import pytest

from bartbench.data.errors import InvalidConfigurationError
from bartbench.models.prior import count_active_variables, sample_variable_selection_prior


@pytest.mark.parametrize("p", [1, 5, 10, 100, 1000])
@pytest.mark.parametrize("a,b", [(0.5, 1.0), (1.0, 1.0), (0.1, 5.0), (5.0, 0.1)])
def test_weights_form_a_probability_vector(p, a, b):
    rng = np.random.default_rng(p * 31 + int(a * 10))
    for _ in range(20):
        prior = sample_variable_selection_prior(p, a, b, rng=rng)

        assert prior.weights.shape == (p,)
        assert np.all(np.isfinite(prior.weights))
        assert np.all(prior.weights >= 0.0)
        assert prior.weights.sum() == pytest.approx(1.0, abs=1e-10)
        assert prior.alpha >= 0.0


def test_tiny_concentration_does_not_underflow():
    # Huge b pushes u, and so alpha, towards zero.
    rng = np.random.default_rng(0)
    for _ in range(50):
        prior = sample_variable_selection_prior(200, a=0.01, b=1000.0, rng=rng)
        assert prior.weights.sum() == pytest.approx(1.0, abs=1e-10)


def test_rho_scales_concentration():
    low = sample_variable_selection_prior(10, rho=1.0, rng=np.random.default_rng(9))
    high = sample_variable_selection_prior(10, rho=100.0, rng=np.random.default_rng(9))
    assert high.alpha == pytest.approx(100.0 * low.alpha)


def test_seeded_prior_is_deterministic():
    p1 = sample_variable_selection_prior(10, rng=np.random.default_rng(3))
    p2 = sample_variable_selection_prior(10, rng=np.random.default_rng(3))
    np.testing.assert_array_equal(p1.weights, p2.weights)
    assert p1.alpha == p2.alpha


@pytest.mark.parametrize("kwargs", [{"p": 0}, {"p": 5, "a": 0.0}, {"p": 5, "b": -1.0}, {"p": 5, "rho": 0.0}])
def test_invalid_shape_parameters_raise(kwargs):
    with pytest.raises(InvalidConfigurationError):
        sample_variable_selection_prior(**kwargs)


def test_count_active_variables_thresholds_mean_usage_at_zero():
    usage = np.array(
        [
            [3, 0, 1, 0],
            [2, 0, 0, 0],
            [4, 0, 0, 1],
        ]
    )
    assert count_active_variables(usage) == 3
    assert count_active_variables(np.zeros((5, 4))) == 0
    assert count_active_variables(np.array([0.0, 2.0, 0.5])) == 2
