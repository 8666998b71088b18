import numpy as np
import pytest

from bartbench.data.errors import InvalidConfigurationError
from bartbench.data.synthetic import generate_sparse_regression, sparse_signal, summarize_dataset


@pytest.mark.parametrize("p", [0, 1, 4])
def test_low_dimension_raises_before_sampling(p):
    rng = np.random.default_rng(7)
    state_before = rng.bit_generator.state

    with pytest.raises(InvalidConfigurationError):
        generate_sparse_regression(100, p, 1.0, rng=rng)

    assert rng.bit_generator.state == state_before


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        generate_sparse_regression(100, 4, 1.0, seed=1)


@pytest.mark.parametrize("n,p", [(1, 5), (100, 10), (37, 100)])
def test_shapes_and_unit_range(n, p):
    X, y = generate_sparse_regression(n, p, 1.0, seed=2026)

    assert X.shape == (n, p)
    assert y.shape == (n,)
    assert np.all(X >= 0.0) and np.all(X <= 1.0)


def test_noiseless_response_equals_signal():
    X, y = generate_sparse_regression(200, 12, noise_sd=0.0, seed=3)
    np.testing.assert_allclose(y, sparse_signal(X), rtol=0, atol=1e-12)


def test_signal_ignores_distractor_columns():
    X, _ = generate_sparse_regression(50, 20, noise_sd=0.0, seed=4)
    X_shuffled = X.copy()
    X_shuffled[:, 5:] = np.random.default_rng(0).uniform(size=(50, 15))
    np.testing.assert_allclose(sparse_signal(X), sparse_signal(X_shuffled))


def test_signal_known_value():
    x = np.array([[0.5, 1.0, 0.5, 1.0, 1.0, 0.3]])
    # 10 sin(pi/2) + 0 + 10 + 5
    np.testing.assert_allclose(sparse_signal(x), [25.0])


def test_seeded_generation_is_deterministic():
    X1, y1 = generate_sparse_regression(30, 8, 1.0, seed=11)
    X2, y2 = generate_sparse_regression(30, 8, 1.0, seed=11)
    X3, _ = generate_sparse_regression(30, 8, 1.0, seed=12)

    np.testing.assert_array_equal(X1, X2)
    np.testing.assert_array_equal(y1, y2)
    assert not np.array_equal(X1, X3)


def test_noise_level_matches_configuration():
    X, y = generate_sparse_regression(20000, 5, noise_sd=2.0, seed=5)
    noise = y - sparse_signal(X)
    assert abs(noise.std() - 2.0) < 0.05


def test_negative_noise_rejected():
    with pytest.raises(InvalidConfigurationError):
        generate_sparse_regression(10, 5, noise_sd=-1.0, seed=1)


def test_summary_lists_active_columns_and_distractor_block():
    X, y = generate_sparse_regression(100, 10, 1.0, seed=1)
    summary = summarize_dataset(X, y)

    assert summary["variable"].tolist() == ["x1", "x2", "x3", "x4", "x5", "x6..x10", "y"]
    assert summary.loc[summary["role"] == "distractor", "n"].item() == 500
