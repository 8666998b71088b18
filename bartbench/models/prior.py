from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from bartbench.data.validate import assert_positive


@dataclass(frozen=True)
class VariableSelectionPrior:
    alpha: float
    weights: np.ndarray


def _log_gamma_draws(shape: float, size: int, rng: np.random.Generator) -> np.ndarray:
    # log G(k) = log G(k + 1) + log(U) / k keeps tiny shapes away from underflow.
    log_g = np.log(rng.gamma(shape + 1.0, 1.0, size=size))
    log_u = np.log(rng.uniform(0.0, 1.0, size=size))
    return log_g + log_u / shape


def sample_variable_selection_prior(
    p: int,
    a: float = 0.5,
    b: float = 1.0,
    rho: Optional[float] = None,
    *,
    rng: Optional[np.random.Generator] = None,
) -> VariableSelectionPrior:
    """Draw split-proportion weights from the sparse Dirichlet prior.

    u ~ Beta(a, b), alpha = rho * u / (1 - u), s ~ Dirichlet(alpha/p, ..., alpha/p).
    The Dirichlet draw is built from independent Gamma draws normalized to
    one. rho defaults to p.
    """

    assert_positive("p", p)
    assert_positive("a", a)
    assert_positive("b", b)
    rho = float(p) if rho is None else float(rho)
    assert_positive("rho", rho)

    if rng is None:
        rng = np.random.default_rng()

    u = float(rng.beta(a, b))
    # Beta draws can round to exactly 1.0 for small b.
    u = min(u, 1.0 - np.finfo(float).eps)
    alpha = rho * u / (1.0 - u)

    shape = alpha / p
    log_g = _log_gamma_draws(shape, p, rng) if shape > 0 else np.full(p, -np.inf)
    if not np.isfinite(log_g).any():
        # Vanishing concentration: all mass on a single uniformly chosen predictor.
        log_g = np.full(p, -np.inf)
        log_g[rng.integers(0, p)] = 0.0

    w = np.exp(log_g - log_g.max())
    weights = w / w.sum()
    return VariableSelectionPrior(alpha=alpha, weights=weights)


def count_active_variables(usage: np.ndarray) -> int:
    """Number of predictors with positive mean usage across draws (rows)."""

    usage = np.asarray(usage, dtype=float)
    if usage.ndim == 1:
        usage = usage.reshape(1, -1)
    if usage.ndim != 2:
        raise ValueError(f"Variable usage must be 1-D or 2-D; got shape {usage.shape}.")
    return int(np.sum(usage.mean(axis=0) > 0))
