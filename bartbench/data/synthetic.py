from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pandas as pd

from bartbench.config import MIN_DIMENSION
from bartbench.data.validate import assert_min_dimension, assert_non_negative, assert_positive


def sparse_signal(X: np.ndarray) -> np.ndarray:
    """Friedman #1 mean function of the first five columns of X.

    f(x) = 10 sin(pi x1 x2) + 20 (x3 - 0.5)^2 + 10 x4 + 5 x5

    Columns beyond the fifth do not enter the function.
    """

    X = np.asarray(X, dtype=float)
    if X.ndim != 2:
        raise ValueError(f"Expected a 2-D feature matrix; got shape {X.shape}.")
    assert_min_dimension(X.shape[1], MIN_DIMENSION)

    return (
        10.0 * np.sin(np.pi * X[:, 0] * X[:, 1])
        + 20.0 * (X[:, 2] - 0.5) ** 2
        + 10.0 * X[:, 3]
        + 5.0 * X[:, 4]
    )


def generate_sparse_regression(
    n: int,
    p: int,
    noise_sd: float = 1.0,
    *,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Draw X ~ U[0,1]^(n x p) and y = f(X) + N(0, noise_sd^2).

    All arguments are validated before the random source is touched, so an
    invalid configuration never consumes draws from a shared generator.
    """

    assert_min_dimension(p, MIN_DIMENSION)
    assert_positive("n", n)
    assert_non_negative("noise_sd", noise_sd)
    if seed is not None and rng is not None:
        raise ValueError("Pass either seed or rng, not both.")

    if rng is None:
        rng = np.random.default_rng(seed)

    X = rng.uniform(0.0, 1.0, size=(n, p))
    y = sparse_signal(X)
    if noise_sd > 0:
        y = y + rng.normal(0.0, noise_sd, size=n)
    return X, y


def summarize_dataset(X: np.ndarray, y: np.ndarray) -> pd.DataFrame:
    """Per-block summary: the five active columns, the distractor block, and y."""

    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)

    rows = []
    for j in range(MIN_DIMENSION):
        rows.append(_summary_row(f"x{j + 1}", "active", X[:, j]))
    if X.shape[1] > MIN_DIMENSION:
        rows.append(
            _summary_row(
                f"x{MIN_DIMENSION + 1}..x{X.shape[1]}",
                "distractor",
                X[:, MIN_DIMENSION:].ravel(),
            )
        )
    rows.append(_summary_row("y", "response", y))
    return pd.DataFrame(rows)


def _summary_row(variable: str, role: str, values: np.ndarray) -> dict:
    return {
        "variable": variable,
        "role": role,
        "n": int(values.size),
        "mean": round(float(values.mean()), 4),
        "std": round(float(values.std(ddof=1)) if values.size > 1 else float("nan"), 4),
        "min": round(float(values.min()), 4),
        "max": round(float(values.max()), 4),
    }
