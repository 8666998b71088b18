from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

import numpy as np

from bartbench.models.prior import VariableSelectionPrior, count_active_variables


class FittableModel(Protocol):
    """Any regressor that fits on (X, y), predicts on features, and optionally
    reports how often each predictor is used in its splits."""

    def fit(self, X: np.ndarray, y: np.ndarray) -> "FittableModel":
        ...

    def predict(self, X: np.ndarray) -> np.ndarray:
        ...

    def variable_usage(self) -> Optional[np.ndarray]:
        ...


@dataclass(frozen=True)
class FittedModel:
    name: str
    predictions: np.ndarray
    variable_usage: Optional[np.ndarray]
    active_variables: Optional[int]
    prior: Optional[VariableSelectionPrior] = None


def fit_model(name: str, model: FittableModel, X: np.ndarray, y: np.ndarray) -> FittedModel:
    """Fit model on (X, y) and return its in-sample predictions and usage counts."""

    model.fit(X, y)
    predictions = np.asarray(model.predict(X), dtype=float).reshape(-1)
    if predictions.shape[0] != X.shape[0]:
        raise RuntimeError(
            f"Model {name} returned {predictions.shape[0]} predictions for {X.shape[0]} observations."
        )

    usage = model.variable_usage()
    active = count_active_variables(usage) if usage is not None else None
    return FittedModel(
        name=name,
        predictions=predictions,
        variable_usage=usage,
        active_variables=active,
        prior=getattr(model, "prior_", None),
    )
