from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, Tuple

import numpy as np
import pandas as pd

from bartbench.config import MODEL_NAMES
from bartbench.evaluation.metrics import compute_regression_metrics, residuals
from bartbench.models.base import FittableModel, FittedModel, fit_model


ModelFactory = Callable[[], FittableModel]


@dataclass(frozen=True)
class ModelFactories:
    bart: ModelFactory
    dart: ModelFactory
    forest: ModelFactory


@dataclass(frozen=True)
class ModelComparison:
    bart: FittedModel
    dart: FittedModel
    forest: FittedModel

    def items(self) -> Iterator[Tuple[str, FittedModel]]:
        for name in MODEL_NAMES:
            yield name, getattr(self, name)

    def residuals(self, y_true: np.ndarray) -> Dict[str, np.ndarray]:
        return {name: residuals(y_true, fitted.predictions) for name, fitted in self.items()}

    def metrics_frame(self, y_true: np.ndarray, n_active: int) -> pd.DataFrame:
        """One row per model: fit metrics plus how many predictors it split on.

        `true_active_used` counts how many of the first `n_active` columns
        (the ones the signal depends on) appear among the model's splits.
        """

        rows = []
        for name, fitted in self.items():
            row = {"model": name, **compute_regression_metrics(y_true, fitted.predictions)}
            usage = fitted.variable_usage
            if usage is None:
                row["active_variables"] = np.nan
                row["true_active_used"] = np.nan
            else:
                mean_usage = np.asarray(usage, dtype=float).reshape(-1, usage.shape[-1]).mean(axis=0)
                row["active_variables"] = fitted.active_variables
                row["true_active_used"] = int(np.sum(mean_usage[:n_active] > 0))
            rows.append(row)
        return pd.DataFrame(rows)


def run_comparison(X: np.ndarray, y: np.ndarray, factories: ModelFactories) -> ModelComparison:
    """Fit BART, DART and the random forest in that order.

    Each factory is called once. A failure in any fit propagates and aborts
    the remaining fits.
    """

    print("  fitting BART...")
    bart = fit_model("bart", factories.bart(), X, y)
    print("  fitting DART...")
    dart = fit_model("dart", factories.dart(), X, y)
    print("  fitting random forest...")
    forest = fit_model("forest", factories.forest(), X, y)
    return ModelComparison(bart=bart, dart=dart, forest=forest)
