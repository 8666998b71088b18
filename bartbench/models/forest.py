from typing import Optional, Union

import numpy as np
from sklearn.ensemble import RandomForestRegressor

from bartbench.config import RF_MAX_FEATURES, RF_N_ESTIMATORS


def build_random_forest(
    n_estimators: int = RF_N_ESTIMATORS,
    max_features: Union[int, float, str] = RF_MAX_FEATURES,
    random_state: Optional[int] = None,
) -> RandomForestRegressor:
    return RandomForestRegressor(
        n_estimators=n_estimators,
        max_features=max_features,
        min_samples_leaf=5,
        n_jobs=1,
        random_state=random_state,
    )


class RandomForestRegressorModel:
    def __init__(
        self,
        n_estimators: int = RF_N_ESTIMATORS,
        max_features: Union[int, float, str] = RF_MAX_FEATURES,
        random_state: Optional[int] = None,
    ):
        self.estimator = build_random_forest(n_estimators, max_features, random_state)

    def fit(self, X: np.ndarray, y: np.ndarray) -> "RandomForestRegressorModel":
        self.estimator.fit(np.asarray(X, dtype=float), np.asarray(y, dtype=float))
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        return self.estimator.predict(np.asarray(X, dtype=float))

    def variable_usage(self) -> np.ndarray:
        """Split counts per tree (rows) and predictor (columns)."""

        n_features = self.estimator.n_features_in_
        rows = []
        for tree in self.estimator.estimators_:
            feature = tree.tree_.feature
            # Leaves are marked with a negative feature index.
            rows.append(np.bincount(feature[feature >= 0], minlength=n_features))
        return np.vstack(rows).astype(float)
