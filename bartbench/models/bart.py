from __future__ import annotations

from typing import Optional

import numpy as np
from stochtree import BARTModel

from bartbench.config import (
    BART_NUM_BURNIN,
    BART_NUM_GFR,
    BART_NUM_MCMC,
    BART_NUM_TREES,
    DART_PRIOR_A,
    DART_PRIOR_B,
    DART_PRIOR_RHO,
)
from bartbench.models.prior import VariableSelectionPrior, sample_variable_selection_prior


class BartRegressor:
    """Posterior-mean BART regressor backed by stochtree.

    The mean forest is warm-started with `num_gfr` grow-from-root sweeps and
    then sampled for `num_burnin + num_mcmc` MCMC iterations; only the
    `num_mcmc` retained draws enter predictions and usage counts.
    """

    def __init__(
        self,
        num_trees: int = BART_NUM_TREES,
        num_gfr: int = BART_NUM_GFR,
        num_burnin: int = BART_NUM_BURNIN,
        num_mcmc: int = BART_NUM_MCMC,
        random_seed: Optional[int] = None,
    ):
        self.num_trees = num_trees
        self.num_gfr = num_gfr
        self.num_burnin = num_burnin
        self.num_mcmc = num_mcmc
        self.random_seed = random_seed
        self.model_: Optional[BARTModel] = None
        self.n_features_: Optional[int] = None

    def _general_params(self) -> dict:
        params = {}
        if self.random_seed is not None:
            params["random_seed"] = int(self.random_seed)
        return params

    def fit(self, X: np.ndarray, y: np.ndarray) -> "BartRegressor":
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        model = BARTModel()
        model.sample(
            X_train=X,
            y_train=y,
            num_gfr=self.num_gfr,
            num_burnin=self.num_burnin,
            num_mcmc=self.num_mcmc,
            general_params=self._general_params(),
            mean_forest_params={"num_trees": self.num_trees},
        )
        self.model_ = model
        self.n_features_ = X.shape[1]
        return self

    def _require_fitted(self) -> BARTModel:
        if self.model_ is None:
            raise RuntimeError(f"{type(self).__name__} must be fit before use.")
        return self.model_

    def predict(self, X: np.ndarray) -> np.ndarray:
        model = self._require_fitted()
        y_hat = model.predict(X=np.asarray(X, dtype=np.float64), type="mean", terms="y_hat")
        return np.asarray(y_hat, dtype=float).reshape(-1)

    def variable_usage(self) -> np.ndarray:
        """Split counts per retained draw (rows) and predictor (columns)."""

        model = self._require_fitted()
        counts = np.asarray(
            model.forest_container_mean.get_granular_split_counts(self.n_features_),
            dtype=float,
        )
        # (draws, trees, features) -> (draws, features)
        if counts.ndim == 3:
            counts = counts.sum(axis=1)
        return counts


class DartRegressor(BartRegressor):
    """BART paired with a sparse Dirichlet variable-selection prior.

    The prior is drawn once per fit and kept on `prior_`. The weights are
    reported alongside the fit; stochtree's sampler still splits on
    predictors uniformly.
    """

    def __init__(
        self,
        num_trees: int = BART_NUM_TREES,
        num_gfr: int = BART_NUM_GFR,
        num_burnin: int = BART_NUM_BURNIN,
        num_mcmc: int = BART_NUM_MCMC,
        random_seed: Optional[int] = None,
        prior_a: float = DART_PRIOR_A,
        prior_b: float = DART_PRIOR_B,
        prior_rho: Optional[float] = DART_PRIOR_RHO,
    ):
        super().__init__(
            num_trees=num_trees,
            num_gfr=num_gfr,
            num_burnin=num_burnin,
            num_mcmc=num_mcmc,
            random_seed=random_seed,
        )
        self.prior_a = prior_a
        self.prior_b = prior_b
        self.prior_rho = prior_rho
        self.prior_: Optional[VariableSelectionPrior] = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> "DartRegressor":
        X = np.asarray(X, dtype=np.float64)
        self.prior_ = sample_variable_selection_prior(
            X.shape[1],
            a=self.prior_a,
            b=self.prior_b,
            rho=self.prior_rho,
            rng=np.random.default_rng(self.random_seed),
        )
        super().fit(X, y)
        return self
