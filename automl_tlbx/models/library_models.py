"""Library-backed models exposed through the :class:`BaseModel` contract.

Linear regression delegates to SciPy (one feature) or statsmodels OLS (several
features); random forests delegate to scikit-learn. Any other estimator with a
fit/predict pair can be wrapped the same way and registered in
:class:`~automl_tlbx.analysis.model_registry.ModelRegistry`.
"""

from __future__ import annotations

import math
from typing import Self

import numpy as np
import statsmodels.api as sm
from scipy import stats
from sklearn.ensemble import RandomForestClassifier, RandomForestRegressor

from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig

from .base import BaseModel


class SimpleLinearRegressionModel(BaseModel):
    """Univariate least-squares line ``y = slope * x + intercept`` via :func:`scipy.stats.linregress`."""

    name = "Linear Regression"

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.slope: float | None = None
        self.intercept: float | None = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> Self:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != 1:
            raise ValueError(f"{self.name} expects exactly one feature column, got shape {X.shape}.")
        res = stats.linregress(X[:, 0], np.asarray(y, dtype=float))
        self.slope = float(res.slope)
        self.intercept = float(res.intercept)
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        if self.slope is None or self.intercept is None:
            raise ValueError("Must call fit() before predict()")
        return self.slope * np.asarray(X, dtype=float)[:, 0] + self.intercept


class MultivariateLinearRegressionModel(BaseModel):
    """Ordinary least squares with intercept via :class:`statsmodels.api.OLS`."""

    name = "Multivariate Linear Regression"

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.result_: sm.regression.linear_model.RegressionResultsWrapper | None = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> Self:
        x_matrix = sm.add_constant(np.asarray(X, dtype=float), has_constant="add")
        self.result_ = sm.OLS(np.asarray(y, dtype=float), x_matrix).fit()
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        if self.result_ is None:
            raise ValueError("Must call fit() before predict()")
        x_matrix = sm.add_constant(np.asarray(X, dtype=float), has_constant="add")
        return np.asarray(self.result_.predict(x_matrix), dtype=float)

    @property
    def params(self) -> np.ndarray:
        """Fitted coefficients, intercept first."""
        if self.result_ is None:
            raise ValueError("Must call fit() first")
        return np.asarray(self.result_.params)


class _ForestModel(BaseModel):
    """Shared setup for the scikit-learn random forests.

    Uses ``n_estimators`` trees, ``floor(sqrt(n_features))`` candidate features
    per split and no bootstrap resampling (each tree sees every training row).
    """

    estimator_cls: type[RandomForestRegressor] | type[RandomForestClassifier]

    def __init__(self, config: EngineConfig | None = None) -> None:
        cfg = config or DEFAULT_ENGINE_CFG
        self.n_estimators = cfg.forest_n_estimators
        self.random_state = cfg.random_state
        self.estimator_: RandomForestRegressor | RandomForestClassifier | None = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> Self:
        X = np.asarray(X, dtype=float)
        self.estimator_ = self.estimator_cls(
            n_estimators=self.n_estimators,
            max_features=max(1, math.floor(math.sqrt(X.shape[1]))),
            bootstrap=False,
            random_state=self.random_state,
        )
        self.estimator_.fit(X, np.asarray(y, dtype=float))
        return self

    def predict(self, X: np.ndarray) -> np.ndarray:
        if self.estimator_ is None:
            raise ValueError("Must call fit() before predict()")
        return np.asarray(self.estimator_.predict(np.asarray(X, dtype=float)), dtype=float)


class RandomForestRegressionModel(_ForestModel):
    name = "Random Forest Regression"
    estimator_cls = RandomForestRegressor


class RandomForestClassifierModel(_ForestModel):
    """Random forest classifier; labels are indexed so non-integral codes are accepted."""

    name = "Random Forest Classifier"
    estimator_cls = RandomForestClassifier

    def fit(self, X: np.ndarray, y: np.ndarray) -> Self:
        self.classes_, codes = np.unique(np.asarray(y, dtype=float), return_inverse=True)
        return super().fit(X, codes)

    def predict(self, X: np.ndarray) -> np.ndarray:
        codes = super().predict(X).astype(int)
        return self.classes_[codes]
