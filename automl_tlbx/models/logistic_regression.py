r"""Binary logistic regression trained with full-batch gradient descent.

For weights :math:`w` and bias :math:`b` the model predicts

.. math:: p(x) = \sigma(\mathrm{clip}(w^\top x + b, -500, 500))

and every iteration applies

.. math::
    w \leftarrow w - \eta \frac{1}{n}\sum_i (p_i - y_i) x_i, \qquad
    b \leftarrow b - \eta \frac{1}{n}\sum_i (p_i - y_i)

for a fixed number of iterations (no convergence check, no regularisation).
"""

from __future__ import annotations

from typing import Self

import numpy as np

from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig

from .base import BaseModel


class LogisticRegressionModel(BaseModel):
    """Gradient-descent logistic regression for 0/1 targets.

    Attributes:
        learning_rate: Step size :math:`\\eta` (default 0.01).
        n_iterations: Number of full-batch updates (default 1000).
        clip: Bound applied to the linear score before the sigmoid.
    """

    name = "Logistic Regression"

    def __init__(self, config: EngineConfig | None = None) -> None:
        cfg = config or DEFAULT_ENGINE_CFG
        self.learning_rate = cfg.learning_rate
        self.n_iterations = cfg.n_iterations
        self.clip = cfg.logit_clip
        self.weights: np.ndarray | None = None
        self.bias = 0.0

    def _sigmoid(self, scores: np.ndarray) -> np.ndarray:
        return 1.0 / (1.0 + np.exp(-np.clip(scores, -self.clip, self.clip)))

    def decision_function(self, X: np.ndarray) -> np.ndarray:
        """Return the linear score ``X @ w + b`` per row."""
        if self.weights is None:
            raise ValueError("Must call fit() before predict()")
        return np.asarray(X, dtype=float) @ self.weights + self.bias

    def fit(self, X: np.ndarray, y: np.ndarray) -> Self:
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float)
        n_rows, n_features = X.shape
        if n_rows == 0:
            raise ValueError("Cannot fit logistic regression on an empty training set.")

        self.weights = np.zeros(n_features)
        self.bias = 0.0
        for _ in range(self.n_iterations):
            errors = self._sigmoid(X @ self.weights + self.bias) - y
            self.weights -= self.learning_rate * (X.T @ errors) / n_rows
            self.bias -= self.learning_rate * float(errors.mean())
        return self

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Return :math:`p(y=1 \\mid x)` per row."""
        return self._sigmoid(self.decision_function(X))

    def predict(self, X: np.ndarray) -> np.ndarray:
        """Round probabilities to the nearest class label (0 or 1)."""
        proba = self.predict_proba(X)
        # round half up; np.round would send 0.5 to 0
        return np.floor(proba + 0.5)
