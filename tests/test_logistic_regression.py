"""Tests for the gradient-descent logistic regression."""

import warnings

import numpy as np
import pytest

from automl_tlbx.models import LogisticRegressionModel
from automl_tlbx.utils.engine_config import EngineConfig


class TestLogisticRegressionModel:
    """Test training and prediction."""

    def test_separable_training_accuracy(self, separable_2d: tuple[np.ndarray, np.ndarray]) -> None:
        """Linearly separable data is fit well on the training set."""
        X, y = separable_2d
        model = LogisticRegressionModel().fit(X, y)
        accuracy = float(np.mean(model.predict(X) == y))
        assert accuracy >= 0.9

    def test_predictions_are_binary(self, separable_2d: tuple[np.ndarray, np.ndarray]) -> None:
        X, y = separable_2d
        preds = LogisticRegressionModel().fit(X, y).predict(X)
        assert set(preds.tolist()) <= {0.0, 1.0}

    def test_zero_iterations_rounds_half_up(self) -> None:
        """Untrained weights give p = 0.5, which predicts class 1."""
        X = np.array([[1.0], [2.0]])
        model = LogisticRegressionModel(EngineConfig(n_iterations=0)).fit(X, np.array([0.0, 1.0]))
        np.testing.assert_allclose(model.predict_proba(X), [0.5, 0.5])
        np.testing.assert_array_equal(model.predict(X), [1.0, 1.0])

    def test_extreme_scores_do_not_overflow(self) -> None:
        """Scores are clipped before the sigmoid."""
        X = np.array([[1e6], [-1e6], [2e6], [-2e6]])
        y = np.array([1.0, 0.0, 1.0, 0.0])
        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            model = LogisticRegressionModel().fit(X, y)
            proba = model.predict_proba(X)
        assert np.all(np.isfinite(proba))
        np.testing.assert_array_equal(model.predict(X), y)

    def test_deterministic(self, separable_2d: tuple[np.ndarray, np.ndarray]) -> None:
        X, y = separable_2d
        first = LogisticRegressionModel().fit(X, y)
        second = LogisticRegressionModel().fit(X, y)
        np.testing.assert_array_equal(first.weights, second.weights)
        assert first.bias == second.bias

    def test_single_step_matches_gradient(self) -> None:
        """One iteration from zero weights moves by lr * mean((0.5 - y) x)."""
        X = np.array([[2.0], [4.0]])
        y = np.array([1.0, 0.0])
        model = LogisticRegressionModel(EngineConfig(n_iterations=1, learning_rate=0.1)).fit(X, y)
        # errors = [-0.5, 0.5]; grad_w = (-1 + 2) / 2 = 0.5; grad_b = 0
        np.testing.assert_allclose(model.weights, [-0.05])
        assert model.bias == pytest.approx(0.0)

    def test_predict_before_fit(self) -> None:
        with pytest.raises(ValueError, match="fit"):
            LogisticRegressionModel().predict(np.zeros((1, 1)))

    def test_empty_training_set(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            LogisticRegressionModel().fit(np.zeros((0, 2)), np.zeros(0))
