"""Train/evaluate pipeline: deterministic split, model dispatch, timing, metrics."""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np
import pandas as pd

from automl_tlbx.data.column_types import ProblemType
from automl_tlbx.data.views import EncodedFeatures
from automl_tlbx.errors import TrainingError
from automl_tlbx.models.base import ModelKind
from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig

from .metrics import METRIC_PRETTY_NAMES, calculate_metrics, compute_confusion_matrix
from .model_registry import ModelRegistry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResultsRecord:
    """Outcome of one training run.

    Arrays are stored read-only and ``metrics`` as a read-only mapping, so a
    record does not change after it is produced.

    Attributes:
        model_name: Display name of the trained model.
        problem_type: Learning task the model was trained for.
        metrics: Rounded metrics keyed ``mse``/``mae``/``rmse``/``r2`` or
            ``accuracy``/``precision``/``recall``/``f1``.
        predictions: Predictions for the held-out rows.
        actual_values: Held-out target values, aligned with ``predictions``.
        training_time_ms: Wall-clock time of fit + predict in milliseconds.
        confusion_matrix: Rows = actual, columns = predicted (classification only).
        confusion_labels: Sorted labels indexing ``confusion_matrix``.
    """

    model_name: str
    problem_type: ProblemType
    metrics: Mapping[str, float]
    predictions: np.ndarray
    actual_values: np.ndarray
    training_time_ms: float
    confusion_matrix: np.ndarray | None = None
    confusion_labels: np.ndarray | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))
        for name in ("predictions", "actual_values", "confusion_matrix", "confusion_labels"):
            value = getattr(self, name)
            if value is None:
                continue
            frozen = np.array(value, copy=True)
            frozen.setflags(write=False)
            object.__setattr__(self, name, frozen)

    @property
    def n_test(self) -> int:
        return int(self.actual_values.size)

    def pretty_metrics(self) -> dict[str, float]:
        """Metrics keyed by display names (e.g. ``"R² Score"``)."""
        return {METRIC_PRETTY_NAMES.get(key, key): value for key, value in self.metrics.items()}

    def prediction_table(self) -> pd.DataFrame:
        """Per-row comparison of held-out actual and predicted values.

        Returns:
            DataFrame indexed from 1 with columns ``actual``, ``predicted``,
            ``error`` (residual ``actual - predicted`` for regression, 0/1
            mismatch for classification) and ``correct``.
        """
        actual = self.actual_values
        predicted = self.predictions
        correct = actual == predicted
        if self.problem_type is ProblemType.REGRESSION:
            error = actual - predicted
        else:
            error = (~correct).astype(int)
        return pd.DataFrame(
            {"actual": actual, "predicted": predicted, "error": error, "correct": correct},
            index=pd.RangeIndex(1, actual.size + 1, name="index"),
        )

    def confusion_frame(self) -> pd.DataFrame | None:
        """Confusion matrix as a labelled DataFrame (``None`` for regression)."""
        if self.confusion_matrix is None or self.confusion_labels is None:
            return None
        labels = pd.Index(self.confusion_labels, name="actual")
        return pd.DataFrame(
            self.confusion_matrix,
            index=labels,
            columns=pd.Index(self.confusion_labels, name="predicted"),
        )


class TrainingPipeline:
    """Split, fit, predict and evaluate.

    The first ``train_fraction`` (80%) of the rows, in their original order,
    form the training set and the remaining rows the held-out set. No rows are
    shuffled unless ``EngineConfig.shuffle_split`` is enabled, so two runs on
    the same input produce identical splits and metrics.

    Example:
        >>> pipeline = TrainingPipeline()
        >>> results = pipeline.run(X, y, ProblemType.CLASSIFICATION, model="decisiontree")
        >>> results.metrics["accuracy"]
    """

    def __init__(
        self,
        registry: ModelRegistry | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.registry = registry or ModelRegistry.default()
        self._cfg = config or DEFAULT_ENGINE_CFG

    def split_indices(self, n_rows: int) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(train_idx, test_idx)`` for ``n_rows`` rows."""
        order = np.arange(n_rows)
        if self._cfg.shuffle_split:
            order = np.random.default_rng(self._cfg.random_state).permutation(n_rows)
        cut = math.floor(n_rows * self._cfg.train_fraction)
        return order[:cut], order[cut:]

    def run(
        self,
        X: np.ndarray,
        y: np.ndarray,
        problem_type: ProblemType | str,
        model: ModelKind | str = ModelKind.AUTO,
    ) -> ResultsRecord:
        """Train ``model`` on the training split and evaluate on the held-out split.

        Args:
            X: Feature matrix ``(n_rows, n_features)``.
            y: Target vector aligned with ``X``.
            problem_type: ``classification`` or ``regression``.
            model: Model token; ``auto`` picks linear regression or logistic regression.

        Raises:
            UnsupportedModelError: If ``model`` is unknown or unavailable for ``problem_type``.
            TrainingError: If building, fitting or predicting fails.
        """
        problem_type = ProblemType(problem_type)
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float)
        if X.ndim != 2 or X.shape[0] != y.shape[0]:
            raise ValueError(f"X must be 2-D and aligned with y, got {X.shape} and {y.shape}.")

        kind = self.registry.resolve(problem_type, model)
        try:
            estimator = self.registry.create(problem_type, kind, n_features=X.shape[1], config=self._cfg)
        except Exception as exc:
            logger.exception("Model construction error (%s)", kind)
            raise TrainingError(str(kind), f"Failed to build {kind}: {exc}") from exc
        train_idx, test_idx = self.split_indices(X.shape[0])
        logger.info(
            "Training %s on %d rows (%d held out)",
            estimator.name,
            train_idx.size,
            test_idx.size,
        )

        start = time.perf_counter()
        try:
            estimator.fit(X[train_idx], y[train_idx])
            predictions = np.asarray(estimator.predict(X[test_idx]), dtype=float)
        except Exception as exc:
            logger.exception("Model training error (%s)", estimator.name)
            raise TrainingError(estimator.name, f"Failed to train {estimator.name}: {exc}") from exc
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.info("Trained %s in %.1f ms", estimator.name, elapsed_ms)

        actual = y[test_idx]
        matrix = labels = None
        if problem_type is ProblemType.CLASSIFICATION:
            matrix, labels = compute_confusion_matrix(actual, predictions)

        return ResultsRecord(
            model_name=estimator.name,
            problem_type=problem_type,
            metrics=calculate_metrics(actual, predictions, problem_type, config=self._cfg),
            predictions=predictions,
            actual_values=actual,
            training_time_ms=elapsed_ms,
            confusion_matrix=matrix,
            confusion_labels=labels,
        )

    def run_encoded(
        self,
        encoded: EncodedFeatures,
        problem_type: ProblemType | str,
        model: ModelKind | str = ModelKind.AUTO,
    ) -> ResultsRecord:
        """Shortcut for :meth:`run` on an :class:`EncodedFeatures` view."""
        return self.run(encoded.X, encoded.y, problem_type, model=model)


def train_model(
    X: np.ndarray,
    y: np.ndarray,
    problem_type: ProblemType | str,
    model: ModelKind | str = ModelKind.AUTO,
    config: EngineConfig | None = None,
) -> ResultsRecord:
    """Run the default :class:`TrainingPipeline` once."""
    return TrainingPipeline(config=config).run(X, y, problem_type, model=model)
