r"""Evaluation metrics for held-out predictions.

Regression (``n`` held-out rows, actual :math:`a`, predicted :math:`p`):

- :math:`\text{MSE} = \frac{1}{n}\sum_i (a_i - p_i)^2`
- :math:`\text{MAE} = \frac{1}{n}\sum_i |a_i - p_i|`
- :math:`\text{RMSE} = \sqrt{\text{MSE}}`
- :math:`R^2 = 1 - \frac{n \cdot \text{MSE}}{\sum_i (a_i - \bar a)^2}` with :math:`\bar a`
  the held-out mean. Constant actual values give ``inf``/``nan``.

Classification: accuracy over all rows. Precision, recall and F1 are only
computed when exactly two labels occur in ``actual`` and ``predicted``
combined, with the numerically larger label as the positive class; with more
labels they are reported as 0.

Every metric is rounded to ``metric_decimals`` (4) places.
"""

from __future__ import annotations

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    precision_recall_fscore_support,
)

from automl_tlbx.data.column_types import ProblemType
from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig


METRIC_PRETTY_NAMES: dict[str, str] = {
    "mse": "Mean Squared Error",
    "mae": "Mean Absolute Error",
    "rmse": "Root Mean Squared Error",
    "r2": "R² Score",
    "accuracy": "Accuracy",
    "precision": "Precision",
    "recall": "Recall",
    "f1": "F1 Score",
}


def _as_arrays(actual: np.ndarray, predicted: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    a = np.asarray(actual, dtype=float)
    p = np.asarray(predicted, dtype=float)
    if a.shape != p.shape:
        raise ValueError(f"actual and predicted must be aligned, got {a.shape} and {p.shape}.")
    if a.size == 0:
        raise ValueError("Cannot compute metrics on an empty evaluation set.")
    return a, p


def regression_metrics(
    actual: np.ndarray,
    predicted: np.ndarray,
    decimals: int = DEFAULT_ENGINE_CFG.metric_decimals,
) -> dict[str, float]:
    """Return rounded ``mse``, ``mae``, ``rmse`` and ``r2``."""
    a, p = _as_arrays(actual, predicted)
    mse = float(np.mean((a - p) ** 2))
    mae = float(np.mean(np.abs(a - p)))
    total_sum_squares = float(np.sum((a - a.mean()) ** 2))
    with np.errstate(divide="ignore", invalid="ignore"):
        r2 = float(1.0 - np.float64(mse * a.size) / np.float64(total_sum_squares))
    return {
        "mse": round(mse, decimals),
        "mae": round(mae, decimals),
        "rmse": round(float(np.sqrt(mse)), decimals),
        "r2": round(r2, decimals),
    }


def _label_codes(a: np.ndarray, p: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Index both label arrays into their sorted union (non-integral labels included)."""
    labels = np.unique(np.concatenate([a, p]))
    return np.searchsorted(labels, a), np.searchsorted(labels, p), labels


def classification_metrics(
    actual: np.ndarray,
    predicted: np.ndarray,
    decimals: int = DEFAULT_ENGINE_CFG.metric_decimals,
) -> dict[str, float]:
    """Return rounded ``accuracy``, ``precision``, ``recall`` and ``f1``."""
    a_codes, p_codes, labels = _label_codes(*_as_arrays(actual, predicted))
    accuracy = float(accuracy_score(a_codes, p_codes))
    precision = recall = f1 = 0.0

    if labels.size == 2:
        # code 1 is the numerically larger label
        precision, recall, f1, _ = precision_recall_fscore_support(
            a_codes,
            p_codes,
            pos_label=1,
            average="binary",
            zero_division=0,
        )
    return {
        "accuracy": round(accuracy, decimals),
        "precision": round(float(precision), decimals),
        "recall": round(float(recall), decimals),
        "f1": round(float(f1), decimals),
    }


def compute_confusion_matrix(
    actual: np.ndarray,
    predicted: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """Count (actual, predicted) label pairs.

    Returns:
        ``(matrix, labels)`` where ``labels`` is the sorted union of labels and
        ``matrix[i, j]`` counts rows with actual ``labels[i]`` predicted as ``labels[j]``.
    """
    a_codes, p_codes, labels = _label_codes(*_as_arrays(actual, predicted))
    return confusion_matrix(a_codes, p_codes, labels=np.arange(labels.size)), labels


def calculate_metrics(
    actual: np.ndarray,
    predicted: np.ndarray,
    problem_type: ProblemType | str,
    config: EngineConfig | None = None,
) -> dict[str, float]:
    """Dispatch to the regression or classification metrics."""
    decimals = (config or DEFAULT_ENGINE_CFG).metric_decimals
    if ProblemType(problem_type) is ProblemType.REGRESSION:
        return regression_metrics(actual, predicted, decimals=decimals)
    return classification_metrics(actual, predicted, decimals=decimals)
