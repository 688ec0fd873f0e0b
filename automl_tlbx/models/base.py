"""Shared fit/predict contract and the closed set of model kinds."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Self

import numpy as np

from automl_tlbx.data.column_types import ProblemType


class ModelKind(StrEnum):
    """Model tokens a user can choose.

    ``AUTO`` is never dispatched directly; :meth:`resolve` maps it to the
    default kind of the problem type first.
    """

    AUTO = "auto"
    LINEAR = "linear"
    LOGISTIC = "logistic"
    DECISION_TREE = "decisiontree"
    RANDOM_FOREST = "randomforest"

    def resolve(self, problem_type: ProblemType) -> ModelKind:
        """Return the concrete kind for ``problem_type``."""
        if self is not ModelKind.AUTO:
            return self
        if problem_type is ProblemType.REGRESSION:
            return ModelKind.LINEAR
        return ModelKind.LOGISTIC


class BaseModel(ABC):
    """Abstract base class for every model the pipeline can train.

    Lifecycle: create -> :meth:`fit` once -> :meth:`predict` any number of
    times. Library-backed implementations wrap a third-party estimator behind
    the same two methods, so the pipeline never depends on a concrete library.
    """

    name: str = "model"

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray) -> Self:
        """Fit the model.

        Args:
            X: Training features of shape ``(n_rows, n_features)``.
            y: Training targets of length ``n_rows``.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        """Predict one value per row of ``X``.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
