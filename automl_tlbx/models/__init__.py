"""Model implementations sharing the fit/predict contract."""

from .base import BaseModel, ModelKind
from .decision_tree import DecisionTreeModel, Leaf, Split
from .library_models import (
    MultivariateLinearRegressionModel,
    RandomForestClassifierModel,
    RandomForestRegressionModel,
    SimpleLinearRegressionModel,
)
from .logistic_regression import LogisticRegressionModel


__all__ = [
    "BaseModel",
    "DecisionTreeModel",
    "Leaf",
    "LogisticRegressionModel",
    "ModelKind",
    "MultivariateLinearRegressionModel",
    "RandomForestClassifierModel",
    "RandomForestRegressionModel",
    "SimpleLinearRegressionModel",
    "Split",
]
