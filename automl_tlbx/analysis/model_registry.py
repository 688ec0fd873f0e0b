from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pandas as pd

from automl_tlbx.data.column_types import ProblemType
from automl_tlbx.errors import UnsupportedModelError
from automl_tlbx.models.base import BaseModel, ModelKind
from automl_tlbx.models.decision_tree import DecisionTreeModel
from automl_tlbx.models.library_models import (
    MultivariateLinearRegressionModel,
    RandomForestClassifierModel,
    RandomForestRegressionModel,
    SimpleLinearRegressionModel,
)
from automl_tlbx.models.logistic_regression import LogisticRegressionModel
from automl_tlbx.utils.engine_config import EngineConfig


ModelFactory = Callable[[EngineConfig, int], BaseModel]
"""Builds an unfitted model from the engine config and the number of features."""


def _linear_factory(config: EngineConfig, n_features: int) -> BaseModel:
    if n_features == 1:
        return SimpleLinearRegressionModel(config)
    return MultivariateLinearRegressionModel(config)


@dataclass
class ModelEntry:
    """Typed registry entry binding a model kind to its factory."""

    problem_type: ProblemType
    kind: ModelKind
    factory: ModelFactory
    description: str = ""


@dataclass
class ModelRegistry:
    """Registry mapping ``(problem type, model kind)`` to model factories.

    Replacing an entry swaps the implementation used by the training pipeline
    without touching the pipeline itself.
    """

    entries: dict[tuple[ProblemType, ModelKind], ModelEntry] = field(default_factory=dict)

    @classmethod
    def default(cls) -> ModelRegistry:
        """Return a registry with the built-in models."""
        registry = cls()
        registry.register(
            ProblemType.REGRESSION,
            ModelKind.LINEAR,
            _linear_factory,
            description="Linear model for continuous values",
        )
        registry.register(
            ProblemType.REGRESSION,
            ModelKind.RANDOM_FOREST,
            lambda cfg, _: RandomForestRegressionModel(cfg),
            description="Ensemble regression model",
        )
        registry.register(
            ProblemType.CLASSIFICATION,
            ModelKind.LOGISTIC,
            lambda cfg, _: LogisticRegressionModel(cfg),
            description="Linear model for classification",
        )
        registry.register(
            ProblemType.CLASSIFICATION,
            ModelKind.DECISION_TREE,
            lambda cfg, _: DecisionTreeModel(cfg),
            description="Tree-based classification model",
        )
        registry.register(
            ProblemType.CLASSIFICATION,
            ModelKind.RANDOM_FOREST,
            lambda cfg, _: RandomForestClassifierModel(cfg),
            description="Ensemble classification model",
        )
        return registry

    def register(
        self,
        problem_type: ProblemType | str,
        kind: ModelKind | str,
        factory: ModelFactory,
        *,
        description: str = "",
        overwrite: bool = False,
    ) -> None:
        """Add a factory (optionally overwriting an existing one).

        Raises:
            ValueError: If ``kind`` is ``auto``.
            KeyError: If the entry exists and ``overwrite`` is False.
        """
        problem_type, kind = ProblemType(problem_type), ModelKind(kind)
        if kind is ModelKind.AUTO:
            raise ValueError("'auto' is resolved before dispatch and cannot be registered.")
        key = (problem_type, kind)
        if key in self.entries and not overwrite:
            raise KeyError(f"Model '{kind}' already registered for {problem_type}.")
        self.entries[key] = ModelEntry(problem_type, kind, factory, description)

    def resolve(self, problem_type: ProblemType | str, model: ModelKind | str) -> ModelKind:
        """Map a user token to a registered concrete kind.

        Raises:
            UnsupportedModelError: If the token is unknown or not registered for the problem type.
        """
        problem_type = ProblemType(problem_type)
        try:
            kind = ModelKind(str(model).lower()).resolve(problem_type)
        except ValueError as exc:
            raise UnsupportedModelError(str(model), problem_type) from exc
        if (problem_type, kind) not in self.entries:
            raise UnsupportedModelError(str(kind), problem_type)
        return kind

    def create(
        self,
        problem_type: ProblemType | str,
        model: ModelKind | str,
        *,
        n_features: int,
        config: EngineConfig,
    ) -> BaseModel:
        """Build an unfitted model for ``model`` (``auto`` allowed)."""
        kind = self.resolve(problem_type, model)
        return self.entries[(ProblemType(problem_type), kind)].factory(config, n_features)

    def available(self, problem_type: ProblemType | str) -> list[ModelKind]:
        """Registered kinds for ``problem_type`` (``auto`` first)."""
        problem_type = ProblemType(problem_type)
        kinds = [kind for (ptype, kind) in self.entries if ptype is problem_type]
        return [ModelKind.AUTO, *kinds] if kinds else []

    def compare(self) -> pd.DataFrame:
        """Return a table of registered models."""
        rows = [
            {"problem_type": str(e.problem_type), "model": str(e.kind), "description": e.description}
            for e in self.entries.values()
        ]
        return pd.DataFrame(rows, columns=["problem_type", "model", "description"])
