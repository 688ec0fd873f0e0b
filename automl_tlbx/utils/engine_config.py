"""Shared engine configuration (thresholds, split, model hyper-parameters)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True)
class EngineConfig:
    """Constants used across profiling, encoding, training and evaluation.

    The defaults reproduce the behaviour of the interactive trainer. Components
    accept an optional config and fall back to :data:`DEFAULT_ENGINE_CFG`.
    """

    # profiling
    numeric_threshold: float = 0.8
    """A column is numeric iff more than this share of its non-missing values parse as numbers."""

    # problem-type detection
    max_classification_cardinality: int = 20
    classification_ratio: float = 0.1
    """Targets with fewer distinct values than this share of the row count are classification."""
    regression_numeric_ratio: float = 0.8

    # feature encoding
    fallback_modulus: int = 100

    # train/test split
    train_fraction: float = 0.8
    shuffle_split: bool = False
    """Opt-in seeded permutation before the cut. The default split is order preserving."""
    random_state: int | None = 42
    """Seed for the split permutation (if enabled) and for library forests."""

    # logistic regression
    learning_rate: float = 0.01
    n_iterations: int = 1000
    logit_clip: float = 500.0

    # decision tree
    max_depth: int = 10
    min_samples_split: int = 2

    # library random forests
    forest_n_estimators: int = 10

    # reporting
    metric_decimals: int = 4

    def replace(self, **changes: Any) -> EngineConfig:
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


# Default configuration used across the engine
DEFAULT_ENGINE_CFG = EngineConfig()


__all__ = ["DEFAULT_ENGINE_CFG", "EngineConfig"]
