"""Vocabulary enums shared by the profiler, detector and training pipeline."""

from __future__ import annotations

from enum import StrEnum


class ColumnType(StrEnum):
    """Inferred type of a dataset column."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"

    @property
    def pretty_name(self) -> str:
        """Get the human-readable name for tables and reports."""
        return self.value.title()


class ProblemType(StrEnum):
    """Learning task implied by the selected target column."""

    CLASSIFICATION = "classification"
    REGRESSION = "regression"

    @property
    def pretty_name(self) -> str:
        """Get the human-readable name for tables and reports."""
        return self.value.title()
