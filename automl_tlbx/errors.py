"""Exceptions raised by the tabular-learning engine.

Every error is terminal for the invocation that raised it: no partial results
are returned and nothing is retried. The engine holds no state between calls,
so callers can re-invoke with corrected inputs (another target, another model).
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all engine errors."""


class EmptyDatasetError(EngineError, ValueError):
    """Raised when a dataset without rows is profiled."""

    def __init__(self, message: str = "No data to analyze: the dataset has no rows.") -> None:
        super().__init__(message)


class InvalidTargetError(EngineError, KeyError):
    """Raised when the requested target column is not part of the dataset."""

    def __init__(self, target: str, available: list[str] | None = None) -> None:
        self.target = target
        self.available = list(available or [])
        super().__init__(target)

    def __str__(self) -> str:
        shown = ", ".join(self.available[:10])
        return f"Target column '{self.target}' not found. Available columns: {shown}"


class NoValidRowsError(EngineError, ValueError):
    """Raised when feature encoding drops every row."""

    def __init__(self, message: str = "No valid feature data found after preprocessing.") -> None:
        super().__init__(message)


class TrainingError(EngineError, RuntimeError):
    """Raised when fitting or predicting fails.

    Attributes:
        model_name: Name of the model whose training was attempted.
    """

    def __init__(self, model_name: str, message: str | None = None) -> None:
        self.model_name = model_name
        super().__init__(message or f"Failed to train {model_name}")


class UnsupportedModelError(TrainingError):
    """Raised when a model token is unknown or unavailable for the problem type."""

    def __init__(self, model_name: str, problem_type: str) -> None:
        self.problem_type = problem_type
        super().__init__(
            model_name,
            f"Model '{model_name}' is not available for {problem_type} problems.",
        )


__all__ = [
    "EmptyDatasetError",
    "EngineError",
    "InvalidTargetError",
    "NoValidRowsError",
    "TrainingError",
    "UnsupportedModelError",
]
