"""Tabular-learning engine: profile a dataset, pick a target, train and evaluate a model."""

from .analysis import AnalysisRecord, ResultsRecord, TrainingPipeline
from .data import ProblemType, TabularDataset
from .errors import (
    EmptyDatasetError,
    EngineError,
    InvalidTargetError,
    NoValidRowsError,
    TrainingError,
    UnsupportedModelError,
)
from .models import ModelKind
from .utils import DEFAULT_ENGINE_CFG, EngineConfig
from .workflow import TabularWorkflow, run_workflow


__all__ = [
    "DEFAULT_ENGINE_CFG",
    "AnalysisRecord",
    "EmptyDatasetError",
    "EngineConfig",
    "EngineError",
    "InvalidTargetError",
    "ModelKind",
    "NoValidRowsError",
    "ProblemType",
    "ResultsRecord",
    "TabularDataset",
    "TabularWorkflow",
    "TrainingError",
    "TrainingPipeline",
    "UnsupportedModelError",
    "run_workflow",
]
