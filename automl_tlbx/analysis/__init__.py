"""Analysis modules: profiling, target detection, encoding, training and metrics."""

from .feature_encoder import FeatureEncoder, prepare_features
from .metrics import (
    METRIC_PRETTY_NAMES,
    calculate_metrics,
    classification_metrics,
    compute_confusion_matrix,
    regression_metrics,
)
from .model_registry import ModelEntry, ModelRegistry
from .problem_type import ProblemTypeDetector, ProblemTypeResult, detect_problem_type, select_target
from .profiler import AnalysisRecord, ColumnProfile, ColumnStatistics, DatasetProfiler, analyze_data
from .training import ResultsRecord, TrainingPipeline, train_model


__all__ = [
    "METRIC_PRETTY_NAMES",
    "AnalysisRecord",
    "ColumnProfile",
    "ColumnStatistics",
    "DatasetProfiler",
    "FeatureEncoder",
    "ModelEntry",
    "ModelRegistry",
    "ProblemTypeDetector",
    "ProblemTypeResult",
    "ResultsRecord",
    "TrainingPipeline",
    "analyze_data",
    "calculate_metrics",
    "classification_metrics",
    "compute_confusion_matrix",
    "detect_problem_type",
    "prepare_features",
    "regression_metrics",
    "select_target",
    "train_model",
]
