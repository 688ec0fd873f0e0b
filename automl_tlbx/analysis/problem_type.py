"""Problem-type detection and class balance for a selected target column."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from automl_tlbx.data.cells import as_number, is_missing
from automl_tlbx.data.column_types import ProblemType
from automl_tlbx.data.tabular_dataset import TabularDataset
from automl_tlbx.errors import InvalidTargetError
from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig

from .base_analyser import BaseAnalyser
from .profiler import AnalysisRecord


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProblemTypeResult:
    """Outcome of problem-type detection.

    Attributes:
        target_column: Target the detection ran on.
        problem_type: Detected learning task.
        n_unique: Number of distinct non-missing target values.
        class_balance: Rows per distinct target value in order of first
            appearance (classification only). Missing targets are counted
            under ``"null"`` so counts sum to the row count.
    """

    target_column: str
    problem_type: ProblemType
    n_unique: int
    class_balance: dict[str, int] | None = None

    def apply_to(self, analysis: AnalysisRecord) -> AnalysisRecord:
        """Write target, problem type and class balance into ``analysis`` in place."""
        analysis.target_column = self.target_column
        analysis.problem_type = self.problem_type
        analysis.class_balance = dict(self.class_balance) if self.class_balance is not None else None
        return analysis


class ProblemTypeDetector(BaseAnalyser):
    """Classify a target column as classification or regression.

    Rules, evaluated in order:

    1. at most ``max_classification_cardinality`` (20) distinct values, or fewer
       distinct values than ``classification_ratio`` (10%) of the rows
       -> classification
    2. more than ``regression_numeric_ratio`` (80%) of the non-missing values
       numeric -> regression
    3. otherwise -> classification
    """

    def __init__(
        self,
        dataset: TabularDataset,
        target_col: str,
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize the detector.

        Args:
            dataset: Dataset containing the target column.
            target_col: Name of the target column.
            config: Optional engine configuration.

        Raises:
            InvalidTargetError: If ``target_col`` is not a dataset column.
        """
        if target_col not in dataset:
            raise InvalidTargetError(target_col, dataset.columns)
        self._dataset = dataset
        self.target_col = target_col
        self._cfg = config or DEFAULT_ENGINE_CFG
        self._result: ProblemTypeResult | None = None

    def fit(self) -> ProblemTypeDetector:
        """Detect the problem type (and class balance for classification)."""
        cfg = self._cfg
        cells = self._dataset.column(self.target_col)
        present = [cell for cell in cells if not is_missing(cell)]
        n_unique = len(set(present))

        if (
            n_unique <= cfg.max_classification_cardinality
            or n_unique < len(cells) * cfg.classification_ratio
        ):
            problem_type = ProblemType.CLASSIFICATION
        elif sum(as_number(cell) is not None for cell in present) > len(present) * cfg.regression_numeric_ratio:
            problem_type = ProblemType.REGRESSION
        else:
            problem_type = ProblemType.CLASSIFICATION

        balance = None
        if problem_type is ProblemType.CLASSIFICATION:
            balance = {}
            for cell in cells:
                key = str(cell)
                balance[key] = balance.get(key, 0) + 1

        logger.debug(
            "Target '%s': %d distinct values -> %s",
            self.target_col,
            n_unique,
            problem_type,
        )
        self._result = ProblemTypeResult(
            target_column=self.target_col,
            problem_type=problem_type,
            n_unique=n_unique,
            class_balance=balance,
        )
        return self

    def result(self) -> ProblemTypeResult:
        """Return the detection result.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        if self._result is None:
            raise ValueError("Must call fit() before result()")
        return self._result


def detect_problem_type(
    dataset: TabularDataset,
    target_col: str,
    config: EngineConfig | None = None,
) -> ProblemType:
    """Return the problem type implied by ``target_col``."""
    return ProblemTypeDetector(dataset, target_col, config=config).fit().result().problem_type


def select_target(
    analysis: AnalysisRecord,
    dataset: TabularDataset,
    target_col: str,
    config: EngineConfig | None = None,
) -> AnalysisRecord:
    """Validate ``target_col``, detect its problem type and record both in ``analysis``.

    Raises:
        InvalidTargetError: If ``target_col`` is not one of ``analysis.columns``.
    """
    if target_col not in analysis.columns:
        raise InvalidTargetError(target_col, analysis.columns)
    return ProblemTypeDetector(dataset, target_col, config=config).fit().result().apply_to(analysis)
