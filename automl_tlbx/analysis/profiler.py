"""Dataset profiling: column types, missing values and summary statistics."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from automl_tlbx.data.cells import as_number, is_missing
from automl_tlbx.data.column_types import ColumnType, ProblemType
from automl_tlbx.data.tabular_dataset import TabularDataset
from automl_tlbx.errors import EmptyDatasetError
from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig

from .base_analyser import BaseAnalyser


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnStatistics:
    """Summary statistics of the non-missing numeric values of a column."""

    mean: float
    median: float
    """Element at index ``n // 2`` of the sorted values (no averaging of the two middle values)."""
    min: float
    max: float
    std: float
    """Population standard deviation (divides by ``n``)."""


@dataclass(frozen=True)
class ColumnProfile:
    """Per-column view of an :class:`AnalysisRecord`."""

    name: str
    dtype: ColumnType
    missing: int
    statistics: ColumnStatistics | None = None


@dataclass
class AnalysisRecord:
    """Shape, types and statistics of a dataset, plus the selected target.

    The record is created by :class:`DatasetProfiler` without a target. Target
    selection writes ``target_column``, ``problem_type`` and ``class_balance``
    in place, so one record travels through every stage.

    Attributes:
        shape: ``(rows, columns)`` of the profiled dataset.
        columns: Column names in dataset order.
        dtypes: Inferred type per column.
        missing_values: Missing-value count per column.
        numeric_columns: Columns inferred as numeric, in dataset order.
        categorical_columns: Columns inferred as categorical, in dataset order.
        statistics: Summary statistics for every numeric column.
        target_column: Selected prediction target (``None`` until selected).
        problem_type: Problem type of the selected target.
        class_balance: Rows per distinct target value (classification only).
    """

    shape: tuple[int, int]
    columns: list[str]
    dtypes: dict[str, ColumnType]
    missing_values: dict[str, int]
    numeric_columns: list[str]
    categorical_columns: list[str]
    statistics: dict[str, ColumnStatistics] = field(default_factory=dict)
    target_column: str | None = None
    problem_type: ProblemType | None = None
    class_balance: dict[str, int] | None = None

    @property
    def n_rows(self) -> int:
        return self.shape[0]

    @property
    def profiles(self) -> list[ColumnProfile]:
        """Per-column profiles in dataset order."""
        return [self.profile(col) for col in self.columns]

    def profile(self, column: str) -> ColumnProfile:
        """Return the profile of a single column.

        Raises:
            KeyError: If the column was not profiled.
        """
        if column not in self.dtypes:
            raise KeyError(f"Unknown column '{column}'.")
        return ColumnProfile(
            name=column,
            dtype=self.dtypes[column],
            missing=self.missing_values[column],
            statistics=self.statistics.get(column),
        )

    def feature_columns(self) -> list[str]:
        """Return every column except the selected target."""
        return [col for col in self.columns if col != self.target_column]

    def to_frame(self) -> pd.DataFrame:
        """Return one row per column with type, missing count and statistics."""
        rows = []
        for prof in self.profiles:
            row: dict[str, object] = {
                "column": prof.name,
                "dtype": str(prof.dtype),
                "missing": prof.missing,
                "missing_pct": 100.0 * prof.missing / self.n_rows if self.n_rows else 0.0,
            }
            stats = prof.statistics
            for key in ("mean", "median", "min", "max", "std"):
                row[key] = getattr(stats, key) if stats is not None else np.nan
            rows.append(row)
        return pd.DataFrame(rows).set_index("column")


class DatasetProfiler(BaseAnalyser):
    """Infer column types, count missing values and summarise numeric columns.

    A column is numeric iff strictly more than ``numeric_threshold`` (80%) of
    its non-missing values are numbers or parse as numbers. A column with no
    non-missing values is categorical.

    Example:
        >>> ds = TabularDataset.from_records([{"a": 1, "b": "x"}, {"a": 2, "b": None}])
        >>> analysis = DatasetProfiler(ds).fit().result()
        >>> analysis.numeric_columns
        ['a']
    """

    def __init__(self, dataset: TabularDataset, config: EngineConfig | None = None) -> None:
        """Initialize the profiler.

        Args:
            dataset: Dataset to profile.
            config: Optional engine configuration (uses ``numeric_threshold``).
        """
        self._dataset = dataset
        self._cfg = config or DEFAULT_ENGINE_CFG
        self._record: AnalysisRecord | None = None

    def fit(self) -> DatasetProfiler:
        """Profile every column.

        Raises:
            EmptyDatasetError: If the dataset has no rows.
        """
        ds = self._dataset
        if ds.n_rows == 0:
            raise EmptyDatasetError

        dtypes: dict[str, ColumnType] = {}
        missing: dict[str, int] = {}
        statistics: dict[str, ColumnStatistics] = {}
        for col in ds.columns:
            present = [cell for cell in ds.column(col) if not is_missing(cell)]
            missing[col] = ds.n_rows - len(present)
            numbers = [value for value in map(as_number, present) if value is not None]

            if len(numbers) > self._cfg.numeric_threshold * len(present):
                dtypes[col] = ColumnType.NUMERIC
                statistics[col] = summarize(numbers)
            else:
                dtypes[col] = ColumnType.CATEGORICAL

        self._record = AnalysisRecord(
            shape=(ds.n_rows, ds.n_columns),
            columns=ds.columns,
            dtypes=dtypes,
            missing_values=missing,
            numeric_columns=[c for c in ds.columns if dtypes[c] is ColumnType.NUMERIC],
            categorical_columns=[c for c in ds.columns if dtypes[c] is ColumnType.CATEGORICAL],
            statistics=statistics,
        )
        logger.debug(
            "Profiled %d rows: %d numeric, %d categorical columns",
            ds.n_rows,
            len(self._record.numeric_columns),
            len(self._record.categorical_columns),
        )
        return self

    def result(self) -> AnalysisRecord:
        """Return the analysis record.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        if self._record is None:
            raise ValueError("Must call fit() before result()")
        return self._record


def summarize(values: list[float]) -> ColumnStatistics:
    """Compute summary statistics of a non-empty list of numbers."""
    arr = np.sort(np.asarray(values, dtype=float))
    return ColumnStatistics(
        mean=float(arr.mean()),
        median=float(arr[arr.size // 2]),
        min=float(arr[0]),
        max=float(arr[-1]),
        std=float(arr.std(ddof=0)),
    )


def analyze_data(dataset: TabularDataset, config: EngineConfig | None = None) -> AnalysisRecord:
    """Profile ``dataset`` and return its analysis record."""
    return DatasetProfiler(dataset, config=config).fit().result()
