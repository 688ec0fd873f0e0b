"""Immutable rectangular dataset of typed cells."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

import pandas as pd

from .cells import MISSING, Cell, to_cell


if TYPE_CHECKING:
    from automl_tlbx.analysis.feature_encoder import FeatureEncoder
    from automl_tlbx.analysis.problem_type import ProblemTypeDetector
    from automl_tlbx.analysis.profiler import DatasetProfiler
    from automl_tlbx.utils.engine_config import EngineConfig


class TabularDataset:
    """Ordered rows mapping column names to typed cells.

    The column set is taken from the first row. Later rows are read through
    that column set: keys they lack read as ``MISSING`` and extra keys are
    ignored. Rows are stored as read-only mappings; the engine never mutates a
    dataset.
    """

    def __init__(self, rows: Iterable[Mapping[str, object]] = ()) -> None:
        """Initialize the dataset.

        Args:
            rows: Records as produced by a file-parsing collaborator, raw
                scalars or :mod:`~automl_tlbx.data.cells` values.
        """
        materialized = list(rows)
        self._columns: tuple[str, ...] = tuple(str(col) for col in materialized[0]) if materialized else ()
        self._rows: tuple[Mapping[str, Cell], ...] = tuple(
            MappingProxyType({col: to_cell(row.get(col, MISSING)) for col in self._columns})
            for row in materialized
        )

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, object]]) -> TabularDataset:
        """Build a dataset from a list of dict records."""
        return cls(records)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> TabularDataset:
        """Build a dataset from a DataFrame; NaN cells become ``MISSING``.

        Args:
            df: DataFrame produced by e.g. ``pd.read_csv``. Column labels are
                converted to strings.
        """
        frame = df.rename(columns=str)
        return cls(frame.to_dict(orient="records"))

    @property
    def columns(self) -> list[str]:
        """Column names in order of the first row."""
        return list(self._columns)

    @property
    def rows(self) -> Sequence[Mapping[str, Cell]]:
        """The typed rows."""
        return self._rows

    @property
    def n_rows(self) -> int:
        return len(self._rows)

    @property
    def n_columns(self) -> int:
        return len(self._columns)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Mapping[str, Cell]]:
        return iter(self._rows)

    def __contains__(self, column: object) -> bool:
        return column in self._columns

    def column(self, name: str) -> list[Cell]:
        """Return every cell of ``name`` in row order.

        Raises:
            KeyError: If the column does not exist.
        """
        if name not in self._columns:
            raise KeyError(f"Unknown column '{name}'.")
        return [row[name] for row in self._rows]

    def to_frame(self) -> pd.DataFrame:
        """Return an object-dtype DataFrame of plain values (``None`` for missing)."""
        return pd.DataFrame(
            [
                {col: (None if cell is MISSING else cell.value) for col, cell in row.items()}  # type: ignore[union-attr]
                for row in self._rows
            ],
            columns=list(self._columns),
            dtype=object,
        )

    def make_profiler(self, config: EngineConfig | None = None) -> DatasetProfiler:
        """Instantiate a profiler for this dataset."""
        from automl_tlbx.analysis.profiler import DatasetProfiler

        return DatasetProfiler(self, config=config)

    def make_problem_type_detector(
        self,
        target_col: str,
        config: EngineConfig | None = None,
    ) -> ProblemTypeDetector:
        """Instantiate a problem-type detector for ``target_col``."""
        from automl_tlbx.analysis.problem_type import ProblemTypeDetector

        return ProblemTypeDetector(self, target_col=target_col, config=config)

    def make_feature_encoder(
        self,
        target_col: str,
        feature_cols: Iterable[str] | None = None,
        config: EngineConfig | None = None,
    ) -> FeatureEncoder:
        """Instantiate a feature encoder.

        Args:
            target_col: Column to predict.
            feature_cols: Feature columns in order (defaults to every column but the target).
            config: Optional engine configuration.
        """
        from automl_tlbx.analysis.feature_encoder import FeatureEncoder

        features = list(feature_cols) if feature_cols is not None else [c for c in self._columns if c != target_col]
        return FeatureEncoder(self, feature_cols=features, target_col=target_col, config=config)

    def __repr__(self) -> str:
        return f"TabularDataset(rows={self.n_rows}, columns={self.n_columns})"
