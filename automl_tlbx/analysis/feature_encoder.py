"""Conversion of typed rows into a numeric feature matrix and target vector."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from automl_tlbx.data.cells import Cell, as_number, fallback_code, is_missing
from automl_tlbx.data.tabular_dataset import TabularDataset
from automl_tlbx.data.views import EncodedFeatures
from automl_tlbx.errors import InvalidTargetError, NoValidRowsError
from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig

from .base_analyser import BaseAnalyser


logger = logging.getLogger(__name__)


class FeatureEncoder(BaseAnalyser):
    """Encode rows as float vectors, dropping incomplete rows.

    A row is dropped when any feature cell or the target cell is missing;
    partial rows are never imputed. Numeric cells (including numeric text)
    encode to their value, anything else to ``ord(first character) % 100``.
    """

    def __init__(
        self,
        dataset: TabularDataset,
        feature_cols: Sequence[str],
        target_col: str,
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize the encoder.

        Args:
            dataset: Source dataset.
            feature_cols: Feature columns in matrix column order (target excluded).
            target_col: Column encoded into the target vector.
            config: Optional engine configuration (uses ``fallback_modulus``).

        Raises:
            InvalidTargetError: If the target is not a dataset column.
            KeyError: If a feature column is not a dataset column.
        """
        if target_col not in dataset:
            raise InvalidTargetError(target_col, dataset.columns)
        unknown = [col for col in feature_cols if col not in dataset]
        if unknown:
            raise KeyError(f"Columns not found in data: {', '.join(unknown)}")
        self._dataset = dataset
        self.feature_cols = list(feature_cols)
        self.target_col = target_col
        self._cfg = config or DEFAULT_ENGINE_CFG
        self._result: EncodedFeatures | None = None

    def encode_cell(self, cell: Cell) -> float:
        """Encode a single non-missing cell."""
        value = as_number(cell)
        if value is not None:
            return value
        return fallback_code(cell, self._cfg.fallback_modulus)

    def fit(self) -> FeatureEncoder:
        """Encode every complete row.

        Raises:
            NoValidRowsError: If no row survives.
        """
        features: list[list[float]] = []
        targets: list[float] = []
        kept: list[int] = []
        for idx, row in enumerate(self._dataset.rows):
            target = row[self.target_col]
            cells = [row[col] for col in self.feature_cols]
            if is_missing(target) or any(map(is_missing, cells)):
                continue
            features.append([self.encode_cell(cell) for cell in cells])
            targets.append(self.encode_cell(target))
            kept.append(idx)

        if not kept:
            raise NoValidRowsError
        logger.debug("Encoded %d rows, dropped %d incomplete rows", len(kept), self._dataset.n_rows - len(kept))

        self._result = EncodedFeatures(
            X=np.asarray(features, dtype=float).reshape(len(kept), len(self.feature_cols)),
            y=np.asarray(targets, dtype=float),
            feature_names=list(self.feature_cols),
            target_col=self.target_col,
            row_indices=np.asarray(kept, dtype=int),
        )
        return self

    def result(self) -> EncodedFeatures:
        """Return the encoded matrices.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        if self._result is None:
            raise ValueError("Must call fit() before result()")
        return self._result


def prepare_features(
    dataset: TabularDataset,
    feature_cols: Sequence[str],
    target_col: str,
    config: EngineConfig | None = None,
) -> EncodedFeatures:
    """Encode ``dataset`` into ``(X, y)`` for the given feature and target columns."""
    return FeatureEncoder(dataset, feature_cols, target_col, config=config).fit().result()
