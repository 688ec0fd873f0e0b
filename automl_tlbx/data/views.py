"""Task-specific views over dataset content."""

from dataclasses import dataclass

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class EncodedFeatures:
    """Numeric feature matrix and target vector ready for model training.

    Attributes:
        X: Feature matrix of shape ``(n_rows, n_features)``.
        y: Target vector of length ``n_rows``, row-aligned with ``X``.
        feature_names: Feature column names in matrix column order.
        target_col: Name of the encoded target column.
        row_indices: Position of each kept row in the source dataset.
    """

    X: np.ndarray
    """Feature matrix of shape ``(n_rows, n_features)``."""
    y: np.ndarray
    feature_names: list[str]
    target_col: str
    row_indices: np.ndarray
    """Position of each kept row in the source dataset (dropped rows are absent)."""

    @property
    def n_rows(self) -> int:
        return int(self.X.shape[0])

    @property
    def n_features(self) -> int:
        return int(self.X.shape[1])

    def to_frame(self) -> pd.DataFrame:
        """Return features and target as a DataFrame indexed by source row."""
        df = pd.DataFrame(self.X, columns=self.feature_names, index=self.row_indices)
        df[self.target_col] = self.y
        return df
