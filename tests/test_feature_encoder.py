"""Tests for feature encoding."""

import numpy as np
import pytest

from automl_tlbx.analysis.feature_encoder import FeatureEncoder, prepare_features
from automl_tlbx.data import Number, TabularDataset, Text
from automl_tlbx.errors import InvalidTargetError, NoValidRowsError


class TestFeatureEncoder:
    """Test row filtering and cell encoding."""

    def test_incomplete_rows_are_dropped(self) -> None:
        """A row missing one feature is dropped from both X and y."""
        records = [{"a": float(i), "b": float(2 * i), "y": i % 2} for i in range(10)]
        records[5]["b"] = None
        encoded = prepare_features(TabularDataset.from_records(records), ["a", "b"], "y")
        assert encoded.X.shape == (9, 2)
        assert encoded.y.shape == (9,)
        assert 5 not in encoded.row_indices.tolist()
        np.testing.assert_array_equal(encoded.X[:, 0], encoded.row_indices.astype(float))

    def test_missing_target_is_dropped(self) -> None:
        records = [{"a": 1, "y": 1}, {"a": 2, "y": ""}, {"a": 3, "y": 0}]
        encoded = prepare_features(TabularDataset.from_records(records), ["a"], "y")
        np.testing.assert_array_equal(encoded.y, [1.0, 0.0])
        np.testing.assert_array_equal(encoded.row_indices, [0, 2])

    def test_text_encodings(self) -> None:
        """Numeric text parses, other text uses the first-character code."""
        records = [
            {"fruit": "apple", "amount": "3.5", "y": "yes"},
            {"fruit": "Banana", "amount": 2, "y": "no"},
        ]
        encoded = prepare_features(TabularDataset.from_records(records), ["fruit", "amount"], "y")
        np.testing.assert_array_equal(encoded.X, [[97.0, 3.5], [66.0, 2.0]])
        np.testing.assert_array_equal(encoded.y, [21.0, 10.0])

    def test_encode_cell(self) -> None:
        ds = TabularDataset.from_records([{"a": 1, "y": 0}])
        encoder = FeatureEncoder(ds, ["a"], "y")
        assert encoder.encode_cell(Number(4.5)) == 4.5
        assert encoder.encode_cell(Text("zebra")) == 22.0

    def test_no_valid_rows(self) -> None:
        """Every row incomplete raises NoValidRowsError."""
        records = [{"a": None, "y": 1}, {"a": 2, "y": None}]
        with pytest.raises(NoValidRowsError):
            prepare_features(TabularDataset.from_records(records), ["a"], "y")

    def test_unknown_feature_column(self) -> None:
        ds = TabularDataset.from_records([{"a": 1, "y": 0}])
        with pytest.raises(KeyError, match="Columns not found"):
            FeatureEncoder(ds, ["a", "zzz"], "y")

    def test_unknown_target(self) -> None:
        ds = TabularDataset.from_records([{"a": 1, "y": 0}])
        with pytest.raises(InvalidTargetError):
            FeatureEncoder(ds, ["a"], "target")

    def test_result_before_fit(self) -> None:
        ds = TabularDataset.from_records([{"a": 1, "y": 0}])
        with pytest.raises(ValueError, match="fit"):
            FeatureEncoder(ds, ["a"], "y").result()

    def test_mixed_records(self, mixed_records: list[dict[str, object]]) -> None:
        ds = TabularDataset.from_records(mixed_records)
        encoded = ds.make_feature_encoder("label").fit().result()
        assert encoded.n_rows == 18
        assert encoded.n_features == 3
        assert encoded.feature_names == ["size", "color", "weight"]
        assert set(encoded.y.tolist()) == {0.0, 1.0}


class TestEncodedFeatures:
    """Test the encoded view."""

    def test_to_frame(self) -> None:
        records = [{"a": 1, "y": 0}, {"a": None, "y": 1}, {"a": 3, "y": 1}]
        encoded = prepare_features(TabularDataset.from_records(records), ["a"], "y")
        df = encoded.to_frame()
        assert list(df.columns) == ["a", "y"]
        assert list(df.index) == [0, 2]
        assert df.loc[2, "a"] == 3.0

    def test_wrapped_nan_row_is_dropped(self) -> None:
        """A NaN already wrapped as a Number never reaches the matrix."""
        ds = TabularDataset.from_records([{"x": Number(float("nan")), "t": 1}, {"x": 2.0, "t": 0}])
        encoded = prepare_features(ds, ["x"], "t")
        np.testing.assert_array_equal(encoded.X, [[2.0]])
        np.testing.assert_array_equal(encoded.row_indices, [1])
        assert not np.isnan(encoded.X).any()
