"""Tests for problem-type detection and class balance."""

import pytest

from automl_tlbx.analysis.problem_type import (
    ProblemTypeDetector,
    ProblemTypeResult,
    detect_problem_type,
    select_target,
)
from automl_tlbx.analysis.profiler import analyze_data
from automl_tlbx.data import Number, ProblemType, TabularDataset
from automl_tlbx.errors import InvalidTargetError
from automl_tlbx.utils.engine_config import EngineConfig


def _target_dataset(values: list[object]) -> TabularDataset:
    return TabularDataset.from_records([{"x": i, "target": v} for i, v in enumerate(values)])


class TestProblemTypeDetector:
    """Test the detection rules."""

    def test_few_distinct_values_is_classification(self) -> None:
        """Five distinct values is classification regardless of size."""
        ds = _target_dataset([float(i % 5) for i in range(1000)])
        assert detect_problem_type(ds, "target") is ProblemType.CLASSIFICATION

    def test_twenty_one_numeric_values_is_regression(self) -> None:
        """21 distinct numeric values in 100 rows passes both classification rules."""
        ds = _target_dataset([float(i % 21) for i in range(100)])
        assert detect_problem_type(ds, "target") is ProblemType.REGRESSION

    def test_low_cardinality_ratio_is_classification(self) -> None:
        """Fewer distinct values than 10% of the rows is classification."""
        ds = _target_dataset([float(i % 21) for i in range(1000)])
        assert detect_problem_type(ds, "target") is ProblemType.CLASSIFICATION

    def test_mostly_numeric_high_cardinality_is_regression(self) -> None:
        values: list[object] = [float(i) for i in range(85)] + [f"x{i}" for i in range(15)]
        assert detect_problem_type(_target_dataset(values), "target") is ProblemType.REGRESSION

    def test_high_cardinality_text_falls_back_to_classification(self) -> None:
        values = [f"id-{i}" for i in range(100)]
        assert detect_problem_type(_target_dataset(values), "target") is ProblemType.CLASSIFICATION

    def test_number_and_text_are_distinct_values(self) -> None:
        """1 and "1" count as two distinct target values."""
        ds = _target_dataset([1, "1", 2])
        result = ProblemTypeDetector(ds, "target").fit().result()
        assert result.n_unique == 3

    def test_custom_cardinality(self) -> None:
        ds = _target_dataset([float(i % 21) for i in range(100)])
        cfg = EngineConfig(max_classification_cardinality=25)
        assert detect_problem_type(ds, "target", config=cfg) is ProblemType.CLASSIFICATION

    def test_unknown_target(self) -> None:
        """A target outside the dataset columns raises InvalidTargetError."""
        ds = _target_dataset([1, 2])
        with pytest.raises(InvalidTargetError) as exc_info:
            ProblemTypeDetector(ds, "nope")
        assert isinstance(exc_info.value, KeyError)
        assert "nope" in str(exc_info.value)

    def test_result_before_fit(self) -> None:
        with pytest.raises(ValueError, match="fit"):
            ProblemTypeDetector(_target_dataset([1, 2]), "target").result()


class TestClassBalance:
    """Test class-balance accounting."""

    def test_first_appearance_order(self) -> None:
        ds = _target_dataset(["b", "a", "b", "c", "a", "b"])
        result = ProblemTypeDetector(ds, "target").fit().result()
        assert list(result.class_balance) == ["b", "a", "c"]
        assert result.class_balance == {"b": 3, "a": 2, "c": 1}

    def test_counts_sum_to_row_count(self) -> None:
        """Missing targets are counted too, under "null"."""
        ds = _target_dataset([1, 0, None, 1, ""])
        result = ProblemTypeDetector(ds, "target").fit().result()
        assert result.class_balance == {"1": 2, "0": 1, "null": 2}
        assert sum(result.class_balance.values()) == ds.n_rows

    def test_regression_has_no_balance(self) -> None:
        ds = _target_dataset([float(i) for i in range(100)])
        result = ProblemTypeDetector(ds, "target").fit().result()
        assert result.problem_type is ProblemType.REGRESSION
        assert result.class_balance is None


class TestSelectTarget:
    """Test writing the selection into an analysis record."""

    def test_select_target_updates_analysis_in_place(self, mixed_records: list[dict[str, object]]) -> None:
        ds = TabularDataset.from_records(mixed_records)
        analysis = analyze_data(ds)
        returned = select_target(analysis, ds, "label")
        assert returned is analysis
        assert analysis.target_column == "label"
        assert analysis.problem_type is ProblemType.CLASSIFICATION
        assert analysis.class_balance == {"0": 9, "1": 10, "null": 1}

    def test_select_unknown_target(self, mixed_records: list[dict[str, object]]) -> None:
        ds = TabularDataset.from_records(mixed_records)
        analysis = analyze_data(ds)
        with pytest.raises(InvalidTargetError):
            select_target(analysis, ds, "missing_column")
        assert analysis.target_column is None

    def test_apply_to_copies_balance(self, mixed_records: list[dict[str, object]]) -> None:
        ds = TabularDataset.from_records(mixed_records)
        analysis = analyze_data(ds)
        result = ProblemTypeResult("label", ProblemType.CLASSIFICATION, 2, {"0": 1})
        result.apply_to(analysis)
        analysis.class_balance["0"] = 5  # type: ignore[index]
        assert result.class_balance == {"0": 1}


class TestIntegerNumberCells:
    """Test targets given as Number cells holding ints."""

    def test_class_balance_keys(self) -> None:
        ds = TabularDataset.from_records(
            [{"x": i, "t": Number(i % 2)} for i in range(6)],  # type: ignore[arg-type]
        )
        result = ProblemTypeDetector(ds, "t").fit().result()
        assert result.problem_type is ProblemType.CLASSIFICATION
        assert result.class_balance == {"0": 3, "1": 3}
