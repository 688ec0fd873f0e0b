"""Tests for the Gini decision tree."""

import numpy as np
import pytest

from automl_tlbx.models import DecisionTreeModel
from automl_tlbx.models.decision_tree import Leaf, Split, gini_impurity, most_common_label, weighted_gini
from automl_tlbx.utils.engine_config import EngineConfig


class TestImpurityHelpers:
    """Test Gini and majority-vote helpers."""

    def test_gini(self) -> None:
        assert gini_impurity(np.array([0.0, 0.0, 1.0, 1.0])) == pytest.approx(0.5)
        assert gini_impurity(np.array([1.0, 1.0])) == 0.0
        assert gini_impurity(np.array([])) == 0.0

    def test_weighted_gini(self) -> None:
        left = np.array([0.0, 0.0])
        right = np.array([0.0, 1.0])
        assert weighted_gini(left, right) == pytest.approx(0.25)

    def test_most_common_label_ties_keep_first_seen(self) -> None:
        assert most_common_label(np.array([2.0, 1.0, 1.0, 2.0])) == 2.0
        assert most_common_label(np.array([1.0, 2.0, 2.0])) == 2.0


class TestDecisionTreeModel:
    """Test tree growth and prediction."""

    def test_single_threshold(self) -> None:
        """Two separable groups split at the midpoint."""
        X = np.array([[1.0], [2.0], [3.0], [4.0]])
        y = np.array([0.0, 0.0, 1.0, 1.0])
        model = DecisionTreeModel().fit(X, y)
        assert isinstance(model.root, Split)
        assert model.root.feature == 0
        assert model.root.threshold == pytest.approx(2.5)
        np.testing.assert_array_equal(model.predict(X), y)

    def test_threshold_is_inclusive_on_the_left(self) -> None:
        X = np.array([[1.0], [2.0], [3.0], [4.0]])
        y = np.array([0.0, 0.0, 1.0, 1.0])
        model = DecisionTreeModel().fit(X, y)
        np.testing.assert_array_equal(model.predict(np.array([[2.5], [2.51]])), [0.0, 1.0])

    def test_max_depth_zero_is_a_leaf(self) -> None:
        X = np.array([[1.0], [2.0], [3.0]])
        y = np.array([1.0, 0.0, 1.0])
        model = DecisionTreeModel(EngineConfig(max_depth=0)).fit(X, y)
        assert model.root == Leaf(1.0)
        assert model.depth == 0
        assert model.n_leaves == 1

    def test_identical_features_make_a_leaf(self) -> None:
        """No split separates identical rows."""
        X = np.ones((4, 2))
        y = np.array([0.0, 1.0, 1.0, 0.0])
        model = DecisionTreeModel().fit(X, y)
        assert model.root == Leaf(0.0)

    def test_pure_node_is_a_leaf(self) -> None:
        model = DecisionTreeModel().fit(np.array([[1.0], [5.0]]), np.array([3.0, 3.0]))
        assert model.root == Leaf(3.0)

    def test_xor(self) -> None:
        """XOR needs two levels and is fit exactly."""
        X = np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]] * 2)
        y = np.array([0.0, 1.0, 1.0, 0.0] * 2)
        model = DecisionTreeModel().fit(X, y)
        np.testing.assert_array_equal(model.predict(X), y)
        assert model.depth == 2
        assert model.n_leaves == 4

    def test_ties_choose_first_feature(self) -> None:
        """Equally good splits on two features keep feature 0."""
        X = np.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0], [4.0, 4.0]])
        y = np.array([0.0, 0.0, 1.0, 1.0])
        model = DecisionTreeModel().fit(X, y)
        assert isinstance(model.root, Split)
        assert model.root.feature == 0

    def test_min_samples_split(self) -> None:
        X = np.array([[1.0], [2.0], [3.0], [4.0]])
        y = np.array([0.0, 1.0, 0.0, 1.0])
        model = DecisionTreeModel(EngineConfig(min_samples_split=5)).fit(X, y)
        assert isinstance(model.root, Leaf)

    def test_predict_before_fit(self) -> None:
        with pytest.raises(ValueError, match="fit"):
            DecisionTreeModel().predict(np.zeros((1, 1)))
