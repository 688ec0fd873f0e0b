r"""CART-style classification tree grown depth-first on Gini impurity.

The Gini impurity of a label set is :math:`G = 1 - \sum_k p_k^2`. Candidate
splits are the midpoints between adjacent distinct values of each feature and
are scored by the sample-weighted impurity of both sides,

.. math:: G_{split} = \frac{n_L}{n} G_L + \frac{n_R}{n} G_R .
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Self, TypeAlias

import numpy as np

from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig

from .base import BaseModel


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Leaf:
    """Terminal node predicting ``label``."""

    label: float


@dataclass(frozen=True)
class Split:
    """Internal node routing ``x[feature] <= threshold`` to ``left``."""

    feature: int
    threshold: float
    left: Node
    right: Node


Node: TypeAlias = Leaf | Split


@dataclass(frozen=True)
class _Candidate:
    feature: int
    threshold: float
    gini: float
    left_mask: np.ndarray


def gini_impurity(labels: np.ndarray) -> float:
    """Return :math:`1 - \\sum_k p_k^2` of ``labels`` (0 for an empty set)."""
    if labels.size == 0:
        return 0.0
    _, counts = np.unique(labels, return_counts=True)
    proportions = counts / labels.size
    return float(1.0 - np.sum(proportions**2))


def weighted_gini(left: np.ndarray, right: np.ndarray) -> float:
    """Sample-weighted Gini impurity of a two-way partition."""
    total = left.size + right.size
    return left.size / total * gini_impurity(left) + right.size / total * gini_impurity(right)


def most_common_label(labels: np.ndarray) -> float:
    """Return the most frequent label; ties go to the label seen first."""
    counts: dict[float, int] = {}
    for label in labels.tolist():
        counts[label] = counts.get(label, 0) + 1
    return max(counts.items(), key=lambda item: item[1])[0]


class DecisionTreeModel(BaseModel):
    """Binary-split decision tree classifier.

    Attributes:
        max_depth: Nodes at this depth become leaves (default 10).
        min_samples_split: Subsets smaller than this become leaves (default 2).
    """

    name = "Decision Tree"

    def __init__(self, config: EngineConfig | None = None) -> None:
        cfg = config or DEFAULT_ENGINE_CFG
        self.max_depth = cfg.max_depth
        self.min_samples_split = cfg.min_samples_split
        self.root: Node | None = None

    def fit(self, X: np.ndarray, y: np.ndarray) -> Self:
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float)
        if X.shape[0] == 0:
            raise ValueError("Cannot fit a decision tree on an empty training set.")
        self.root = self._build(X, y, depth=0)
        logger.debug("Grew decision tree: depth=%d, leaves=%d", self.depth, self.n_leaves)
        return self

    def _build(self, X: np.ndarray, y: np.ndarray, depth: int) -> Node:
        if depth >= self.max_depth or y.size < self.min_samples_split or np.unique(y).size == 1:
            return Leaf(most_common_label(y))

        best = self._best_split(X, y)
        if best is None:
            return Leaf(most_common_label(y))

        mask = best.left_mask
        return Split(
            feature=best.feature,
            threshold=best.threshold,
            left=self._build(X[mask], y[mask], depth + 1),
            right=self._build(X[~mask], y[~mask], depth + 1),
        )

    @staticmethod
    def _best_split(X: np.ndarray, y: np.ndarray) -> _Candidate | None:
        best: _Candidate | None = None
        for feature in range(X.shape[1]):
            column = X[:, feature]
            values = np.unique(column)
            for threshold in (values[:-1] + values[1:]) / 2:
                left_mask = column <= threshold
                n_left = int(left_mask.sum())
                if n_left == 0 or n_left == column.size:
                    continue
                score = weighted_gini(y[left_mask], y[~left_mask])
                # strict comparison keeps the first split on ties
                if best is None or score < best.gini:
                    best = _Candidate(feature, float(threshold), score, left_mask)
        return best

    def _predict_row(self, row: np.ndarray) -> float:
        node = self.root
        while isinstance(node, Split):
            node = node.left if row[node.feature] <= node.threshold else node.right
        return node.label  # type: ignore[union-attr]

    def predict(self, X: np.ndarray) -> np.ndarray:
        if self.root is None:
            raise ValueError("Must call fit() before predict()")
        X = np.asarray(X, dtype=float)
        return np.array([self._predict_row(row) for row in X], dtype=float)

    @property
    def depth(self) -> int:
        """Depth of the fitted tree (a single leaf has depth 0)."""

        def _depth(node: Node | None) -> int:
            if not isinstance(node, Split):
                return 0
            return 1 + max(_depth(node.left), _depth(node.right))

        return _depth(self.root)

    @property
    def n_leaves(self) -> int:
        """Number of leaves of the fitted tree."""

        def _count(node: Node | None) -> int:
            if node is None:
                return 0
            if isinstance(node, Leaf):
                return 1
            return _count(node.left) + _count(node.right)

        return _count(self.root)
