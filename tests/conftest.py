"""Test configuration for the automl toolbox."""

from pathlib import Path
import sys

import numpy as np
import pytest


# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


@pytest.fixture
def mixed_records() -> list[dict[str, object]]:
    """Twenty records with numeric, categorical and missing values.

    Row 3 lacks ``weight`` and row 7 lacks ``label``; every other row is complete.
    """
    colors = ["red", "green", "blue", "yellow"]
    records: list[dict[str, object]] = []
    for i in range(20):
        records.append(
            {
                "size": float(i),
                "color": colors[i % 4],
                "weight": None if i == 3 else 10.0 + 2 * i,
                "label": "" if i == 7 else int(i >= 10),
            },
        )
    return records


@pytest.fixture
def separable_2d() -> tuple[np.ndarray, np.ndarray]:
    """Linearly separable 2-D points with alternating 0/1 labels."""
    rows = []
    labels = []
    for i in range(20):
        offset = 0.05 * i
        if i % 2 == 0:
            rows.append([2.0 + offset, 2.0 + 0.5 * offset])
            labels.append(1.0)
        else:
            rows.append([-2.0 - offset, -2.0 - 0.5 * offset])
            labels.append(0.0)
    return np.array(rows), np.array(labels)


@pytest.fixture
def linear_1d() -> tuple[np.ndarray, np.ndarray]:
    """Single feature with an exact linear target ``y = 3x + 2``."""
    x = np.arange(1.0, 21.0)
    return x.reshape(-1, 1), 3.0 * x + 2.0
