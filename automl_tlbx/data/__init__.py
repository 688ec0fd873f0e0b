"""Data module for datasets, typed cells and encoded views."""

from .cells import MISSING, Cell, Number, Text, to_cell
from .column_types import ColumnType, ProblemType
from .tabular_dataset import TabularDataset
from .views import EncodedFeatures


__all__ = [
    "MISSING",
    "Cell",
    "ColumnType",
    "EncodedFeatures",
    "Number",
    "ProblemType",
    "TabularDataset",
    "Text",
    "to_cell",
]
