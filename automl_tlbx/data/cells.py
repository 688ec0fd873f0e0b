"""Typed cell values for rows handed over by the file-parsing collaborator.

Every raw scalar is wrapped into exactly one of three variants:

- :class:`Number` for values that arrived as numbers,
- :class:`Text` for everything else that is present,
- :data:`MISSING` for ``None``, empty strings and NaN.

Text is *not* converted to a number on ingestion; whether it parses as one is
asked through :func:`as_number`. This keeps ``Number(1)`` and ``Text("1")``
distinct when counting distinct target values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import TypeAlias

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class Number:
    """A numeric cell."""

    value: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def __str__(self) -> str:
        if math.isfinite(self.value) and self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class Text:
    """A non-empty text cell."""

    value: str

    def __str__(self) -> str:
        return self.value


class _Missing:
    """Singleton marker for absent values."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __str__(self) -> str:
        return "null"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

Cell: TypeAlias = Number | Text | _Missing


def to_cell(raw: object) -> Cell:
    """Wrap a raw scalar into a typed cell.

    Args:
        raw: Value as produced by a CSV/Excel reader or a ``DataFrame`` record.

    Returns:
        ``MISSING`` for ``None``, ``""`` and NaN (also a wrapped NaN); :class:`Number` for ints,
        floats, bools and numpy numbers; :class:`Text` otherwise.
    """
    if isinstance(raw, Number):
        return MISSING if math.isnan(raw.value) else raw
    if isinstance(raw, Text | _Missing):
        return raw
    if raw is None or (pd.api.types.is_scalar(raw) and pd.isna(raw)):
        return MISSING
    if isinstance(raw, bool | np.bool_ | Real | np.number):
        return Number(float(raw))
    text = str(raw)
    if text == "":
        return MISSING
    return Text(text)


def is_missing(cell: Cell) -> bool:
    """Return whether ``cell`` is the missing marker."""
    return cell is MISSING


def as_number(cell: Cell) -> float | None:
    """Return the numeric value of ``cell`` or ``None`` if it does not parse.

    Text counts as numeric when its stripped content parses with ``float()``
    to a non-NaN value, e.g. ``"3.5"`` or ``" 12 "``. Underscore separators
    and non-ASCII digits (``"1_000"``, full-width numerals) are rejected.
    """
    if isinstance(cell, Number):
        return cell.value
    if isinstance(cell, Text):
        stripped = cell.value.strip()
        if not stripped or "_" in stripped or not stripped.isascii():
            return None
        try:
            value = float(stripped)
        except ValueError:
            return None
        return None if math.isnan(value) else value
    return None


def fallback_code(cell: Cell, modulus: int = 100) -> float:
    """Encode a non-numeric cell from the code point of its first character."""
    return float(ord(str(cell)[0]) % modulus)


__all__ = [
    "MISSING",
    "Cell",
    "Number",
    "Text",
    "as_number",
    "fallback_code",
    "is_missing",
    "to_cell",
]
