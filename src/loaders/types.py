from __future__ import annotations

"""Core data types for loaded tabular test data."""

from typing import Literal

RowRecord = dict[str, str]
Dataset = list[RowRecord]
ShapePolicy = Literal["pad", "strict"]

SHAPE_POLICIES: frozenset[str] = frozenset({"pad", "strict"})
