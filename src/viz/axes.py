"""Axis eligibility filters over a result set's columns."""

from typing import List, Sequence

from dal.query_result import ColumnMeta
from viz.classify import ColumnCategory, classify_type

_X_AXIS_CATEGORIES = {ColumnCategory.DATETIME, ColumnCategory.CATEGORICAL}


def numeric_columns(columns: Sequence[ColumnMeta]) -> List[ColumnMeta]:
    """Columns usable as Y-axis series."""
    return [col for col in columns if classify_type(col.data_type) == ColumnCategory.NUMERIC]


def datetime_columns(columns: Sequence[ColumnMeta]) -> List[ColumnMeta]:
    """Columns usable as a time-series X axis."""
    return [col for col in columns if classify_type(col.data_type) == ColumnCategory.DATETIME]


def x_axis_columns(columns: Sequence[ColumnMeta]) -> List[ColumnMeta]:
    """Columns usable as X-axis labels (categorical or datetime)."""
    return [col for col in columns if classify_type(col.data_type) in _X_AXIS_CATEGORIES]


def can_visualize(columns: Sequence[ColumnMeta]) -> bool:
    """Whether at least one label column and one value column exist."""
    return bool(numeric_columns(columns)) and bool(x_axis_columns(columns))


def find_column(columns: Sequence[ColumnMeta], name: str) -> int:
    """Return the index of the column called `name`, or -1."""
    for index, col in enumerate(columns):
        if col.name == name:
            return index
    return -1
