"""Semantic classification of raw column type tags."""

from enum import Enum
from typing import Any

# PostgreSQL type names, matched as case-insensitive substrings.
NUMERIC_TYPES = (
    "int2",
    "int4",
    "int8",
    "smallint",
    "integer",
    "bigint",
    "decimal",
    "numeric",
    "real",
    "double precision",
    "float4",
    "float8",
    "money",
)

DATETIME_TYPES = (
    "timestamp",
    "timestamptz",
    "timestamp with time zone",
    "timestamp without time zone",
    "date",
    "time",
    "timetz",
    "time with time zone",
    "time without time zone",
)

CATEGORICAL_TYPES = (
    "text",
    "varchar",
    "character varying",
    "char",
    "character",
    "name",
    "uuid",
)


class ColumnCategory(str, Enum):
    """Semantic category of a column, derived from its raw type tag."""

    NUMERIC = "numeric"
    DATETIME = "datetime"
    CATEGORICAL = "categorical"
    OTHER = "other"


def _matches(data_type: Any, vocabulary: tuple) -> bool:
    normalized = str(data_type).lower()
    return any(term in normalized for term in vocabulary)


def is_numeric_type(data_type: str) -> bool:
    """Check if a column type is numeric."""
    return _matches(data_type, NUMERIC_TYPES)


def is_datetime_type(data_type: str) -> bool:
    """Check if a column type is a date, time or timestamp."""
    return _matches(data_type, DATETIME_TYPES)


def is_categorical_type(data_type: str) -> bool:
    """Check if a column type is string-like."""
    return _matches(data_type, CATEGORICAL_TYPES)


def classify_type(data_type: str) -> ColumnCategory:
    """Classify a raw type tag; tags matching no vocabulary fall to OTHER."""
    if is_numeric_type(data_type):
        return ColumnCategory.NUMERIC
    if is_datetime_type(data_type):
        return ColumnCategory.DATETIME
    if is_categorical_type(data_type):
        return ColumnCategory.CATEGORICAL
    return ColumnCategory.OTHER
