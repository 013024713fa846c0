"""Shared fixtures for unit tests."""

import pytest

from dal.query_result import ColumnMeta


@pytest.fixture
def sales_columns():
    """A result set with a datetime, a categorical and two numeric columns."""
    return [
        ColumnMeta(name="created_at", data_type="timestamp without time zone"),
        ColumnMeta(name="region", data_type="character varying"),
        ColumnMeta(name="revenue", data_type="numeric"),
        ColumnMeta(name="orders", data_type="int4"),
    ]


@pytest.fixture
def category_columns():
    """A result set without any datetime column."""
    return [
        ColumnMeta(name="id", data_type="uuid"),
        ColumnMeta(name="product", data_type="text"),
        ColumnMeta(name="price", data_type="float8"),
        ColumnMeta(name="stock", data_type="bigint"),
    ]
