"""Decoded result-set payloads and cell values consumed by the workbench."""

from dal.cells import Cell, CellKind, cell_at
from dal.query_result import ColumnMeta, ExplainResult, PaginatedResult, QueryResult, Row

__all__ = [
    "Cell",
    "CellKind",
    "ColumnMeta",
    "ExplainResult",
    "PaginatedResult",
    "QueryResult",
    "Row",
    "cell_at",
]
