"""Result-set payloads returned by the query-execution backend."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Row = List[Any]


class ColumnMeta(BaseModel):
    """Name and raw database type of one result column."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Column name, unique within a result set")
    data_type: str = Field("", description="Raw type tag reported by the database")


class QueryResult(BaseModel):
    """Unbounded result of an ad-hoc statement."""

    columns: List[ColumnMeta] = Field(default_factory=list)
    rows: List[Row] = Field(default_factory=list)
    row_count: int = Field(0, ge=0, description="Number of rows returned")
    affected_rows: Optional[int] = Field(None, description="Rows touched by DML statements")

    @model_validator(mode="before")
    @classmethod
    def _default_row_count(cls, value: Any) -> Any:
        if isinstance(value, dict) and value.get("row_count") is None:
            data = dict(value)
            data["row_count"] = len(data.get("rows") or [])
            return data
        return value


class PaginatedResult(BaseModel):
    """Bounded window over one table's rows plus total-count metadata."""

    columns: List[ColumnMeta] = Field(default_factory=list)
    rows: List[Row] = Field(default_factory=list)
    total_count: int = Field(0, ge=0, description="Rows in the whole table")
    page: int = Field(1, ge=1, description="1-based page index")
    page_size: int = Field(..., ge=1, description="Rows per page")


class ExplainResult(BaseModel):
    """Execution plan document plus timing summary.

    The plan is kept as the backend's JSON document and only read for display.
    """

    plan: Any = None
    planning_time: Optional[float] = None
    execution_time: Optional[float] = None
    total_cost: Optional[float] = None

    @model_validator(mode="after")
    def _fill_from_plan(self) -> "ExplainResult":
        root = _plan_root(self.plan)
        if root is None:
            return self
        if self.planning_time is None:
            self.planning_time = _as_float(root.get("Planning Time"))
        if self.execution_time is None:
            self.execution_time = _as_float(root.get("Execution Time"))
        if self.total_cost is None and isinstance(root.get("Plan"), dict):
            self.total_cost = _as_float(root["Plan"].get("Total Cost"))
        return self


def _plan_root(plan: Any) -> Optional[dict]:
    if isinstance(plan, list) and plan and isinstance(plan[0], dict):
        return plan[0]
    return None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)
