"""Chart axis configuration and automatic defaults."""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple

from dal.query_result import ColumnMeta
from viz.axes import datetime_columns, find_column, numeric_columns, x_axis_columns
from viz.classify import ColumnCategory, classify_type

logger = logging.getLogger(__name__)


class ChartKind(str, Enum):
    """Chart kinds the renderer understands."""

    BAR = "bar"
    LINE = "line"
    AREA = "area"
    PIE = "pie"


class ChartConfigError(ValueError):
    """Raised when a user edit would break the axis invariants."""


@dataclass(frozen=True)
class ChartConfig:
    """Selected chart kind and axes.

    The order of `y_axis_columns` is the series and legend order.
    """

    chart_kind: ChartKind = ChartKind.BAR
    x_axis_column: Optional[str] = None
    y_axis_columns: Tuple[str, ...] = ()

    @property
    def is_configured(self) -> bool:
        return bool(self.x_axis_column) and bool(self.y_axis_columns)

    def with_chart_kind(self, chart_kind) -> "ChartConfig":
        return replace(self, chart_kind=ChartKind(chart_kind))

    def with_x_axis(self, column_name: Optional[str]) -> "ChartConfig":
        return replace(self, x_axis_column=column_name or None)

    def toggle_y_axis_column(
        self, column_name: str, columns: Sequence[ColumnMeta]
    ) -> "ChartConfig":
        """Remove `column_name` from the series if selected, otherwise append it.

        Raises:
            ChartConfigError: if the column is being added and is not numeric
                in the current result set.
        """
        if column_name in self.y_axis_columns:
            remaining = tuple(name for name in self.y_axis_columns if name != column_name)
            return replace(self, y_axis_columns=remaining)

        index = find_column(columns, column_name)
        if index == -1 or classify_type(columns[index].data_type) != ColumnCategory.NUMERIC:
            raise ChartConfigError(f"Column '{column_name}' is not a numeric column")
        return replace(self, y_axis_columns=self.y_axis_columns + (column_name,))


@dataclass(frozen=True)
class ChartConfigPatch:
    """Partial configuration produced by auto-detection."""

    chart_kind: Optional[ChartKind] = None
    x_axis_column: Optional[str] = None
    y_axis_columns: Optional[Tuple[str, ...]] = None

    @property
    def is_empty(self) -> bool:
        return not self.x_axis_column and not self.y_axis_columns

    def apply_to(self, config: ChartConfig) -> ChartConfig:
        changes = {}
        if self.chart_kind is not None:
            changes["chart_kind"] = self.chart_kind
        if self.x_axis_column is not None:
            changes["x_axis_column"] = self.x_axis_column
        if self.y_axis_columns is not None:
            changes["y_axis_columns"] = self.y_axis_columns
        return replace(config, **changes)


def auto_detect_chart_config(columns: Sequence[ColumnMeta]) -> ChartConfigPatch:
    """Pick default axes: a datetime X axis (line chart) is preferred over a
    categorical one (bar chart); Y is the first numeric column only."""
    datetime_cols = datetime_columns(columns)
    label_cols = x_axis_columns(columns)
    numeric_cols = numeric_columns(columns)

    chart_kind = None
    x_axis = None
    if datetime_cols:
        x_axis = datetime_cols[0].name
        chart_kind = ChartKind.LINE
    elif label_cols:
        x_axis = label_cols[0].name
        chart_kind = ChartKind.BAR

    y_axes = (numeric_cols[0].name,) if numeric_cols else None
    return ChartConfigPatch(chart_kind=chart_kind, x_axis_column=x_axis, y_axis_columns=y_axes)


def ensure_chart_config(config: ChartConfig, columns: Sequence[ColumnMeta]) -> ChartConfig:
    """Fill in defaults when the config lacks an X axis or any Y series.

    A complete user configuration is returned unchanged.
    """
    if config.is_configured:
        return config
    patch = auto_detect_chart_config(columns)
    if patch.is_empty:
        return config
    updated = patch.apply_to(config)
    logger.info(
        "Auto-configured %s chart: x=%s y=%s",
        updated.chart_kind.value,
        updated.x_axis_column,
        list(updated.y_axis_columns),
    )
    return updated


def validate_chart_config(config: ChartConfig, columns: Sequence[ColumnMeta]) -> list[str]:
    """Return the invariant violations of `config` against the current columns."""
    issues = []
    if config.x_axis_column and find_column(columns, config.x_axis_column) == -1:
        issues.append(f"X axis column '{config.x_axis_column}' is not in the result set")
    for name in config.y_axis_columns:
        index = find_column(columns, name)
        if index == -1:
            issues.append(f"Y axis column '{name}' is not in the result set")
        elif classify_type(columns[index].data_type) != ColumnCategory.NUMERIC:
            issues.append(f"Y axis column '{name}' is not numeric")
    if len(set(config.y_axis_columns)) != len(config.y_axis_columns):
        issues.append("Y axis columns must not repeat")
    return issues
