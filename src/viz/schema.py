"""Chart schema payloads for the downstream renderer.

Design Notes:
-------------
The schema bundles everything the renderer needs for one result set:
  - `status`: "ok", "cannot_visualize" (no label or no numeric column) or
    "unconfigured" (no X axis, no Y series, axes missing from the result
    set, or a Y column that is no longer numeric). The last two are
    informational empty states, not errors.
  - `numericColumns` / `labelColumns`: the columns a user may pick from.
  - `series`: one entry per Y column, in selection order, with its color.
  - `data`: flattened chart points (see `ChartPoint.to_record`).
  - `slices`: for pie charts, one slice per point using the first Y series.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from dal.query_result import ColumnMeta
from viz.axes import find_column, numeric_columns, x_axis_columns
from viz.chart_config import ChartConfig, ChartKind, validate_chart_config
from viz.classify import is_datetime_type
from viz.series import ChartPoint, transform_rows

CHART_COLORS = (
    "var(--chart-1)",
    "var(--chart-2)",
    "var(--chart-3)",
    "var(--chart-4)",
    "var(--chart-5)",
)

MAX_TICK_LABEL_LENGTH = 12
LINE_DOTS_MAX_POINTS = 50

STATUS_OK = "ok"
STATUS_CANNOT_VISUALIZE = "cannot_visualize"
STATUS_UNCONFIGURED = "unconfigured"


@dataclass
class ColumnOption:
    """A column offered for axis selection."""

    name: str
    kind: str


@dataclass
class Series:
    """One Y-axis series."""

    name: str
    label: str
    color: str


@dataclass
class PieSlice:
    """One pie slice."""

    name: str
    value: Optional[float]
    color: str


@dataclass
class AxisSpec:
    """Axis configuration for a chart."""

    label: Optional[str] = None


@dataclass
class ChartSchema:
    """Chart schema payload for the UI renderer."""

    status: str
    chartType: str
    numericColumns: List[ColumnOption] = field(default_factory=list)
    labelColumns: List[ColumnOption] = field(default_factory=list)
    series: List[Series] = field(default_factory=list)
    data: List[Dict[str, Any]] = field(default_factory=list)
    xAxis: Optional[AxisSpec] = None
    showDots: Optional[bool] = None
    message: Optional[str] = None


def chart_colors(count: int) -> List[str]:
    """Series colors, cycling through the palette when it runs out."""
    return [CHART_COLORS[i % len(CHART_COLORS)] for i in range(count)]


def truncate_tick_label(label: str) -> str:
    """Shorten long X tick labels."""
    if len(label) > MAX_TICK_LABEL_LENGTH:
        return f"{label[:MAX_TICK_LABEL_LENGTH]}..."
    return label


def format_tick_value(value: float) -> str:
    """Compact Y tick text: 1.5M, 2.0K, or the plain number."""
    if value >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value / 1_000:.1f}K"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _drop_none(payload: Any) -> Any:
    if isinstance(payload, dict):
        return {key: _drop_none(value) for key, value in payload.items() if value is not None}
    if isinstance(payload, list):
        return [_drop_none(item) for item in payload]
    return payload


def _axes_resolve(config: ChartConfig, columns: Sequence[ColumnMeta]) -> bool:
    if not config.is_configured:
        return False
    names = (config.x_axis_column,) + config.y_axis_columns
    return all(find_column(columns, name) != -1 for name in names)


def _pie_slices(points: List[ChartPoint], y_column: str) -> List[PieSlice]:
    colors = chart_colors(len(points))
    return [
        PieSlice(name=point.x_label, value=point.values.get(y_column), color=colors[i])
        for i, point in enumerate(points)
    ]


def build_chart_schema(
    columns: Sequence[ColumnMeta],
    rows: Sequence[Sequence[Any]],
    config: ChartConfig,
) -> Dict[str, Any]:
    """Build a ChartSchema payload for one result set and chart configuration."""
    numeric_cols = numeric_columns(columns)
    label_cols = x_axis_columns(columns)

    schema = ChartSchema(
        status=STATUS_OK,
        chartType=config.chart_kind.value,
        numericColumns=[ColumnOption(name=col.name, kind="numeric") for col in numeric_cols],
        labelColumns=[
            ColumnOption(
                name=col.name,
                kind="datetime" if is_datetime_type(col.data_type) else "text",
            )
            for col in label_cols
        ],
    )

    if not numeric_cols or not label_cols:
        schema.status = STATUS_CANNOT_VISUALIZE
        schema.message = (
            "Chart visualization requires at least one numeric column for values "
            "and one text/datetime column for labels."
        )
        return _drop_none(asdict(schema))

    if not _axes_resolve(config, columns):
        schema.status = STATUS_UNCONFIGURED
        schema.message = "Select an X-axis column and at least one Y-axis column to visualize"
        return _drop_none(asdict(schema))

    issues = validate_chart_config(config, columns)
    if issues:
        schema.status = STATUS_UNCONFIGURED
        schema.message = "; ".join(issues)
        return _drop_none(asdict(schema))

    points = transform_rows(columns, rows, config)
    colors = chart_colors(len(config.y_axis_columns))
    schema.series = [
        Series(name=name, label=name, color=colors[i])
        for i, name in enumerate(config.y_axis_columns)
    ]
    schema.xAxis = AxisSpec(label=config.x_axis_column)
    if config.chart_kind == ChartKind.LINE:
        schema.showDots = len(points) <= LINE_DOTS_MAX_POINTS

    payload = _drop_none(asdict(schema))
    # null series values are kept so every series stays aligned with the X axis
    payload["data"] = [point.to_record() for point in points]
    if config.chart_kind == ChartKind.PIE:
        payload["slices"] = [
            asdict(slice_) for slice_ in _pie_slices(points, config.y_axis_columns[0])
        ]
    return payload
