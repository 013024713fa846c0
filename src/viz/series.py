"""Transformation of result rows into axis-aligned chart points.

Rows are mapped one-to-one onto points. When the X column is a datetime
column the points are ordered chronologically; any other X axis keeps the
arrival order of the rows. Cells that cannot be interpreted never abort the
transformation: numeric series fall back to None and datetime labels fall
back to the raw string.

Timestamp text is read as ISO 8601 first, then as a few common layouts
("2023/01/02", "01/02/2023", "Jan 2, 2023", a bare "2023"). Anything else
sorts by its text.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from functools import cmp_to_key
from typing import Any, Dict, List, Optional, Sequence, Union

from dal.cells import Cell, CellKind, cell_at
from dal.query_result import ColumnMeta
from viz.axes import find_column
from viz.chart_config import ChartConfig
from viz.classify import is_datetime_type

SortKey = Union[float, str]

_MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

# Tried in order when text is not ISO 8601.
_FALLBACK_TIMESTAMP_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%Y-%m",
    "%Y",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%b %d, %Y",
    "%B %d, %Y",
)


@dataclass
class ChartPoint:
    """One source row, ready for rendering."""

    x_label: str
    x_sort_key: SortKey
    values: Dict[str, Optional[float]] = field(default_factory=dict)

    def to_record(self) -> Dict[str, Any]:
        """Flatten to the record shape consumed by the renderer."""
        record: Dict[str, Any] = {
            "xAxis": self.x_label,
            "xAxisRaw": self.x_sort_key if isinstance(self.x_sort_key, float) else None,
        }
        record.update(self.values)
        return record


def parse_timestamp(cell: Cell) -> Optional[datetime]:
    """Interpret a cell as a calendar timestamp, or None if it is not one."""
    if cell.kind is CellKind.TEMPORAL:
        value = cell.value
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        return None
    if cell.kind is not CellKind.STRING:
        return None
    text = cell.value.strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _FALLBACK_TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def epoch_millis(moment: datetime) -> float:
    """Milliseconds since the Unix epoch; naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp() * 1000.0


def format_datetime_label(cell: Cell) -> str:
    """Human-readable X label for a datetime cell.

    Midnight values render as a date ("Jan 2, 23"); values with a time of
    day render as date and time ("Jan 2, 01:30 PM").
    """
    if cell.kind is CellKind.NULL:
        return ""
    moment = parse_timestamp(cell)
    if moment is None:
        return cell.as_text()

    month = _MONTH_ABBREVIATIONS[moment.month - 1]
    if (
        moment.hour == 0
        and moment.minute == 0
        and moment.second == 0
        and moment.microsecond == 0
    ):
        return f"{month} {moment.day}, {moment.year % 100:02d}"

    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{month} {moment.day}, {hour:02d}:{moment.minute:02d} {meridiem}"


def sort_key_for(cell: Cell, is_datetime: bool) -> SortKey:
    """Sort key of an X value: epoch millis for parseable datetimes, else text."""
    if is_datetime and cell.kind is not CellKind.NULL:
        moment = parse_timestamp(cell)
        if moment is not None:
            return epoch_millis(moment)
    return cell.as_text()


def _compare_keys(left: SortKey, right: SortKey) -> int:
    if isinstance(left, float) and isinstance(right, float):
        return (left > right) - (left < right)
    left_text = _key_text(left)
    right_text = _key_text(right)
    return (left_text > right_text) - (left_text < right_text)


def _key_text(key: SortKey) -> str:
    if isinstance(key, float):
        return Cell.of(key).as_text()
    return key


def transform_rows(
    columns: Sequence[ColumnMeta],
    rows: Sequence[Sequence[Any]],
    config: ChartConfig,
) -> List[ChartPoint]:
    """Convert rows into chart points for the configured axes.

    Returns an empty list when the X axis is unset, no Y series is selected,
    or any configured column is missing from `columns`.
    """
    if not config.x_axis_column or not config.y_axis_columns:
        return []

    x_index = find_column(columns, config.x_axis_column)
    y_indices = [(name, find_column(columns, name)) for name in config.y_axis_columns]
    if x_index == -1 or any(index == -1 for _, index in y_indices):
        return []

    is_datetime = is_datetime_type(columns[x_index].data_type)

    keyed = []
    for row in rows:
        x_cell = cell_at(row, x_index)
        keyed.append((sort_key_for(x_cell, is_datetime), x_cell, row))

    if is_datetime:
        # list.sort is stable, so equal keys keep arrival order
        keyed.sort(key=cmp_to_key(lambda a, b: _compare_keys(a[0], b[0])))

    points = []
    for sort_key, x_cell, row in keyed:
        label = format_datetime_label(x_cell) if is_datetime else x_cell.as_text()
        values = {name: cell_at(row, index).as_number() for name, index in y_indices}
        points.append(ChartPoint(x_label=label, x_sort_key=sort_key, values=values))
    return points
