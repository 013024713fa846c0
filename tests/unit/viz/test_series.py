from datetime import date, datetime, timezone

import pytest

from dal.cells import Cell
from dal.query_result import ColumnMeta
from viz.chart_config import ChartConfig
from viz.series import (
    ChartPoint,
    epoch_millis,
    format_datetime_label,
    parse_timestamp,
    sort_key_for,
    transform_rows,
)

DAY_COLUMNS = [
    ColumnMeta(name="day", data_type="date"),
    ColumnMeta(name="total", data_type="numeric"),
    ColumnMeta(name="count", data_type="int8"),
]

REGION_COLUMNS = [
    ColumnMeta(name="region", data_type="text"),
    ColumnMeta(name="total", data_type="numeric"),
]

DAY_CONFIG = ChartConfig(x_axis_column="day", y_axis_columns=("total",))
REGION_CONFIG = ChartConfig(x_axis_column="region", y_axis_columns=("total",))


class TestEarlyExit:
    """Unconfigured or unresolved axes yield no points."""

    def test_unset_x_axis(self):
        rows = [["2023-01-01", 1]]
        assert transform_rows(DAY_COLUMNS, rows, ChartConfig(y_axis_columns=("total",))) == []

    def test_empty_y_axes(self):
        rows = [["2023-01-01", 1]]
        assert transform_rows(DAY_COLUMNS, rows, ChartConfig(x_axis_column="day")) == []

    def test_unresolved_x_axis(self):
        config = ChartConfig(x_axis_column="month", y_axis_columns=("total",))
        assert transform_rows(DAY_COLUMNS, [["2023-01-01", 1, 2]], config) == []

    def test_unresolved_y_axis(self):
        config = ChartConfig(x_axis_column="day", y_axis_columns=("total", "missing"))
        assert transform_rows(DAY_COLUMNS, [["2023-01-01", 1, 2]], config) == []


class TestOrdering:
    """Datetime axes sort chronologically, others keep arrival order."""

    def test_datetime_rows_sorted_ascending(self):
        rows = [["2023-01-02", 2, 0], ["2023-01-01", 1, 0]]
        points = transform_rows(DAY_COLUMNS, rows, DAY_CONFIG)
        assert [p.values["total"] for p in points] == [1, 2]
        assert [p.x_label for p in points] == ["Jan 1, 23", "Jan 2, 23"]

    def test_categorical_rows_keep_order(self):
        rows = [["west", 3], ["east", 1], ["north", 2]]
        points = transform_rows(REGION_COLUMNS, rows, REGION_CONFIG)
        assert [p.x_label for p in points] == ["west", "east", "north"]
        assert [p.x_sort_key for p in points] == ["west", "east", "north"]

    def test_equal_timestamps_keep_arrival_order(self):
        rows = [["2023-01-01", 1, 0], ["2023-01-01", 2, 0], ["2022-12-31", 3, 0]]
        points = transform_rows(DAY_COLUMNS, rows, DAY_CONFIG)
        assert [p.values["total"] for p in points] == [3, 1, 2]

    def test_unparseable_dates_sort_as_text(self):
        rows = [["2023-01-02", 2, 0], ["someday", 9, 0], ["2023-01-01", 1, 0]]
        points = transform_rows(DAY_COLUMNS, rows, DAY_CONFIG)
        assert [p.x_label for p in points] == ["Jan 1, 23", "Jan 2, 23", "someday"]
        assert points[2].x_sort_key == "someday"

    def test_null_datetime_sorts_first_with_empty_label(self):
        rows = [["2023-01-01", 1, 0], [None, 2, 0]]
        points = transform_rows(DAY_COLUMNS, rows, DAY_CONFIG)
        assert points[0].x_label == ""
        assert points[0].x_sort_key == ""
        assert points[1].x_label == "Jan 1, 23"

    def test_datetime_sort_key_is_epoch_millis(self):
        points = transform_rows(DAY_COLUMNS, [["2023-01-01", 1, 0]], DAY_CONFIG)
        assert points[0].x_sort_key == 1672531200000.0


class TestAlignment:
    """Every row becomes exactly one point with every series present."""

    def test_output_length_matches_rows(self):
        rows = [["a", 1], ["b", None], ["a", "x"], [None, 4]]
        points = transform_rows(REGION_COLUMNS, rows, REGION_CONFIG)
        assert len(points) == len(rows)

    def test_numeric_coercion(self):
        columns = REGION_COLUMNS + [ColumnMeta(name="extra", data_type="int4")]
        config = ChartConfig(x_axis_column="region", y_axis_columns=("total", "extra"))
        rows = [
            ["a", "12.5", 7],
            ["b", "abc", True],
            ["c", None, {"n": 1}],
            ["d", 3],
        ]
        points = transform_rows(columns, rows, config)
        assert points[0].values == {"total": 12.5, "extra": 7}
        assert points[1].values == {"total": None, "extra": None}
        assert points[2].values == {"total": None, "extra": None}
        assert points[3].values == {"total": 3, "extra": None}

    def test_series_follow_selection_order(self):
        config = ChartConfig(x_axis_column="day", y_axis_columns=("count", "total"))
        points = transform_rows(DAY_COLUMNS, [["2023-01-01", "1", "2"]], config)
        assert list(points[0].values) == ["count", "total"]
        assert points[0].values == {"count": 2.0, "total": 1.0}

    def test_null_category_label_is_empty(self):
        points = transform_rows(REGION_COLUMNS, [[None, 1]], REGION_CONFIG)
        assert points[0].x_label == ""


class TestDatetimeLabels:
    """Formatting of datetime X labels."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2023-01-01", "Jan 1, 23"),
            ("2023-03-15T00:00:00", "Mar 15, 23"),
            ("2023-01-01T13:30:00", "Jan 1, 01:30 PM"),
            ("2023-07-04 09:05:00", "Jul 4, 09:05 AM"),
            ("2023-12-31T00:00:00Z", "Dec 31, 23"),
            ("2024-02-29T12:00:00+02:00", "Feb 29, 12:00 PM"),
            ("2023-01-01T00:00:00.500", "Jan 1, 12:00 AM"),
            ("2023/01/02", "Jan 2, 23"),
            ("2023/01/02 18:45", "Jan 2, 06:45 PM"),
            ("2023", "Jan 1, 23"),
            ("01/15/2023", "Jan 15, 23"),
            ("Mar 5, 2024", "Mar 5, 24"),
            ("not a date", "not a date"),
            (None, ""),
        ],
    )
    def test_format(self, value, expected):
        assert format_datetime_label(Cell.of(value)) == expected

    def test_native_values(self):
        assert format_datetime_label(Cell.of(date(2021, 5, 9))) == "May 9, 21"
        assert format_datetime_label(Cell.of(datetime(2021, 5, 9, 0, 1))) == "May 9, 12:01 AM"

    def test_sub_second_midnight_keeps_time(self):
        moment = datetime(2021, 5, 9, 0, 0, 0, 250000)
        assert format_datetime_label(Cell.of(moment)) == "May 9, 12:00 AM"

    def test_slash_dates_sort_chronologically(self):
        assert sort_key_for(Cell.of("2023/01/01"), True) == 1672531200000.0

    def test_time_only_values_fall_back_to_text(self):
        assert parse_timestamp(Cell.of("10:30:00")) is None
        assert format_datetime_label(Cell.of("10:30:00")) == "10:30:00"


def test_epoch_millis_treats_naive_as_utc():
    naive = datetime(1970, 1, 2)
    aware = datetime(1970, 1, 2, tzinfo=timezone.utc)
    assert epoch_millis(naive) == epoch_millis(aware) == 86_400_000.0


def test_sort_key_for_non_datetime_axis_is_text():
    assert sort_key_for(Cell.of("2023-01-01"), is_datetime=False) == "2023-01-01"
    assert sort_key_for(Cell.of(None), is_datetime=False) == ""


def test_point_record_shape():
    point = ChartPoint(x_label="Jan 1, 23", x_sort_key=1.0, values={"total": None})
    assert point.to_record() == {"xAxis": "Jan 1, 23", "xAxisRaw": 1.0, "total": None}
    text_point = ChartPoint(x_label="a", x_sort_key="a", values={"total": 2})
    assert text_point.to_record()["xAxisRaw"] is None
