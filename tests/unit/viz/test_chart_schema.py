import unittest

from dal.query_result import ColumnMeta
from viz.chart_config import ChartConfig, ChartKind
from viz.schema import (
    build_chart_schema,
    chart_colors,
    format_tick_value,
    truncate_tick_label,
)

COLUMNS = [
    ColumnMeta(name="day", data_type="date"),
    ColumnMeta(name="sales", data_type="numeric"),
    ColumnMeta(name="returns", data_type="int4"),
]
ROWS = [["2023-01-02", 110, None], ["2023-01-01", 100, 3]]


class TestChartSchemaBuilder(unittest.TestCase):
    """Unit tests for the renderer payload."""

    def test_line_chart(self):
        """Create a line schema for temporal + numeric data."""
        config = ChartConfig(ChartKind.LINE, "day", ("sales", "returns"))
        schema = build_chart_schema(COLUMNS, ROWS, config)
        self.assertEqual(schema["status"], "ok")
        self.assertEqual(schema["chartType"], "line")
        self.assertEqual(schema["xAxis"]["label"], "day")
        self.assertTrue(schema["showDots"])
        self.assertEqual([s["name"] for s in schema["series"]], ["sales", "returns"])
        self.assertEqual(schema["series"][1]["color"], "var(--chart-2)")
        self.assertEqual(schema["data"][0]["sales"], 100)
        self.assertIsNone(schema["data"][1]["returns"])

    def test_label_columns_report_kind(self):
        """Label columns carry their datetime/text kind."""
        columns = COLUMNS + [ColumnMeta(name="region", data_type="text")]
        schema = build_chart_schema(columns, [], ChartConfig())
        self.assertEqual(
            schema["labelColumns"],
            [{"name": "day", "kind": "datetime"}, {"name": "region", "kind": "text"}],
        )

    def test_cannot_visualize(self):
        """Return an informational state when no label column exists."""
        columns = [ColumnMeta(name="n", data_type="int4")]
        schema = build_chart_schema(columns, [[1]], ChartConfig())
        self.assertEqual(schema["status"], "cannot_visualize")
        self.assertIn("message", schema)
        self.assertEqual(schema["data"], [])

    def test_unconfigured(self):
        """Return an informational state when axes are unset or stale."""
        schema = build_chart_schema(COLUMNS, ROWS, ChartConfig(x_axis_column="day"))
        self.assertEqual(schema["status"], "unconfigured")

        stale = ChartConfig(x_axis_column="week", y_axis_columns=("sales",))
        self.assertEqual(build_chart_schema(COLUMNS, ROWS, stale)["status"], "unconfigured")

    def test_non_numeric_y_axis_is_not_charted(self):
        """Y columns are re-checked against the column types of each result set."""
        columns = COLUMNS + [ColumnMeta(name="note", data_type="text")]
        config = ChartConfig(ChartKind.BAR, "day", ("sales", "note"))
        schema = build_chart_schema(columns, [["2023-01-01", 1, 2, "12 apples"]], config)
        self.assertEqual(schema["status"], "unconfigured")
        self.assertIn("Y axis column 'note' is not numeric", schema["message"])
        self.assertEqual(schema["data"], [])
        self.assertEqual(schema["series"], [])

    def test_pie_slices(self):
        """Pie charts slice the first series by X label."""
        config = ChartConfig(ChartKind.PIE, "day", ("sales", "returns"))
        schema = build_chart_schema(COLUMNS, ROWS, config)
        self.assertEqual(
            schema["slices"],
            [
                {"name": "Jan 1, 23", "value": 100, "color": "var(--chart-1)"},
                {"name": "Jan 2, 23", "value": 110, "color": "var(--chart-2)"},
            ],
        )
        self.assertNotIn("showDots", schema)

    def test_colors_cycle(self):
        """Palette cycles after five series."""
        colors = chart_colors(7)
        self.assertEqual(colors[5], colors[0])
        self.assertEqual(len(colors), 7)

    def test_tick_formatting(self):
        """Y ticks are abbreviated and X labels truncated."""
        self.assertEqual(format_tick_value(2_500_000), "2.5M")
        self.assertEqual(format_tick_value(1500), "1.5K")
        self.assertEqual(format_tick_value(12.0), "12")
        self.assertEqual(format_tick_value(7), "7")
        self.assertEqual(truncate_tick_label("a" * 13), "a" * 12 + "...")
        self.assertEqual(truncate_tick_label("short"), "short")
