"""Result-set visualization.

This package turns a relational result set into chart-ready data.

Design Notes:
-------------
Pipeline:
  - classify: raw column type tag -> numeric / datetime / categorical / other.
  - axes: which columns may serve as X labels and which as Y series.
  - chart_config: selected axes and chart kind, plus automatic defaults
    (datetime X -> line chart, otherwise categorical X -> bar chart).
  - series: rows -> ordered chart points, chronological for datetime axes.
  - schema: renderer payload with colors and informational empty states.

Everything here is synchronous and pure; classification is re-derived for
every result set because a column name may carry a different type in the
next query.
"""
