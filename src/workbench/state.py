"""Result display state and the controller that owns it.

Three kinds of result compete for the main pane: ad-hoc query output,
paginated table browsing and execution plans. Exactly one mode is active,
and the mode only changes when a new result of that kind arrives. Paging,
page-size changes and table selection never switch the mode by themselves.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from dal.query_result import ColumnMeta, ExplainResult, PaginatedResult, QueryResult, Row
from viz.chart_config import ChartConfig, ensure_chart_config
from viz.schema import build_chart_schema
from workbench.settings import WorkbenchSettings

logger = logging.getLogger(__name__)


class ResultMode(str, Enum):
    """Which result governs the display."""

    TABLE = "table"
    QUERY = "query"
    EXPLAIN = "explain"


class ResultView(str, Enum):
    """What the main pane should show."""

    EXPLAIN = "explain"
    DISCONNECTED = "disconnected"
    LOADING = "loading"
    ERROR = "error"
    EMPTY = "empty"
    DATA = "data"


@dataclass(frozen=True)
class SelectedTable:
    """A table chosen for browsing."""

    schema: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}"


@dataclass(frozen=True)
class DisplayData:
    """Rows selected for display under the current mode."""

    columns: List[ColumnMeta]
    rows: List[Row]
    row_count: int
    total_count: int
    is_paginated: bool


@dataclass
class WorkbenchState:
    """Application state for the result pane."""

    mode: ResultMode = ResultMode.TABLE
    query_result: Optional[QueryResult] = None
    table_result: Optional[PaginatedResult] = None
    explain_result: Optional[ExplainResult] = None
    current_page: int = 1
    page_size: int = 50
    selected_table: Optional[SelectedTable] = None
    chart_config: ChartConfig = field(default_factory=ChartConfig)
    error: Optional[str] = None
    is_connected: bool = False
    is_executing: bool = False
    is_explaining: bool = False
    is_loading_table: bool = False


def total_pages(total_count: int, page_size: int) -> int:
    """Number of pages needed for `total_count` rows."""
    if page_size < 1:
        return 0
    return math.ceil(total_count / page_size)


class ResultController:
    """Single owner of `WorkbenchState`; all mutations go through its methods."""

    def __init__(
        self,
        settings: Optional[WorkbenchSettings] = None,
        state: Optional[WorkbenchState] = None,
    ):
        """Initialize the controller with settings-derived defaults."""
        self.settings = settings or WorkbenchSettings()
        self._state = state or WorkbenchState(page_size=self.settings.default_page_size)

    @property
    def state(self) -> WorkbenchState:
        return self._state

    @property
    def mode(self) -> ResultMode:
        return self._state.mode

    def _switch_mode(self, mode: ResultMode) -> None:
        if self._state.mode != mode:
            logger.info("Result mode %s -> %s", self._state.mode.value, mode.value)
        self._state.mode = mode

    # Result arrival

    def receive_query_result(self, result: QueryResult) -> None:
        """Store an ad-hoc execution result and make it authoritative."""
        self._state.query_result = result
        self._switch_mode(ResultMode.QUERY)

    def receive_table_result(self, result: PaginatedResult) -> None:
        """Store a page of table data and make it authoritative."""
        self._state.table_result = result
        self._switch_mode(ResultMode.TABLE)

    def receive_explain_result(self, result: ExplainResult) -> None:
        """Store an execution plan and make it authoritative."""
        self._state.explain_result = result
        self._switch_mode(ResultMode.EXPLAIN)

    # Table browsing

    def select_table(self, schema: str, name: str) -> SelectedTable:
        """Choose a table to browse; paging restarts at the first page."""
        selected = SelectedTable(schema=schema, name=name)
        self._state.selected_table = selected
        self._state.current_page = 1
        return selected

    def set_page_size(self, page_size: int) -> None:
        """Change the page size and go back to the first page.

        Raises:
            ValueError: if `page_size` is smaller than 1 or is not one of the
                configured page-size options.
        """
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        options = self.settings.page_size_options
        if options and page_size not in options:
            raise ValueError(f"page_size must be one of {list(options)}, got {page_size}")
        self._state.page_size = page_size
        self._state.current_page = 1

    @property
    def total_pages(self) -> Optional[int]:
        """Pages in the browsed table, or None before any page has arrived."""
        result = self._state.table_result
        if result is None:
            return None
        return total_pages(result.total_count, self._state.page_size)

    def set_page(self, page: int) -> int:
        """Move to `page`, clamped to the known page range; returns the new page."""
        last = self.total_pages
        clamped = max(1, page)
        if last is not None:
            clamped = max(1, min(clamped, last))
        self._state.current_page = clamped
        return clamped

    @property
    def can_go_previous(self) -> bool:
        return self._state.current_page > 1

    @property
    def can_go_next(self) -> bool:
        last = self.total_pages
        return last is not None and self._state.current_page < last

    def first_page(self) -> int:
        return self.set_page(1)

    def previous_page(self) -> int:
        return self.set_page(self._state.current_page - 1)

    def next_page(self) -> int:
        if not self.can_go_next:
            return self._state.current_page
        return self.set_page(self._state.current_page + 1)

    def last_page(self) -> int:
        last = self.total_pages
        if not last:
            return self._state.current_page
        return self.set_page(last)

    # Status flags

    def set_connected(self, connected: bool) -> None:
        self._state.is_connected = connected

    def set_error(self, message: Optional[str]) -> None:
        """Record a fetch failure; stored results are left untouched."""
        self._state.error = message

    def clear_error(self) -> None:
        self._state.error = None

    def set_executing(self, flag: bool) -> None:
        self._state.is_executing = flag

    def set_explaining(self, flag: bool) -> None:
        self._state.is_explaining = flag

    def set_loading_table(self, flag: bool) -> None:
        self._state.is_loading_table = flag

    # Chart configuration

    def set_chart_config(self, config: ChartConfig) -> None:
        self._state.chart_config = config

    def toggle_y_axis_column(self, column_name: str) -> ChartConfig:
        """Add or remove a Y series against the displayed columns."""
        data = self.display_data()
        columns = data.columns if data else []
        config = self._state.chart_config.toggle_y_axis_column(column_name, columns)
        self._state.chart_config = config
        return config

    # Derived views

    def display_data(self) -> Optional[DisplayData]:
        """Rows the current mode displays, or None if that mode has no result."""
        state = self._state
        if state.mode == ResultMode.QUERY and state.query_result is not None:
            result = state.query_result
            return DisplayData(
                columns=result.columns,
                rows=result.rows,
                row_count=result.row_count,
                total_count=result.row_count,
                is_paginated=False,
            )
        if state.mode == ResultMode.TABLE and state.table_result is not None:
            page = state.table_result
            return DisplayData(
                columns=page.columns,
                rows=page.rows,
                row_count=len(page.rows),
                total_count=page.total_count,
                is_paginated=True,
            )
        return None

    def view(self) -> ResultView:
        """Decide what the main pane shows for the current state."""
        state = self._state
        if state.mode == ResultMode.EXPLAIN and state.explain_result is not None:
            return ResultView.EXPLAIN
        if not state.is_connected:
            return ResultView.DISCONNECTED
        if state.is_executing or state.is_loading_table:
            return ResultView.LOADING
        if state.error and state.mode in (ResultMode.QUERY, ResultMode.TABLE):
            return ResultView.ERROR
        data = self.display_data()
        if data is None or not data.rows:
            return ResultView.EMPTY
        return ResultView.DATA

    def chart_schema(self) -> Optional[Dict[str, Any]]:
        """Chart payload for the displayed rows, filling in default axes first."""
        data = self.display_data()
        if data is None:
            return None
        config = ensure_chart_config(self._state.chart_config, data.columns)
        self._state.chart_config = config
        return build_chart_schema(data.columns, data.rows, config)
