"""Request/response wiring between the result pane and the backend.

Each fetch is a single request with no retry. Failures are stored on the
state as a message string and never replace the last good result.

Overlapping requests for the same target (query, table or explain) are
tagged with increasing sequence numbers. With the "discard" policy only
the most recently issued request may update state; with "overwrite" every
response is applied in completion order.
"""

import itertools
import logging
from typing import Dict, Optional

from common.errors import classify_fetch_error, fetch_error_message
from dal.query_result import ExplainResult, PaginatedResult, QueryResult
from workbench.backend import WorkbenchBackend
from workbench.state import ResultController, ResultMode

logger = logging.getLogger(__name__)

TARGET_QUERY = "query"
TARGET_TABLE = "table"
TARGET_EXPLAIN = "explain"


class FetchCoordinator:
    """Issues backend requests and feeds their results to a `ResultController`."""

    def __init__(self, backend: WorkbenchBackend, controller: ResultController):
        """Initialize with the backend collaborator and the state owner."""
        self.backend = backend
        self.controller = controller
        self._counter = itertools.count(1)
        self._latest: Dict[str, int] = {}

    def _issue(self, target: str) -> int:
        sequence = next(self._counter)
        self._latest[target] = sequence
        return sequence

    def _is_stale(self, target: str, sequence: int) -> bool:
        if not self.controller.settings.discard_stale_responses:
            return False
        return self._latest.get(target) != sequence

    def _record_failure(self, target: str, exc: Exception) -> None:
        code = classify_fetch_error(exc)
        message = fetch_error_message(exc)
        logger.error(f"{target} request failed ({code.value}): {message}")
        self.controller.set_error(message)

    # Connection lifecycle

    async def connect(self, connection_id: str) -> bool:
        """Open a connection; returns False and records the error on failure."""
        try:
            await self.backend.connect(connection_id)
        except Exception as e:
            self._record_failure("connect", e)
            self.controller.set_connected(False)
            return False
        self.controller.clear_error()
        self.controller.set_connected(True)
        logger.info("Connected to %s", connection_id)
        return True

    async def disconnect(self) -> None:
        try:
            await self.backend.disconnect()
        except Exception as e:
            self._record_failure("disconnect", e)
        self.controller.set_connected(False)

    # Result fetches

    async def execute_query(self, sql: str) -> Optional[QueryResult]:
        """Run an ad-hoc statement and make its result authoritative."""
        sequence = self._issue(TARGET_QUERY)
        self.controller.set_executing(True)
        self.controller.clear_error()
        try:
            payload = await self.backend.execute_query(sql)
            result = QueryResult.model_validate(payload)
        except Exception as e:
            if not self._is_stale(TARGET_QUERY, sequence):
                self._record_failure(TARGET_QUERY, e)
                self.controller.set_executing(False)
            return None

        if self._is_stale(TARGET_QUERY, sequence):
            logger.info("Discarding stale query response #%d", sequence)
            return None
        self.controller.set_executing(False)
        self.controller.receive_query_result(result)
        return result

    async def fetch_table_page(self) -> Optional[PaginatedResult]:
        """Fetch the current page of the selected table."""
        state = self.controller.state
        table = state.selected_table
        if table is None or not state.is_connected:
            return None

        sequence = self._issue(TARGET_TABLE)
        page, page_size = state.current_page, state.page_size
        self.controller.set_loading_table(True)
        self.controller.clear_error()
        try:
            payload = await self.backend.fetch_table_data(table.schema, table.name, page, page_size)
            result = PaginatedResult.model_validate(payload)
        except Exception as e:
            if not self._is_stale(TARGET_TABLE, sequence):
                self._record_failure(TARGET_TABLE, e)
                self.controller.set_loading_table(False)
            return None

        if self._is_stale(TARGET_TABLE, sequence):
            logger.info(
                "Discarding stale page %d of %s (request #%d)",
                page,
                table.qualified_name,
                sequence,
            )
            return None
        self.controller.set_loading_table(False)
        self.controller.receive_table_result(result)
        return result

    async def explain_query(self, sql: str) -> Optional[ExplainResult]:
        """Explain a statement and make the plan authoritative."""
        sequence = self._issue(TARGET_EXPLAIN)
        self.controller.set_explaining(True)
        self.controller.clear_error()
        try:
            payload = await self.backend.explain_query(sql)
            result = ExplainResult.model_validate(payload)
        except Exception as e:
            if not self._is_stale(TARGET_EXPLAIN, sequence):
                self._record_failure(TARGET_EXPLAIN, e)
                self.controller.set_explaining(False)
            return None

        if self._is_stale(TARGET_EXPLAIN, sequence):
            logger.info("Discarding stale explain response #%d", sequence)
            return None
        self.controller.set_explaining(False)
        self.controller.receive_explain_result(result)
        return result

    # Table browsing

    async def select_table(self, schema: str, name: str) -> Optional[PaginatedResult]:
        """Browse a table from its first page."""
        self.controller.select_table(schema, name)
        return await self.fetch_table_page()

    async def change_page(self, page: int) -> Optional[PaginatedResult]:
        """Move to another page; refetches only while table browsing is displayed."""
        self.controller.set_page(page)
        if self.controller.mode != ResultMode.TABLE:
            return None
        return await self.fetch_table_page()

    async def change_page_size(self, page_size: int) -> Optional[PaginatedResult]:
        """Change the page size; refetches only while table browsing is displayed."""
        self.controller.set_page_size(page_size)
        if self.controller.mode != ResultMode.TABLE:
            return None
        return await self.fetch_table_page()
