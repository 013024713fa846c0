from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class WorkbenchBackend(Protocol):
    """Protocol for the query-execution backend the workbench talks to.

    Results are returned as decoded JSON-like payloads; the workbench
    validates them into `dal.query_result` models.
    """

    async def connect(self, connection_id: str) -> None:
        """Open the connection identified by `connection_id`."""
        ...

    async def disconnect(self) -> None:
        """Close the active connection."""
        ...

    async def list_tables(self) -> List[Dict[str, Any]]:
        """List tables as `{schema, name, table_type}` entries."""
        ...

    async def get_table_columns(self, schema: str, table: str) -> List[Dict[str, Any]]:
        """Describe the columns of one table."""
        ...

    async def execute_query(self, sql: str) -> Dict[str, Any]:
        """Execute an ad-hoc statement.

        Returns:
            Payload with `columns`, `rows`, `row_count` and `affected_rows`.
        """
        ...

    async def fetch_table_data(
        self, schema: str, table: str, page: int, page_size: int
    ) -> Dict[str, Any]:
        """Fetch one page of a table.

        Returns:
            Payload with `columns`, `rows`, `total_count`, `page` and `page_size`.
        """
        ...

    async def explain_query(self, sql: str) -> Dict[str, Any]:
        """Explain a statement.

        Returns:
            Payload with `plan`, `planning_time`, `execution_time` and `total_cost`.
        """
        ...

    async def save_editor_content(self, sql: str) -> Optional[Any]:
        """Persist the editor text."""
        ...
