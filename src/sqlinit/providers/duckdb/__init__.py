"""DuckDB provider: runs statements on a local DuckDB connection."""

from typing import TYPE_CHECKING, Any

from sqlinit.domain.errors import ExecutionError

from ..registry import ExecutorProvider
from .executor import DuckDBSQLExecutor

if TYPE_CHECKING:
    from sqlinit.config import SQLInitConfig


def _create_executor(_config: "SQLInitConfig", connection: Any) -> DuckDBSQLExecutor:
    if connection is None:
        raise ExecutionError("DuckDB provider requires an open connection", "connection_required")
    return DuckDBSQLExecutor(connection)


duckdb_provider = ExecutorProvider(
    id="duckdb",
    name="DuckDB",
    factory=_create_executor,
    needs_connection=True,
)

__all__ = ["DuckDBSQLExecutor", "duckdb_provider"]
