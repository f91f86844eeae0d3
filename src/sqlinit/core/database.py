"""
Database Manager

Owns the main DuckDB connection: opens it from settings, applies the init
file once on open, and closes it.
"""

from pathlib import Path
from types import TracebackType

import duckdb

from sqlinit.config import SQLInitConfig
from sqlinit.domain.errors import ExecutionError
from sqlinit.logging_utils import get_logger
from sqlinit.providers.base.executor import ExecutionResult
from sqlinit.providers.duckdb.executor import DuckDBSQLExecutor

from .init_file import load_init_file

logger = get_logger(__name__)


class DatabaseManager:
    """Lifecycle of one DuckDB database described by SQLInitConfig

    Example:
        >>> with DatabaseManager(SQLInitConfig(init_sql_file="init.sql")) as conn:
        ...     conn.execute("SELECT 1").fetchall()
    """

    def __init__(self, config: SQLInitConfig) -> None:
        self.config = config
        self.connection: duckdb.DuckDBPyConnection | None = None

    def open(self, apply_init: bool = True) -> duckdb.DuckDBPyConnection:
        """Connect (once) and apply the configured init file.

        A failing init file closes the connection again before the error
        propagates.

        Raises:
            ExecutionError: If the database cannot be opened
            InitFileReadError, InitStatementError: If the init file fails
        """
        if self.connection is not None:
            return self.connection

        logger.info(
            "Opening database path=%s read_only=%s",
            self.config.database_path,
            self.config.read_only,
        )
        try:
            self.connection = duckdb.connect(
                database=self.config.database_path, read_only=self.config.read_only
            )
        except duckdb.Error as e:
            raise ExecutionError(
                f"failed to open database '{self.config.database_path}': {e}",
                "database_unavailable",
            ) from e

        if apply_init and self.config.init_sql_file:
            try:
                self.apply_init_file(Path(self.config.init_sql_file))
            except Exception:
                self.close()
                raise
        return self.connection

    def executor(self) -> DuckDBSQLExecutor:
        """Executor bound to the open connection."""
        if self.connection is None:
            raise ExecutionError("Database is not open", "database_not_open")
        return DuckDBSQLExecutor(self.connection)

    def apply_init_file(self, path: Path, dry_run: bool = False) -> ExecutionResult:
        """Run an init file against the open connection."""
        return load_init_file(path, self.executor(), self.config.execution_config(dry_run))

    def close(self) -> None:
        if self.connection is None:
            return
        self.connection.close()
        self.connection = None
        logger.debug("Closed database path=%s", self.config.database_path)

    def __enter__(self) -> duckdb.DuckDBPyConnection:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
