"""
DuckDB SQL Executor

Executes SQL statements against a local DuckDB connection, one at a time,
stopping at the first failure. A single deadline covers the whole batch and is
enforced by interrupting the connection from a timer thread.
"""

import threading
import time
from typing import Any

import duckdb

from sqlinit.core.sql_utils import truncate_statement
from sqlinit.logging_utils import get_logger
from sqlinit.providers.base.executor import (
    ExecutionConfig,
    ExecutionResult,
    StatementResult,
    dry_run_result,
    elapsed_ms,
    failure_status,
    new_run_id,
)

logger = get_logger(__name__)


class DuckDBSQLExecutor:
    """Execute SQL statements against a DuckDB connection

    The executor does not own the connection; whoever opened it closes it.

    Attributes:
        connection: Open DuckDB connection
    """

    def __init__(self, connection: duckdb.DuckDBPyConnection) -> None:
        self.connection = connection

    def execute_statements(self, statements: list[str], config: ExecutionConfig) -> ExecutionResult:
        """Execute SQL statements sequentially with fail-fast behavior

        Args:
            statements: List of SQL statements to execute
            config: Execution configuration (timeout, dry run, row cap)

        Returns:
            ExecutionResult with detailed execution information
        """
        if config.dry_run:
            return dry_run_result(statements)

        run_id = new_run_id()
        results: list[StatementResult] = []
        start_time = time.monotonic()
        deadline = start_time + config.timeout_seconds

        for i, sql in enumerate(statements, 1):
            logger.debug(
                "Executing statement index=%d/%d statement=%s",
                i,
                len(statements),
                truncate_statement(sql, 100),
            )
            try:
                result = self._execute_single_statement(sql, i, deadline, config)
            except Exception as e:
                result = self._make_failure_result(
                    f"stmt_error_{i}", i, sql, time.monotonic(), f"Unexpected error: {e}"
                )
            results.append(result)

            if result.status == "failed":
                return ExecutionResult(
                    run_id=run_id,
                    total_statements=len(statements),
                    successful_statements=i - 1,
                    failed_statement_index=i - 1,
                    statement_results=results,
                    total_execution_time_ms=elapsed_ms(start_time),
                    status=failure_status(i - 1),
                    error_message=result.error_message,
                )

        return ExecutionResult(
            run_id=run_id,
            total_statements=len(statements),
            successful_statements=len(statements),
            failed_statement_index=None,
            statement_results=results,
            total_execution_time_ms=elapsed_ms(start_time),
            status="success",
            error_message=None,
        )

    def _execute_single_statement(
        self, sql: str, index: int, deadline: float, config: ExecutionConfig
    ) -> StatementResult:
        """Run one statement, interrupting it if it is still running at the deadline."""
        exec_start = time.monotonic()
        statement_id = f"stmt_{index}"
        remaining = deadline - exec_start
        if remaining <= 0:
            return self._make_failure_result(
                statement_id,
                index,
                sql,
                exec_start,
                f"Statement execution timed out after {config.timeout_seconds}s",
            )

        timer = threading.Timer(remaining, self.connection.interrupt)
        timer.daemon = True
        timer.start()
        try:
            cursor = self.connection.execute(sql)
            rows = self._fetch_rows(cursor, config.max_result_rows)
        except duckdb.InterruptException:
            return self._make_failure_result(
                statement_id,
                index,
                sql,
                exec_start,
                f"Statement execution timed out after {config.timeout_seconds}s",
            )
        except duckdb.Error as e:
            return self._make_failure_result(statement_id, index, sql, exec_start, str(e))
        finally:
            timer.cancel()

        return StatementResult(
            statement_id=statement_id,
            index=index,
            sql=sql,
            status="success",
            execution_time_ms=elapsed_ms(exec_start),
            error_message=None,
            result_data=rows,
        )

    @staticmethod
    def _fetch_rows(cursor: Any, max_rows: int) -> list[dict[str, object]] | None:
        """Capture up to ``max_rows`` rows when the statement produced a result set."""
        if not cursor.description or max_rows == 0:
            return None
        columns = [column[0] for column in cursor.description]
        return [dict(zip(columns, row)) for row in cursor.fetchmany(max_rows)]

    @staticmethod
    def _make_failure_result(
        statement_id: str, index: int, sql: str, exec_start: float, error_message: str
    ) -> StatementResult:
        """Build a failed StatementResult."""
        return StatementResult(
            statement_id=statement_id,
            index=index,
            sql=sql,
            status="failed",
            execution_time_ms=elapsed_ms(exec_start),
            error_message=error_message,
        )
