"""
Databricks SQL Executor

Executes SQL statements on a Databricks SQL warehouse using the SQL Statement
Execution API. Each statement is submitted asynchronously and polled until it
reaches a terminal state; the batch deadline cancels whatever is still running.
"""

import time
from typing import Any

from databricks.sdk import WorkspaceClient
from databricks.sdk.service.sql import StatementState

from sqlinit.core.sql_utils import truncate_statement
from sqlinit.domain.errors import ExecutionError
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

TERMINAL_STATES = (StatementState.SUCCEEDED, StatementState.FAILED, StatementState.CANCELED)


class DatabricksSQLExecutor:
    """Execute SQL statements against a Databricks SQL warehouse

    Attributes:
        client: Authenticated Databricks WorkspaceClient
        warehouse_id: SQL warehouse that runs the statements
        catalog: Default catalog for unqualified names (optional)
        schema: Default schema for unqualified names (optional)
        poll_interval_seconds: Delay between status polls
    """

    def __init__(
        self,
        client: WorkspaceClient,
        warehouse_id: str,
        catalog: str | None = None,
        schema: str | None = None,
        poll_interval_seconds: float = 2.0,
    ) -> None:
        self.client = client
        self.warehouse_id = warehouse_id
        self.catalog = catalog
        self.schema = schema
        self.poll_interval_seconds = poll_interval_seconds

    def execute_statements(self, statements: list[str], config: ExecutionConfig) -> ExecutionResult:
        """Execute SQL statements sequentially with fail-fast behavior

        Args:
            statements: List of SQL statements to execute
            config: Execution configuration (timeout, dry run, row cap)

        Returns:
            ExecutionResult with detailed execution information

        Raises:
            ExecutionError: If the statement status can no longer be read
        """
        if config.dry_run:
            return dry_run_result(statements)

        run_id = new_run_id()
        results: list[StatementResult] = []
        start_time = time.monotonic()
        deadline = start_time + config.timeout_seconds

        for i, sql in enumerate(statements, 1):
            logger.debug(
                "Executing statement index=%d/%d warehouse=%s statement=%s",
                i,
                len(statements),
                self.warehouse_id,
                truncate_statement(sql, 100),
            )
            result = self._execute_single_statement(sql, i, deadline, config)
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
        """Submit one statement and wait for a terminal state or the deadline."""
        exec_start = time.monotonic()
        timeout_message = f"Statement execution timed out after {config.timeout_seconds}s"
        if exec_start >= deadline:
            return self._make_failure_result(
                f"stmt_{index}", index, sql, exec_start, timeout_message
            )

        submitted_id: str | None = None
        try:
            response = self._submit_statement(sql)
            submitted_id = response.statement_id
            statement_id = submitted_id or f"stmt_{index}"
            terminal = self._poll_until_terminal(statement_id, deadline)
        except ExecutionError:
            if submitted_id:
                self._cancel(submitted_id)
            raise
        except Exception as e:
            if submitted_id:
                self._cancel(submitted_id)
            return self._make_failure_result(
                submitted_id or f"stmt_error_{index}", index, sql, exec_start, f"API error: {e}"
            )

        if terminal is None:
            self._cancel(statement_id)
            return self._make_failure_result(statement_id, index, sql, exec_start, timeout_message)
        return self._handle_terminal_state(terminal, statement_id, index, sql, exec_start, config)

    def _submit_statement(self, sql: str) -> Any:
        return self.client.statement_execution.execute_statement(
            statement=sql,
            warehouse_id=self.warehouse_id,
            catalog=self.catalog,
            schema=self.schema,
            wait_timeout="0s",
        )

    def _poll_until_terminal(self, statement_id: str, deadline: float) -> Any | None:
        """Poll until the statement reaches a terminal state.

        Returns the final status response, or None once the deadline passes.
        """
        while time.monotonic() < deadline:
            resp = self.client.statement_execution.get_statement(statement_id)
            if not resp or not resp.status:
                raise ExecutionError(
                    f"Failed to get status of statement {statement_id}", "status_unavailable"
                )
            if resp.status.state in TERMINAL_STATES:
                return resp
            time.sleep(min(self.poll_interval_seconds, max(0.0, deadline - time.monotonic())))
        return None

    def _cancel(self, statement_id: str) -> None:
        try:
            self.client.statement_execution.cancel_execution(statement_id)
        except Exception as e:
            logger.warning("Failed to cancel statement %s: %s", statement_id, e)

    def _handle_terminal_state(
        self,
        response: Any,
        statement_id: str,
        index: int,
        sql: str,
        exec_start: float,
        config: ExecutionConfig,
    ) -> StatementResult:
        state = response.status.state

        if state == StatementState.SUCCEEDED:
            return StatementResult(
                statement_id=statement_id,
                index=index,
                sql=sql,
                status="success",
                execution_time_ms=elapsed_ms(exec_start),
                error_message=None,
                result_data=self._parse_result_data(response, config.max_result_rows),
            )

        if state == StatementState.FAILED:
            error = response.status.error
            error_msg = error.message if error and error.message else "Unknown error"
            return self._make_failure_result(statement_id, index, sql, exec_start, error_msg)

        return self._make_failure_result(
            statement_id, index, sql, exec_start, "Statement was canceled"
        )

    @staticmethod
    def _parse_result_data(response: Any, max_rows: int) -> list[dict[str, object]] | None:
        """Extract up to ``max_rows`` rows from a SUCCEEDED response."""
        if not (
            response.result
            and response.result.data_array
            and response.manifest
            and response.manifest.schema
            and response.manifest.schema.columns
        ):
            return None
        columns = [col.name for col in response.manifest.schema.columns]
        return [dict(zip(columns, row)) for row in response.result.data_array[:max_rows]]

    @staticmethod
    def _make_failure_result(
        statement_id: str, index: int, sql: str, exec_start: float, error_message: str
    ) -> StatementResult:
        return StatementResult(
            statement_id=statement_id,
            index=index,
            sql=sql,
            status="failed",
            execution_time_ms=elapsed_ms(exec_start),
            error_message=error_message,
        )
