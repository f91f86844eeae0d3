"""
Base SQL Executor Protocol

Defines the contract for running a batch of statements against an engine.
Providers implement this protocol to support ``sqlinit run`` and init files
applied by the database manager.
"""

import time
from typing import Literal, Protocol
from uuid import uuid4

from pydantic import BaseModel, Field


class ExecutionConfig(BaseModel):
    """Configuration for SQL execution

    Attributes:
        timeout_seconds: Deadline for the whole batch, not per statement
        dry_run: If True, report statements as skipped without executing
        max_result_rows: Cap on rows captured for statements that return rows
    """

    timeout_seconds: float = Field(default=300, gt=0, description="Batch timeout in seconds")
    dry_run: bool = Field(default=False, description="Preview without executing")
    max_result_rows: int = Field(default=50, ge=0, description="Rows captured per statement")


class StatementResult(BaseModel):
    """Result of single statement execution

    Attributes:
        statement_id: Unique identifier for the statement execution
        index: 1-based position of the statement in its batch
        sql: The SQL statement that was executed
        status: Execution status (success/failed/skipped)
        execution_time_ms: Time taken to execute in milliseconds
        error_message: Error details if execution failed
        result_data: Rows returned by the statement (list of row dicts)
    """

    statement_id: str = Field(..., description="Statement execution ID")
    index: int = Field(..., ge=1, description="1-based statement index")
    sql: str = Field(..., description="SQL statement")
    status: Literal["success", "failed", "skipped"] = Field(..., description="Execution status")
    execution_time_ms: int = Field(default=0, description="Execution time in milliseconds")
    error_message: str | None = Field(None, description="Error message if failed")
    result_data: list[dict[str, object]] | None = Field(
        None, description="Rows returned by the statement"
    )


class ExecutionResult(BaseModel):
    """Result of a full batch

    Attributes:
        run_id: Unique identifier of this run
        total_statements: Total number of statements in the batch
        successful_statements: Number of statements that succeeded
        failed_statement_index: 0-based index of the first failed statement (if any)
        statement_results: Detailed results for each attempted statement
        total_execution_time_ms: Total execution time in milliseconds
        status: Overall execution status
        error_message: Summary error message (if failed)
    """

    run_id: str = Field(..., description="Run ID")
    total_statements: int = Field(..., description="Total statements")
    successful_statements: int = Field(default=0, description="Successful statements")
    failed_statement_index: int | None = Field(None, description="First failed statement index")
    statement_results: list[StatementResult] = Field(
        default_factory=list, description="Statement results"
    )
    total_execution_time_ms: int = Field(default=0, description="Total execution time (ms)")
    status: Literal["success", "failed", "partial"] = Field(..., description="Overall status")
    error_message: str | None = Field(None, description="Error summary")

    @property
    def failed_statement(self) -> StatementResult | None:
        """Result of the statement that stopped the batch, if any."""
        if self.failed_statement_index is None:
            return None
        for result in self.statement_results:
            if result.index == self.failed_statement_index + 1:
                return result
        return None


def new_run_id() -> str:
    """Generate a short unique run identifier."""
    return f"run_{uuid4().hex[:8]}"


def failure_status(successful_count: int) -> Literal["failed", "partial"]:
    """Return "failed" if nothing succeeded before the failure, else "partial"."""
    return "failed" if successful_count == 0 else "partial"


def dry_run_result(statements: list[str]) -> ExecutionResult:
    """Build a result that reports every statement as skipped."""
    return ExecutionResult(
        run_id=new_run_id(),
        total_statements=len(statements),
        successful_statements=0,
        statement_results=[
            StatementResult(statement_id=f"dry_run_{i}", index=i, sql=sql, status="skipped")
            for i, sql in enumerate(statements, 1)
        ],
        status="success",
    )


class SQLExecutor(Protocol):
    """Protocol for running statements against an engine

    Statements run strictly in order and the first failure stops the batch.
    Statement-level failures are reported in the result, not raised.
    """

    def execute_statements(self, statements: list[str], config: ExecutionConfig) -> ExecutionResult:
        """Execute SQL statements sequentially

        Args:
            statements: List of SQL statements to execute
            config: Execution configuration (timeout, dry run)

        Returns:
            ExecutionResult with detailed execution information

        Raises:
            ExecutionError: If the engine cannot be reached at all
        """
        ...


def elapsed_ms(start: float) -> int:
    """Milliseconds elapsed since a ``time.monotonic()`` reading."""
    return int((time.monotonic() - start) * 1000)
