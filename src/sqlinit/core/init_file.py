"""
Init File Loader

Reads a SQL init file (extension loading, settings, secrets...), splits it
into statements and runs them in order through an executor. The first failing
statement stops the run and fails the whole file.
"""

from pathlib import Path

from sqlinit.domain.errors import InitFileReadError, InitStatementError
from sqlinit.logging_utils import get_logger
from sqlinit.providers.base.executor import (
    ExecutionConfig,
    ExecutionResult,
    SQLExecutor,
    new_run_id,
)

from .sql_utils import split_sql_statements, truncate_statement

logger = get_logger(__name__)

ERROR_STATEMENT_WIDTH = 50


def read_init_file(path: Path) -> list[str]:
    """Read an init file and split it into statements.

    Raises:
        InitFileReadError: If the file cannot be read or is not valid UTF-8
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InitFileReadError(
            f"failed to read init file '{path}': {e}", "init_file_unreadable", path=str(path)
        ) from e
    return split_sql_statements(content)


def load_init_file(
    path: Path | str, executor: SQLExecutor, config: ExecutionConfig | None = None
) -> ExecutionResult:
    """Read, split and execute an init file

    Args:
        path: Init file to apply
        executor: Backend that runs the statements
        config: Execution configuration (defaults to ExecutionConfig())

    Returns:
        ExecutionResult of the run (empty success result for an empty file)

    Raises:
        InitFileReadError: If the file cannot be read
        InitStatementError: If a statement fails; carries the 1-based index
            and the truncated statement text
    """
    path = Path(path)
    config = config or ExecutionConfig()
    statements = read_init_file(path)

    if not statements:
        logger.info("Init file is empty, skipping path=%s", path)
        return ExecutionResult(run_id=new_run_id(), total_statements=0, status="success")

    logger.info("Executing init SQL file path=%s statements=%d", path, len(statements))

    result = executor.execute_statements(statements, config)
    if result.status != "success":
        raise _statement_error(path, statements, result)

    if config.dry_run:
        logger.info("Dry run, nothing executed path=%s statements=%d", path, len(statements))
    else:
        logger.info(
            "Init SQL file executed successfully path=%s statements_executed=%d",
            path,
            result.successful_statements,
        )
    return result


def _statement_error(
    path: Path, statements: list[str], result: ExecutionResult
) -> InitStatementError:
    """Describe the statement that stopped the run."""
    failed_index = result.failed_statement_index or 0
    failed = result.failed_statement
    sql = failed.sql if failed else statements[failed_index]
    truncated = truncate_statement(sql, ERROR_STATEMENT_WIDTH)
    cause = result.error_message or "unknown error"
    number = failed_index + 1

    logger.error(
        "Init statement failed path=%s index=%d statement=%s error=%s",
        path,
        number,
        truncated,
        cause,
    )
    return InitStatementError(
        f"failed to execute init statement {number} ({truncated}) from '{path}': {cause}",
        "init_statement_failed",
        path=str(path),
        index=number,
        statement=truncated,
    )
