"""
Run Command Implementation

Applies an init file to the configured engine: builds the executor for the
configured provider, runs the statements fail-fast and prints a summary.
"""

from pathlib import Path

from sqlinit.commands._preview import console, print_result_tables, print_sql_statements_preview
from sqlinit.config import SQLInitConfig
from sqlinit.core.database import DatabaseManager
from sqlinit.core.init_file import load_init_file
from sqlinit.providers import ExecutorRegistry
from sqlinit.providers.base.executor import ExecutionResult, SQLExecutor


def run_init_file(
    file: Path,
    config: SQLInitConfig,
    dry_run: bool = False,
    show_results: bool = False,
) -> ExecutionResult:
    """Run an init file against the configured provider

    For providers that need a local connection (DuckDB) the database is opened
    for the duration of the run; its own configured init file is not applied,
    only ``file`` is.

    Args:
        file: Init file to run
        config: Loaded settings (provider, database, timeout)
        dry_run: List statements instead of executing them
        show_results: Print tables for statements that return rows

    Returns:
        ExecutionResult of the run

    Raises:
        ProviderNotFoundError: If ``config.provider`` is unknown
        InitFileReadError: If the file cannot be read
        InitStatementError: If a statement fails
    """
    provider = ExecutorRegistry.require(config.provider)
    console.print(f"[blue]Provider:[/blue] {provider.name}")
    if provider.needs_connection:
        console.print(f"[blue]Database:[/blue] {config.database_path}")
    console.print(f"[blue]Init file:[/blue] {file}")

    if not provider.needs_connection:
        result = _run(file, ExecutorRegistry.create(config), config, dry_run)
    else:
        manager = DatabaseManager(config)
        try:
            connection = manager.open(apply_init=False)
            result = _run(file, ExecutorRegistry.create(config, connection), config, dry_run)
        finally:
            manager.close()

    _show_results(result, dry_run, show_results)
    return result


def _run(
    file: Path, executor: SQLExecutor, config: SQLInitConfig, dry_run: bool
) -> ExecutionResult:
    return load_init_file(file, executor, config.execution_config(dry_run))


def _show_results(result: ExecutionResult, dry_run: bool, show_results: bool) -> None:
    """Print final summary."""
    if dry_run:
        print_sql_statements_preview(
            [stmt.sql for stmt in result.statement_results], title="Dry run"
        )
        console.print(
            f"[yellow]Dry run: {result.total_statements} statement(s) not executed[/yellow]"
        )
        return

    if show_results:
        print_result_tables(result)

    if result.total_statements == 0:
        console.print("[yellow]Init file is empty, nothing to execute[/yellow]")
        return

    exec_time = result.total_execution_time_ms / 1000
    console.print(
        f"[green]✓ Executed {result.successful_statements} statement(s) in {exec_time:.2f}s[/green]"
    )
