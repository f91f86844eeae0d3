"""
Check Command

Opens the configured engine the same way a server would at startup (applying
the configured init file) and reports whether it is usable.
"""

from sqlinit.commands._preview import console
from sqlinit.config import SQLInitConfig
from sqlinit.core.database import DatabaseManager
from sqlinit.core.init_file import load_init_file
from sqlinit.domain.errors import ExecutionError
from sqlinit.providers import ExecutorRegistry


def check_database(config: SQLInitConfig) -> None:
    """Open the configured engine, apply its init file and run a probe query

    Raises:
        ProviderNotFoundError: If ``config.provider`` is unknown
        InitFileReadError, InitStatementError: If the init file fails
        ExecutionError: If the engine cannot be opened or the probe fails
    """
    provider = ExecutorRegistry.require(config.provider)
    console.print(f"[blue]Provider:[/blue] {provider.name}")

    if provider.needs_connection:
        with DatabaseManager(config) as connection:
            row = connection.execute("SELECT version()").fetchone()
        console.print(f"[green]✓[/green] Database ready: {config.database_path}")
        console.print(f"  DuckDB version: {row[0] if row else 'unknown'}")
        return

    executor = ExecutorRegistry.create(config)
    exec_config = config.execution_config()
    if config.init_sql_file:
        load_init_file(config.init_sql_file, executor, exec_config)
    result = executor.execute_statements(["SELECT 1"], exec_config)
    if result.status != "success":
        raise ExecutionError(f"Probe query failed: {result.error_message}", "probe_failed")
    console.print(f"[green]✓[/green] {provider.name} ready")
