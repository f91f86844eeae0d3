"""Shared CLI preview helpers (statement listing, result tables)."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sqlinit.core.sql_utils import truncate_statement
from sqlinit.providers.base.executor import ExecutionResult

console = Console()


def print_sql_statements_preview(
    statements: list[str], title: str = "SQL Preview", max_width: int | None = None
) -> None:
    """Print a numbered listing of SQL statements.

    Args:
        statements: List of SQL statement strings.
        title: Section title.
        max_width: If set, each statement is shown on one line cut to this width;
            otherwise long statements show their first three and last line.
    """
    console.print()
    console.print(f"[bold]{title}:[/bold]")
    console.print("─" * 60)
    if not statements:
        console.print("\n[yellow]No SQL statements found.[/yellow]")
        return

    for i, stmt in enumerate(statements, 1):
        if max_width:
            console.print(f"[cyan]{i:>3}.[/cyan] {escape(truncate_statement(stmt, max_width))}")
            continue
        console.print(f"\n[cyan]Statement {i}/{len(statements)}:[/cyan]")
        stmt_lines = stmt.split("\n")
        if len(stmt_lines) <= 5:
            for line in stmt_lines:
                console.print(f"  {line}", markup=False)
        else:
            for line in stmt_lines[:3]:
                console.print(f"  {line}", markup=False)
            console.print(f"  ... ({len(stmt_lines) - 4} more lines)")
            console.print(f"  {stmt_lines[-1]}", markup=False)
    console.print()


def print_result_tables(result: ExecutionResult, max_width: int = 60) -> None:
    """Print one table per statement that returned rows."""
    for stmt_result in result.statement_results:
        if not stmt_result.result_data:
            continue
        title = truncate_statement(stmt_result.sql, max_width)
        table = Table(title=f"{stmt_result.index}. {escape(title)}")
        columns = list(stmt_result.result_data[0].keys())
        for column in columns:
            table.add_column(str(column))
        for row in stmt_result.result_data:
            table.add_row(*(str(row.get(column)) for column in columns))
        console.print(table)
