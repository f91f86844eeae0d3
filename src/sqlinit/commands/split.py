"""
Split Command

Shows how an init file divides into statements without executing anything.
"""

import json
from pathlib import Path

from sqlinit.commands._preview import console, print_sql_statements_preview
from sqlinit.core.init_file import read_init_file


def split_init_file(file: Path, as_json: bool = False, max_width: int | None = None) -> list[str]:
    """Split an init file and print the statements

    Args:
        file: Init file to split
        as_json: Print a plain JSON array instead of the rich preview
        max_width: One line per statement, cut to this width (rich preview only)

    Returns:
        The statements, in order

    Raises:
        InitFileReadError: If the file cannot be read
    """
    statements = read_init_file(file)

    if as_json:
        print(json.dumps(statements))
        return statements

    print_sql_statements_preview(statements, title=f"Statements in {file.name}", max_width=max_width)
    console.print(f"[green]✓[/green] {len(statements)} statement(s)")
    return statements
