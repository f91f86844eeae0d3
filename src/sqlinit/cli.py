"""
Click-based CLI for SQLInit.
"""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .commands import check_database, run_init_file, split_init_file
from .config import SQLInitConfig, apply_overrides, discover_config_file, load_config
from .domain.errors import SQLInitError
from .logging_utils import setup_logging

console = Console()


def _load_settings(config_path: str | None, **overrides: object) -> SQLInitConfig:
    """Load settings from --config (or ./sqlinit.json), env vars, then CLI flags."""
    path = Path(config_path) if config_path else discover_config_file(Path.cwd())
    config = load_config(path)
    return apply_overrides(config, overrides, source="command line")


@click.group()
@click.version_option(version=__version__, prog_name="sqlinit")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """SQLInit CLI for splitting and running SQL init files"""
    setup_logging(logging.DEBUG if verbose else logging.INFO)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print statements as a JSON array")
@click.option(
    "--max-width",
    type=click.IntRange(min=4),
    help="Show each statement on one line, cut to this many characters",
)
def split(file: str, as_json: bool, max_width: int | None) -> None:
    """Split an init file into statements without executing them

    Examples:
        sqlinit split init.sql
        sqlinit split init.sql --json
        sqlinit split init.sql --max-width 80
    """
    try:
        split_init_file(Path(file), as_json=as_json, max_width=max_width)
    except SQLInitError as e:
        console.print(f"[red]✗ Split failed:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Settings file (default: ./sqlinit.json if present)",
)
@click.option("--database", "-d", help="DuckDB database path (default: :memory:)")
@click.option("--provider", "-p", help="Execution provider (duckdb, databricks)")
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Timeout in seconds for the whole file",
)
@click.option("--profile", help="Databricks profile name")
@click.option("--warehouse-id", help="Databricks SQL warehouse ID")
@click.option("--dry-run", is_flag=True, help="List statements without executing them")
@click.option("--show-results", is_flag=True, help="Print rows returned by statements")
def run(
    file: str,
    config_path: str | None,
    database: str | None,
    provider: str | None,
    timeout: float | None,
    profile: str | None,
    warehouse_id: str | None,
    dry_run: bool,
    show_results: bool,
) -> None:
    """Run an init file statement by statement, stopping at the first failure

    Examples:
        sqlinit run init.sql                       # In-memory DuckDB
        sqlinit run init.sql -d data/main.db       # DuckDB file
        sqlinit run init.sql --dry-run
        sqlinit run init.sql -p databricks --warehouse-id abc123
    """
    try:
        config = _load_settings(
            config_path,
            database_path=database,
            provider=provider,
            query_timeout_seconds=timeout,
            databricks={"profile": profile, "warehouse_id": warehouse_id},
        )
        run_init_file(Path(file), config, dry_run=dry_run, show_results=show_results)
    except SQLInitError as e:
        console.print(f"[red]✗ Run failed:[/red] {e}")
        sys.exit(1)


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Settings file (default: ./sqlinit.json if present)",
)
def check(config_path: str | None) -> None:
    """Open the configured database, applying its init file"""
    try:
        check_database(_load_settings(config_path))
    except SQLInitError as e:
        console.print(f"[red]✗ Check failed:[/red] {e}")
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
