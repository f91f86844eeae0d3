"""
Execution providers for SQLInit

Each provider package contributes one executor backend and registers it with
ExecutorRegistry on import.
"""

from .base.executor import ExecutionConfig, ExecutionResult, SQLExecutor, StatementResult
from .databricks import databricks_provider
from .duckdb import duckdb_provider
from .registry import ExecutorProvider, ExecutorRegistry

__all__ = [
    "ExecutorRegistry",
    "ExecutorProvider",
    "SQLExecutor",
    "ExecutionConfig",
    "ExecutionResult",
    "StatementResult",
]


def initialize_providers() -> None:
    """Register the built-in providers; idempotent."""
    for provider in (duckdb_provider, databricks_provider):
        if not ExecutorRegistry.has(provider.id):
            ExecutorRegistry.register(provider)


# Auto-initialize on import
initialize_providers()
