"""
SQLInit

Split SQL init files into statements and run them against DuckDB or a
Databricks SQL warehouse.
"""

__version__ = "0.1.0"

from .config import SQLInitConfig, load_config
from .core.database import DatabaseManager
from .core.init_file import load_init_file, read_init_file
from .core.sql_utils import LexMode, split_sql_statements, truncate_statement
from .domain.errors import (
    ConfigurationError,
    InitFileReadError,
    InitStatementError,
    SQLInitError,
)
from .providers import ExecutionConfig, ExecutionResult, ExecutorRegistry, StatementResult

__all__ = [
    "__version__",
    "split_sql_statements",
    "truncate_statement",
    "LexMode",
    "load_init_file",
    "read_init_file",
    "DatabaseManager",
    "SQLInitConfig",
    "load_config",
    "ExecutorRegistry",
    "ExecutionConfig",
    "ExecutionResult",
    "StatementResult",
    "SQLInitError",
    "ConfigurationError",
    "InitFileReadError",
    "InitStatementError",
]
