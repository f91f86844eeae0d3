"""Core SQL text handling and init-file workflow."""

from .sql_utils import LexMode, split_sql_statements, truncate_statement

__all__ = ["LexMode", "split_sql_statements", "truncate_statement"]
