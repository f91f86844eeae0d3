"""Domain types for SQLInit workflows."""

from .errors import (
    AuthenticationError,
    ConfigurationError,
    ExecutionError,
    InitFileReadError,
    InitStatementError,
    ProviderNotFoundError,
    SQLInitError,
)

__all__ = [
    "SQLInitError",
    "ConfigurationError",
    "ProviderNotFoundError",
    "AuthenticationError",
    "ExecutionError",
    "InitFileReadError",
    "InitStatementError",
]
