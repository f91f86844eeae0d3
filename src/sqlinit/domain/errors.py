"""Unified domain error taxonomy for init-file workflows."""

from dataclasses import dataclass


@dataclass(slots=True)
class SQLInitError(Exception):
    """Base class for application/domain-level failures."""

    message: str
    code: str

    def __str__(self) -> str:
        return self.message


class ConfigurationError(SQLInitError):
    """Raised for invalid or unreadable configuration."""


class ProviderNotFoundError(SQLInitError):
    """Raised when no executor is registered under a provider id."""


class AuthenticationError(SQLInitError):
    """Raised when a remote engine rejects or cannot resolve credentials."""


class ExecutionError(SQLInitError):
    """Raised when an executor cannot talk to its engine at all."""


@dataclass(slots=True)
class InitFileReadError(SQLInitError):
    """Raised when an init file cannot be read."""

    path: str = ""


@dataclass(slots=True)
class InitStatementError(SQLInitError):
    """Raised when one statement of an init file fails.

    ``index`` is 1-based; ``statement`` is the truncated single-line rendering.
    """

    path: str = ""
    index: int = 0
    statement: str = ""
