"""Shared helpers for SQLInit tests."""

from .cli_helpers import invoke_cli
from .executors import RecordingExecutor

__all__ = ["RecordingExecutor", "invoke_cli"]
