"""Logging setup: stdlib loggers rendered through rich."""

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "sqlinit"


def setup_logging(
    level: int | str = logging.INFO, console: Console | None = None
) -> logging.Logger:
    """Attach a single RichHandler to the package logger.

    Calling it again replaces the handler and level, so the CLI can switch to
    DEBUG after parsing ``--verbose``.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the package namespace."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
