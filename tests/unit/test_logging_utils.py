"""Tests for the rich-backed logging setup."""

import io
import logging

import pytest
from rich.console import Console
from rich.logging import RichHandler

from sqlinit.logging_utils import ROOT_LOGGER, get_logger, setup_logging


@pytest.fixture
def package_logger():
    """Restore the package logger's handlers and level after each test"""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level = list(logger.handlers), logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


def _rich_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, RichHandler)]


def test_setup_logging_attaches_single_rich_handler(package_logger) -> None:
    setup_logging(logging.INFO)
    setup_logging(logging.DEBUG)

    assert len(_rich_handlers(package_logger)) == 1
    assert package_logger.level == logging.DEBUG


def test_setup_logging_accepts_level_names(package_logger) -> None:
    setup_logging("WARNING")
    assert package_logger.level == logging.WARNING


def test_records_rendered_to_given_console(package_logger) -> None:
    buffer = io.StringIO()
    setup_logging(logging.INFO, console=Console(file=buffer, width=200))

    get_logger("core.init_file").info("Executing init SQL file path=%s statements=%d", "a.sql", 2)
    get_logger("core.init_file").debug("hidden at INFO")

    output = buffer.getvalue()
    assert "Executing init SQL file path=a.sql statements=2" in output
    assert "hidden at INFO" not in output


def test_markup_in_messages_is_not_interpreted(package_logger) -> None:
    buffer = io.StringIO()
    setup_logging(logging.INFO, console=Console(file=buffer, width=200))

    get_logger().info("statement=SELECT '[bold]x[/bold]'")

    assert "[bold]x[/bold]" in buffer.getvalue()


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        (None, "sqlinit"),
        ("", "sqlinit"),
        ("sqlinit", "sqlinit"),
        ("sqlinit.core.database", "sqlinit.core.database"),
        ("core.database", "sqlinit.core.database"),
        ("sqlinitx", "sqlinit.sqlinitx"),
    ],
)
def test_get_logger_namespaces_names(name, expected) -> None:
    assert get_logger(name).name == expected
