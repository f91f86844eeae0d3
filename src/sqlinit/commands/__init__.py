"""
SQLInit CLI Commands

Each command is implemented as a separate module; the CLI layer (cli.py) is a
thin routing layer over these functions.
"""

from .check import check_database
from .run import run_init_file
from .split import split_init_file

__all__ = [
    "check_database",
    "run_init_file",
    "split_init_file",
]
