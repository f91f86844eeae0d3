from collections.abc import Callable
from pathlib import Path

import duckdb
import pytest

from tests.utils import RecordingExecutor


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace directory"""
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    return workspace


@pytest.fixture
def write_sql(temp_workspace: Path) -> Callable[..., Path]:
    """Write SQL text to a file in the workspace and return its path"""

    def _write(content: str, name: str = "init.sql") -> Path:
        path = temp_workspace / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def duckdb_connection():
    connection = duckdb.connect(database=":memory:")
    yield connection
    connection.close()


@pytest.fixture(autouse=True)
def _clean_sqlinit_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings from the developer's shell out of the tests"""
    for name in (
        "SQLINIT_PROVIDER",
        "SQLINIT_DATABASE",
        "SQLINIT_INIT_FILE",
        "SQLINIT_QUERY_TIMEOUT",
        "SQLINIT_READ_ONLY",
        "DATABRICKS_CONFIG_PROFILE",
        "DATABRICKS_WAREHOUSE_ID",
    ):
        monkeypatch.delenv(name, raising=False)
