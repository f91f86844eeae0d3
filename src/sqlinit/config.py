"""
Configuration for SQLInit

Settings come from an optional JSON file (``sqlinit.json`` by convention) and
are then overridden by environment variables. Keys in the file use camelCase,
matching the field aliases below; snake_case names are accepted as well.
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from sqlinit.domain.errors import ConfigurationError
from sqlinit.providers.base.executor import ExecutionConfig

CONFIG_FILENAME = "sqlinit.json"

# Environment variable -> top-level field name
ENV_OVERRIDES: dict[str, str] = {
    "SQLINIT_PROVIDER": "provider",
    "SQLINIT_DATABASE": "database_path",
    "SQLINIT_INIT_FILE": "init_sql_file",
    "SQLINIT_QUERY_TIMEOUT": "query_timeout_seconds",
    "SQLINIT_READ_ONLY": "read_only",
}

# Environment variable -> databricks field name
DATABRICKS_ENV_OVERRIDES: dict[str, str] = {
    "DATABRICKS_CONFIG_PROFILE": "profile",
    "DATABRICKS_WAREHOUSE_ID": "warehouse_id",
}


class DatabricksSettings(BaseModel):
    """Connection settings for the Databricks SQL warehouse provider"""

    profile: Optional[str] = None
    warehouse_id: Optional[str] = Field(None, alias="warehouseId")
    catalog: Optional[str] = None
    schema_name: Optional[str] = Field(None, alias="schema")

    class Config:
        populate_by_name = True


class SQLInitConfig(BaseModel):
    """Top-level settings: which engine to open and which init file to apply"""

    provider: str = "duckdb"
    database_path: str = Field(":memory:", alias="databasePath")
    init_sql_file: Optional[str] = Field(None, alias="initSqlFile")
    query_timeout_seconds: float = Field(300, gt=0, alias="queryTimeoutSeconds")
    read_only: bool = Field(False, alias="readOnly")
    databricks: Optional[DatabricksSettings] = None

    class Config:
        populate_by_name = True

    def execution_config(self, dry_run: bool = False) -> ExecutionConfig:
        """Build the executor configuration for statements run under these settings."""
        return ExecutionConfig(timeout_seconds=self.query_timeout_seconds, dry_run=dry_run)


def discover_config_file(directory: Path) -> Path | None:
    """Return ``directory/sqlinit.json`` if it exists."""
    candidate = directory / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(path: Path | None = None, env: Mapping[str, str] | None = None) -> SQLInitConfig:
    """Load settings from an optional JSON file, then apply environment overrides.

    A relative ``initSqlFile`` in the file is resolved against the file's
    directory. Values coming from the environment are used as given.

    Args:
        path: JSON config file, or None for defaults only
        env: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated SQLInitConfig

    Raises:
        ConfigurationError: If the file cannot be read or any value is invalid
    """
    env = os.environ if env is None else env

    file_data = _read_config_file(path) if path is not None else {}
    config = _validate(file_data, source=str(path) if path else "defaults")

    if path is not None and config.init_sql_file:
        init_path = Path(config.init_sql_file).expanduser()
        if not init_path.is_absolute():
            config = config.model_copy(update={"init_sql_file": str(path.parent / init_path)})

    return apply_overrides(config, _collect_env_overrides(env), source="environment")


def apply_overrides(
    config: SQLInitConfig, overrides: Mapping[str, Any], source: str = "overrides"
) -> SQLInitConfig:
    """Return a re-validated copy of ``config`` with field overrides applied.

    ``None`` values are ignored. A nested ``databricks`` mapping is merged
    into the existing Databricks settings rather than replacing them.

    Raises:
        ConfigurationError: If an override value is invalid
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config

    merged = config.model_dump()
    databricks_updates = updates.pop("databricks", None) or {}
    merged.update(updates)
    databricks_updates = {k: v for k, v in databricks_updates.items() if v is not None}
    if databricks_updates:
        merged["databricks"] = {**(merged.get("databricks") or {}), **databricks_updates}
    return _validate(merged, source=source)


def _read_config_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(
            f"failed to read config file '{path}': {e}", "config_unreadable"
        ) from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"invalid JSON in config file '{path}': {e}", "config_invalid_json"
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"config file '{path}' must contain a JSON object", "config_invalid_json"
        )
    return data


def _collect_env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {
        field: env[name] for name, field in ENV_OVERRIDES.items() if env.get(name)
    }
    databricks = {
        field: env[name] for name, field in DATABRICKS_ENV_OVERRIDES.items() if env.get(name)
    }
    if databricks:
        overrides["databricks"] = databricks
    return overrides


def _validate(data: dict[str, Any], source: str) -> SQLInitConfig:
    try:
        return SQLInitConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"invalid configuration ({source}): {e}", "config_invalid"
        ) from e
