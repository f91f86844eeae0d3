"""
Unit tests for settings loading (JSON file, environment, overrides).
"""

import json
from pathlib import Path

import pytest

from sqlinit.config import (
    CONFIG_FILENAME,
    SQLInitConfig,
    apply_overrides,
    discover_config_file,
    load_config,
)
from sqlinit.domain.errors import ConfigurationError


def _write_config(directory: Path, data: object, name: str = CONFIG_FILENAME) -> Path:
    path = directory / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestDefaults:
    def test_defaults_without_file(self) -> None:
        config = load_config(env={})
        assert config.provider == "duckdb"
        assert config.database_path == ":memory:"
        assert config.init_sql_file is None
        assert config.query_timeout_seconds == 300
        assert config.read_only is False
        assert config.databricks is None

    def test_execution_config_uses_query_timeout(self) -> None:
        exec_config = SQLInitConfig(query_timeout_seconds=12).execution_config(dry_run=True)
        assert exec_config.timeout_seconds == 12
        assert exec_config.dry_run is True


class TestConfigFile:
    def test_camel_case_keys(self, temp_workspace) -> None:
        path = _write_config(
            temp_workspace,
            {
                "databasePath": "data/main.db",
                "queryTimeoutSeconds": 30,
                "readOnly": True,
                "databricks": {"profile": "DEV", "warehouseId": "abc123", "schema": "raw"},
            },
        )

        config = load_config(path, env={})

        assert config.database_path == "data/main.db"
        assert config.query_timeout_seconds == 30
        assert config.read_only is True
        assert config.databricks is not None
        assert config.databricks.profile == "DEV"
        assert config.databricks.warehouse_id == "abc123"
        assert config.databricks.schema_name == "raw"

    def test_snake_case_keys(self, temp_workspace) -> None:
        path = _write_config(temp_workspace, {"database_path": "x.db", "provider": "databricks"})
        config = load_config(path, env={})
        assert config.database_path == "x.db"
        assert config.provider == "databricks"

    def test_relative_init_file_resolved_against_config_directory(self, temp_workspace) -> None:
        path = _write_config(temp_workspace, {"initSqlFile": "sql/init.sql"})
        config = load_config(path, env={})
        assert config.init_sql_file == str(temp_workspace / "sql" / "init.sql")

    def test_absolute_init_file_kept(self, temp_workspace, tmp_path) -> None:
        init_path = tmp_path / "elsewhere" / "init.sql"
        path = _write_config(temp_workspace, {"initSqlFile": str(init_path)})
        config = load_config(path, env={})
        assert config.init_sql_file == str(init_path)

    def test_missing_file(self, temp_workspace) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(temp_workspace / "absent.json", env={})
        assert exc_info.value.code == "config_unreadable"

    def test_invalid_json(self, temp_workspace) -> None:
        path = temp_workspace / CONFIG_FILENAME
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path, env={})
        assert exc_info.value.code == "config_invalid_json"

    def test_json_must_be_object(self, temp_workspace) -> None:
        path = _write_config(temp_workspace, ["duckdb"])
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path, env={})
        assert exc_info.value.code == "config_invalid_json"

    @pytest.mark.parametrize("timeout", [0, -5, "soon"])
    def test_invalid_timeout(self, temp_workspace, timeout) -> None:
        path = _write_config(temp_workspace, {"queryTimeoutSeconds": timeout})
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(path, env={})
        assert exc_info.value.code == "config_invalid"
        assert str(path) in str(exc_info.value)


class TestEnvironmentOverrides:
    def test_env_overrides_file(self, temp_workspace) -> None:
        path = _write_config(temp_workspace, {"databasePath": "file.db", "provider": "duckdb"})
        env = {
            "SQLINIT_DATABASE": "env.db",
            "SQLINIT_QUERY_TIMEOUT": "7.5",
            "SQLINIT_READ_ONLY": "true",
            "SQLINIT_INIT_FILE": "boot.sql",
        }

        config = load_config(path, env=env)

        assert config.database_path == "env.db"
        assert config.query_timeout_seconds == 7.5
        assert config.read_only is True
        assert config.init_sql_file == "boot.sql"

    def test_databricks_env_merges_into_file_settings(self, temp_workspace) -> None:
        path = _write_config(
            temp_workspace, {"databricks": {"profile": "DEV", "catalog": "main"}}
        )
        env = {"DATABRICKS_WAREHOUSE_ID": "wh-1"}

        config = load_config(path, env=env)

        assert config.databricks is not None
        assert config.databricks.profile == "DEV"
        assert config.databricks.catalog == "main"
        assert config.databricks.warehouse_id == "wh-1"

    def test_empty_env_values_ignored(self) -> None:
        config = load_config(env={"SQLINIT_DATABASE": "", "SQLINIT_PROVIDER": ""})
        assert config.database_path == ":memory:"
        assert config.provider == "duckdb"

    def test_reads_process_environment_by_default(self, monkeypatch) -> None:
        monkeypatch.setenv("SQLINIT_PROVIDER", "databricks")
        assert load_config().provider == "databricks"

    def test_invalid_env_value(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(env={"SQLINIT_QUERY_TIMEOUT": "never"})
        assert "environment" in str(exc_info.value)


class TestApplyOverrides:
    def test_none_values_ignored(self) -> None:
        config = SQLInitConfig(database_path="a.db")
        assert apply_overrides(config, {"database_path": None, "provider": None}) is config

    def test_overrides_replace_fields(self) -> None:
        config = apply_overrides(SQLInitConfig(), {"database_path": "b.db"})
        assert config.database_path == "b.db"

    def test_nested_databricks_merged(self) -> None:
        config = SQLInitConfig.model_validate({"databricks": {"profile": "DEV"}})
        updated = apply_overrides(
            config, {"databricks": {"profile": None, "warehouse_id": "wh-2"}}
        )
        assert updated.databricks is not None
        assert updated.databricks.profile == "DEV"
        assert updated.databricks.warehouse_id == "wh-2"

    def test_all_none_databricks_leaves_settings_unset(self) -> None:
        updated = apply_overrides(
            SQLInitConfig(), {"databricks": {"profile": None, "warehouse_id": None}}
        )
        assert updated.databricks is None

    def test_invalid_override_names_source(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            apply_overrides(
                SQLInitConfig(), {"query_timeout_seconds": -1}, source="command line"
            )
        assert "command line" in str(exc_info.value)


class TestDiscoverConfigFile:
    def test_found(self, temp_workspace) -> None:
        path = _write_config(temp_workspace, {})
        assert discover_config_file(temp_workspace) == path

    def test_absent(self, temp_workspace) -> None:
        assert discover_config_file(temp_workspace) is None
