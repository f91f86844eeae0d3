"""Databricks provider: runs statements on a SQL warehouse."""

from typing import TYPE_CHECKING, Any

from sqlinit.domain.errors import ConfigurationError

from ..registry import ExecutorProvider
from .auth import create_databricks_client
from .executor import DatabricksSQLExecutor

if TYPE_CHECKING:
    from sqlinit.config import SQLInitConfig


def _create_executor(config: "SQLInitConfig", _connection: Any) -> DatabricksSQLExecutor:
    settings = config.databricks
    if settings is None or not settings.warehouse_id:
        raise ConfigurationError(
            "Databricks provider requires a warehouse id "
            "(databricks.warehouseId or DATABRICKS_WAREHOUSE_ID)",
            "warehouse_required",
        )
    client = create_databricks_client(settings.profile)
    return DatabricksSQLExecutor(
        client,
        settings.warehouse_id,
        catalog=settings.catalog,
        schema=settings.schema_name,
    )


databricks_provider = ExecutorProvider(
    id="databricks",
    name="Databricks SQL Warehouse",
    factory=_create_executor,
)

__all__ = ["DatabricksSQLExecutor", "databricks_provider", "create_databricks_client"]
