"""
Executor Registry

Central registry of execution backends. Provider packages register
themselves here on import so the CLI and the database manager can build an
executor from a provider id.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlinit.domain.errors import ProviderNotFoundError

from .base.executor import SQLExecutor

if TYPE_CHECKING:
    from sqlinit.config import SQLInitConfig

ExecutorFactory = Callable[["SQLInitConfig", Any], SQLExecutor]


@dataclass(frozen=True)
class ExecutorProvider:
    """A named execution backend and the factory that builds its executor

    The factory receives the loaded settings and an already-open connection
    (or None for backends that connect on their own).
    """

    id: str
    name: str
    factory: ExecutorFactory
    needs_connection: bool = False


class ExecutorRegistryClass:
    """Registry for managing execution backends"""

    def __init__(self) -> None:
        self.providers: dict[str, ExecutorProvider] = {}

    def register(self, provider: ExecutorProvider) -> None:
        """
        Register a provider

        Raises:
            ValueError: If a provider with the same id is already registered
        """
        if provider.id in self.providers:
            raise ValueError(f"Provider with ID '{provider.id}' is already registered")
        self.providers[provider.id] = provider

    def get(self, provider_id: str) -> ExecutorProvider | None:
        return self.providers.get(provider_id)

    def get_all_ids(self) -> list[str]:
        return list(self.providers.keys())

    def has(self, provider_id: str) -> bool:
        return provider_id in self.providers

    def require(self, provider_id: str) -> ExecutorProvider:
        """Get a provider by id or raise ProviderNotFoundError listing the known ids."""
        provider = self.get(provider_id)
        if provider is None:
            available = ", ".join(self.get_all_ids()) or "none"
            raise ProviderNotFoundError(
                f"Provider '{provider_id}' not found. Available providers: {available}",
                "provider_not_found",
            )
        return provider

    def create(self, config: "SQLInitConfig", connection: Any = None) -> SQLExecutor:
        """Build the executor for ``config.provider``."""
        return self.require(config.provider).factory(config, connection)

    def unregister(self, provider_id: str) -> None:
        self.providers.pop(provider_id, None)


# Singleton instance
ExecutorRegistry = ExecutorRegistryClass()
