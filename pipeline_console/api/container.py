"""Dependency Injection Container - centralized service management."""

from functools import cached_property
from typing import TYPE_CHECKING

from pipeline_console.domain.entities.configuration import ConfigurationStore
from pipeline_console.domain.ports.config import AppConfig
from pipeline_console.domain.ports.gateway import GatewayPort
from pipeline_console.infrastructure.config import load_config

if TYPE_CHECKING:
    from pipeline_console.application.console.use_case import ConsoleUseCase


class Container:
    """Dependency Injection Container with lazy initialization.

    One container is one operator session: it owns the configuration
    store and the console (view state, execution log, transcript).

    Usage:
        container = Container()
        console = container.console
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        gateway: GatewayPort | None = None,
    ):
        """Initialize container with optional config and gateway overrides."""
        self._config_override = config
        self._gateway_override = gateway

    @cached_property
    def config(self) -> AppConfig:
        """Application configuration."""
        if self._config_override:
            return self._config_override
        return load_config()

    @cached_property
    def gateway(self) -> GatewayPort:
        """Call gateway to the remote pipeline service."""
        if self._gateway_override is not None:
            return self._gateway_override
        from pipeline_console.infrastructure.gateway.http_gateway import HTTPGateway

        return HTTPGateway(self.config.pipeline)

    @cached_property
    def configuration_store(self) -> ConfigurationStore:
        """Operator configuration record, seeded from [defaults]."""
        return ConfigurationStore(defaults=self.config.defaults.to_record())

    @cached_property
    def console(self) -> "ConsoleUseCase":
        """Console use case with all dependencies."""
        from pipeline_console.application.console.use_case import ConsoleUseCase

        return ConsoleUseCase(store=self.configuration_store, gateway=self.gateway)

    def reset(self) -> None:
        """Reset all cached instances (useful for testing)."""
        for attr in list(self.__dict__.keys()):
            if not attr.startswith("_"):
                delattr(self, attr)


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """Get or create global container instance."""
    global _container
    if _container is None:
        _container = Container()
    return _container


def set_container(container: Container) -> None:
    """Install a prepared container (tests inject fake gateways this way)."""
    global _container
    _container = container


def reset_container() -> None:
    """Reset global container (for testing)."""
    global _container
    if _container:
        _container.reset()
    _container = None
