"""FastAPI dependencies - wiring routes to the container."""

from slowapi import Limiter
from slowapi.util import get_remote_address

from pipeline_console.api.container import get_container
from pipeline_console.application.console.use_case import ConsoleUseCase
from pipeline_console.domain.entities.configuration import ConfigurationStore
from pipeline_console.domain.ports.config import AppConfig

limiter = Limiter(key_func=get_remote_address)


def rate_limit() -> str:
    """Per-client limit from [security]."""
    return f"{get_config().security.rate_limit_requests_per_minute}/minute"


def get_config() -> AppConfig:
    return get_container().config


def get_configuration_store() -> ConfigurationStore:
    return get_container().configuration_store


def get_console() -> ConsoleUseCase:
    return get_container().console
