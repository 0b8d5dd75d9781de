"""Config Port - interface for configuration access."""

from typing import Protocol

from pydantic import BaseModel, ConfigDict

from pipeline_console.domain.entities.configuration import ConfigurationRecord


class ServerConfig(BaseModel):
    """Console API server configuration."""

    host: str = "0.0.0.0"
    port: int = 3000


class PipelineServiceConfig(BaseModel):
    """Remote pipeline service (parse/document/embed/ask endpoints)."""

    base_url: str = "http://localhost:8000"
    timeout: float | None = None  # None = wait as long as the service needs


class SecurityConfig(BaseModel):
    """Security settings."""

    rate_limit_requests_per_minute: int = 100
    cors_origins: list[str] = ["http://localhost:3000"]


class ConsoleDefaults(BaseModel):
    """Initial values of the configuration record, restored on reset."""

    repository_path: str = ""
    output_path: str = "parsed_repository.json"
    write_in_place: str = "false"
    model_identifier: str = "gpt-4-1106-preview"
    embedding_model_identifier: str = "text-embedding-ada-002"
    vector_store_url: str = ""
    vector_store_collection: str = "my_qdrant_collection"
    api_key: str = ""

    model_config = ConfigDict(extra="ignore")

    def to_record(self) -> ConfigurationRecord:
        return ConfigurationRecord(**self.model_dump())


class AppConfig(BaseModel):
    """Full application configuration."""

    server: ServerConfig = ServerConfig()
    pipeline: PipelineServiceConfig = PipelineServiceConfig()
    security: SecurityConfig = SecurityConfig()
    defaults: ConsoleDefaults = ConsoleDefaults()
    log_level: str = "INFO"
    # Log file: path relative to cwd or absolute. Empty = only stdout. Rotation when file exceeds max_mb.
    log_file: str = ""
    log_rotation_max_mb: int = 5
    log_rotation_backups: int = 3


class ConfigPort(Protocol):
    """Interface for configuration providers."""

    def get_config(self) -> AppConfig:
        """Get the full application configuration."""
        ...
