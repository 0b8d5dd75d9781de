"""TOML configuration loader with env overrides."""

import logging
import os
import tomllib
from pathlib import Path

from pipeline_console.domain.ports.config import (
    AppConfig,
    ConsoleDefaults,
    PipelineServiceConfig,
    SecurityConfig,
    ServerConfig,
)

logger = logging.getLogger(__name__)


def _load_toml(path: Path) -> dict:
    """Load TOML file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def _apply_env_overrides(config: dict) -> dict:
    """Apply environment variable overrides."""
    if url := os.getenv("PIPELINE_SERVICE_URL"):
        config.setdefault("pipeline", {})["base_url"] = url.strip()
    if timeout := os.getenv("PIPELINE_TIMEOUT"):
        try:
            config.setdefault("pipeline", {})["timeout"] = float(timeout)
        except ValueError:
            logger.warning("Invalid PIPELINE_TIMEOUT env value: %r, ignoring", timeout)
    if port := os.getenv("PORT"):
        try:
            config.setdefault("server", {})["port"] = int(port)
        except ValueError:
            logger.warning("Invalid PORT env value: %r, ignoring", port)
    if level := os.getenv("LOG_LEVEL"):
        config.setdefault("logging", {})["level"] = level.upper()
    if path := os.getenv("LOG_FILE"):
        config.setdefault("logging", {})["file"] = path.strip()
    if origins := os.getenv("CORS_ORIGINS"):
        config.setdefault("security", {})["cors_origins"] = [o.strip() for o in origins.split(",")]
    if rate := os.getenv("RATE_LIMIT_PER_MINUTE"):
        try:
            config.setdefault("security", {})["rate_limit_requests_per_minute"] = int(rate)
        except ValueError:
            logger.warning("Invalid RATE_LIMIT_PER_MINUTE env value: %r, ignoring", rate)
    return config


def default_config_dir() -> Path:
    return Path(__file__).resolve().parent.parent.parent.parent / "config"


def load_config(config_dir: Path | None = None) -> AppConfig:
    """Load configuration from TOML files with env overrides.

    Loads default.toml, then development.toml if exists.
    """
    if config_dir is None:
        config_dir = default_config_dir()

    config: dict = {}

    default_path = config_dir / "default.toml"
    if default_path.exists():
        config = _load_toml(default_path)

    dev_path = config_dir / "development.toml"
    if dev_path.exists():
        dev_config = _load_toml(dev_path)
        for key, value in dev_config.items():
            if isinstance(value, dict) and key in config and isinstance(config[key], dict):
                config[key] = {**config[key], **value}
            else:
                config[key] = value

    config = _apply_env_overrides(config)

    server = ServerConfig(**(config.get("server") or {}))
    pipeline = PipelineServiceConfig(**(config.get("pipeline") or {}))
    security = SecurityConfig(**(config.get("security") or {}))
    defaults = ConsoleDefaults(**(config.get("defaults") or {}))
    logging_raw = config.get("logging") or {}
    log_level = logging_raw.get("level", "INFO")
    log_file = (logging_raw.get("file") or "").strip()
    log_rotation_max_mb = int(logging_raw.get("log_rotation_max_mb", 5))
    log_rotation_backups = int(logging_raw.get("log_rotation_backups", 3))

    return AppConfig(
        server=server,
        pipeline=pipeline,
        security=security,
        defaults=defaults,
        log_level=log_level,
        log_file=log_file,
        log_rotation_max_mb=log_rotation_max_mb,
        log_rotation_backups=log_rotation_backups,
    )
