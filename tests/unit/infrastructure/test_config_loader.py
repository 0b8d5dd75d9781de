"""Tests for TOML config loader."""

import tempfile
from pathlib import Path

from pipeline_console.infrastructure.config.toml_loader import _apply_env_overrides, load_config


class TestLoadConfig:
    """Tests for load_config function."""

    def test_loads_default_config(self):
        """Loads the shipped default.toml."""
        config = load_config()

        assert config.pipeline.base_url == "http://localhost:8000"
        assert config.pipeline.timeout is None
        assert config.server.port == 3000
        assert config.defaults.output_path == "parsed_repository.json"
        assert config.defaults.write_in_place == "false"
        assert config.defaults.vector_store_collection == "my_qdrant_collection"

    def test_loads_from_custom_dir(self):
        """Loads config from custom directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[pipeline]
base_url = "http://rusty-docs:9000"
timeout = 30.5

[defaults]
repository_path = "/repos/rusty"
unknown_field = "ignored"
""")
            config = load_config(Path(tmpdir))

            assert config.pipeline.base_url == "http://rusty-docs:9000"
            assert config.pipeline.timeout == 30.5
            record = config.defaults.to_record()
            assert record.repository_path == "/repos/rusty"
            assert record.model_identifier == "gpt-4-1106-preview"

    def test_merges_development_config(self):
        """Merges development.toml over default.toml."""
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[server]
host = "127.0.0.1"
port = 3000
""")
            (Path(tmpdir) / "development.toml").write_text("""
[server]
port = 4000
""")
            config = load_config(Path(tmpdir))

            assert config.server.port == 4000
            assert config.server.host == "127.0.0.1"

    def test_handles_missing_files(self):
        """Empty directory yields defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config = load_config(Path(tmpdir))

            assert config.pipeline.base_url == "http://localhost:8000"
            assert config.log_level == "INFO"

    def test_logging_section(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "default.toml").write_text("""
[logging]
level = "DEBUG"
file = " logs/console.log "
log_rotation_backups = 7
""")
            config = load_config(Path(tmpdir))

            assert config.log_level == "DEBUG"
            assert config.log_file == "logs/console.log"
            assert config.log_rotation_backups == 7
            assert config.log_rotation_max_mb == 5


class TestApplyEnvOverrides:
    """Tests for _apply_env_overrides function."""

    def test_pipeline_url_override(self, monkeypatch):
        monkeypatch.setenv("PIPELINE_SERVICE_URL", " http://remote:8000 ")
        result = _apply_env_overrides({})
        assert result["pipeline"]["base_url"] == "http://remote:8000"

    def test_timeout_override(self, monkeypatch):
        monkeypatch.setenv("PIPELINE_TIMEOUT", "12")
        result = _apply_env_overrides({})
        assert result["pipeline"]["timeout"] == 12.0

    def test_invalid_timeout_ignored(self, monkeypatch):
        monkeypatch.setenv("PIPELINE_TIMEOUT", "soon")
        result = _apply_env_overrides({"pipeline": {"timeout": 5.0}})
        assert result["pipeline"]["timeout"] == 5.0

    def test_port_override(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        result = _apply_env_overrides({})
        assert result["server"]["port"] == 9000

    def test_invalid_port_ignored(self, monkeypatch):
        monkeypatch.setenv("PORT", "not_a_number")
        result = _apply_env_overrides({"server": {"port": 3000}})
        assert result["server"]["port"] == 3000

    def test_log_level_override(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        result = _apply_env_overrides({})
        assert result["logging"]["level"] == "DEBUG"

    def test_cors_origins_override(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "http://a.com, http://b.com")
        result = _apply_env_overrides({})
        assert result["security"]["cors_origins"] == ["http://a.com", "http://b.com"]

    def test_rate_limit_override(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_PER_MINUTE", "10")
        result = _apply_env_overrides({})
        assert result["security"]["rate_limit_requests_per_minute"] == 10
