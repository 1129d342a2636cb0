"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from property_db.config import AppConfig, load_config
from property_db.exceptions import ConfigurationError


class TestLoadConfig:
    """Tests for load_config precedence and validation."""

    def test_defaults(self) -> None:
        """Test configuration without file, environment or overrides."""
        config = load_config()

        assert config.environment == "development"
        assert config.log_level == "INFO"
        assert config.database.url is None
        assert config.database.pool_size == 5
        assert config.migrations.directory == Path("migrations")
        assert config.is_production is False

    def test_yaml_file(self, tmp_path: Path) -> None:
        """Test loading values from a YAML file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "environment: test\n"
            "database:\n"
            "  url: sqlite:///from-yaml.db\n"
            "  pool_size: 2\n"
            "migrations:\n"
            "  directory: db/migrations\n"
        )

        config = load_config(config_path=config_file)

        assert config.environment == "test"
        assert config.database.url == "sqlite:///from-yaml.db"
        assert config.database.pool_size == 2
        assert config.migrations.directory == Path("db/migrations")

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        """Test that an empty YAML file yields defaults."""
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")

        assert load_config(config_path=config_file) == AppConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing config file is reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_path=tmp_path / "missing.yaml")

        assert "missing.yaml" in str(exc_info.value)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        """Test that unparsable YAML is a configuration error."""
        config_file = tmp_path / "broken.yaml"
        config_file.write_text("database: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_config(config_path=config_file)

        assert isinstance(exc_info.value.__cause__, yaml.YAMLError)

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        """Test that a top-level YAML list is rejected."""
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- sqlite:///a.db\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(config_path=config_file)

    def test_environment_overrides_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that PROPERTY_* variables beat the YAML file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("database:\n  url: sqlite:///from-yaml.db\n")
        monkeypatch.setenv("PROPERTY_DATABASE_URL", "sqlite:///from-env.db")
        monkeypatch.setenv("PROPERTY_MIGRATIONS_DIR", "env-migrations")
        monkeypatch.setenv("PROPERTY_ENV", "production")
        monkeypatch.setenv("PROPERTY_LOG_LEVEL", "warning")

        config = load_config(config_path=config_file)

        assert config.database.url == "sqlite:///from-env.db"
        assert config.migrations.directory == Path("env-migrations")
        assert config.environment == "production"
        assert config.log_level == "WARNING"
        assert config.is_production is True

    def test_cli_overrides_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that CLI overrides beat environment variables."""
        monkeypatch.setenv("PROPERTY_DATABASE_URL", "sqlite:///from-env.db")

        config = load_config(
            cli_overrides={
                "database_url": "sqlite:///from-cli.db",
                "migrations_dir": Path("cli-migrations"),
                "echo": True,
                "log_level": "DEBUG",
            }
        )

        assert config.database.url == "sqlite:///from-cli.db"
        assert config.database.echo is True
        assert config.migrations.directory == Path("cli-migrations")
        assert config.log_level == "DEBUG"

    def test_none_overrides_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that unset CLI options do not clear other sources."""
        monkeypatch.setenv("PROPERTY_DATABASE_URL", "sqlite:///from-env.db")

        config = load_config(cli_overrides={"database_url": None})

        assert config.database.url == "sqlite:///from-env.db"

    def test_invalid_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that an unknown environment name is rejected."""
        monkeypatch.setenv("PROPERTY_ENV", "staging")

        with pytest.raises(ConfigurationError):
            load_config()

    def test_invalid_pool_size(self) -> None:
        """Test that pool_size must be positive."""
        with pytest.raises(ConfigurationError):
            load_config(cli_overrides={"pool_size": 0})
