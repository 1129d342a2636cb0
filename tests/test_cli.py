"""Smoke tests for the CLI commands.

Uses typer.testing.CliRunner against SQLite file databases in a temporary
directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect
from typer.testing import CliRunner

from property_db.__main__ import app
from property_db.db import Base

runner = CliRunner()


@pytest.fixture
def cli_paths(tmp_path: Path) -> tuple[str, Path]:
    """A database URL and an empty migration directory."""
    migrations_dir = tmp_path / "migrations"
    migrations_dir.mkdir()
    return f"sqlite:///{tmp_path / 'cli.db'}", migrations_dir


def tables(url: str) -> set[str]:
    """Table names in the database at ``url``."""
    engine = create_engine(url)
    try:
        return set(inspect(engine).get_table_names())
    finally:
        engine.dispose()


class TestCliBasic:
    """Basic CLI tests."""

    def test_cli_help(self) -> None:
        """Test that --help lists every command."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("generate", "migrate", "status", "push", "seed"):
            assert command in result.output

    def test_cli_no_args_shows_help(self) -> None:
        """Test that running without args shows help."""
        result = runner.invoke(app, [])

        # Typer returns exit code 0 or 2 depending on version when no_args_is_help=True
        assert result.exit_code in (0, 2)
        assert "Usage:" in result.output

    def test_command_help(self) -> None:
        """Test that shared options are documented."""
        result = runner.invoke(app, ["migrate", "--help"])

        assert result.exit_code == 0
        assert "--config" in result.output
        assert "--database-url" in result.output
        assert "--migrations-dir" in result.output
        assert "--verbose" in result.output

    def test_invalid_configuration_exits_nonzero(self) -> None:
        """Test that a bad PROPERTY_ENV value fails before touching a database."""
        result = runner.invoke(app, ["status"], env={"PROPERTY_ENV": "staging"})

        assert result.exit_code == 1
        assert "Configuration error" in result.output


class TestMigrationCommands:
    """Tests for generate, migrate and status."""

    def test_generate_dry_run(self, cli_paths: tuple[str, Path]) -> None:
        """Test that a dry run prints DDL and writes nothing."""
        url, migrations_dir = cli_paths
        result = runner.invoke(
            app,
            [
                "generate",
                "--name",
                "init",
                "--dry-run",
                "--database-url",
                url,
                "--migrations-dir",
                str(migrations_dir),
            ],
        )

        assert result.exit_code == 0
        assert "CREATE TABLE property_listings" in result.output
        assert list(migrations_dir.iterdir()) == []

    def test_generate_migrate_status(self, cli_paths: tuple[str, Path]) -> None:
        """Test the full generate, migrate and status cycle."""
        url, migrations_dir = cli_paths
        common = ["--database-url", url, "--migrations-dir", str(migrations_dir)]

        generated = runner.invoke(app, ["generate", "--name", "initial schema", *common])
        assert generated.exit_code == 0
        assert (migrations_dir / "0000_initial_schema.sql").exists()

        migrated = runner.invoke(app, ["migrate", *common])
        assert migrated.exit_code == 0
        assert "Applied 0000_initial_schema.sql" in migrated.output
        assert set(Base.metadata.tables) <= tables(url)

        again = runner.invoke(app, ["migrate", *common])
        assert again.exit_code == 0
        assert "Nothing to apply" in again.output

        status = runner.invoke(app, ["status", *common])
        assert status.exit_code == 0
        assert "[applied] 0000_initial_schema.sql" in status.output
        assert "1 applied, 0 pending" in status.output

        up_to_date = runner.invoke(app, ["generate", "--name", "noop", *common])
        assert up_to_date.exit_code == 0
        assert "up to date" in up_to_date.output

    def test_migrate_failure_exits_nonzero(self, cli_paths: tuple[str, Path]) -> None:
        """Test that a failing migration exits with status 1."""
        url, migrations_dir = cli_paths
        (migrations_dir / "0000_broken.sql").write_text("CREATE TABLE broken (;\n")

        result = runner.invoke(
            app, ["migrate", "--database-url", url, "--migrations-dir", str(migrations_dir)]
        )

        assert result.exit_code == 1
        assert "0000_broken.sql" in result.output

    def test_migrate_checksum_mismatch_exits_nonzero(
        self, cli_paths: tuple[str, Path]
    ) -> None:
        """Test that an edited migration halts the run."""
        url, migrations_dir = cli_paths
        path = migrations_dir / "0000_a.sql"
        path.write_text("CREATE TABLE a (id INTEGER);\n")
        common = ["--database-url", url, "--migrations-dir", str(migrations_dir)]
        assert runner.invoke(app, ["migrate", *common]).exit_code == 0

        path.write_text("CREATE TABLE a (id INTEGER, name TEXT);\n")
        result = runner.invoke(app, ["migrate", *common])

        assert result.exit_code == 1
        assert "Checksum mismatch" in result.output

    def test_migrations_dir_from_environment(self, cli_paths: tuple[str, Path]) -> None:
        """Test that PROPERTY_MIGRATIONS_DIR is honoured."""
        url, migrations_dir = cli_paths
        (migrations_dir / "0000_a.sql").write_text("CREATE TABLE a (id INTEGER);\n")

        result = runner.invoke(
            app,
            ["migrate"],
            env={"PROPERTY_DATABASE_URL": url, "PROPERTY_MIGRATIONS_DIR": str(migrations_dir)},
        )

        assert result.exit_code == 0
        assert "a" in tables(url)


class TestPushCommand:
    """Tests for the schema push command."""

    def test_push_refused_in_production(self, cli_paths: tuple[str, Path]) -> None:
        """Test that push never runs in production."""
        url, _ = cli_paths

        result = runner.invoke(
            app, ["push", "--yes", "--database-url", url], env={"PROPERTY_ENV": "production"}
        )

        assert result.exit_code == 1
        assert tables(url) == set()

    def test_push_with_yes(self, cli_paths: tuple[str, Path]) -> None:
        """Test pushing the schema without a prompt."""
        url, _ = cli_paths

        result = runner.invoke(app, ["push", "--yes", "--database-url", url])

        assert result.exit_code == 0
        assert "Schema push completed" in result.output
        assert set(Base.metadata.tables) <= tables(url)
        assert "schema_migrations" not in tables(url)

    def test_push_declined(self, cli_paths: tuple[str, Path]) -> None:
        """Test that answering no to the prompt changes nothing."""
        url, _ = cli_paths

        result = runner.invoke(app, ["push", "--database-url", url], input="n\n")

        assert result.exit_code == 1
        assert tables(url) == set()

    def test_push_dry_run(self, cli_paths: tuple[str, Path]) -> None:
        """Test that a dry run only prints statements."""
        url, _ = cli_paths

        result = runner.invoke(app, ["push", "--dry-run", "--database-url", url])

        assert result.exit_code == 0
        assert "CREATE TABLE stores" in result.output
        assert tables(url) == set()


class TestSeedCommand:
    """Tests for the seed command."""

    def test_seed(self, cli_paths: tuple[str, Path]) -> None:
        """Test seeding a migrated database."""
        url, _ = cli_paths
        assert runner.invoke(app, ["push", "--yes", "--database-url", url]).exit_code == 0

        result = runner.invoke(app, ["seed", "--database-url", url])

        assert result.exit_code == 0
        assert "Seed completed" in result.output
        assert "property_costs: 3" in result.output

    def test_seed_without_schema_exits_nonzero(self, cli_paths: tuple[str, Path]) -> None:
        """Test that seeding an empty database fails cleanly."""
        url, _ = cli_paths

        result = runner.invoke(app, ["seed", "--database-url", url])

        assert result.exit_code == 1
        assert "Seed failed" in result.output
