"""CLI entry point for the property database tools."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from property_db.config.settings import AppConfig, load_config
from property_db.db import Database
from property_db.exceptions import PropertyDbError
from property_db.migrations import (
    apply_migrations,
    generate_migration,
    migration_status,
    push_schema,
    write_migration,
)
from property_db.seed import seed_database, table_counts
from property_db.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="property-db",
    help="Manage the property listings database: migrations, schema push and seed data.",
    no_args_is_help=True,
)

logger = get_logger(__name__)


# Common CLI options
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to YAML configuration file.",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
]

DatabaseUrlOption = Annotated[
    str | None,
    typer.Option(
        "--database-url",
        help="Database connection URL (overrides PROPERTY_DATABASE_URL).",
    ),
]

MigrationsDirOption = Annotated[
    Path | None,
    typer.Option(
        "--migrations-dir",
        help="Directory holding NNNN_label.sql migration files.",
        file_okay=False,
    ),
]

DryRunOption = Annotated[
    bool,
    typer.Option(
        "--dry-run",
        help="Print the statements without changing anything.",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Enable verbose logging, including SQL statements.",
    ),
]


def _load(
    config: Path | None,
    database_url: str | None,
    migrations_dir: Path | None,
    verbose: bool,
) -> AppConfig:
    """Load configuration with CLI overrides and configure logging.

    Args:
        config: Optional YAML configuration file.
        database_url: Connection URL override.
        migrations_dir: Migration directory override.
        verbose: Whether to log at DEBUG level with SQL echo.

    Returns:
        The validated application config.
    """
    overrides: dict[str, object] = {
        "database_url": database_url,
        "migrations_dir": migrations_dir,
    }
    if verbose:
        overrides["log_level"] = "DEBUG"

    try:
        app_config = load_config(config_path=config, cli_overrides=overrides)
    except PropertyDbError as e:
        setup_logging()
        logger.error("Configuration error: %s", e)
        raise typer.Exit(code=1) from e

    setup_logging(level=app_config.log_level, sql_echo=verbose)
    return app_config


@app.command()
def generate(
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Label for the new migration file."),
    ],
    config: ConfigOption = None,
    database_url: DatabaseUrlOption = None,
    migrations_dir: MigrationsDirOption = None,
    dry_run: DryRunOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Diff the live database against the models and write the next migration.

    Only additive changes are generated. Review the file before applying it.
    """
    app_config = _load(config, database_url, migrations_dir, verbose)
    database = Database.from_config(app_config.database)
    logger.info("Inspecting schema at %s", database.display_url)

    try:
        statements = generate_migration(database.get_engine())
        if not statements:
            typer.echo("Schema is up to date; nothing to generate.")
            return

        if dry_run:
            logger.info("[DRY RUN] %d statement(s) would be written", len(statements))
            for statement in statements:
                typer.echo(f"{statement};\n")
            return

        path = write_migration(app_config.migrations.directory, statements, name)
        typer.echo(f"Wrote {path} ({len(statements)} statement(s))")
    except PropertyDbError as e:
        logger.error("Migration generation failed: %s", e)
        raise typer.Exit(code=1) from e
    finally:
        database.close()


@app.command()
def migrate(
    config: ConfigOption = None,
    database_url: DatabaseUrlOption = None,
    migrations_dir: MigrationsDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Apply pending migrations in order.

    Exits with status 1 if any migration fails; later migrations are not
    attempted.
    """
    app_config = _load(config, database_url, migrations_dir, verbose)
    database = Database.from_config(app_config.database)
    logger.info("Running migrations against %s", database.display_url)

    try:
        report = apply_migrations(database.get_engine(), app_config.migrations.directory)
    except PropertyDbError as e:
        logger.error("Migration failed: %s", e)
        raise typer.Exit(code=1) from e
    finally:
        database.close()

    if report.is_noop:
        typer.echo(f"Nothing to apply ({len(report.skipped)} already applied).")
    else:
        for migration in report.applied:
            typer.echo(f"Applied {migration}")
        typer.echo(f"Migrations completed: {len(report.applied)} applied.")


@app.command()
def status(
    config: ConfigOption = None,
    database_url: DatabaseUrlOption = None,
    migrations_dir: MigrationsDirOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List applied and pending migrations."""
    app_config = _load(config, database_url, migrations_dir, verbose)
    database = Database.from_config(app_config.database)

    try:
        result = migration_status(database.get_engine(), app_config.migrations.directory)
    except PropertyDbError as e:
        logger.error("Could not read migration status: %s", e)
        raise typer.Exit(code=1) from e
    finally:
        database.close()

    for migration in result.applied:
        typer.echo(f"[applied] {migration}")
    for migration in result.pending:
        typer.echo(f"[pending] {migration}")
    typer.echo(f"{len(result.applied)} applied, {len(result.pending)} pending")


@app.command()
def push(
    config: ConfigOption = None,
    database_url: DatabaseUrlOption = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
    dry_run: DryRunOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Sync the database schema to the models without migration history.

    Undeclared columns are dropped with their data. Refused when the
    environment is production.
    """
    app_config = _load(config, database_url, None, verbose)
    if app_config.is_production:
        logger.error("Schema push is disabled in production; use 'migrate' instead.")
        raise typer.Exit(code=1)

    database = Database.from_config(app_config.database)
    try:
        if dry_run:
            statements = generate_migration(database.get_engine(), destructive=True)
            logger.info("[DRY RUN] %d statement(s) would be executed", len(statements))
            for statement in statements:
                typer.echo(f"{statement};\n")
            return

        if not yes:
            typer.confirm(
                f"Push schema to {database.display_url}? Undeclared columns "
                "will be dropped",
                abort=True,
            )

        statements = push_schema(database.get_engine())
        typer.echo(f"Schema push completed: {len(statements)} statement(s) executed.")
    except PropertyDbError as e:
        logger.error("Schema push failed: %s", e)
        raise typer.Exit(code=1) from e
    finally:
        database.close()


@app.command()
def seed(
    config: ConfigOption = None,
    database_url: DatabaseUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Insert the sample data set and print a summary of table sizes."""
    app_config = _load(config, database_url, None, verbose)
    database = Database.from_config(app_config.database)
    logger.info("Seeding %s", database.display_url)

    try:
        with database.session() as session:
            result = seed_database(session)
        with database.session() as session:
            counts = table_counts(session)
    except PropertyDbError as e:
        logger.error("Seed failed: %s", e)
        raise typer.Exit(code=1) from e
    finally:
        database.close()

    typer.echo(
        f"Seed completed: store {result.store_id}, building {result.building_id}, "
        f"{len(result.room_ids)} room(s), {len(result.listing_ids)} listing(s)"
    )
    for table, count in counts.items():
        typer.echo(f"   {table}: {count}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
