"""Schema migrations for the property database.

Public API:
    - generate_migration: Diff the live schema against the declared models
    - push_schema: Apply the destructive diff without migration history
    - write_migration: Write statements as the next numbered migration file
    - discover_migrations: List migration files in application order
    - apply_migrations: Apply pending migrations and record them in the ledger
    - migration_status: Report applied and pending migrations
"""

from __future__ import annotations

from property_db.migrations.diff import generate_migration, push_schema
from property_db.migrations.runner import (
    MigrationFile,
    MigrationReport,
    MigrationStatus,
    apply_migrations,
    discover_migrations,
    migration_status,
    schema_migrations,
    split_statements,
    write_migration,
)

__all__ = [
    "MigrationFile",
    "MigrationReport",
    "MigrationStatus",
    "apply_migrations",
    "discover_migrations",
    "generate_migration",
    "migration_status",
    "push_schema",
    "schema_migrations",
    "split_statements",
    "write_migration",
]
