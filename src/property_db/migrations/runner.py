"""Forward-only migration files and the checksum ledger.

Migrations live in a directory as ``NNNN_label.sql`` files applied in name
order. Each applied file is recorded in the ``schema_migrations`` table with
the SHA-256 digest of its bytes, so re-running is a no-op and an edited file
is detected instead of silently skipped.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import (
    CHAR,
    Column,
    DateTime,
    MetaData,
    String,
    Table,
    func,
    inspect,
    select,
)
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from property_db.db.base import schema_transaction
from property_db.db.errors import translate_errors
from property_db.exceptions import (
    ConstraintViolationError,
    MigrationChecksumError,
    MigrationError,
    MigrationOrderError,
)
from property_db.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy import Connection, Engine

logger = get_logger(__name__)

MIGRATION_FILE_RE = re.compile(r"^(?P<number>\d{4})_(?P<label>[a-z0-9_]+)\.sql$")

# Kept out of Base.metadata so schema diffs never touch the ledger
ledger_metadata = MetaData()

schema_migrations = Table(
    "schema_migrations",
    ledger_metadata,
    Column("name", String(255), primary_key=True),
    Column("checksum", CHAR(64), nullable=False),
    Column("applied_at", DateTime, nullable=False, server_default=func.now()),
)


# Dollar-quoted PostgreSQL bodies: $$ ... $$ or $tag$ ... $tag$
_DOLLAR_QUOTE_RE = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")


def split_statements(sql: str) -> list[str]:
    """Split migration file content into statements.

    A statement ends at a ``;`` outside quotes and comments. ``--`` comments
    run to the end of the line and are dropped, including ones that follow a
    statement on the same line. Single-quoted literals, double-quoted
    identifiers and dollar-quoted bodies are copied verbatim. A final
    statement without a terminator is still returned.

    Args:
        sql: Raw file content.

    Returns:
        Statements without their trailing semicolons.
    """
    statements: list[str] = []
    current: list[str] = []
    position = 0
    length = len(sql)

    def finish() -> None:
        statement = "".join(current).strip()
        if statement:
            statements.append(statement)
        current.clear()

    while position < length:
        char = sql[position]

        if sql.startswith("--", position):
            end = sql.find("\n", position)
            position = length if end == -1 else end
            continue

        if char in ("'", '"'):
            # A doubled quote inside a literal reads as two adjacent literals
            end = sql.find(char, position + 1)
            end = length if end == -1 else end + 1
            current.append(sql[position:end])
            position = end
            continue

        if char == "$":
            match = _DOLLAR_QUOTE_RE.match(sql, position)
            if match:
                tag = match.group()
                end = sql.find(tag, match.end())
                end = length if end == -1 else end + len(tag)
                current.append(sql[position:end])
                position = end
                continue

        if char == ";":
            finish()
        else:
            current.append(char)
        position += 1

    finish()
    return statements


@dataclass(frozen=True)
class MigrationFile:
    """A migration file on disk.

    Attributes:
        number: Sequence number parsed from the file name.
        label: Descriptive part of the file name.
        path: Location of the file.
    """

    number: int
    label: str
    path: Path

    @property
    def name(self) -> str:
        """File name, which is also the ledger key."""
        return self.path.name

    @property
    def checksum(self) -> str:
        """SHA-256 hex digest of the file's bytes."""
        return hashlib.sha256(self.path.read_bytes()).hexdigest()

    def statements(self) -> list[str]:
        """Read and split the file into executable statements."""
        return split_statements(self.path.read_text(encoding="utf-8"))


@dataclass
class MigrationReport:
    """Outcome of an ``apply_migrations`` run.

    Attributes:
        applied: Names of the files applied by this run, in order.
        skipped: Names of files that were already applied.
    """

    applied: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        """Whether the run changed nothing."""
        return not self.applied


@dataclass
class MigrationStatus:
    """Applied and pending migrations for one database."""

    applied: list[str] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)


def discover_migrations(directory: Path) -> list[MigrationFile]:
    """List the migration files in a directory, in application order.

    Args:
        directory: Directory holding ``NNNN_label.sql`` files.

    Returns:
        Migration files sorted by name.

    Raises:
        MigrationError: If the directory is missing, a ``.sql`` file name is
            malformed, or two files share a sequence number.
    """
    if not directory.is_dir():
        msg = f"Migration directory not found: {directory}"
        raise MigrationError(msg)

    migrations: list[MigrationFile] = []
    seen: dict[int, str] = {}

    for path in sorted(directory.glob("*.sql")):
        match = MIGRATION_FILE_RE.match(path.name)
        if match is None:
            msg = f"Malformed migration file name (expected NNNN_label.sql): {path.name}"
            raise MigrationError(msg, migration=path.name)

        number = int(match.group("number"))
        if number in seen:
            msg = f"Duplicate migration number {number:04d}: {seen[number]}, {path.name}"
            raise MigrationError(msg, migration=path.name)
        seen[number] = path.name

        migrations.append(
            MigrationFile(number=number, label=match.group("label"), path=path)
        )

    return migrations


def normalize_label(label: str) -> str:
    """Turn a free-form description into a file-name label."""
    normalized = re.sub(r"[^a-z0-9]+", "_", label.lower()).strip("_")
    if not normalized:
        msg = f"Migration label has no usable characters: {label!r}"
        raise MigrationError(msg)
    return normalized


def write_migration(
    directory: Path,
    statements: Sequence[str],
    label: str,
) -> Path | None:
    """Write statements as the next numbered migration file.

    Args:
        directory: Migration directory. Created if missing.
        statements: DDL statements, typically from ``generate_migration``.
        label: Description used in the file name.

    Returns:
        Path of the new file, or None when there is nothing to write.
    """
    if not statements:
        return None

    label = normalize_label(label)
    directory.mkdir(parents=True, exist_ok=True)
    existing = discover_migrations(directory)
    number = existing[-1].number + 1 if existing else 0

    path = directory / f"{number:04d}_{label}.sql"
    body = "\n\n".join(f"{statement.strip()};" for statement in statements)
    path.write_text(f"-- {path.name}\n\n{body}\n", encoding="utf-8")

    logger.info("Wrote migration %s (%d statement(s))", path, len(statements))
    return path


def _ensure_ledger(connection: Connection) -> None:
    ledger_metadata.create_all(connection, checkfirst=True)


def _read_ledger(connection: Connection) -> dict[str, str]:
    rows = connection.execute(
        select(schema_migrations.c.name, schema_migrations.c.checksum).order_by(
            schema_migrations.c.name
        )
    )
    return {row.name: row.checksum.strip() for row in rows}


def _pending(
    migrations: list[MigrationFile],
    ledger: dict[str, str],
) -> list[MigrationFile]:
    """Validate history against the directory and return the files to apply.

    Raises:
        MigrationOrderError: If an applied migration is missing on disk, or a
            pending file sorts before the last applied one.
        MigrationChecksumError: If an applied file was edited afterwards.
    """
    on_disk = {migration.name: migration for migration in migrations}

    for name in ledger:
        if name not in on_disk:
            msg = f"Applied migration {name} is missing from the migration directory"
            raise MigrationOrderError(msg, migration=name)

    for migration in migrations:
        expected = ledger.get(migration.name)
        if expected is not None and expected != migration.checksum:
            raise MigrationChecksumError(migration.name, expected, migration.checksum)

    pending = [m for m in migrations if m.name not in ledger]
    if ledger and pending:
        last_applied = max(ledger)
        for migration in pending:
            if migration.name < last_applied:
                msg = (
                    f"Migration {migration.name} sorts before already applied "
                    f"{last_applied}"
                )
                raise MigrationOrderError(msg, migration=migration.name)

    return pending


def migration_status(engine: Engine, directory: Path) -> MigrationStatus:
    """Report which migrations are applied and which are pending.

    Read-only: a database that has never been migrated reports every file
    as pending and is left without a ledger table.

    Args:
        engine: Target engine.
        directory: Migration directory.

    Returns:
        The applied and pending migration names.
    """
    migrations = discover_migrations(directory)
    with translate_errors(), engine.connect() as connection:
        if inspect(connection).has_table(schema_migrations.name):
            ledger = _read_ledger(connection)
        else:
            ledger = {}

    pending = _pending(migrations, ledger)
    return MigrationStatus(
        applied=list(ledger),
        pending=[migration.name for migration in pending],
    )


def apply_migrations(engine: Engine, directory: Path) -> MigrationReport:
    """Apply pending migrations in name order.

    Each file runs in its own transaction together with its ledger row. The
    first failure rolls that file back and stops the run; later files are
    not attempted.

    Args:
        engine: Target engine.
        directory: Migration directory.

    Returns:
        A report of applied and skipped files.

    Raises:
        MigrationError: If a migration fails to apply.
        MigrationChecksumError: If an applied file was edited afterwards.
        MigrationOrderError: If history and the directory disagree.
    """
    migrations = discover_migrations(directory)
    with translate_errors(), engine.begin() as connection:
        _ensure_ledger(connection)
        ledger = _read_ledger(connection)

    pending = _pending(migrations, ledger)
    report = MigrationReport(skipped=[m.name for m in migrations if m.name in ledger])

    if not pending:
        logger.info("No pending migrations (%d already applied)", len(report.skipped))
        return report

    for migration in pending:
        logger.info("Applying migration %s", migration.name)
        checksum = migration.checksum
        try:
            with schema_transaction(engine) as connection:
                for statement in migration.statements():
                    connection.exec_driver_sql(statement)
                connection.execute(
                    schema_migrations.insert().values(
                        name=migration.name, checksum=checksum
                    )
                )
        except SQLAlchemyError as e:
            reason = e.orig if isinstance(e, DBAPIError) else e
            msg = f"Migration {migration.name} failed: {reason}"
            raise MigrationError(msg, migration=migration.name) from e
        except ConstraintViolationError as e:
            msg = f"Migration {migration.name} failed: {e}"
            raise MigrationError(msg, migration=migration.name) from e
        report.applied.append(migration.name)

    logger.info("Applied %d migration(s)", len(report.applied))
    return report
