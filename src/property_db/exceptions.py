"""Exceptions raised by the property database layer.

Exception Hierarchy:
    PropertyDbError (base)
    ├── ConfigurationError
    ├── DatabaseError
    │   ├── ConnectivityError
    │   ├── ConstraintViolationError
    │   └── RecordNotFoundError
    └── MigrationError
        ├── MigrationChecksumError
        └── MigrationOrderError
"""

from __future__ import annotations


class PropertyDbError(Exception):
    """Base exception for all property database errors."""

    def __init__(self, message: str, *args: object) -> None:
        self.message = message
        super().__init__(message, *args)


class ConfigurationError(PropertyDbError):
    """Raised when the configuration is invalid or forbids an operation."""


# Database errors
class DatabaseError(PropertyDbError):
    """Base exception for errors raised by the backing store."""


class ConnectivityError(DatabaseError):
    """Raised when the store is unreachable or rejects the credentials."""


class ConstraintViolationError(DatabaseError):
    """Raised when a foreign-key, unique, not-null or check constraint fails.

    Attributes:
        kind: One of "unique", "foreign_key", "not_null", "check", or None
            when the driver did not say.
        constraint: Constraint name (PostgreSQL) or the offending columns
            (SQLite), if known.
    """

    def __init__(
        self,
        message: str,
        kind: str | None = None,
        constraint: str | None = None,
    ) -> None:
        self.kind = kind
        self.constraint = constraint
        super().__init__(message)


class RecordNotFoundError(DatabaseError):
    """Raised when a mutation targets a row that does not exist."""

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key!r}")


# Migration errors
class MigrationError(PropertyDbError):
    """Raised when a migration cannot be applied.

    Attributes:
        migration: Name of the migration file involved, if any.
    """

    def __init__(self, message: str, migration: str | None = None) -> None:
        self.migration = migration
        super().__init__(message)


class MigrationChecksumError(MigrationError):
    """Raised when an applied migration file was edited afterwards."""

    def __init__(self, migration: str, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum mismatch for applied migration {migration}: "
            f"ledger has {expected[:12]}, file has {actual[:12]}",
            migration=migration,
        )


class MigrationOrderError(MigrationError):
    """Raised when migration history and the migration directory disagree."""
