"""Translation of SQLAlchemy/driver errors into the property_db taxonomy."""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
    SQLAlchemyError,
)

from property_db.exceptions import (
    ConnectivityError,
    ConstraintViolationError,
    DatabaseError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

# SQLSTATE class 23 codes (PostgreSQL)
_PG_INTEGRITY_KINDS: dict[str, str] = {
    "23505": "unique",
    "23503": "foreign_key",
    "23502": "not_null",
    "23514": "check",
}

# e.g. "UNIQUE constraint failed: property_campaigns.code, property_campaigns.listing_id"
_SQLITE_CONSTRAINT_RE = re.compile(
    r"(UNIQUE|NOT NULL|CHECK|FOREIGN KEY) constraint failed(?::\s*(?P<target>.+))?",
    re.IGNORECASE,
)

_SQLITE_KINDS: dict[str, str] = {
    "UNIQUE": "unique",
    "NOT NULL": "not_null",
    "CHECK": "check",
    "FOREIGN KEY": "foreign_key",
}

_CONNECTIVITY_MARKERS = (
    "could not connect",
    "connection refused",
    "connection to server",
    "server closed the connection",
    "password authentication failed",
    "could not translate host name",
    "timeout expired",
    "unable to open database file",
)


def describe_integrity_error(exc: IntegrityError) -> tuple[str | None, str | None]:
    """Extract the constraint kind and name from an integrity error.

    Args:
        exc: The SQLAlchemy integrity error.

    Returns:
        Tuple of (kind, constraint). Either may be None if the driver
        does not report it.
    """
    orig = exc.orig
    pgcode = getattr(orig, "pgcode", None)
    if pgcode is not None:
        diag = getattr(orig, "diag", None)
        constraint = getattr(diag, "constraint_name", None) if diag else None
        return _PG_INTEGRITY_KINDS.get(pgcode), constraint

    match = _SQLITE_CONSTRAINT_RE.search(str(orig))
    if match:
        kind = _SQLITE_KINDS[match.group(1).upper()]
        target = match.group("target")
        return kind, target.strip() if target else None

    return None, None


def is_connectivity_error(exc: DBAPIError) -> bool:
    """Return True if a DBAPI error means the store could not be reached."""
    if isinstance(exc, InterfaceError) or exc.connection_invalidated:
        return True
    if not isinstance(exc, OperationalError):
        return False
    message = str(exc.orig).lower()
    return any(marker in message for marker in _CONNECTIVITY_MARKERS)


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise SQLAlchemy errors as property_db exceptions.

    The original exception is chained as ``__cause__``.

    Raises:
        ConstraintViolationError: On foreign-key, unique, not-null or check
            violations.
        ConnectivityError: When the store is unreachable.
        DatabaseError: For any other SQLAlchemy error.
    """
    try:
        yield
    except IntegrityError as e:
        kind, constraint = describe_integrity_error(e)
        msg = f"Constraint violation ({kind or 'unknown'}): {e.orig}"
        raise ConstraintViolationError(msg, kind=kind, constraint=constraint) from e
    except DBAPIError as e:
        if is_connectivity_error(e):
            msg = f"Database unreachable: {e.orig}"
            raise ConnectivityError(msg) from e
        raise DatabaseError(f"Database error: {e.orig}") from e
    except SQLAlchemyError as e:
        raise DatabaseError(f"Database error: {e}") from e
