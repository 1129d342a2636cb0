"""Schema diffing: compare the live database with the declared models.

``generate_migration`` runs Alembic's autogenerate comparison against the
live schema and renders the resulting operations as SQL for the connection's
dialect, the same way ``alembic upgrade --sql`` would. ``push_schema``
applies that diff directly.

SQLite cannot alter columns or constraints in place. Tables needing such
changes are rebuilt with Alembic's batch mode (create a copy with the new
shape, move the rows, drop the original, rename the copy); run the output
through ``schema_transaction`` so the drop does not cascade.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any

from alembic.autogenerate import produce_migrations
from alembic.operations import Operations
from alembic.operations.ops import (
    AddColumnOp,
    CreateIndexOp,
    DropColumnOp,
    DropIndexOp,
    ModifyTableOps,
)
from alembic.runtime.migration import MigrationContext
from alembic.util import CommandError
from sqlalchemy import Engine, MetaData, Table

from property_db.db.base import Base, schema_transaction
from property_db.db.errors import translate_errors
from property_db.exceptions import MigrationError
from property_db.migrations.runner import split_statements
from property_db.utils.logging import get_logger

if TYPE_CHECKING:
    from alembic.operations.ops import MigrateOperation, UpgradeOps
    from sqlalchemy import Connection

logger = get_logger(__name__)

# Operations SQLite runs with a plain ALTER TABLE / CREATE INDEX
_SQLITE_IN_PLACE_OPS = (AddColumnOp, DropColumnOp, CreateIndexOp, DropIndexOp)


def _include_object(destructive: bool) -> Any:
    """Build the autogenerate filter deciding which differences count.

    Tables the models do not declare (the migration ledger included) are
    never touched. Undeclared columns, indexes and unique constraints are
    dropped only when ``destructive`` is set. Undeclared foreign keys are
    always dropped, since a changed ``ON DELETE`` rule shows up as a drop
    plus an add of the same key.
    """

    def include_object(
        obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any
    ) -> bool:
        if not reflected or compare_to is not None:
            return True
        if type_ == "table":
            return False
        if type_ == "foreign_key_constraint":
            return True
        return destructive

    return include_object


def _diff(
    connection: Connection, metadata: MetaData, *, destructive: bool
) -> UpgradeOps:
    context = MigrationContext.configure(
        connection,
        opts={
            "compare_type": True,
            "include_object": _include_object(destructive),
        },
    )
    return produce_migrations(context, metadata).upgrade_ops


def _needs_rebuild(table_ops: ModifyTableOps) -> bool:
    """Whether SQLite has to recreate the table to apply these operations."""
    for op in table_ops.ops:
        if not isinstance(op, _SQLITE_IN_PLACE_OPS):
            return True
        if isinstance(op, AddColumnOp) and op.column.foreign_keys:
            return True
    return False


def _render(connection: Connection, upgrade_ops: UpgradeOps) -> list[str]:
    """Render autogenerate operations as SQL statements for the bind's dialect."""
    buffer = io.StringIO()
    dialect_name = connection.dialect.name
    render_context = MigrationContext.configure(
        dialect_name=dialect_name,
        opts={"as_sql": True, "output_buffer": buffer},
    )
    operations = Operations(render_context)

    def emit(op: MigrateOperation) -> None:
        if not isinstance(op, ModifyTableOps):
            operations.invoke(op)
        elif dialect_name == "sqlite" and _needs_rebuild(op):
            live_table = Table(op.table_name, MetaData(), autoload_with=connection)
            with operations.batch_alter_table(
                op.table_name, recreate="always", copy_from=live_table
            ) as batch_op:
                for table_op in op.ops:
                    batch_op.invoke(table_op)
        else:
            for table_op in op.ops:
                operations.invoke(table_op)

    for op in upgrade_ops.ops:
        try:
            emit(op)
        except (CommandError, NotImplementedError, ValueError) as e:
            table = getattr(op, "table_name", None) or "schema"
            msg = f"Cannot render change to {table} for {dialect_name}: {e}"
            raise MigrationError(msg) from e

    return split_statements(buffer.getvalue())


def generate_migration(
    bind: Engine | Connection,
    metadata: MetaData | None = None,
    *,
    destructive: bool = False,
) -> list[str]:
    """Diff the live schema against the declared one.

    Covers missing tables (with their indexes), missing columns, column type
    and nullability changes, foreign keys (including their ``ON DELETE``
    rules), missing indexes and missing unique constraints. Drops of
    undeclared columns, indexes and unique constraints are produced only
    when ``destructive`` is set. Tables that exist in the database but not in
    ``metadata`` are left alone.

    Args:
        bind: Engine or Connection to reflect through.
        metadata: Desired schema. Defaults to ``Base.metadata``.
        destructive: Also drop undeclared columns, indexes and unique
            constraints.

    Returns:
        Ordered DDL statements for the bind's dialect, without trailing
        semicolons. Empty when the database is up to date.

    Raises:
        MigrationError: If a change cannot be expressed for the dialect.
    """
    metadata = Base.metadata if metadata is None else metadata

    with translate_errors():
        if isinstance(bind, Engine):
            with bind.connect() as connection:
                statements = _render(
                    connection, _diff(connection, metadata, destructive=destructive)
                )
        else:
            statements = _render(bind, _diff(bind, metadata, destructive=destructive))

    logger.debug("Schema diff produced %d statement(s)", len(statements))
    return statements


def push_schema(engine: Engine, metadata: MetaData | None = None) -> list[str]:
    """Apply the destructive schema diff directly, without migration history.

    Columns that are not declared are dropped along with their data, and
    existing columns and foreign keys are altered to the declared shape.
    Never run this against a database holding data that cannot be lost.

    Args:
        engine: Target engine.
        metadata: Desired schema. Defaults to ``Base.metadata``.

    Returns:
        The statements that were executed.
    """
    logger.warning(
        "Pushing schema to %s without migration history; undeclared columns "
        "will be dropped",
        engine.url.render_as_string(hide_password=True),
    )
    with translate_errors(), schema_transaction(engine) as connection:
        statements = generate_migration(connection, metadata, destructive=True)
        for statement in statements:
            logger.info("Executing: %s", statement.splitlines()[0])
            connection.exec_driver_sql(statement)

    logger.info("Schema push complete: %d statement(s)", len(statements))
    return statements
