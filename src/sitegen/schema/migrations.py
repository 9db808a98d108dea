"""
Migration Compiler
Translates the append-only schema journal into ordered DDL for one dialect.
"""

import posixpath
from datetime import datetime, timezone
from typing import Any, Sequence

from pydantic import ValidationError as PydanticValidationError

from ..blueprint.models import Migration, MigrationChange, Model, ModelField
from ..core import get_logger
from ..output import ArtifactTarget
from .dialects import Dialect
from .tables import Table, USER_FK, Column, field_column, render_create

logger = get_logger(__name__)

MIGRATION_HEADER = "-- Auto-generated migration file"


def _field(value: Any) -> ModelField | None:
    if not isinstance(value, dict):
        return None
    try:
        return ModelField.model_validate({k: v for k, v in value.items() if v is not None})
    except PydanticValidationError:
        return None


def _model(value: Any) -> Model | None:
    if not isinstance(value, dict):
        return None
    try:
        return Model.model_validate({k: v for k, v in value.items() if v is not None and k != "fields"})
    except PydanticValidationError:
        return None


class MigrationCompiler:
    """Compiles journal entries into statements, preserving journal order."""

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect

    def compile(self, journal: Sequence[Migration]) -> list[str]:
        """
        Statements for a journal.

        Unsupported operations become commented warnings; unknown actions
        and constraint changes are skipped with a log line.
        """
        statements: list[str] = []
        for entry in journal:
            action = entry.action.strip().lower()
            match action:
                case "create":
                    statements.extend(self._create(entry))
                case "delete":
                    statements.extend(self._delete(entry))
                case "update":
                    statements.extend(self._update(entry))
                case _:
                    logger.warning("migration_action_unknown", migration_id=entry.id, action=entry.action)
        return statements

    def write(
        self,
        target: ArtifactTarget,
        journal: Sequence[Migration],
        now: datetime | None = None,
        migrations_dir: str = "migrations",
    ) -> str | None:
        """
        Write the journal as a new timestamped migration file.

        A ``-N`` suffix keeps files written within the same second apart. No
        file is written for an empty journal.

        Returns:
            Path written, or None for an empty journal
        """
        if not journal:
            logger.debug("migration_journal_empty")
            return None

        now = now or datetime.now(timezone.utc)
        statements = self.compile(journal)

        stem = migration_filename(now)[: -len(".sql")]
        path = posixpath.join(migrations_dir, f"{stem}.sql")
        counter = 2
        while target.exists(path):
            path = posixpath.join(migrations_dir, f"{stem}-{counter}.sql")
            counter += 1

        content = "\n".join([MIGRATION_HEADER, f"-- Generated at: {now.isoformat()}", "", *statements]) + "\n"
        target.write(path, content)
        logger.info("migration_written", path=path, statements=len(statements), dialect=self.dialect.name)
        return path

    def _create(self, entry: Migration) -> list[str]:
        model_change = next(
            (c for c in entry.changes if c.type == "model" and c.operation == "add"), None
        )
        model = _model(model_change.newValue) if model_change else None
        table_name = ((model.name if model else "") or entry.table_name).lower()
        if not table_name:
            logger.warning("migration_table_missing", migration_id=entry.id)
            return []

        columns = []
        for change in entry.changes:
            if change.type != "field" or change.operation != "add":
                continue
            f = _field(change.newValue)
            if f is None:
                logger.warning("migration_field_invalid", migration_id=entry.id, field=change.field)
                continue
            columns.append(field_column(f))

        foreign_keys = ()
        if model is not None and model.is_user_specific:
            if not any(c.name == "userid" for c in columns):
                columns.append(Column("userid", "UUID", not_null=True))
            foreign_keys = (USER_FK,)

        if not columns:
            logger.warning("migration_create_without_columns", table=table_name)
            return [f"-- WARNING: No columns defined. Manual migration required for: {self.dialect.quote(table_name)}"]

        return [render_create(Table(table_name, tuple(columns), foreign_keys), self.dialect)]

    def _delete(self, entry: Migration) -> list[str]:
        if not entry.table_name:
            logger.warning("migration_table_missing", migration_id=entry.id)
            return []
        return [f"DROP TABLE IF EXISTS {self.dialect.quote(entry.table_name)};"]

    def _update(self, entry: Migration) -> list[str]:
        table = entry.table_name
        if not table:
            logger.warning("migration_table_missing", migration_id=entry.id)
            return []

        statements = []
        for change in entry.changes:
            if change.type != "field":
                logger.info("migration_change_skipped", table=table, type=change.type, operation=change.operation)
                continue
            statement = self._field_change(table, change)
            if statement:
                statements.append(statement)
        return statements

    def _field_change(self, table: str, change: MigrationChange) -> str | None:
        dialect = self.dialect
        match change.operation:
            case "add":
                f = _field(change.newValue)
                if f is None:
                    logger.warning("migration_field_invalid", table=table, field=change.field)
                    return None
                column = field_column(f)
                return dialect.add_column(
                    table, column.name, dialect.column_type(column.type, column.size), column.not_null
                )
            case "remove":
                old = _field(change.oldValue)
                name = change.field or (old.name if old else "")
                if not name:
                    logger.warning("migration_field_missing", table=table, operation="remove")
                    return None
                return dialect.drop_column(table, name.lower())
            case "modify":
                f = _field(change.newValue)
                if f is None:
                    logger.warning("migration_field_invalid", table=table, field=change.field)
                    return None
                name = (f.name or change.field or "col").lower()
                return dialect.alter_column_type(table, name, dialect.column_type(f.datatype, f.datatypesize))
            case _:
                logger.warning("migration_operation_unknown", table=table, operation=change.operation)
                return None


def migration_filename(now: datetime) -> str:
    return f"migration-{now.strftime('%Y%m%d%H%M%S')}.sql"


def write_migration(
    target: ArtifactTarget,
    journal: Sequence[Migration],
    dialect: Dialect,
    now: datetime | None = None,
    migrations_dir: str = "migrations",
) -> str | None:
    """Write the journal as a new timestamped migration file for a dialect."""
    return MigrationCompiler(dialect).write(target, journal, now, migrations_dir)
