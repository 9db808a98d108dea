"""Base schema: built-in tables plus one table per blueprint model."""

import posixpath
from typing import Sequence

from ..blueprint.models import Model
from ..core import get_logger
from ..output import ArtifactTarget
from .dialects import Dialect
from .tables import BUILTIN_NAMES, LEADING_TABLES, TRAILING_TABLES, Table, model_table, render_create, render_indexes

logger = get_logger(__name__)

BASE_SCHEMA_FILE = "000_base.sql"
BASE_SCHEMA_HEADER = "-- Base schema generated from blueprint.models"


class BaseSchemaCompiler:
    """Compiles the initial schema script for one dialect."""

    def __init__(self, dialect: Dialect) -> None:
        self.dialect = dialect

    def tables(self, models: Sequence[Model]) -> list[Table]:
        """Tables in creation order."""
        tables = list(LEADING_TABLES)
        for model in models:
            if model.table_name in BUILTIN_NAMES:
                logger.warning("model_shadows_builtin_table", table=model.table_name)
            tables.append(model_table(model))
        tables.extend(TRAILING_TABLES)
        return tables

    def compile(self, models: Sequence[Model]) -> str:
        """
        Base schema script.

        Order: migrations, users, usersession, oauthtokens, the blueprint
        models in order, passwordauth, form_submissions, then every index.
        """
        tables = self.tables(models)
        model_names = {model.table_name for model in models}

        lines = [BASE_SCHEMA_HEADER]
        for table in tables:
            label = "Model" if table.name in model_names and table.name not in BUILTIN_NAMES else "Table"
            lines.append("")
            lines.append(f"-- {label}: {table.name}")
            lines.append(render_create(table, self.dialect))

        indexes = [stmt for table in tables for stmt in render_indexes(table, self.dialect)]
        if indexes:
            lines.append("")
            lines.append("-- Indexes")
            lines.extend(indexes)

        lines.append("")
        logger.debug("base_schema_compiled", dialect=self.dialect.name, tables=len(tables))
        return "\n".join(lines)

    def write(self, target: ArtifactTarget, models: Sequence[Model], migrations_dir: str = "migrations") -> bool:
        """
        Write ``000_base.sql`` unless it already exists.

        Returns:
            True if the file was written, False if an earlier run created it
        """
        path = posixpath.join(migrations_dir, BASE_SCHEMA_FILE)
        if target.exists(path):
            logger.info("base_schema_exists", path=path)
            return False

        target.write(path, self.compile(models))
        logger.info("base_schema_written", path=path, dialect=self.dialect.name, models=len(models))
        return True


def write_base_schema(
    target: ArtifactTarget,
    models: Sequence[Model],
    dialect: Dialect,
    migrations_dir: str = "migrations",
) -> bool:
    """Write ``000_base.sql`` for a dialect unless it already exists."""
    return BaseSchemaCompiler(dialect).write(target, models, migrations_dir)
