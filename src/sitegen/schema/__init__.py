"""
Schema Compiler
Blueprint models and migration journal to SQL scripts.
"""

from .base import BaseSchemaCompiler, write_base_schema
from .dialects import (
    AlterCapability,
    ColumnTypeMapper,
    Dialect,
    MysqlDialect,
    PostgresDialect,
    SqliteDialect,
    get_dialect,
)
from .migrations import MigrationCompiler, write_migration

__all__ = [
    "AlterCapability",
    "BaseSchemaCompiler",
    "ColumnTypeMapper",
    "Dialect",
    "MigrationCompiler",
    "MysqlDialect",
    "PostgresDialect",
    "SqliteDialect",
    "get_dialect",
    "write_base_schema",
    "write_migration",
]
