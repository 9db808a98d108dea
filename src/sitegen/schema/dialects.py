"""
SQL Dialects
Column type mapping and ALTER capabilities for SQLite, PostgreSQL and MySQL.
"""

from typing import ClassVar, Protocol


class ColumnTypeMapper(Protocol):
    """Maps abstract field types to native column types."""

    def column_type(self, datatype: str, size: str = "") -> str:
        """Native type for an abstract datatype and optional size."""
        ...


class AlterCapability(Protocol):
    """Statements altering an existing table; unsupported ones become warnings."""

    def add_column(self, table: str, column: str, column_type: str, not_null: bool = False) -> str:
        ...

    def drop_column(self, table: str, column: str) -> str:
        ...

    def alter_column_type(self, table: str, column: str, column_type: str) -> str:
        ...


class Dialect:
    """
    Base SQL dialect.

    Subclasses declare their type table and identifier quote and override
    the statements they spell differently.
    """

    name: ClassVar[str] = ""
    quote_char: ClassVar[str] = '"'
    type_map: ClassVar[dict[str, str]] = {}
    # Full column definition of an auto-incrementing integer key
    serial_key: ClassVar[str] = "INTEGER PRIMARY KEY"

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def quote(self, identifier: str) -> str:
        q = self.quote_char
        return f"{q}{identifier.replace(q, q + q)}{q}"

    def column_type(self, datatype: str, size: str = "") -> str:
        """
        Native column type.

        ``VARCHAR`` with a size becomes ``VARCHAR(size)`` on every dialect.
        Unknown types pass through uppercased; an empty type is ``TEXT``.
        """
        abstract = (datatype or "").strip().upper() or "TEXT"
        if abstract == "VARCHAR" and size:
            return f"VARCHAR({size})"
        return self.type_map.get(abstract, abstract)

    def boolean_literal(self, value: bool) -> str:
        return "TRUE" if value else "FALSE"

    def create_index(self, name: str, table: str, columns: tuple[str, ...]) -> str:
        cols = ", ".join(self.quote(c) for c in columns)
        return f"CREATE INDEX IF NOT EXISTS {self.quote(name)} ON {self.quote(table)} ({cols});"

    def add_column(self, table: str, column: str, column_type: str, not_null: bool = False) -> str:
        required = " NOT NULL" if not_null else ""
        return f"ALTER TABLE {self.quote(table)} ADD COLUMN {self.quote(column)} {column_type}{required};"

    def drop_column(self, table: str, column: str) -> str:
        return f"ALTER TABLE {self.quote(table)} DROP COLUMN {self.quote(column)};"

    def alter_column_type(self, table: str, column: str, column_type: str) -> str:
        return f"ALTER TABLE {self.quote(table)} ALTER COLUMN {self.quote(column)} TYPE {column_type};"

    def manual_migration(self, problem: str, table: str, column: str) -> str:
        """Commented warning standing in for an unsupported statement."""
        return (
            f"-- WARNING: {problem}. Manual migration required for: "
            f"{self.quote(table)}.{self.quote(column)}"
        )


class SqliteDialect(Dialect):
    """SQLite: storage classes only, no DROP COLUMN or column type changes."""

    name = "sqlite"
    quote_char = '"'
    serial_key = "INTEGER PRIMARY KEY AUTOINCREMENT"
    type_map = {
        "UUID": "TEXT",
        "TINYINT": "INTEGER",
        "SMALLINT": "INTEGER",
        "BIGINT": "INTEGER",
        "INT128": "TEXT",
        "VARCHAR": "TEXT",
        "TEXT": "TEXT",
        "BINARY": "BLOB",
        "DATE": "TEXT",
        "TIME": "TEXT",
        "DATETIME": "TEXT",
        "DOUBLE": "REAL",
        "FLOAT": "REAL",
        "BOOLEAN": "INTEGER",
    }

    def boolean_literal(self, value: bool) -> str:
        return "1" if value else "0"

    def drop_column(self, table: str, column: str) -> str:
        return self.manual_migration("SQLite doesn't support DROP COLUMN", table, column)

    def alter_column_type(self, table: str, column: str, column_type: str) -> str:
        return self.manual_migration("SQLite doesn't support ALTER COLUMN TYPE", table, column)


class PostgresDialect(Dialect):
    """PostgreSQL: native UUID, ``ALTER COLUMN ... TYPE``."""

    name = "postgres"
    quote_char = '"'
    serial_key = "SERIAL PRIMARY KEY"
    type_map = {
        "UUID": "UUID",
        "TINYINT": "SMALLINT",
        "SMALLINT": "SMALLINT",
        "BIGINT": "BIGINT",
        "INT128": "NUMERIC(39,0)",
        "VARCHAR": "VARCHAR",
        "TEXT": "TEXT",
        "BINARY": "BYTEA",
        "DATE": "DATE",
        "TIME": "TIME",
        "DATETIME": "TIMESTAMP",
        "DOUBLE": "DOUBLE PRECISION",
        "FLOAT": "REAL",
        "BOOLEAN": "BOOLEAN",
    }


class MysqlDialect(Dialect):
    """MySQL: backtick quoting, UUIDs as ``VARCHAR(36)``, ``MODIFY COLUMN``."""

    name = "mysql"
    quote_char = "`"
    serial_key = "INT AUTO_INCREMENT PRIMARY KEY"
    type_map = {
        "UUID": "VARCHAR(36)",
        "TINYINT": "TINYINT",
        "SMALLINT": "SMALLINT",
        "BIGINT": "BIGINT",
        "INT128": "DECIMAL(39,0)",
        "VARCHAR": "VARCHAR",
        "TEXT": "TEXT",
        "BINARY": "BLOB",
        "DATE": "DATE",
        "TIME": "TIME",
        "DATETIME": "DATETIME",
        "DOUBLE": "DOUBLE",
        "FLOAT": "FLOAT",
        "BOOLEAN": "BOOLEAN",
    }

    def create_index(self, name: str, table: str, columns: tuple[str, ...]) -> str:
        # MySQL has no CREATE INDEX IF NOT EXISTS
        cols = ", ".join(self.quote(c) for c in columns)
        return f"CREATE INDEX {self.quote(name)} ON {self.quote(table)} ({cols});"

    def alter_column_type(self, table: str, column: str, column_type: str) -> str:
        return f"ALTER TABLE {self.quote(table)} MODIFY COLUMN {self.quote(column)} {column_type};"


DIALECTS: dict[str, type[Dialect]] = {
    "sqlite": SqliteDialect,
    "postgres": PostgresDialect,
    "postgresql": PostgresDialect,
    "mysql": MysqlDialect,
}


def get_dialect(name: str | None) -> Dialect:
    """
    Dialect by name (case-insensitive).

    Raises:
        ValueError: If the name is not a supported dialect
    """
    key = (name or "sqlite").strip().lower()
    try:
        return DIALECTS[key]()
    except KeyError:
        raise ValueError(f"Unknown database type: {name}") from None
