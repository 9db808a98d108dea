"""
Table Definitions
Dialect-neutral table descriptions (built-in auth tables and blueprint
models) and their rendering to CREATE statements.
"""

from dataclasses import dataclass

from ..blueprint.models import Model, ModelField
from .dialects import Dialect

# Abstract type of auto-incrementing integer keys
SERIAL = "SERIAL"

# Default value markers rendered per dialect
CURRENT_TIMESTAMP = "CURRENT_TIMESTAMP"


@dataclass(frozen=True)
class Column:
    """Column with an abstract type."""

    name: str
    type: str = "TEXT"
    size: str = ""
    not_null: bool = False
    primary: bool = False
    unique: bool = False
    default: str | bool | int | None = None


@dataclass(frozen=True)
class ForeignKey:
    column: str
    table: str
    ref_column: str
    on_delete: str | None = None


@dataclass(frozen=True)
class Index:
    name: str
    columns: tuple[str, ...]


@dataclass(frozen=True)
class Table:
    name: str
    columns: tuple[Column, ...]
    foreign_keys: tuple[ForeignKey, ...] = ()
    indexes: tuple[Index, ...] = ()


USER_FK = ForeignKey("userid", "users", "userid")
USER_FK_CASCADE = ForeignKey("userid", "users", "userid", on_delete="CASCADE")


def render_default(value: str | bool | int, dialect: Dialect) -> str:
    if isinstance(value, bool):
        return dialect.boolean_literal(value)
    return str(value)


def render_column(column: Column, dialect: Dialect) -> str:
    """One column line: name, type, then NOT NULL, PRIMARY KEY, UNIQUE, DEFAULT."""
    name = dialect.quote(column.name)
    if column.type == SERIAL:
        return f"  {name} {dialect.serial_key}"

    parts = [f"  {name} {dialect.column_type(column.type, column.size)}"]
    if column.not_null:
        parts.append("NOT NULL")
    if column.primary:
        parts.append("PRIMARY KEY")
    if column.unique:
        parts.append("UNIQUE")
    if column.default is not None:
        parts.append(f"DEFAULT {render_default(column.default, dialect)}")
    return " ".join(parts)


def render_foreign_key(fk: ForeignKey, dialect: Dialect) -> str:
    q = dialect.quote
    line = f"  FOREIGN KEY ({q(fk.column)}) REFERENCES {q(fk.table)} ({q(fk.ref_column)})"
    if fk.on_delete:
        line += f" ON DELETE {fk.on_delete}"
    return line


def render_create(table: Table, dialect: Dialect) -> str:
    """``CREATE TABLE IF NOT EXISTS`` statement for a table."""
    lines = [render_column(c, dialect) for c in table.columns]
    lines += [render_foreign_key(fk, dialect) for fk in table.foreign_keys]
    body = ",\n".join(lines)
    return f"CREATE TABLE IF NOT EXISTS {dialect.quote(table.name)} (\n{body}\n);"


def render_indexes(table: Table, dialect: Dialect) -> list[str]:
    return [dialect.create_index(ix.name, table.name, ix.columns) for ix in table.indexes]


def field_column(f: ModelField) -> Column:
    """Column for a blueprint model field."""
    return Column(
        name=(f.name or "col").lower(),
        type=f.datatype.upper() or "TEXT",
        size=f.datatypesize,
        not_null=f.is_required,
        primary=f.is_primary,
    )


def model_table(model: Model) -> Table:
    """
    Table for a blueprint model.

    User-specific models get a trailing ``userid`` column (unless a field
    already defines one) and a foreign key to ``users``.
    """
    columns = [field_column(f) for f in model.fields]
    foreign_keys: tuple[ForeignKey, ...] = ()
    if model.is_user_specific:
        if not any(c.name == "userid" for c in columns):
            columns.append(Column("userid", "UUID", not_null=True))
        foreign_keys = (USER_FK,)
    return Table(model.table_name, tuple(columns), foreign_keys)


MIGRATIONS = Table(
    "migrations",
    (
        Column("id", SERIAL),
        Column("filename", "VARCHAR", "255", not_null=True, unique=True),
        Column("applied_at", "DATETIME", default=CURRENT_TIMESTAMP),
    ),
)

USERS = Table(
    "users",
    (
        Column("userid", "UUID", not_null=True, primary=True),
        Column("oauthid", "VARCHAR", "255", not_null=True, unique=True),
        Column("source", "VARCHAR", "20", not_null=True),
        Column("username", "VARCHAR", "255", not_null=True),
        Column("email", "VARCHAR", "255"),
        Column("avatarurl", "TEXT"),
        Column("userlevel", "INTEGER", not_null=True, default=1),
        Column("usertier", "INTEGER", not_null=True, default=0),
        Column("lastlogindate", "DATETIME", not_null=True),
        Column("createddate", "DATETIME", not_null=True),
        Column("isactive", "BOOLEAN", not_null=True, default=True),
    ),
    indexes=(
        Index("idx_users_oauth", ("oauthid",)),
        Index("idx_users_permission", ("userlevel",)),
    ),
)

USER_SESSION = Table(
    "usersession",
    (
        Column("id", "UUID", not_null=True, primary=True),
        Column("sessiontoken", "VARCHAR", "255", not_null=True, unique=True),
        Column("userid", "UUID", not_null=True),
        Column("expirationdate", "DATETIME", not_null=True),
    ),
    (USER_FK_CASCADE,),
    (
        Index("idx_session_token", ("sessiontoken",)),
        Index("idx_session_user", ("userid",)),
        Index("idx_session_expiry", ("expirationdate",)),
    ),
)

OAUTH_TOKENS = Table(
    "oauthtokens",
    (
        Column("id", "UUID", not_null=True, primary=True),
        Column("userid", "UUID", not_null=True),
        Column("provider", "VARCHAR", "20", not_null=True),
        Column("accesstoken", "TEXT", not_null=True),
        Column("refreshtoken", "TEXT"),
        Column("expiresat", "DATETIME"),
        Column("createdat", "DATETIME", not_null=True),
        Column("updatedat", "DATETIME", not_null=True),
    ),
    (USER_FK_CASCADE,),
    (
        Index("idx_oauth_user", ("userid",)),
        Index("idx_oauth_provider", ("userid", "provider")),
    ),
)

PASSWORD_AUTH = Table(
    "passwordauth",
    (
        Column("id", "UUID", not_null=True, primary=True),
        Column("email", "VARCHAR", "255", not_null=True, unique=True),
        Column("passwordhash", "TEXT", not_null=True),
        Column("salt", "TEXT", not_null=True),
        Column("verificationtoken", "VARCHAR", "255"),
        Column("verificationtokenexpires", "DATETIME"),
        Column("emailverified", "BOOLEAN", default=False),
        Column("resettoken", "VARCHAR", "255"),
        Column("resettokenexpires", "DATETIME"),
        Column("createdat", "DATETIME", default=CURRENT_TIMESTAMP),
        Column("updatedat", "DATETIME", default=CURRENT_TIMESTAMP),
    ),
    indexes=(
        Index("idx_passwordauth_email", ("email",)),
        Index("idx_passwordauth_verification_token", ("verificationtoken",)),
        Index("idx_passwordauth_reset_token", ("resettoken",)),
    ),
)

FORM_SUBMISSIONS = Table(
    "form_submissions",
    (
        Column("id", SERIAL),
        Column("form_name", "VARCHAR", "255", not_null=True),
        Column("form_data", "TEXT", not_null=True),
        Column("timestamp", "DATETIME", default=CURRENT_TIMESTAMP),
    ),
    indexes=(Index("idx_form_submissions_name", ("form_name",)),),
)

# Created before the blueprint models (which may reference users)
LEADING_TABLES = (MIGRATIONS, USERS, USER_SESSION, OAUTH_TOKENS)
# Created after the blueprint models
TRAILING_TABLES = (PASSWORD_AUTH, FORM_SUBMISSIONS)

BUILTIN_NAMES = frozenset(t.name for t in LEADING_TABLES + TRAILING_TABLES)
