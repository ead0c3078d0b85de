"""Concrete SQL dialect implementations for DB-API executors."""

from __future__ import annotations

from typing import Any, Optional


class Dialect:
    """Base dialect that defines SQL quoting and placeholder behavior."""

    name: str = "generic"
    paramstyle: str = "named"
    quote_char: str = '"'
    supports_returning: bool = False
    auto_id_sql: str = "NULL"

    def q(self, ident: str) -> str:
        """Quote SQL identifier.

        Embedded quote characters are doubled so a quoted name can never
        terminate the identifier early.
        """

        escaped = ident.replace(self.quote_char, self.quote_char * 2)
        return f"{self.quote_char}{escaped}{self.quote_char}"

    def placeholder(self, key: str) -> str:
        """Return parameter placeholder for current param style."""

        if self.paramstyle == "named":
            return f":{key}"
        if self.paramstyle == "qmark":
            return "?"
        if self.paramstyle == "format":
            return "%s"
        raise ValueError(f"Unsupported paramstyle: {self.paramstyle}")

    def returning_clause(self, pk_name: str) -> str:
        """Return `RETURNING` clause when dialect supports it."""

        if self.supports_returning:
            return f" RETURNING {self.q(pk_name)}"
        return ""

    def get_lastrowid(self, cursor: Any) -> Optional[int]:
        """Extract `lastrowid` from DB-API cursor when available."""

        return getattr(cursor, "lastrowid", None)


class SQLiteDialect(Dialect):
    """SQLite dialect (`:name` parameters, supports `RETURNING`).

    Identifiers are backtick-quoted. SQLite reads an unresolvable
    double-quoted name as a string literal; a backtick-quoted one is always
    an identifier.
    """

    name = "sqlite"
    paramstyle = "named"
    quote_char = "`"
    supports_returning = True


class PostgresDialect(Dialect):
    """PostgreSQL dialect (`%s` positional parameters).

    `SERIAL`/identity columns reject an explicit `NULL`, so inserts use
    `DEFAULT` for the identifier.
    """

    name = "postgres"
    paramstyle = "format"
    quote_char = '"'
    supports_returning = True
    auto_id_sql = "DEFAULT"


class MySQLDialect(Dialect):
    """MySQL dialect (`%s` positional parameters, no `RETURNING`)."""

    name = "mysql"
    paramstyle = "format"
    quote_char = "`"
    supports_returning = False


_DIALECTS_BY_NAME: dict[str, type[Dialect]] = {
    "sqlite": SQLiteDialect,
    "sqlite3": SQLiteDialect,
    "postgres": PostgresDialect,
    "postgresql": PostgresDialect,
    "psycopg": PostgresDialect,
    "psycopg2": PostgresDialect,
    "mysql": MySQLDialect,
    "pymysql": MySQLDialect,
    "mysqldb": MySQLDialect,
}


def resolve_dialect(dialect: Dialect | str | None, conn: Any = None) -> Dialect:
    """Resolve a dialect instance from an instance, a name, or a connection.

    Args:
        dialect: Dialect instance, registered name (`"sqlite"`, `"postgres"`,
            `"mysql"` and driver aliases), or `None` to infer from `conn`.
        conn: DB-API connection whose driver module is inspected when
            `dialect` is `None`.

    Raises:
        ValueError: If the name is unknown or the driver cannot be inferred.
        TypeError: If `dialect` has an unsupported type.
    """

    if isinstance(dialect, Dialect):
        return dialect
    if isinstance(dialect, str):
        dialect_cls = _DIALECTS_BY_NAME.get(dialect.strip().lower())
        if dialect_cls is None:
            raise ValueError(f"Unknown dialect name: {dialect!r}")
        return dialect_cls()
    if dialect is not None:
        raise TypeError("dialect must be a Dialect instance, a name, or None.")

    if conn is None:
        raise ValueError("Cannot infer dialect without a connection.")
    module_name = type(conn).__module__.lower()
    root = module_name.split(".", 1)[0]
    dialect_cls = _DIALECTS_BY_NAME.get(root)
    if dialect_cls is None:
        raise ValueError(
            f"Cannot infer dialect from connection module {module_name!r}; "
            "pass a dialect explicitly."
        )
    return dialect_cls()
