"""Public port exports for concrete adapter implementations."""

from .db_api import (
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    StatementExecutor,
    resolve_dialect,
)

__all__ = [
    "StatementExecutor",
    "Dialect",
    "SQLiteDialect",
    "PostgresDialect",
    "MySQLDialect",
    "resolve_dialect",
]
