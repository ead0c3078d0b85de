"""DB-API executor and dialect exports."""

from .dialects import Dialect, MySQLDialect, PostgresDialect, SQLiteDialect, resolve_dialect
from .executor import StatementExecutor

__all__ = [
    "Dialect",
    "MySQLDialect",
    "PostgresDialect",
    "SQLiteDialect",
    "StatementExecutor",
    "resolve_dialect",
]
