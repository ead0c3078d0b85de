"""Generic CRUD access over DB-API connections with whitelisted SQL."""

from .core import (
    ID_COLUMN,
    ArgumentError,
    CompiledFragment,
    EntityAccessor,
    EntityDescriptor,
    MiniCrudError,
    QueryError,
    SortSpec,
    filter_data,
    parse_sort,
    select_columns,
)
from .ports import (
    Dialect,
    MySQLDialect,
    PostgresDialect,
    SQLiteDialect,
    StatementExecutor,
    resolve_dialect,
)

__all__ = [
    "ID_COLUMN",
    "ArgumentError",
    "CompiledFragment",
    "Dialect",
    "EntityAccessor",
    "EntityDescriptor",
    "MiniCrudError",
    "MySQLDialect",
    "PostgresDialect",
    "QueryError",
    "SQLiteDialect",
    "SortSpec",
    "StatementExecutor",
    "filter_data",
    "parse_sort",
    "resolve_dialect",
    "select_columns",
]
