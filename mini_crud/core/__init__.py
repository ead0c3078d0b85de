"""Public core API for entity description, query building, and CRUD access."""

from .accessor import EntityAccessor
from .descriptor import ID_COLUMN, EntityDescriptor
from .errors import ArgumentError, MiniCrudError, QueryError
from .query_builder import CompiledFragment, filter_data, select_columns
from .sorting import SortSpec, parse_sort

__all__ = [
    "ID_COLUMN",
    "ArgumentError",
    "CompiledFragment",
    "EntityAccessor",
    "EntityDescriptor",
    "MiniCrudError",
    "QueryError",
    "SortSpec",
    "filter_data",
    "parse_sort",
    "select_columns",
]
