"""SQL fragment builders for projection, sorting, paging, and writes.

This module centralizes SQL string compilation from caller input. Every
identifier it emits is drawn from an `EntityDescriptor` and quoted by the
dialect; every value is returned as a bound parameter. It keeps the accessor
focused on orchestration while making SQL generation reusable.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .contracts import DialectPort
from .descriptor import ID_COLUMN, EntityDescriptor
from .sorting import SortInput, SortSpec, parse_sort
from .types import DataInput, QueryParams

_UNSAFE_BIND_CHARS = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True)
class CompiledFragment:
    """Represents a compiled SQL fragment with its bound parameters."""

    sql: str
    params: QueryParams


def filter_data(descriptor: EntityDescriptor, data: DataInput) -> Dict[str, Any]:
    """Keep only declared columns from untrusted input.

    Unknown keys and `id` are dropped silently. Declaration order is kept so
    generated SQL is deterministic.
    """

    return {name: data[name] for name in descriptor.columns if name in data}


def missing_columns(descriptor: EntityDescriptor, data: DataInput) -> List[str]:
    """Return declared columns absent from `data`, in declaration order."""

    return [name for name in descriptor.columns if name not in data]


def select_columns(
    descriptor: EntityDescriptor, columns: Optional[Sequence[str]] = None
) -> List[str]:
    """Resolve the projection for a read.

    `id` always comes first. With no requested columns the full declared list
    follows; otherwise the requested names that are declared, in request
    order and without duplicates.
    """

    if isinstance(columns, str):
        columns = [columns]
    requested = list(columns) if columns else list(descriptor.columns)

    projection = [ID_COLUMN]
    for name in requested:
        if descriptor.is_selectable(name) and name not in projection:
            projection.append(name)
    return projection


def compile_projection(
    descriptor: EntityDescriptor,
    dialect: DialectPort,
    columns: Optional[Sequence[str]] = None,
) -> str:
    """Compile the quoted, comma-separated projection list."""

    return ", ".join(dialect.q(name) for name in select_columns(descriptor, columns))


def resolve_sort(descriptor: EntityDescriptor, sort: SortInput) -> List[SortSpec]:
    """Parse sort input and drop entries on undeclared columns."""

    return [spec for spec in parse_sort(sort) if descriptor.is_selectable(spec.col)]


def compile_order_by(order_by: Optional[Sequence[SortSpec]], dialect: DialectPort) -> str:
    """Compile a leading-space `ORDER BY` for whitelisted specs, or `""`."""

    keys = [f"{dialect.q(spec.col)} {spec.direction}" for spec in order_by or ()]
    return f" ORDER BY {', '.join(keys)}" if keys else ""


def append_limit_offset(
    sql: str,
    params: QueryParams,
    *,
    limit: Optional[int],
    offset: Optional[int],
    dialect: DialectPort,
) -> Tuple[str, QueryParams]:
    """Append bound `LIMIT`/`OFFSET` clauses to `sql`.

    Named styles bind `__limit` and `__offset`, which no column-derived
    parameter name can take. Returns `sql` and `params` unchanged when
    neither value is given.
    """

    page = [
        (keyword, key, value)
        for keyword, key, value in (("LIMIT", "__limit", limit), ("OFFSET", "__offset", offset))
        if value is not None
    ]
    if not page:
        return sql, params

    clauses = " ".join(f"{keyword} {dialect.placeholder(key)}" for keyword, key, _ in page)
    page_params: QueryParams
    if dialect.paramstyle == "named":
        page_params = {key: value for _, key, value in page}
    else:
        page_params = [value for _, _, value in page]
    return f"{sql} {clauses}", merge_params(params, page_params)


def compile_id_match(id_value: Any, dialect: DialectPort) -> CompiledFragment:
    """Compile `WHERE id = <placeholder>` with the identifier bound."""

    fragment = f" WHERE {dialect.q(ID_COLUMN)} = {dialect.placeholder(ID_COLUMN)}"
    if dialect.paramstyle == "named":
        return CompiledFragment(fragment, {ID_COLUMN: id_value})
    return CompiledFragment(fragment, [id_value])


def _bind_names(columns: Sequence[str]) -> List[str]:
    """Derive named-parameter keys from column names.

    Characters outside `[A-Za-z0-9_]` become `_` and each key carries its
    1-based position, so keys stay unique and never equal `id`.
    """

    return [f"{_UNSAFE_BIND_CHARS.sub('_', name)}_{pos}" for pos, name in enumerate(columns, 1)]


def compile_assignments(data: Dict[str, Any], dialect: DialectPort) -> CompiledFragment:
    """Compile a `SET` list for already filtered data.

    Generated parameter names always carry a numeric suffix, so they cannot
    collide with the bound `id`.
    """

    if dialect.paramstyle == "named":
        keys = _bind_names(list(data))
        set_clause = ", ".join(
            f"{dialect.q(col)} = :{key}" for col, key in zip(data, keys)
        )
        return CompiledFragment(set_clause, dict(zip(keys, data.values())))

    set_clause = ", ".join(f"{dialect.q(key)} = {dialect.placeholder(key)}" for key in data)
    return CompiledFragment(set_clause, list(data.values()))


def compile_insert_values(data: Dict[str, Any], dialect: DialectPort) -> CompiledFragment:
    """Compile `(id, cols...) VALUES (<auto id>, placeholders...)`.

    The identifier value is the dialect's auto-assignment keyword, never a
    caller value.
    """

    column_sql = ", ".join(dialect.q(name) for name in [ID_COLUMN, *data])

    if dialect.paramstyle == "named":
        keys = _bind_names(list(data))
        placeholders = [f":{key}" for key in keys]
        params: QueryParams = dict(zip(keys, data.values()))
    else:
        placeholders = [dialect.placeholder(name) for name in data]
        params = list(data.values())

    values_sql = ", ".join([dialect.auto_id_sql, *placeholders])
    return CompiledFragment(f"({column_sql}) VALUES ({values_sql})", params)


def merge_params(target: QueryParams, source: QueryParams) -> QueryParams:
    """Merge parameter collections, returning the combined value."""

    if isinstance(target, dict) and isinstance(source, dict):
        return {**target, **source}
    if isinstance(target, list) and isinstance(source, list):
        return [*target, *source]
    if target is None:
        return source
    if source is None:
        return target
    raise TypeError("Cannot merge named and positional parameters.")
