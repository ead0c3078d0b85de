"""Low-level CRUD implementations used by `EntityAccessor`.

Each function takes the executor and the entity descriptor explicitly, so
they can be used without an accessor instance.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, List, Optional, Sequence

from .contracts import ExecutorPort
from .descriptor import ID_COLUMN, EntityDescriptor
from .errors import ArgumentError, QueryError
from .query_builder import (
    append_limit_offset,
    compile_assignments,
    compile_id_match,
    compile_insert_values,
    compile_order_by,
    compile_projection,
    filter_data,
    merge_params,
    missing_columns,
    resolve_sort,
)
from .sorting import SortInput, SortSpec
from .types import DataInput, MaybeRow, Row


def count_rows(executor: ExecutorPort, descriptor: EntityDescriptor) -> int:
    """Return the number of rows in the entity table."""

    d = executor.dialect
    sql = f"SELECT COUNT({d.q(ID_COLUMN)}) FROM {d.q(descriptor.table)};"
    return int(executor.fetch_scalar(sql, default=0) or 0)


def get_row(
    executor: ExecutorPort,
    descriptor: EntityDescriptor,
    id_value: Any,
    columns: Optional[Sequence[str]] = None,
    *,
    factory: Optional[Callable[[Row], Any]] = None,
) -> MaybeRow:
    """Fetch one row by identifier, or `None` when it does not exist."""

    _require_id(id_value, "get_by_id")
    d = executor.dialect
    projection = compile_projection(descriptor, d, columns)
    match = compile_id_match(id_value, d)
    sql = f"SELECT {projection} FROM {d.q(descriptor.table)}{match.sql};"
    return executor.fetch_one(sql, match.params, factory=factory)


def list_rows(
    executor: ExecutorPort,
    descriptor: EntityDescriptor,
    columns: Optional[Sequence[str]] = None,
    sort: SortInput = None,
    count: Optional[int] = None,
    offset: Optional[int] = None,
    *,
    factory: Optional[Callable[[Row], Any]] = None,
) -> List[Any]:
    """List rows with optional projection, sorting, and pagination.

    Raises:
        ArgumentError: If `offset` is given without `count`, `count` is given
            without a usable sort, or either value is out of range.
    """

    order_by = resolve_sort(descriptor, sort)
    validate_pagination(order_by, count, offset)

    d = executor.dialect
    sql = f"SELECT {compile_projection(descriptor, d, columns)} FROM {d.q(descriptor.table)}"
    sql += compile_order_by(order_by, d)
    sql, params = append_limit_offset(sql, None, limit=count, offset=offset, dialect=d)
    return executor.fetch_all(sql + ";", params, factory=factory)


def insert_row(executor: ExecutorPort, descriptor: EntityDescriptor, data: DataInput) -> int:
    """Insert one row from filtered data and return the assigned identifier.

    Raises:
        ArgumentError: If a declared column is missing from `data`.
        QueryError: If the insert fails or the driver reports no identifier.
    """

    values = filter_data(descriptor, _require_mapping(data))
    missing = missing_columns(descriptor, values)
    if missing:
        raise ArgumentError(f"Missing required columns: {', '.join(missing)}")

    d = executor.dialect
    fragment = compile_insert_values(values, d)
    sql = f"INSERT INTO {d.q(descriptor.table)} {fragment.sql}"

    if d.supports_returning:
        sql += d.returning_clause(ID_COLUMN) + ";"
        new_id = executor.fetch_scalar(sql, fragment.params)
    else:
        sql += ";"
        cursor = executor.execute(sql, fragment.params)
        try:
            new_id = d.get_lastrowid(cursor)
        finally:
            _close_cursor(cursor)

    if new_id is None:
        raise QueryError(
            "Database did not report an identifier for the inserted row.",
            sql=sql,
            params=fragment.params,
        )
    return int(new_id)


def update_row(
    executor: ExecutorPort,
    descriptor: EntityDescriptor,
    id_value: Any,
    data: DataInput,
) -> int:
    """Update declared columns of one row and return the affected row count.

    Partial data is allowed. A nonexistent identifier affects zero rows.

    Raises:
        ArgumentError: If no declared column remains after filtering.
    """

    _require_id(id_value, "update")
    values = filter_data(descriptor, _require_mapping(data))
    if not values:
        raise ArgumentError("update requires at least one declared column.")

    d = executor.dialect
    assignments = compile_assignments(values, d)
    match = compile_id_match(id_value, d)
    sql = f"UPDATE {d.q(descriptor.table)} SET {assignments.sql}{match.sql};"
    cursor = executor.execute(sql, merge_params(assignments.params, match.params))
    return _rowcount(cursor)


def delete_row(executor: ExecutorPort, descriptor: EntityDescriptor, id_value: Any) -> int:
    """Delete one row by identifier and return the affected row count."""

    _require_id(id_value, "delete")
    d = executor.dialect
    match = compile_id_match(id_value, d)
    cursor = executor.execute(f"DELETE FROM {d.q(descriptor.table)}{match.sql};", match.params)
    return _rowcount(cursor)


def validate_pagination(
    order_by: Sequence[SortSpec], count: Optional[int], offset: Optional[int]
) -> None:
    """Check pagination arguments before any SQL is built."""

    if offset is not None and count is None:
        raise ArgumentError("count must be provided when offset is given.")
    if count is not None:
        if not _is_int(count) or count < 1:
            raise ArgumentError("count must be a positive integer.")
        if not order_by:
            raise ArgumentError("sort must be provided when count is given.")
    if offset is not None and (not _is_int(offset) or offset < 0):
        raise ArgumentError("offset must be a non-negative integer.")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_id(id_value: Any, operation: str) -> None:
    if id_value is None:
        raise ArgumentError(f"Cannot {operation} without an id.")


def _require_mapping(data: Any) -> DataInput:
    if not isinstance(data, Mapping):
        raise TypeError("data must be a mapping of column names to values.")
    return data


def _rowcount(cursor: Any) -> int:
    """Read the affected row count, then release the cursor."""

    try:
        rowcount = getattr(cursor, "rowcount", -1)
    finally:
        _close_cursor(cursor)
    return rowcount if isinstance(rowcount, int) and rowcount >= 0 else 0


def _close_cursor(cursor: Any) -> None:
    close = getattr(cursor, "close", None)
    if callable(close):
        close()
