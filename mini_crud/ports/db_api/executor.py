"""DB-API statement executor used by the entity accessor."""

from __future__ import annotations

import contextlib
import logging
from typing import Any, Callable, Iterator, Mapping, Optional

from ...core.errors import QueryError
from ...core.types import MaybeRow, QueryParams, Row
from .dialects import Dialect, resolve_dialect

logger = logging.getLogger(__name__)

_DB_API_ERROR_NAMES = frozenset({"Error", "DatabaseError", "InterfaceError"})


class StatementExecutor:
    """Thin DB-API wrapper that runs parameterized SQL and normalizes rows.

    The executor never commits, rolls back, or retries. Transaction scope and
    connection lifetime belong to the caller that owns `conn`.
    """

    def __init__(self, conn: Any, dialect: Dialect | str | None = None):
        """Create statement executor.

        Args:
            conn: DB-API 2.0 connection object.
            dialect: Dialect instance or name. Inferred from the connection's
                driver module when omitted.
        """

        self._closed = False
        self.conn: Any | None = conn
        self.dialect = resolve_dialect(dialect, conn)
        self._driver_error = _driver_error_class(conn)

    def _require_open_connection(self) -> Any:
        if self._closed or self.conn is None:
            raise RuntimeError("connection is closed")
        return self.conn

    def _is_driver_error(self, exc: BaseException) -> bool:
        if self._driver_error is not None and isinstance(exc, self._driver_error):
            return True
        return any(cls.__name__ in _DB_API_ERROR_NAMES for cls in type(exc).mro())

    @contextlib.contextmanager
    def _translate_errors(self, sql: str, params: QueryParams) -> Iterator[None]:
        """Re-raise driver errors as `QueryError`, chained to the original."""

        try:
            yield
        except QueryError:
            raise
        except Exception as exc:
            if not self._is_driver_error(exc):
                raise
            raise QueryError(
                f"{type(exc).__name__}: {exc}", sql=sql, params=params
            ) from exc

    def _run(self, sql: str, params: QueryParams) -> Any:
        conn = self._require_open_connection()
        logger.debug("Executing SQL: %s | %s", sql, _describe_params(params))
        cur = conn.cursor()
        try:
            if params is None:
                cur.execute(sql)
            else:
                cur.execute(sql, params)
        except BaseException:
            _close_cursor(cur)
            raise
        return cur

    def execute(self, sql: str, params: QueryParams = None) -> Any:
        """Execute SQL with optional parameters and return the cursor.

        Raises:
            QueryError: If the driver rejects or fails the statement.
        """

        with self._translate_errors(sql, params):
            return self._run(sql, params)

    def _row_to_mapping(self, cursor: Any, row: Any) -> Row:
        """Return `row` as a plain dict keyed by column name.

        Sequence rows are keyed through `cursor.description`; mapping-like rows
        such as `sqlite3.Row` are copied.
        """

        if isinstance(row, Mapping):
            return dict(row)

        if isinstance(row, (tuple, list)):
            description = getattr(cursor, "description", None)
            if not description:
                raise TypeError("Cannot map a sequence row without cursor.description.")
            return {column[0]: value for column, value in zip(description, row)}

        try:
            mapped = dict(row)
        except (TypeError, ValueError):
            mapped = {}
        if not mapped:
            raise TypeError(f"Unsupported row type: {type(row).__name__}")
        return mapped

    def fetch_one(
        self,
        sql: str,
        params: QueryParams = None,
        *,
        factory: Optional[Callable[[Row], Any]] = None,
    ) -> MaybeRow:
        """Execute query and return the first row, or `None` when empty.

        Args:
            sql: SQL text with placeholders.
            params: Bound parameters.
            factory: Optional callable applied to the row mapping.
        """

        with self._translate_errors(sql, params):
            cur = self._run(sql, params)
            try:
                row = cur.fetchone()
                if row is None:
                    return None
                mapped = self._row_to_mapping(cur, row)
            finally:
                _close_cursor(cur)
        return factory(mapped) if factory is not None else mapped

    def fetch_all(
        self,
        sql: str,
        params: QueryParams = None,
        *,
        factory: Optional[Callable[[Row], Any]] = None,
    ) -> list[Any]:
        """Execute query and return all rows in driver order.

        Returns an empty list when nothing matches.
        """

        with self._translate_errors(sql, params):
            cur = self._run(sql, params)
            try:
                rows = cur.fetchall() or []
                mapped = [self._row_to_mapping(cur, r) for r in rows]
            finally:
                _close_cursor(cur)
        if factory is None:
            return mapped
        return [factory(row) for row in mapped]

    def fetch_scalar(
        self, sql: str, params: QueryParams = None, *, default: Any = None
    ) -> Any:
        """Return the first column of the first row.

        `default` is returned only when the query yields no rows, so falsy
        values such as `0` or `""` are never confused with a missing row.
        Pass a sentinel as `default` to tell SQL `NULL` apart from no row.
        """

        with self._translate_errors(sql, params):
            cur = self._run(sql, params)
            try:
                row = cur.fetchone()
                if row is None:
                    return default
                if isinstance(row, (tuple, list)):
                    return row[0] if row else default
                mapped = self._row_to_mapping(cur, row)
            finally:
                _close_cursor(cur)
        return next(iter(mapped.values()), default)

    def close(self) -> None:
        """Close the underlying connection. Safe to call more than once."""

        if self._closed:
            return
        conn = self.conn
        self._closed = True
        self.conn = None
        close = getattr(conn, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> StatementExecutor:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()


def _driver_error_class(conn: Any) -> Optional[type]:
    """Return the DB-API `Error` class exported by the connection's driver."""

    module_name = type(conn).__module__
    if not module_name or module_name == "builtins":
        return None
    try:
        module_obj = __import__(module_name.split(".", 1)[0])
    except ImportError:
        return None
    error_cls = getattr(module_obj, "Error", None)
    if isinstance(error_cls, type) and issubclass(error_cls, Exception):
        return error_cls
    return None


def _close_cursor(cursor: Any) -> None:
    close = getattr(cursor, "close", None)
    if callable(close):
        close()


def _describe_params(params: QueryParams) -> str:
    """Summarize bound parameters for logging without their values."""

    if params is None:
        return "no params"
    if isinstance(params, Mapping):
        return f"param keys={list(params)}"
    return f"{len(params)} positional params"
