"""Error types raised by the accessor and statement executor."""

from __future__ import annotations

from typing import Any

from .types import QueryParams


class MiniCrudError(Exception):
    """Base class for errors raised by mini_crud."""


class ArgumentError(MiniCrudError, ValueError):
    """Caller violated a precondition that is checked before any SQL runs."""


class QueryError(MiniCrudError, RuntimeError):
    """Database driver failed to execute a statement.

    The driver exception is chained as `__cause__`.

    Attributes:
        sql: Statement that failed.
        params: Parameters bound to the statement.
    """

    def __init__(self, message: str, *, sql: str, params: QueryParams = None):
        super().__init__(message)
        self.sql = sql
        self.params = params

    @property
    def original(self) -> Any:
        """Return the wrapped driver exception."""

        return self.__cause__
