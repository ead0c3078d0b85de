"""Core port contracts used by adapters and the entity accessor."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Protocol

from .types import MaybeRow, QueryParams, Row


class DialectPort(Protocol):
    """Dialect behavior required by query compilation and CRUD operations."""

    paramstyle: str
    supports_returning: bool
    auto_id_sql: str

    def q(self, ident: str) -> str: ...

    def placeholder(self, key: str) -> str: ...

    def returning_clause(self, pk_name: str) -> str: ...

    def get_lastrowid(self, cursor: Any) -> Optional[int]: ...


class ExecutorPort(Protocol):
    """Statement execution behavior required by the entity accessor."""

    dialect: DialectPort

    def execute(self, sql: str, params: QueryParams = None) -> Any: ...

    def fetch_all(
        self,
        sql: str,
        params: QueryParams = None,
        *,
        factory: Optional[Callable[[Row], Any]] = None,
    ) -> List[Any]: ...

    def fetch_one(
        self,
        sql: str,
        params: QueryParams = None,
        *,
        factory: Optional[Callable[[Row], Any]] = None,
    ) -> MaybeRow: ...

    def fetch_scalar(
        self, sql: str, params: QueryParams = None, *, default: Any = None
    ) -> Any: ...
