"""Entity accessor: generic CRUD over one declared entity table."""

from __future__ import annotations

from typing import Any, Callable, List, Optional, Sequence

from . import accessor_crud
from .contracts import ExecutorPort
from .descriptor import EntityDescriptor
from .sorting import SortInput
from .types import DataInput, MaybeRow, Row


class EntityAccessor:
    """CRUD accessor backed by an `ExecutorPort` implementation.

    The accessor holds an `EntityDescriptor` and delegates to the functions in
    `accessor_crud`. Column names from callers are matched against the
    descriptor; unknown names are dropped, never interpolated.

    Example:
        >>> class User:
        ...     __table__ = "users"
        ...     __columns__ = ("email", "name")
        >>> users = EntityAccessor(executor, User)
        >>> new_id = users.create({"email": "a@example.com", "name": "A"})
        >>> users.get(sort=["name:desc"], count=10)
    """

    def __init__(
        self,
        executor: ExecutorPort,
        entity: EntityDescriptor | type | Any,
        *,
        row_factory: Optional[Callable[[Row], Any]] = None,
    ):
        """Create accessor for an entity.

        Args:
            executor: Statement executor implementing `ExecutorPort`.
            entity: `EntityDescriptor`, or a class declaring `__table__` and
                `__columns__`.
            row_factory: Optional callable applied to every returned row.
        """

        self.executor = executor
        self.descriptor = EntityDescriptor.of(entity)
        self.row_factory = row_factory

    @property
    def table(self) -> str:
        return self.descriptor.table

    @property
    def columns(self) -> tuple[str, ...]:
        return self.descriptor.columns

    def count(self) -> int:
        """Return the number of rows in the table."""

        return accessor_crud.count_rows(self.executor, self.descriptor)

    def get_by_id(self, id_value: Any, columns: Optional[Sequence[str]] = None) -> MaybeRow:
        """Fetch one row by identifier.

        Args:
            id_value: Identifier to match, bound as a parameter.
            columns: Optional projection; `id` is always included.

        Returns:
            Row mapping, or `None` when no row has that identifier.
        """

        return accessor_crud.get_row(
            self.executor, self.descriptor, id_value, columns, factory=self.row_factory
        )

    def get(
        self,
        columns: Optional[Sequence[str]] = None,
        sort: SortInput = None,
        count: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Any]:
        """Fetch rows with optional projection, sort, and pagination.

        `sort` entries are `"column"` or `"column:ASC|DESC"`. `count` requires
        a sort, and `offset` requires `count`.

        Raises:
            ArgumentError: On invalid pagination arguments.
        """

        return accessor_crud.list_rows(
            self.executor,
            self.descriptor,
            columns,
            sort,
            count,
            offset,
            factory=self.row_factory,
        )

    def create(self, data: DataInput) -> int:
        """Insert a row and return its database-assigned identifier.

        Every declared column must be present in `data`; unknown keys and
        `id` are ignored.
        """

        return accessor_crud.insert_row(self.executor, self.descriptor, data)

    def update(self, id_value: Any, data: DataInput) -> int:
        """Update the declared columns present in `data`.

        Returns:
            Number of affected rows.
        """

        return accessor_crud.update_row(self.executor, self.descriptor, id_value, data)

    def delete(self, id_value: Any) -> int:
        """Delete a row by identifier.

        Returns:
            Number of affected rows.
        """

        return accessor_crud.delete_row(self.executor, self.descriptor, id_value)
