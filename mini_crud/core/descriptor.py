"""Entity descriptor: table name plus declared column whitelist."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Tuple

ID_COLUMN = "id"


@dataclass(frozen=True)
class EntityDescriptor:
    """Immutable description of one persisted entity type.

    Attributes:
        table: Table name, declared explicitly by the entity.
        columns: Declared column names in order, excluding the `id` column.
    """

    table: str
    columns: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not isinstance(self.table, str) or not self.table.strip():
            raise ValueError("Entity table name must be a non-empty string.")
        if isinstance(self.columns, str):
            raise TypeError("columns must be an iterable of names, not a string.")

        normalized: list[str] = []
        for name in self.columns:
            if not isinstance(name, str) or not name:
                raise ValueError(f"Invalid column name: {name!r}")
            if name == ID_COLUMN:
                raise ValueError(
                    f"'{ID_COLUMN}' is implicit and must not be declared in columns."
                )
            if name not in normalized:
                normalized.append(name)
        object.__setattr__(self, "columns", tuple(normalized))

    @property
    def whitelist(self) -> Tuple[str, ...]:
        """Names allowed to appear as identifiers in projections and sorts."""

        return (ID_COLUMN,) + self.columns

    def is_column(self, name: Any) -> bool:
        """Return whether `name` is a declared column (never `id`)."""

        return isinstance(name, str) and name in self.columns

    def is_selectable(self, name: Any) -> bool:
        """Return whether `name` may be projected or sorted on."""

        return isinstance(name, str) and (name == ID_COLUMN or name in self.columns)

    @classmethod
    def of(cls, entity: Any) -> EntityDescriptor:
        """Build a descriptor from a class declaring `__table__` and `__columns__`.

        Descriptor instances are returned unchanged.

        Raises:
            ValueError: If `__table__` is missing or empty.
            TypeError: If `__columns__` is missing.
        """

        if isinstance(entity, EntityDescriptor):
            return entity

        owner = entity if isinstance(entity, type) else type(entity)
        table = getattr(owner, "__table__", None)
        if not isinstance(table, str) or not table:
            raise ValueError(f"{owner.__name__} must declare a non-empty __table__.")
        columns: Iterable[str] | None = getattr(owner, "__columns__", None)
        if columns is None:
            raise TypeError(f"{owner.__name__} must declare __columns__.")
        return cls(table=table, columns=tuple(columns))
