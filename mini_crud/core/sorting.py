"""Sort specification parsing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union


@dataclass(frozen=True)
class SortSpec:
    """Represents one ordering expression."""

    col: str
    desc: bool = False

    @property
    def direction(self) -> str:
        return "DESC" if self.desc else "ASC"

    @classmethod
    def parse(cls, raw: str) -> SortSpec:
        """Parse `"column"` or `"column:direction"`.

        Only a case-insensitive `DESC` sorts descending; any other direction
        token falls back to ascending.
        """

        col, _, direction = raw.partition(":")
        return cls(col=col.strip(), desc=direction.strip().upper() == "DESC")


SortInput = Optional[Iterable[Union[str, SortSpec]]]


def parse_sort(sort: SortInput) -> List[SortSpec]:
    """Normalize sort input into `SortSpec` entries.

    Strings are parsed with `SortSpec.parse`; `SortSpec` instances pass
    through. A bare string is treated as a single entry.
    """

    if sort is None:
        return []
    if isinstance(sort, (str, SortSpec)):
        sort = [sort]

    specs: List[SortSpec] = []
    for item in sort:
        if isinstance(item, SortSpec):
            specs.append(item)
        elif isinstance(item, str):
            specs.append(SortSpec.parse(item))
        else:
            raise TypeError("Sort entries must be strings or SortSpec instances.")
    return specs
