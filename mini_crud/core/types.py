"""Shared core type aliases used across contracts, accessor, and ports."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

NamedParams = Dict[str, Any]
PositionalParams = List[Any]
QueryParams = Union[NamedParams, PositionalParams, None]

Row = Dict[str, Any]
Rows = List[Row]
MaybeRow = Optional[Row]

DataInput = Mapping[str, Any]
