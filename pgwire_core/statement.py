"""Prepared statements and the columns they return."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

__all__ = ["Column", "Statement"]


@dataclass(frozen=True)
class Column:
    """A column of a query's result: its name and its type."""

    name: str
    type: Any


@dataclass(frozen=True)
class Statement:
    """A prepared statement, usable only with the connection that created it."""

    name: str
    params: Sequence[Any] = field(default_factory=tuple)
    columns: Sequence[Column] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))
        object.__setattr__(self, "columns", tuple(self.columns))

    def __repr__(self) -> str:
        return (
            f"Statement(name={self.name!r}, params={list(self.params)!r}, "
            f"columns={list(self.columns)!r})"
        )