"""Rows returned by extended and simple queries."""

from __future__ import annotations

import string
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional, Union

from .errors import PostgresError
from .statement import Column, Statement

__all__ = ["column_index", "Row", "SimpleColumn", "SimpleQueryRow"]

RowIndex = Union[int, str]

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def column_index(names: Sequence[str], index: RowIndex) -> Optional[int]:
    """Resolve ``index`` against column ``names``; None if it names no column.

    A string matches exactly first, then ignoring ASCII case.
    """
    if isinstance(index, bool):
        raise TypeError("a column index must be an int or a str")
    if isinstance(index, int):
        return index if 0 <= index < len(names) else None
    if not isinstance(index, str):
        raise TypeError("a column index must be an int or a str")
    names = list(names)
    if index in names:
        return names.index(index)
    folded = index.translate(_ASCII_LOWER)
    return next(
        (pos for pos, name in enumerate(names) if name.translate(_ASCII_LOWER) == folded),
        None,
    )


def _resolve(names: Sequence[str], index: RowIndex) -> int:
    position = column_index(names, index)
    if position is None:
        raise PostgresError.column(str(index))
    return position


@dataclass(frozen=True)
class Row:
    """A row of data returned by a prepared statement."""

    statement: Statement
    values: Sequence[Optional[bytes]] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", tuple(self.values))

    @property
    def columns(self) -> tuple[Column, ...]:
        """The columns of the row."""
        return tuple(self.statement.columns)

    def __len__(self) -> int:
        return len(self.columns)

    def get_raw(self, index: RowIndex) -> Optional[bytes]:
        """The raw bytes of a column, by position or name; None for NULL."""
        position = _resolve([column.name for column in self.columns], index)
        return self.values[position]

    def __repr__(self) -> str:
        return f"Row(columns={list(self.columns)!r})"


@dataclass(frozen=True)
class SimpleColumn:
    """A column of a simple query's row."""

    name: str


@dataclass(frozen=True)
class SimpleQueryRow:
    """A row of text data returned by a simple query."""

    columns: Sequence[SimpleColumn]
    values: Sequence[Optional[bytes]] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "values", tuple(self.values))

    def __len__(self) -> int:
        return len(self.columns)

    def get(self, index: RowIndex) -> Optional[str]:
        """The text of a column, by position or name; None for NULL."""
        position = _resolve([column.name for column in self.columns], index)
        raw = self.values[position]
        if raw is None:
            return None
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PostgresError.from_sql(exc, position) from exc