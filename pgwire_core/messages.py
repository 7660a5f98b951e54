"""Asynchronous server messages and simple-query results."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from .errors import DbError, PostgresError
from .row import SimpleQueryRow

__all__ = [
    "Notification",
    "Notice",
    "CommandComplete",
    "AsyncMessage",
    "SimpleQueryMessage",
    "extract_rows_affected",
]

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class Notification:
    """A notification raised with NOTIFY on a channel the connection listens to."""

    process_id: int
    channel: str
    payload: str


@dataclass(frozen=True)
class Notice:
    """A notice from the server; it has the form of an error but is not one."""

    error: DbError

    @classmethod
    def from_fields(cls, fields: Iterable[tuple]) -> "Notice":
        """Build a notice from ``(type, value)`` field pairs of a notice response."""
        try:
            return cls(DbError.parse(fields))
        except ValueError as exc:
            raise PostgresError.parse(exc) from exc

    @property
    def severity(self) -> str:
        return self.error.severity

    @property
    def message(self) -> str:
        return self.error.message

    def __str__(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class CommandComplete:
    """A statement of a simple query has completed, touching ``rows`` rows."""

    rows: int

    @classmethod
    def from_tag(cls, tag: Union[str, bytes]) -> "CommandComplete":
        """Build the message from a command tag such as ``INSERT 0 1``."""
        return cls(extract_rows_affected(tag))


AsyncMessage = Union[Notice, Notification]
SimpleQueryMessage = Union[SimpleQueryRow, CommandComplete]


def _parse_u64(text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        return 0
    number = int(digits)
    return number if number <= _U64_MAX else 0


def extract_rows_affected(tag: Union[str, bytes]) -> int:
    """The row count at the end of a command tag, or 0 if it carries none."""
    if isinstance(tag, (bytes, bytearray, memoryview)):
        try:
            tag = bytes(tag).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PostgresError.parse(exc) from exc
    return _parse_u64(tag.rsplit(" ", 1)[-1])