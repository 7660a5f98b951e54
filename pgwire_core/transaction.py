"""Transactions, savepoints and the builder that starts them."""

from __future__ import annotations

import abc
import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional

from .errors import PostgresError

__all__ = [
    "GenericClient",
    "IsolationLevel",
    "TransactionBuilder",
    "Transaction",
]


class GenericClient(abc.ABC):
    """The operations shared by a client and a transaction."""

    @abc.abstractmethod
    async def execute(self, statement: Any, params: Sequence[Any] = ()) -> int:
        """Execute a statement and return the number of rows it touched."""

    @abc.abstractmethod
    async def query(self, statement: Any, params: Sequence[Any] = ()) -> list:
        """Execute a statement and return the rows it produced."""

    @abc.abstractmethod
    async def prepare(self, query: str) -> Any:
        """Prepare a statement."""

    @abc.abstractmethod
    async def simple_query(self, query: str) -> list:
        """Run one or more statements with the simple query protocol."""

    @abc.abstractmethod
    async def batch_execute(self, query: str) -> None:
        """Run one or more statements, discarding their results."""

    @abc.abstractmethod
    async def transaction(self) -> "Transaction":
        """Begin a transaction."""

    @property
    @abc.abstractmethod
    def client(self) -> Any:
        """The client that carries out the work."""


class IsolationLevel(enum.Enum):
    """The isolation level of a transaction."""

    READ_UNCOMMITTED = "READ UNCOMMITTED"
    READ_COMMITTED = "READ COMMITTED"
    REPEATABLE_READ = "REPEATABLE READ"
    SERIALIZABLE = "SERIALIZABLE"


class TransactionBuilder:
    """Collects the settings of a transaction and then starts it."""

    def __init__(self, client: Any) -> None:
        self._client = client
        self._isolation_level: Optional[IsolationLevel] = None
        self._read_only: Optional[bool] = None
        self._deferrable: Optional[bool] = None

    def isolation_level(self, level: IsolationLevel) -> "TransactionBuilder":
        """Set the isolation level."""
        self._isolation_level = IsolationLevel(level)
        return self

    def read_only(self, read_only: bool) -> "TransactionBuilder":
        """Set the access mode."""
        self._read_only = bool(read_only)
        return self

    def deferrable(self, deferrable: bool) -> "TransactionBuilder":
        """Set whether the transaction is deferrable."""
        self._deferrable = bool(deferrable)
        return self

    def query(self) -> str:
        """The statement that starts the transaction."""
        parts = []
        if self._isolation_level is not None:
            parts.append(f" ISOLATION LEVEL {self._isolation_level.value}")
        if self._read_only is not None:
            parts.append(" READ ONLY" if self._read_only else " READ WRITE")
        if self._deferrable is not None:
            parts.append(" DEFERRABLE" if self._deferrable else " NOT DEFERRABLE")
        return "START TRANSACTION" + ",".join(parts)

    async def start(self) -> "Transaction":
        """Begin the transaction; it rolls back unless committed."""
        await self._client.batch_execute(self.query())
        return Transaction(self._client)


@dataclass(frozen=True)
class _Savepoint:
    name: str
    depth: int


class Transaction(GenericClient):
    """A database transaction, or a savepoint nested inside one.

    Used as an async context manager, it is rolled back on exit unless it
    was committed or rolled back before.
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._savepoint: Optional[_Savepoint] = None
        self._done = False

    @property
    def client(self) -> Any:
        """The client the transaction runs on."""
        return self._client

    @property
    def savepoint_name(self) -> Optional[str]:
        """The savepoint's name for a nested transaction, else None."""
        return self._savepoint.name if self._savepoint is not None else None

    @property
    def is_done(self) -> bool:
        """Whether the transaction has been committed or rolled back."""
        return self._done

    def _finish(self) -> None:
        if self._done:
            raise RuntimeError("transaction has already finished")
        self._done = True

    def _rollback_query(self) -> str:
        if self._savepoint is not None:
            return f"ROLLBACK TO {self._savepoint.name}"
        return "ROLLBACK"

    async def commit(self) -> None:
        """Commit the changes made in the transaction."""
        self._finish()
        if self._savepoint is not None:
            query = f"RELEASE {self._savepoint.name}"
        else:
            query = "COMMIT"
        await self._client.batch_execute(query)

    async def rollback(self) -> None:
        """Discard the changes made in the transaction."""
        self._finish()
        await self._client.batch_execute(self._rollback_query())

    async def transaction(self) -> "Transaction":
        """Begin a nested transaction through a savepoint named by depth."""
        return await self._nested(None)

    async def savepoint(self, name: str) -> "Transaction":
        """Begin a nested transaction through a savepoint called ``name``."""
        return await self._nested(str(name))

    async def _nested(self, name: Optional[str]) -> "Transaction":
        if self._done:
            raise RuntimeError("transaction has already finished")
        depth = (self._savepoint.depth if self._savepoint is not None else 0) + 1
        if name is None:
            name = f"sp_{depth}"
        await self.batch_execute(f"SAVEPOINT {name}")
        nested = Transaction(self._client)
        nested._savepoint = _Savepoint(name, depth)
        return nested

    async def prepare(self, query: str) -> Any:
        return await self._client.prepare(query)

    async def query(self, statement: Any, params: Sequence[Any] = ()) -> list:
        return await self._client.query(statement, params)

    async def execute(self, statement: Any, params: Sequence[Any] = ()) -> int:
        return await self._client.execute(statement, params)

    async def simple_query(self, query: str) -> list:
        return await self._client.simple_query(query)

    async def batch_execute(self, query: str) -> None:
        await self._client.batch_execute(query)

    async def __aenter__(self) -> "Transaction":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if not self._done:
            self._done = True
            try:
                await self._client.batch_execute(self._rollback_query())
            except PostgresError:
                if exc_type is None:
                    raise
        return False

    def __repr__(self) -> str:
        return f"Transaction(savepoint={self.savepoint_name!r}, done={self._done})"