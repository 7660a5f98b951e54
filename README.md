# pgwire_core

Building blocks for an asynchronous PostgreSQL client written on `asyncio`.
It has no dependencies outside the standard library.

## Modules

- `pgwire_core.errors`: `SqlState` (every standard SQLSTATE code as a class
  attribute, such as `SqlState.UNDEFINED_TABLE`; `SqlState.from_code` for any
  code), `Severity`, `OriginalPosition` and `InternalPosition`, `DbError`
  parsed from the `(type, value)` fields of a server error or notice, and
  `PostgresError`, the single exception raised for every failure, with an
  `ErrorKind` telling what went wrong.
- `pgwire_core.statement`: prepared `Statement` objects and their `Column`s.
- `pgwire_core.row`: `Row` and `SimpleQueryRow`, with lookup by position or
  by column name (exact match first, then ASCII case-insensitive), and
  `column_index` for resolving an index yourself.
- `pgwire_core.messages`: `Notification`, `Notice`, `CommandComplete`, and
  `extract_rows_affected` for command tags such as `INSERT 0 5`.
- `pgwire_core.net`: `TcpHost`, `UnixHost`, `KeepaliveConfig`,
  `unix_socket_path` and `connect_socket`, which tries each resolved address
  in turn, applies an optional connect timeout, sets `TCP_NODELAY` and
  returns an `asyncio` stream reader and writer.
- `pgwire_core.transaction`: the `GenericClient` interface,
  `TransactionBuilder`, `IsolationLevel`, and `Transaction`, with nested
  transactions through savepoints.

## Installation

```
pip install .
```

## Errors

```python
from pgwire_core.errors import PostgresError, SqlState

fields = [("S", "ERROR"), ("C", "42P01"), ("M", 'relation "foo" does not exist')]
error = PostgresError.db(fields)

assert error.code() == SqlState.UNDEFINED_TABLE
print(error)  # db error: ERROR: relation "foo" does not exist
```

Fields that are missing or malformed (no `S`, `C` or `M`, a non-numeric
`P`, `p` or `L`, a `p` without `q`) make `PostgresError.db` return an error of
kind `ErrorKind.PARSE` instead.

## Rows and command tags

```python
from pgwire_core.messages import extract_rows_affected
from pgwire_core.row import Row, SimpleColumn, SimpleQueryRow
from pgwire_core.statement import Column, Statement

statement = Statement("s0", columns=[Column("id", "int4")])
row = Row(statement, [b"1"])
assert row.get_raw("ID") == b"1"

simple = SimpleQueryRow([SimpleColumn("name")], [b"alice"])
assert simple.get(0) == "alice"

assert extract_rows_affected("INSERT 0 5") == 5
```

An unknown column raises `PostgresError` of kind `ErrorKind.COLUMN`.

## Connecting a socket

```python
from pgwire_core.net import KeepaliveConfig, TcpHost, connect_socket

reader, writer = await connect_socket(
    TcpHost("localhost"), 5432, connect_timeout=5.0, keepalive=KeepaliveConfig(idle=60)
)
```

A `UnixHost(directory)` connects to `directory/.s.PGSQL.<port>`.

## Transactions

Any object with async `batch_execute`, `query`, `execute`, `prepare` and
`simple_query` methods can carry a transaction:

```python
from pgwire_core.transaction import IsolationLevel, TransactionBuilder

builder = (
    TransactionBuilder(client)
    .isolation_level(IsolationLevel.SERIALIZABLE)
    .read_only(True)
    .deferrable(True)
)
print(builder.query())
# START TRANSACTION ISOLATION LEVEL SERIALIZABLE, READ ONLY, DEFERRABLE

async with await builder.start() as tx:
    await tx.execute("INSERT INTO foo (id) VALUES ($1)", [1])
    async with await tx.savepoint("inner") as inner:
        await inner.batch_execute("DELETE FROM foo")
        await inner.rollback()
    await tx.commit()
```

A transaction that is left without `commit()` or `rollback()` is rolled back
when its `async with` block exits. `transaction()` opens a nested savepoint
named `sp_<depth>`.

## What this package does not do

It is not a complete driver. It does not encode or decode protocol messages,
perform the startup and authentication exchange, negotiate TLS, or run a
connection that sends queries and reads their results. `Transaction` and
`TransactionBuilder` only issue statements through the client object you give
them. There is no command-line tool.

## Tests

```
pip install ".[test]"
pytest
```