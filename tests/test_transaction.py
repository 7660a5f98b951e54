import pytest

from pgwire_core.errors import PostgresError
from pgwire_core.statement import Statement
from pgwire_core.transaction import (
    GenericClient,
    IsolationLevel,
    Transaction,
    TransactionBuilder,
)


class FakeClient:
    def __init__(self, fail_on=()):
        self.batches = []
        self.calls = []
        self.fail_on = set(fail_on)

    async def batch_execute(self, query):
        self.batches.append(query)
        if query in self.fail_on:
            raise PostgresError.closed()

    async def query(self, statement, params):
        self.calls.append(("query", statement, tuple(params)))
        return ["row-a", "row-b"]

    async def execute(self, statement, params):
        self.calls.append(("execute", statement, tuple(params)))
        return 7

    async def prepare(self, query):
        self.calls.append(("prepare", query))
        return Statement(name="s0")

    async def simple_query(self, query):
        self.calls.append(("simple_query", query))
        return ["message"]


def test_default_builder_query():
    assert TransactionBuilder(FakeClient()).query() == "START TRANSACTION"


@pytest.mark.parametrize(
    "level,text",
    [
        (IsolationLevel.READ_UNCOMMITTED, "READ UNCOMMITTED"),
        (IsolationLevel.READ_COMMITTED, "READ COMMITTED"),
        (IsolationLevel.REPEATABLE_READ, "REPEATABLE READ"),
        (IsolationLevel.SERIALIZABLE, "SERIALIZABLE"),
    ],
)
def test_builder_isolation_level(level, text):
    query = TransactionBuilder(FakeClient()).isolation_level(level).query()
    assert query == "START TRANSACTION ISOLATION LEVEL " + text


def test_builder_all_options_joined_with_commas():
    query = (
        TransactionBuilder(FakeClient())
        .isolation_level(IsolationLevel.SERIALIZABLE)
        .read_only(True)
        .deferrable(True)
        .query()
    )
    assert query == "START TRANSACTION ISOLATION LEVEL SERIALIZABLE, READ ONLY, DEFERRABLE"


def test_builder_negative_options_without_isolation():
    query = TransactionBuilder(FakeClient()).read_only(False).deferrable(False).query()
    assert query == "START TRANSACTION READ WRITE, NOT DEFERRABLE"


@pytest.mark.asyncio
async def test_start_then_commit():
    client = FakeClient()
    tx = await TransactionBuilder(client).read_only(True).start()
    assert tx.client is client
    assert isinstance(tx, GenericClient)
    await tx.commit()
    assert client.batches == ["START TRANSACTION READ ONLY", "COMMIT"]
    assert tx.is_done


@pytest.mark.asyncio
async def test_start_failure_propagates():
    client = FakeClient(fail_on={"START TRANSACTION"})
    with pytest.raises(PostgresError) as info:
        await TransactionBuilder(client).start()
    assert info.value.is_closed()


@pytest.mark.asyncio
async def test_rollback():
    client = FakeClient()
    tx = Transaction(client)
    await tx.rollback()
    assert client.batches == ["ROLLBACK"]


@pytest.mark.asyncio
async def test_finished_transaction_cannot_finish_again():
    client = FakeClient()
    tx = Transaction(client)
    await tx.commit()
    with pytest.raises(RuntimeError):
        await tx.rollback()
    with pytest.raises(RuntimeError):
        await tx.transaction()
    assert client.batches == ["COMMIT"]


@pytest.mark.asyncio
async def test_nested_savepoints_named_by_depth():
    client = FakeClient()
    outer = Transaction(client)
    first = await outer.transaction()
    second = await first.transaction()
    assert first.savepoint_name == "sp_1"
    assert second.savepoint_name == "sp_2"
    await second.commit()
    await first.rollback()
    assert client.batches == [
        "SAVEPOINT sp_1",
        "SAVEPOINT sp_2",
        "RELEASE sp_2",
        "ROLLBACK TO sp_1",
    ]


@pytest.mark.asyncio
async def test_named_savepoint():
    client = FakeClient()
    nested = await Transaction(client).savepoint("mark")
    assert nested.savepoint_name == "mark"
    await nested.commit()
    assert client.batches == ["SAVEPOINT mark", "RELEASE mark"]


@pytest.mark.asyncio
async def test_context_manager_rolls_back_unfinished():
    client = FakeClient()
    async with Transaction(client) as tx:
        await tx.batch_execute("SELECT 1")
    assert client.batches == ["SELECT 1", "ROLLBACK"]
    assert tx.is_done


@pytest.mark.asyncio
async def test_context_manager_after_commit_does_nothing_more():
    client = FakeClient()
    async with Transaction(client) as tx:
        await tx.commit()
    assert client.batches == ["COMMIT"]


@pytest.mark.asyncio
async def test_context_manager_rolls_back_savepoint_on_error():
    client = FakeClient()
    outer = Transaction(client)
    with pytest.raises(KeyError):
        async with await outer.savepoint("inner"):
            raise KeyError("boom")
    assert client.batches == ["SAVEPOINT inner", "ROLLBACK TO inner"]


@pytest.mark.asyncio
async def test_failed_rollback_does_not_hide_original_error():
    client = FakeClient(fail_on={"ROLLBACK"})
    with pytest.raises(ValueError):
        async with Transaction(client):
            raise ValueError("original")
    assert client.batches == ["ROLLBACK"]


@pytest.mark.asyncio
async def test_failed_rollback_raises_without_other_error():
    client = FakeClient(fail_on={"ROLLBACK"})
    with pytest.raises(PostgresError) as info:
        async with Transaction(client):
            pass
    assert info.value.is_closed()


@pytest.mark.asyncio
async def test_operations_forward_to_client():
    client = FakeClient()
    tx = Transaction(client)
    assert await tx.query("SELECT $1", [1]) == ["row-a", "row-b"]
    assert await tx.execute("DELETE FROM t", []) == 7
    statement = await tx.prepare("SELECT 2")
    assert statement.name == "s0"
    assert await tx.simple_query("SELECT 3") == ["message"]
    assert client.calls == [
        ("query", "SELECT $1", (1,)),
        ("execute", "DELETE FROM t", ()),
        ("prepare", "SELECT 2"),
        ("simple_query", "SELECT 3"),
    ]