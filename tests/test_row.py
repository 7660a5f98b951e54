import pytest

from pgwire_core.errors import ErrorKind, PostgresError
from pgwire_core.row import Row, SimpleColumn, SimpleQueryRow, column_index
from pgwire_core.statement import Column, Statement


@pytest.fixture
def statement():
    return Statement("s0", [], [Column("id", "int4"), Column("Name", "text")])


def test_column_index_by_position():
    assert column_index(["a", "b"], 1) == 1


def test_column_index_out_of_range():
    assert column_index(["a", "b"], 2) is None
    assert column_index(["a", "b"], -1) is None


def test_column_index_exact_match_first():
    assert column_index(["foo", "FOO"], "FOO") == 1


def test_column_index_ascii_case_insensitive_fallback():
    assert column_index(["Foo", "bar"], "BAR") == 1


def test_column_index_non_ascii_case_not_folded():
    assert column_index(["É"], "é") is None


def test_column_index_missing_name():
    assert column_index(["a"], "b") is None


def test_column_index_rejects_other_types():
    with pytest.raises(TypeError):
        column_index(["a"], 1.5)


def test_row_len_and_columns(statement):
    row = Row(statement, [b"1", b"bob"])
    assert len(row) == 2
    assert [c.name for c in row.columns] == ["id", "Name"]


def test_row_get_raw_by_index_and_name(statement):
    row = Row(statement, [b"1", b"bob"])
    assert row.get_raw(0) == b"1"
    assert row.get_raw("name") == b"bob"
    assert row.get_raw("Name") == row.get_raw(1)


def test_row_get_raw_null(statement):
    row = Row(statement, [None, b"bob"])
    assert row.get_raw("id") is None


def test_row_get_raw_missing_column(statement):
    row = Row(statement, [b"1", b"bob"])
    with pytest.raises(PostgresError) as info:
        row.get_raw("missing")
    assert info.value.kind is ErrorKind.COLUMN
    assert str(info.value) == "invalid column `missing`"


def test_row_get_raw_out_of_range_index(statement):
    row = Row(statement, [b"1", b"bob"])
    with pytest.raises(PostgresError) as info:
        row.get_raw(5)
    assert info.value.column_name == "5"


def test_row_repr_lists_columns(statement):
    row = Row(statement, [b"1", b"bob"])
    assert repr(row).startswith("Row(columns=[")
    assert "'Name'" in repr(row)


def test_empty_row():
    row = Row(Statement("s1"))
    assert len(row) == 0


def test_simple_row_get():
    row = SimpleQueryRow(
        [SimpleColumn("greeting"), SimpleColumn("missing")],
        ["イロハ".encode(), None],
    )
    assert row.get("greeting") == "イロハ"
    assert row.get(1) is None
    assert len(row) == 2


def test_simple_row_case_insensitive_name():
    row = SimpleQueryRow([SimpleColumn("Value")], [b"hello world"])
    assert row.get("VALUE") == "hello world"


def test_simple_row_invalid_utf8():
    row = SimpleQueryRow([SimpleColumn("a"), SimpleColumn("b")], [b"ok", b"\xff\xfe"])
    with pytest.raises(PostgresError) as info:
        row.get("b")
    assert info.value.kind is ErrorKind.FROM_SQL
    assert info.value.index == 1


def test_simple_row_missing_column():
    row = SimpleQueryRow([SimpleColumn("a")], [b"x"])
    with pytest.raises(PostgresError) as info:
        row.get("z")
    assert info.value.kind is ErrorKind.COLUMN