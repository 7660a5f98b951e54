import dataclasses

import pytest

from pgwire_core.statement import Column, Statement


def test_sequences_are_stored_as_tuples():
    columns = [Column("id", "int4"), Column("name", "text")]
    statement = Statement("s1", ["int4"], columns)
    assert statement.params == ("int4",)
    assert statement.columns == tuple(columns)


def test_defaults_are_empty():
    statement = Statement("s2")
    assert statement.params == ()
    assert statement.columns == ()


def test_statement_is_immutable():
    statement = Statement("s3")
    with pytest.raises(dataclasses.FrozenInstanceError):
        statement.name = "other"
    assert statement.name == "s3"


def test_input_list_changes_do_not_leak():
    params = ["int4"]
    statement = Statement("s4", params)
    params.append("text")
    assert statement.params == ("int4",)


def test_repr_lists_name_params_and_columns():
    statement = Statement("s0", ["int4"], [Column("id", "int4")])
    assert repr(statement) == (
        "Statement(name='s0', params=['int4'], columns=[Column(name='id', type='int4')])"
    )


def test_column_fields():
    column = Column("total", 20)
    assert column.name == "total"
    assert column.type == 20


def test_equal_statements_compare_equal():
    first = Statement("s5", ["int4"], [Column("a", "int4")])
    second = Statement("s5", ("int4",), (Column("a", "int4"),))
    assert first == second