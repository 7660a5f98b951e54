import pytest

from pgwire_core.errors import DbError, ErrorKind, PostgresError, SqlState
from pgwire_core.messages import (
    CommandComplete,
    Notice,
    Notification,
    extract_rows_affected,
)


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("INSERT 0 5", 5),
        ("SELECT 3", 3),
        ("UPDATE 42", 42),
        ("DELETE 0", 0),
        ("COPY 7", 7),
    ],
)
def test_rows_from_tag(tag, expected):
    assert extract_rows_affected(tag) == expected


@pytest.mark.parametrize("tag", ["CREATE TABLE", "", "BEGIN", "SELECT -1", "SELECT 1.5"])
def test_tag_without_count_gives_zero(tag):
    assert extract_rows_affected(tag) == 0


def test_count_larger_than_u64_gives_zero():
    assert extract_rows_affected("SELECT " + str(2**64)) == 0
    assert extract_rows_affected("SELECT " + str(2**64 - 1)) == 2**64 - 1


def test_bytes_tag():
    assert extract_rows_affected(b"INSERT 0 12") == 12


def test_invalid_utf8_tag_is_parse_error():
    with pytest.raises(PostgresError) as info:
        extract_rows_affected(b"SELECT \xff")
    assert info.value.kind is ErrorKind.PARSE


def test_command_complete_from_tag():
    assert CommandComplete.from_tag("SELECT 9") == CommandComplete(9)
    assert CommandComplete.from_tag("VACUUM").rows == 0


def test_notification_fields():
    note = Notification(process_id=1234, channel="jobs", payload="run")
    assert note.process_id == 1234
    assert note.channel == "jobs"
    assert note.payload == "run"
    assert note == Notification(1234, "jobs", "run")


def test_notice_from_fields():
    notice = Notice.from_fields(
        [(b"S", b"NOTICE"), (b"C", b"00000"), (b"M", b"table skipped")]
    )
    assert notice.severity == "NOTICE"
    assert notice.message == "table skipped"
    assert notice.error.code == SqlState.SUCCESSFUL_COMPLETION
    assert str(notice) == str(notice.error)


def test_notice_display_matches_error():
    error = DbError(severity="WARNING", code=SqlState.WARNING, message="careful")
    assert str(Notice(error)) == str(error)


def test_notice_missing_message_is_parse_error():
    with pytest.raises(PostgresError) as info:
        Notice.from_fields([("S", "NOTICE"), ("C", "00000")])
    assert info.value.kind is ErrorKind.PARSE
    assert "`M` field missing" in str(info.value)