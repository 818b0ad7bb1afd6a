import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, NoResultFound, OperationalError

from errors import ErrorKind, MediaDBError, classify_error, generate_error_message, raise_db_error
from validation import parse_positive_integer


def validation_error():
    try:
        parse_positive_integer(0)
    except ValidationError as e:
        return e


def test_validation_error():
    kind, message = classify_error(validation_error())

    assert kind == ErrorKind.VALIDATION
    assert message.startswith("Validation error: ")
    assert "greater than 0" in message


@pytest.mark.parametrize(
    "detail",
    [
        "UNIQUE constraint failed: tags.name",
        'duplicate key value violates unique constraint "tags_name_key"',
    ],
)
def test_unique_violation_is_a_conflict(detail):
    error = IntegrityError("INSERT", {}, Exception(detail))

    kind, message = classify_error(error)

    assert kind == ErrorKind.CONFLICT
    assert message == f"Unique constraint violation: {detail}"


def test_other_integrity_error_is_storage():
    error = IntegrityError("INSERT", {}, Exception("FOREIGN KEY constraint failed"))

    kind, message = classify_error(error)

    assert kind == ErrorKind.STORAGE
    assert message == "Database error: FOREIGN KEY constraint failed"


def test_storage_and_not_found():
    assert classify_error(OperationalError("SELECT", {}, Exception("locked")))[0] == ErrorKind.STORAGE
    assert classify_error(NoResultFound("no row"))[0] == ErrorKind.NOT_FOUND


def test_unexpected_error():
    assert generate_error_message(RuntimeError("boom")) == "Unexpected error: boom"


def test_raise_db_error_keeps_the_cause():
    original = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: websites.url"))

    with pytest.raises(MediaDBError) as info:
        raise_db_error(original)

    assert info.value.kind == ErrorKind.CONFLICT
    assert info.value.__cause__ is original
    # Already classified errors pass through unchanged.
    assert classify_error(info.value) == (ErrorKind.CONFLICT, info.value.message)
