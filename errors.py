"""Translate validation and database exceptions into envelope messages."""

import enum
from typing import NoReturn, Tuple

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    STORAGE = "storage"
    UNEXPECTED = "unexpected"


class MediaDBError(Exception):
    """An error already reduced to a kind and a readable message."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNEXPECTED):
        super().__init__(message)
        self.message = message
        self.kind = kind


def _validation_detail(error: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
        for err in error.errors()
    )


def _is_unique_violation(error: IntegrityError) -> bool:
    detail = str(error.orig).lower()
    return "unique" in detail or "duplicate key" in detail


def classify_error(error: BaseException) -> Tuple[ErrorKind, str]:
    if isinstance(error, MediaDBError):
        return error.kind, error.message
    if isinstance(error, ValidationError):
        return ErrorKind.VALIDATION, f"Validation error: {_validation_detail(error)}"
    if isinstance(error, IntegrityError):
        if _is_unique_violation(error):
            return ErrorKind.CONFLICT, f"Unique constraint violation: {error.orig}"
        return ErrorKind.STORAGE, f"Database error: {error.orig}"
    if isinstance(error, NoResultFound):
        return ErrorKind.NOT_FOUND, f"Record not found: {error}"
    if isinstance(error, SQLAlchemyError):
        return ErrorKind.STORAGE, f"Database error: {error}"
    # Anything else, including failures raised by our own code paths.
    return ErrorKind.UNEXPECTED, f"Unexpected error: {error}"


def generate_error_message(error: BaseException) -> str:
    return classify_error(error)[1]


def raise_db_error(error: BaseException) -> NoReturn:
    """Re-raise ``error`` as a MediaDBError with the standard message."""
    kind, message = classify_error(error)
    raise MediaDBError(message, kind) from error
