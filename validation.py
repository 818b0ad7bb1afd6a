"""Runtime checks for externally supplied ids, names and page parameters.

All parsers raise ``pydantic.ValidationError``; callers fold that into an
envelope through ``errors.classify_error``.
"""

from typing import Annotated, Any, List

from pydantic import Field, TypeAdapter

# Largest value a 64-bit SQL INTEGER column or LIMIT/OFFSET accepts.
MAX_SQL_INTEGER = 2**63 - 1

# strict=True rejects "3", 3.0 and True rather than coercing them.
PositiveInteger = Annotated[int, Field(strict=True, gt=0, le=MAX_SQL_INTEGER)]
RowOffset = Annotated[int, Field(strict=True, ge=0, le=MAX_SQL_INTEGER)]
NonEmptyString = Annotated[str, Field(strict=True, min_length=1)]
NonEmptyArrayOfPositiveIntegers = Annotated[List[PositiveInteger], Field(min_length=1)]

_positive_integer = TypeAdapter(PositiveInteger)
_non_empty_string = TypeAdapter(NonEmptyString)
_positive_integer_list = TypeAdapter(NonEmptyArrayOfPositiveIntegers)
_row_offset = TypeAdapter(RowOffset)


def parse_positive_integer(value: Any) -> int:
    return _positive_integer.validate_python(value)


def parse_non_empty_string(value: Any) -> str:
    return _non_empty_string.validate_python(value)


def parse_positive_integer_list(value: Any) -> List[int]:
    return _positive_integer_list.validate_python(value)


def parse_row_offset(value: Any) -> int:
    return _row_offset.validate_python(value)
