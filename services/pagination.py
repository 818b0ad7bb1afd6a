"""Generic paginated query engine shared by the per-entity services."""

import logging
from typing import Any, AsyncContextManager, List, Optional, Protocol, Tuple

from pydantic import ValidationError

from constants import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from errors import ErrorKind, classify_error
from repositories.base import Include, OrderBy, Where
from results import PaginatedResult
from validation import MAX_SQL_INTEGER, parse_positive_integer, parse_row_offset

logger = logging.getLogger(__name__)


class PageableRepository(Protocol):
    """What ``paginate`` needs from a repository."""

    def snapshot(self) -> AsyncContextManager[Any]: ...

    async def find_many(
        self,
        where: Where = (),
        include: Include = (),
        order_by: OrderBy = (),
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> List[Any]: ...

    async def count(self, where: Where = ()) -> int: ...


def validate_pagination_params(page: Any, page_size: Any) -> Tuple[int, int]:
    """Return ``(page, page_size)`` or raise ``ValidationError``.

    The row offset the pair implies must fit a SQL integer as well.
    """
    page_num, num_per_page = parse_positive_integer(page), parse_positive_integer(page_size)
    parse_row_offset((page_num - 1) * num_per_page)
    return page_num, num_per_page


def _echo(value: Any) -> Optional[int]:
    # Report the caller's value back when it is an int a SQL integer can hold.
    if isinstance(value, int) and not isinstance(value, bool) and abs(value) <= MAX_SQL_INTEGER:
        return value
    return None


async def paginate(
    repository: PageableRepository,
    where: Where = (),
    *,
    page: Any = DEFAULT_PAGE_NUMBER,
    page_size: Any = DEFAULT_PAGE_SIZE,
    include: Include = (),
    order_by: OrderBy = (),
) -> PaginatedResult:
    """Fetch one page of rows plus the total match count.

    Both queries run inside ``repository.snapshot()`` so the page and the
    total see the same data. Nothing is held between calls, so the total can
    change from one page request to the next.
    """
    try:
        page_num, num_per_page = validate_pagination_params(page, page_size)
    except ValidationError as e:
        logger.warning("Rejected pagination parameters page=%r page_size=%r", page, page_size)
        return error_page(e, page, page_size)

    try:
        async with repository.snapshot():
            data = await repository.find_many(
                where,
                include=include,
                order_by=order_by,
                skip=(page_num - 1) * num_per_page,
                take=num_per_page,
            )
            total = await repository.count(where)
    except Exception as e:
        logger.warning("Paginated query failed: %s", e)
        return error_page(e, page_num, num_per_page)

    return PaginatedResult(
        success=True,
        data=data,
        message="Data retrieved successfully",
        total=total,
        page=page_num,
        page_size=num_per_page,
    )


def _failed_page(kind: ErrorKind, message: str, page: Any, page_size: Any) -> PaginatedResult:
    # No partial data is ever returned alongside a failure.
    return PaginatedResult(
        success=False, message=message, error_kind=kind,
        total=0, page=_echo(page), page_size=_echo(page_size),
    )


def error_page(error: BaseException, page: Any, page_size: Any) -> PaginatedResult:
    kind, message = classify_error(error)
    return _failed_page(kind, message, page, page_size)


def not_found_page(message_prefix: str, page: Any, page_size: Any) -> PaginatedResult:
    """Envelope for a paginated listing whose parent record does not exist."""
    return _failed_page(ErrorKind.NOT_FOUND, f"{message_prefix} not found.", page, page_size)
