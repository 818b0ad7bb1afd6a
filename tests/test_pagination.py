"""Tests for the generic paginated query engine."""

import math
from contextlib import asynccontextmanager

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import OperationalError

from errors import ErrorKind
from services.pagination import paginate, validate_pagination_params


class FakeRepository:
    """In-memory stand-in that records every call the engine makes."""

    def __init__(self, rows, fail_with=None):
        self.rows = rows
        self.fail_with = fail_with
        self.calls = []
        self.in_snapshot = False

    @asynccontextmanager
    async def snapshot(self):
        self.in_snapshot = True
        try:
            yield
        finally:
            self.in_snapshot = False

    async def find_many(self, where=(), include=(), order_by=(), skip=None, take=None):
        self.calls.append({"op": "find_many", "where": where, "include": include,
                           "order_by": order_by, "skip": skip, "take": take,
                           "in_snapshot": self.in_snapshot})
        if self.fail_with is not None:
            raise self.fail_with
        return self.rows[skip:skip + take]

    async def count(self, where=()):
        self.calls.append({"op": "count", "where": where, "in_snapshot": self.in_snapshot})
        return len(self.rows)


@pytest.mark.parametrize("page", [0, -3, "2", 1.5, True, None])
async def test_invalid_page_never_touches_storage(page):
    repo = FakeRepository(list(range(10)))
    result = await paginate(repo, page=page, page_size=5)

    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION
    assert result.data is None
    assert result.total == 0
    assert result.message.startswith("Validation error")
    assert repo.calls == []


@pytest.mark.parametrize("page_size", [0, -1, "25"])
async def test_invalid_page_size_never_touches_storage(page_size):
    repo = FakeRepository(list(range(10)))
    result = await paginate(repo, page=1, page_size=page_size)

    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION
    assert repo.calls == []


async def test_invalid_integer_page_is_echoed_back():
    result = await paginate(FakeRepository([]), page=-3, page_size=10)
    assert result.page == -3
    assert result.page_size == 10


async def test_queries_run_inside_one_snapshot_with_passthrough_arguments():
    repo = FakeRepository(list(range(10)))
    where, include, order_by = ["w"], ["i"], ["o"]

    result = await paginate(repo, where, page=2, page_size=3, include=include, order_by=order_by)

    assert result.success is True
    assert result.data == [3, 4, 5]
    assert result.total == 10
    assert result.page == 2
    assert result.page_size == 3
    assert result.message == "Data retrieved successfully"

    find_many, count = repo.calls
    assert find_many == {"op": "find_many", "where": where, "include": include,
                         "order_by": order_by, "skip": 3, "take": 3, "in_snapshot": True}
    assert count == {"op": "count", "where": where, "in_snapshot": True}


async def test_page_beyond_range_is_empty_with_true_total():
    repo = FakeRepository(list(range(7)))
    first = await paginate(repo, page=1, page_size=5)
    beyond = await paginate(repo, page=4, page_size=5)

    assert beyond.success is True
    assert beyond.data == []
    assert beyond.total == first.total == 7


async def test_storage_fault_returns_failure_without_partial_data():
    repo = FakeRepository(list(range(5)), fail_with=OperationalError("SELECT", {}, Exception("disk I/O error")))
    result = await paginate(repo, page=1, page_size=2)

    assert result.success is False
    assert result.data is None
    assert result.total == 0
    assert result.page == 1
    assert result.page_size == 2
    assert result.error_kind == ErrorKind.STORAGE
    assert "disk I/O error" in result.message


def test_validate_pagination_params():
    assert validate_pagination_params(3, 25) == (3, 25)
    with pytest.raises(ValidationError):
        validate_pagination_params(1, 0)


async def test_ten_rows_with_default_page_size(tag_service):
    for i in range(10):
        await tag_service.create_tag(f"tag-{i:02d}")

    result = await tag_service.get_paginated_tags(page=1, page_size=25)

    assert result.success is True
    assert len(result.data) == 10
    assert result.total == 10


@pytest.mark.parametrize("page_size", [1, 3, 4, 23, 50])
async def test_pages_add_up_to_total(tag_service, page_size):
    for i in range(23):
        await tag_service.create_tag(f"tag-{i:02d}")

    first = await tag_service.get_paginated_tags(page=1, page_size=page_size)
    seen = []
    for page in range(1, math.ceil(first.total / page_size) + 1):
        result = await tag_service.get_paginated_tags(page=page, page_size=page_size)
        assert len(result.data) <= page_size
        seen.extend(tag.name for tag in result.data)

    assert len(seen) == first.total == 23
    assert seen == sorted(seen)  # default tag order is by name


@pytest.mark.parametrize("page, page_size", [(10**20, 5), (1, 2**63), (2**62, 10)])
async def test_pages_beyond_sql_integer_range_are_rejected(page, page_size):
    repo = FakeRepository(list(range(10)))
    result = await paginate(repo, page=page, page_size=page_size)

    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION
    assert repo.calls == []


async def test_huge_page_against_sqlite_is_a_validation_error(tag_service):
    await tag_service.create_tag("only")

    result = await tag_service.get_paginated_tags(page=10**20, page_size=25)

    assert result.success is False
    assert result.error_kind == ErrorKind.VALIDATION
