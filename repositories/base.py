"""Shared async repository utilities for SQLAlchemy models."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement
from sqlalchemy.sql.base import ExecutableOption

from database import Base
from errors import raise_db_error

T = TypeVar("T", bound=Base)  # Generic model type constrained to SQLAlchemy Base.

Where = Sequence[ColumnElement[bool]]
Include = Sequence[ExecutableOption]
OrderBy = Sequence[ColumnElement[Any]]


class BaseRepository(Generic[T]):
    """Generic async repository with the find/count/write primitives for a model.

    ``find_many``, ``count`` and ``snapshot`` make up the capability the
    pagination engine needs; see ``services.pagination.PageableRepository``.
    """

    def __init__(self, session: AsyncSession, model: Type[T]):
        """Store the async DB session and the model class this repository serves."""
        self.session = session
        self.model = model

    @asynccontextmanager
    async def snapshot(self) -> AsyncIterator[None]:
        """Run the enclosed statements inside a single transaction.

        Joins the session's current transaction if one is already open,
        otherwise begins one and commits it on exit.
        """
        if self.session.in_transaction():
            yield
        else:
            async with self.session.begin():
                yield

    async def find_many(
        self,
        where: Where = (),
        include: Include = (),
        order_by: OrderBy = (),
        skip: Optional[int] = None,
        take: Optional[int] = None,
    ) -> List[T]:
        stmt = select(self.model).where(*where).options(*include).order_by(*order_by)
        # Re-read rows already in the identity map so eager loads are current.
        stmt = stmt.execution_options(populate_existing=True)
        if skip:
            stmt = stmt.offset(skip)
        if take is not None:
            stmt = stmt.limit(take)
        result = await self.session.execute(stmt)
        # `scalars()` yields model instances; `all()` collects them.
        return list(result.scalars().all())

    async def count(self, where: Where = ()) -> int:
        stmt = select(func.count()).select_from(self.model).where(*where)
        return await self.session.scalar(stmt) or 0

    async def get_by_id(self, id: int, include: Include = ()) -> Optional[T]:
        """Fetch a single model instance by primary key, if it exists."""
        if include:
            return await self.find_unique(self.model.id == id, include=include)
        # `session.get` is optimized for primary-key lookup.
        return await self.session.get(self.model, id)

    async def find_unique(self, *where: ColumnElement[bool], include: Include = ()) -> Optional[T]:
        stmt = (
            select(self.model)
            .where(*where)
            .options(*include)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def commit(self) -> None:
        """Commit, rolling back first if the flush fails so the session stays usable.

        Failures are re-raised as ``MediaDBError`` with their kind attached.
        """
        try:
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            raise_db_error(e)

    async def create(self, **values: Any) -> T:
        instance = self.model(**values)
        self.session.add(instance)
        await self.commit()
        return instance

    async def update(self, instance: T, **values: Any) -> T:
        for key, value in values.items():
            setattr(instance, key, value)
        await self.commit()
        return instance

    async def delete(self, instance: T) -> T:
        # Awaitable so cascades can load unloaded relationships first.
        await self.session.delete(instance)
        await self.commit()
        return instance
