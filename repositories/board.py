from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from models import Board
from repositories.base import BaseRepository, Include


class BoardRepository(BaseRepository[Board]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Board)

    async def get_by_name(
        self, website_id: int, name: str, include: Include = ()
    ) -> Optional[Board]:
        """Look up a board through the (name, website_id) unique constraint."""
        return await self.find_unique(
            self.model.website_id == website_id,
            self.model.name == name,
            include=include,
        )
