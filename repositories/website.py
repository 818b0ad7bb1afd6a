from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from models import Website
from repositories.base import BaseRepository


class WebsiteRepository(BaseRepository[Website]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Website)

    async def get_by_url(self, url: str) -> Optional[Website]:
        return await self.find_unique(self.model.url == url)
