from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from models import MediaFile, Tag
from repositories.base import BaseRepository


class MediaFileRepository(BaseRepository[MediaFile]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, MediaFile)

    async def get_by_hash(self, hash: str) -> Optional[MediaFile]:
        return await self.find_unique(self.model.hash == hash)

    def untagged(self):
        return [~self.model.tags.any()]

    def with_all_tags(self, tag_ids: List[int]):
        # One EXISTS per tag, so a file must carry every id to match.
        return [self.model.tags.any(Tag.id == tag_id) for tag_id in tag_ids]

    async def replace_tags(self, media_file: MediaFile, tags: List[Tag]) -> MediaFile:
        media_file.tags = tags
        await self.commit()
        return media_file

    async def migrate_tag(self, from_tag: Tag, to_tag: Tag) -> List[MediaFile]:
        """Swap ``from_tag`` for ``to_tag`` on every file carrying it, in one commit."""
        stmt = (
            select(self.model)
            .where(self.model.tags.any(Tag.id == from_tag.id))
            .options(selectinload(self.model.tags))
            .order_by(self.model.id.asc())
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        media_files = list(result.scalars().all())
        for media_file in media_files:
            media_file.tags = [t for t in media_file.tags if t.id != from_tag.id]
            if all(t.id != to_tag.id for t in media_file.tags):
                media_file.tags.append(to_tag)
        await self.commit()
        return media_files
