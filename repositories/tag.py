from typing import Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from models import MediaFile, Tag, media_file_tags
from repositories.base import BaseRepository, Include


class TagRepository(BaseRepository[Tag]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Tag)

    async def get_by_name(self, name: str, include: Include = ()) -> Optional[Tag]:
        return await self.find_unique(self.model.name == name, include=include)

    async def ensure(self, name: str) -> Tag:
        """Return the tag called ``name``, creating it when missing."""
        tag = await self.get_by_name(name)
        if tag is None:
            tag = await self.create(name=name)
        return tag

    def name_contains(self, substring: str):
        return [self.model.name.contains(substring, autoescape=True)]

    async def sample_media_files(self, tag_ids: List[int], sample_size: int) -> Dict[int, List[MediaFile]]:
        """Newest ``sample_size`` media files per tag, keyed by tag id."""
        samples: Dict[int, List[MediaFile]] = {tag_id: [] for tag_id in tag_ids}
        for tag_id in tag_ids:
            stmt = (
                select(MediaFile)
                .join(media_file_tags, media_file_tags.c.media_file_id == MediaFile.id)
                .where(media_file_tags.c.tag_id == tag_id)
                .order_by(MediaFile.id.desc())
                .limit(sample_size)
            )
            result = await self.session.execute(stmt)
            samples[tag_id] = list(result.scalars().all())
        return samples
