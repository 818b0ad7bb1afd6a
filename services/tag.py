import logging
from typing import Any

from sqlalchemy.orm import selectinload

from constants import (
    DEFAULT_MEDIA_FILE_SAMPLE_SIZE,
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TAG_INCLUDES,
    DEFAULT_TAG_ORDER_BY,
)
from models import Tag
from repositories.base import Include, OrderBy, Where
from repositories.tag import TagRepository
from results import (
    CreateResult,
    DeleteResult,
    PaginatedResult,
    RetrieveResult,
    UpdateResult,
    creation_error,
    creation_found_preexisting,
    creation_successful,
    deletion_error,
    deletion_not_found,
    deletion_successful,
    retrieval_error,
    retrieval_not_found,
    retrieval_successful,
    update_error,
    update_not_found,
    update_successful,
)
from services.pagination import error_page, paginate
from validation import parse_non_empty_string, parse_positive_integer

logger = logging.getLogger(__name__)

WITH_MEDIA_FILES = (selectinload(Tag.media_files),)


class TagService:
    def __init__(self, repository: TagRepository):
        self.repository = repository

    async def create_tag(self, name: str) -> CreateResult:
        try:
            valid_name = parse_non_empty_string(name)
            pre_existing = await self.repository.get_by_name(valid_name)
            if pre_existing:
                return creation_found_preexisting(pre_existing, "Tag")
            tag = await self.repository.create(name=valid_name)
            return creation_successful(tag, "Tag")
        except Exception as e:
            logger.warning("Could not create tag %r: %s", name, e)
            return creation_error(e)

    async def get_tag_by_id(self, tag_id: Any, include_media_files: bool = False) -> RetrieveResult:
        try:
            tag = await self.repository.get_by_id(
                parse_positive_integer(tag_id),
                include=WITH_MEDIA_FILES if include_media_files else (),
            )
            if tag:
                return retrieval_successful(tag, "Tag")
            return retrieval_not_found("Tag")
        except Exception as e:
            logger.warning("Could not retrieve tag %r: %s", tag_id, e)
            return retrieval_error(e)

    async def get_tag_by_name(self, name: str, include_media_files: bool = False) -> RetrieveResult:
        try:
            tag = await self.repository.get_by_name(
                parse_non_empty_string(name),
                include=WITH_MEDIA_FILES if include_media_files else (),
            )
            if tag:
                return retrieval_successful(tag, "Tag")
            return retrieval_not_found("Tag")
        except Exception as e:
            logger.warning("Could not retrieve tag %r: %s", name, e)
            return retrieval_error(e)

    async def update_tag(self, tag_id: Any, new_name: str) -> UpdateResult:
        """Rename a tag. Renaming onto an existing name is a conflict."""
        try:
            valid_id = parse_positive_integer(tag_id)
            valid_name = parse_non_empty_string(new_name)
            tag = await self.repository.get_by_id(valid_id)
            if not tag:
                return update_not_found("Tag")
            updated = await self.repository.update(tag, name=valid_name)
            return update_successful(updated, "Tag")
        except Exception as e:
            logger.warning("Could not rename tag %r: %s", tag_id, e)
            return update_error(e)

    async def delete_tag(self, tag_id: Any) -> DeleteResult:
        """Delete a tag, detaching it from every media file."""
        try:
            tag = await self.repository.get_by_id(parse_positive_integer(tag_id))
            if not tag:
                return deletion_not_found("Tag")
            deleted = await self.repository.delete(tag)
            return deletion_successful(deleted, "Tag")
        except Exception as e:
            logger.warning("Could not delete tag %r: %s", tag_id, e)
            return deletion_error(e)

    async def get_all_tags(
        self,
        include_sample_media_files: bool = False,
        sample_size: Any = DEFAULT_MEDIA_FILE_SAMPLE_SIZE,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        """All tags by name, each optionally with its newest few media files."""
        return await self._tags_page(
            (), include_sample_media_files, sample_size, page, page_size
        )

    async def search_tags(
        self,
        substring: Any = "",  # the default fails validation
        include_sample_media_files: bool = False,
        sample_size: Any = DEFAULT_MEDIA_FILE_SAMPLE_SIZE,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        """Tags whose name contains ``substring``, sorted by name."""
        try:
            where = self.repository.name_contains(parse_non_empty_string(substring))
        except Exception as e:
            logger.warning("Rejected tag search %r: %s", substring, e)
            return error_page(e, page, page_size)
        return await self._tags_page(
            where, include_sample_media_files, sample_size, page, page_size
        )

    async def _tags_page(self, where, include_sample_media_files, sample_size, page, page_size):
        if include_sample_media_files:
            try:
                sample_size = parse_positive_integer(sample_size)
            except Exception as e:
                return error_page(e, page, page_size)
        result = await self.get_paginated_tags(where, page=page, page_size=page_size)
        if result.success and include_sample_media_files and result.data:
            try:
                samples = await self.repository.sample_media_files(
                    [tag.id for tag in result.data], sample_size
                )
            except Exception as e:
                logger.warning("Could not load sample media files: %s", e)
                return error_page(e, result.page, result.page_size)
            for tag in result.data:
                tag.sample_media_files = samples[tag.id]
        return result

    async def get_paginated_tags(
        self,
        where: Where = (),
        include: Include = DEFAULT_TAG_INCLUDES,
        order_by: OrderBy = DEFAULT_TAG_ORDER_BY,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        return await paginate(
            self.repository, where,
            include=include, order_by=order_by, page=page, page_size=page_size,
        )
