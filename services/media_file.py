import logging
import os
from typing import Any, Optional

from sqlalchemy.orm import selectinload

from config import FilesSettings
from constants import (
    DEFAULT_MEDIA_FILE_INCLUDES,
    DEFAULT_MEDIA_FILE_ORDER_BY,
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
)
from errors import ErrorKind, MediaDBError
from models import MediaFile
from repositories.base import Include, OrderBy, Where
from repositories.media_file import MediaFileRepository
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
from schemas import MediaFileCreate
from services.pagination import error_page, paginate
from validation import parse_positive_integer, parse_positive_integer_list

logger = logging.getLogger(__name__)

WITH_TAGS = (selectinload(MediaFile.tags),)


def check_file_policy(media_file: MediaFileCreate, files: FilesSettings) -> None:
    """Raise if the file's extension or size is outside the configured limits."""
    extension = os.path.splitext(media_file.path)[1].lstrip(".").lower()
    if extension not in files.allowed_types:
        raise MediaDBError(
            f"Validation error: file type {extension or '(none)'!r} is not allowed",
            ErrorKind.VALIDATION,
        )
    if media_file.size is not None and media_file.size > files.max_size_mb * 1024 * 1024:
        raise MediaDBError(
            f"Validation error: file is larger than {files.max_size_mb} MB",
            ErrorKind.VALIDATION,
        )


class MediaFileService:
    def __init__(
        self,
        media_files: MediaFileRepository,
        tags: TagRepository,
        files: Optional[FilesSettings] = None,
    ):
        self.media_files = media_files
        self.tags = tags
        self.files = files  # no type or size limits when unset

    async def create_media_file(self, media_file: MediaFileCreate) -> CreateResult:
        """Add a media file, unless one with the same content hash is already stored."""
        try:
            if self.files is not None:
                check_file_policy(media_file, self.files)
            pre_existing = await self.media_files.get_by_hash(media_file.hash)
            if pre_existing:
                return creation_found_preexisting(pre_existing, "MediaFile")
            created = await self.media_files.create(**media_file.model_dump())
            logger.info("Registered media file %s (%s)", created.id, created.path)
            return creation_successful(created, "MediaFile")
        except Exception as e:
            logger.warning("Could not create media file %r: %s", media_file.path, e)
            return creation_error(e)

    async def get_media_file_by_id(self, media_file_id: Any, include_tags: bool = True) -> RetrieveResult:
        try:
            media_file = await self.media_files.get_by_id(
                parse_positive_integer(media_file_id),
                include=WITH_TAGS if include_tags else (),
            )
            if media_file:
                return retrieval_successful(media_file, "MediaFile")
            return retrieval_not_found("MediaFile")
        except Exception as e:
            logger.warning("Could not retrieve media file %r: %s", media_file_id, e)
            return retrieval_error(e)

    async def delete_media_file(self, media_file_id: Any) -> DeleteResult:
        """Delete the record and its tag links. The file on disk is left alone."""
        try:
            media_file = await self.media_files.get_by_id(parse_positive_integer(media_file_id))
            if not media_file:
                return deletion_not_found("MediaFile")
            deleted = await self.media_files.delete(media_file)
            return deletion_successful(deleted, "MediaFile")
        except Exception as e:
            logger.warning("Could not delete media file %r: %s", media_file_id, e)
            return deletion_error(e)

    async def get_untagged_media_files(
        self, page: Any = DEFAULT_PAGE_NUMBER, page_size: Any = DEFAULT_PAGE_SIZE
    ) -> PaginatedResult:
        return await self.get_paginated_media_files(
            self.media_files.untagged(), include=(), page=page, page_size=page_size
        )

    async def get_media_files_with_tags(
        self,
        tag_ids: Any,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        """Media files carrying every one of ``tag_ids``."""
        try:
            valid_tag_ids = parse_positive_integer_list(tag_ids)
        except Exception as e:
            logger.warning("Rejected tag ids %r: %s", tag_ids, e)
            return error_page(e, page, page_size)
        return await self.get_paginated_media_files(
            self.media_files.with_all_tags(valid_tag_ids), page=page, page_size=page_size
        )

    async def migrate_media_file_tag(self, from_tag_id: Any, to_tag_id: Any) -> UpdateResult:
        """Move every media file tagged ``from_tag_id`` over to ``to_tag_id``.

        ``data`` is the list of media files that were changed.
        """
        try:
            from_tag = await self.tags.get_by_id(parse_positive_integer(from_tag_id))
            to_tag = await self.tags.get_by_id(parse_positive_integer(to_tag_id))
            if not from_tag or not to_tag:
                return update_not_found("Tag")
            migrated = await self.media_files.migrate_tag(from_tag, to_tag)
            logger.info("Moved %d media files from tag %s to %s", len(migrated), from_tag.id, to_tag.id)
            return update_successful(migrated, "MediaFile tags")
        except Exception as e:
            logger.warning("Could not migrate tag %r to %r: %s", from_tag_id, to_tag_id, e)
            return update_error(e)

    async def update_media_file_tags(self, media_file_id: Any, tag_ids: Any) -> UpdateResult:
        """Replace the tag set of a media file with exactly ``tag_ids``."""
        try:
            valid_media_file_id = parse_positive_integer(media_file_id)
            valid_tag_ids = parse_positive_integer_list(tag_ids)
            # Tags must be loaded before the collection can be replaced.
            media_file = await self.media_files.get_by_id(valid_media_file_id, include=WITH_TAGS)
            if not media_file:
                return update_not_found("MediaFile")
            tags = await self.tags.find_many([self.tags.model.id.in_(valid_tag_ids)])
            missing = set(valid_tag_ids) - {tag.id for tag in tags}
            if missing:
                return update_not_found(f"Tag {', '.join(str(i) for i in sorted(missing))}")
            updated = await self.media_files.replace_tags(media_file, tags)
            return update_successful(updated, "MediaFile")
        except Exception as e:
            logger.warning("Could not update tags on media file %r: %s", media_file_id, e)
            return update_error(e)

    async def get_paginated_media_files(
        self,
        where: Where = (),
        include: Include = DEFAULT_MEDIA_FILE_INCLUDES,
        order_by: OrderBy = DEFAULT_MEDIA_FILE_ORDER_BY,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        return await paginate(
            self.media_files, where,
            include=include, order_by=order_by, page=page, page_size=page_size,
        )
