"""
Controller for Media Files.
Registers files by content hash and manages their tag sets.
"""

from typing import List

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from api.responses import raise_for_failure, require_data
from constants import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from database import get_db
from repositories.media_file import MediaFileRepository
from repositories.tag import TagRepository
from services.media_file import MediaFileService
from schemas import (
    MediaFileCreate,
    MediaFileCreateResponse,
    MediaFileDeleteResponse,
    MediaFileListUpdateResponse,
    MediaFileRetrieveResponse,
    MediaFileTagsUpdate,
    MediaFileUpdateResponse,
    PaginatedMediaFilesResponse,
    TagMigration,
)

router = APIRouter(prefix="/media-files", tags=["Media Files"])


def get_media_file_service(request: Request, session: AsyncSession = Depends(get_db)) -> MediaFileService:
    # New files are checked against the configured type and size limits.
    files = request.app.state.settings.files
    return MediaFileService(MediaFileRepository(session), TagRepository(session), files)


@router.post("/", response_model=MediaFileCreateResponse)
async def create_media_file(payload: MediaFileCreate, service: MediaFileService = Depends(get_media_file_service)):
    return raise_for_failure(await service.create_media_file(payload))


@router.get("/", response_model=PaginatedMediaFilesResponse)
async def read_media_files_with_tags(
    tag_ids: List[int] = Query(...),
    page: int = DEFAULT_PAGE_NUMBER,
    page_size: int = DEFAULT_PAGE_SIZE,
    service: MediaFileService = Depends(get_media_file_service),
):
    """
    Media files carrying ALL of the given tags.
    """
    return raise_for_failure(await service.get_media_files_with_tags(tag_ids, page=page, page_size=page_size))


@router.get("/untagged", response_model=PaginatedMediaFilesResponse)
async def read_untagged_media_files(
    page: int = DEFAULT_PAGE_NUMBER,
    page_size: int = DEFAULT_PAGE_SIZE,
    service: MediaFileService = Depends(get_media_file_service),
):
    return raise_for_failure(await service.get_untagged_media_files(page=page, page_size=page_size))


@router.post("/migrate-tag", response_model=MediaFileListUpdateResponse)
async def migrate_tag(payload: TagMigration, service: MediaFileService = Depends(get_media_file_service)):
    return require_data(await service.migrate_media_file_tag(payload.from_tag_id, payload.to_tag_id))


@router.get("/{media_file_id}", response_model=MediaFileRetrieveResponse)
async def read_media_file(
    media_file_id: int,
    include_tags: bool = True,
    service: MediaFileService = Depends(get_media_file_service),
):
    return require_data(await service.get_media_file_by_id(media_file_id, include_tags=include_tags))


@router.put("/{media_file_id}/tags", response_model=MediaFileUpdateResponse)
async def replace_media_file_tags(
    media_file_id: int,
    payload: MediaFileTagsUpdate,
    service: MediaFileService = Depends(get_media_file_service),
):
    return require_data(await service.update_media_file_tags(media_file_id, payload.tag_ids))


@router.delete("/{media_file_id}", response_model=MediaFileDeleteResponse)
async def delete_media_file(media_file_id: int, service: MediaFileService = Depends(get_media_file_service)):
    """
    Removes the database record only; the file on disk is untouched.
    """
    return require_data(await service.delete_media_file(media_file_id))
