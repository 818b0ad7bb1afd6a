from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.responses import raise_for_failure, require_data
from constants import DEFAULT_MEDIA_FILE_SAMPLE_SIZE, DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from database import get_db
from repositories.tag import TagRepository
from services.tag import TagService
from schemas import (
    PaginatedTagsResponse,
    TagCreate,
    TagCreateResponse,
    TagDeleteResponse,
    TagRetrieveResponse,
    TagUpdateResponse,
)

router = APIRouter(prefix="/tags", tags=["Tags"])


def get_tag_repository(session: AsyncSession = Depends(get_db)) -> TagRepository:
    return TagRepository(session)


def get_tag_service(repository: TagRepository = Depends(get_tag_repository)) -> TagService:
    return TagService(repository)


@router.post("/", response_model=TagCreateResponse)
async def create_tag(payload: TagCreate, service: TagService = Depends(get_tag_service)):
    return raise_for_failure(await service.create_tag(payload.name))


@router.get("/", response_model=PaginatedTagsResponse)
async def read_tags(
    search: Optional[str] = None,
    include_samples: bool = False,
    sample_size: int = DEFAULT_MEDIA_FILE_SAMPLE_SIZE,
    page: int = DEFAULT_PAGE_NUMBER,
    page_size: int = DEFAULT_PAGE_SIZE,
    service: TagService = Depends(get_tag_service),
):
    options = dict(
        include_sample_media_files=include_samples,
        sample_size=sample_size,
        page=page,
        page_size=page_size,
    )
    if search is not None:
        return raise_for_failure(await service.search_tags(search, **options))
    return raise_for_failure(await service.get_all_tags(**options))


@router.get("/by-name/{name}", response_model=TagRetrieveResponse)
async def read_tag_by_name(
    name: str,
    include_media_files: bool = False,
    service: TagService = Depends(get_tag_service),
):
    return require_data(await service.get_tag_by_name(name, include_media_files=include_media_files))


@router.get("/{tag_id}", response_model=TagRetrieveResponse)
async def read_tag(
    tag_id: int,
    include_media_files: bool = False,
    service: TagService = Depends(get_tag_service),
):
    return require_data(await service.get_tag_by_id(tag_id, include_media_files=include_media_files))


@router.patch("/{tag_id}", response_model=TagUpdateResponse)
async def rename_tag(tag_id: int, payload: TagCreate, service: TagService = Depends(get_tag_service)):
    return require_data(await service.update_tag(tag_id, payload.name))


@router.delete("/{tag_id}", response_model=TagDeleteResponse)
async def delete_tag(tag_id: int, service: TagService = Depends(get_tag_service)):
    return require_data(await service.delete_tag(tag_id))
