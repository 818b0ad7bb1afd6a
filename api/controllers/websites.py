"""
Controller for Websites.
Registers source websites and lists them by name.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.responses import raise_for_failure, require_data
from constants import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from database import get_db
from repositories.website import WebsiteRepository
from services.website import WebsiteService
from schemas import (
    PaginatedWebsitesResponse,
    WebsiteCreate,
    WebsiteCreateResponse,
    WebsiteDeleteResponse,
    WebsiteRetrieveResponse,
)

router = APIRouter(prefix="/websites", tags=["Websites"])


def get_website_repository(session: AsyncSession = Depends(get_db)) -> WebsiteRepository:
    return WebsiteRepository(session)


def get_website_service(repository: WebsiteRepository = Depends(get_website_repository)) -> WebsiteService:
    return WebsiteService(repository)


@router.post("/", response_model=WebsiteCreateResponse)
async def create_website(payload: WebsiteCreate, service: WebsiteService = Depends(get_website_service)):
    return raise_for_failure(await service.create_website(payload.url, payload.name))


@router.get("/", response_model=PaginatedWebsitesResponse)
async def read_websites(
    page: int = DEFAULT_PAGE_NUMBER,
    page_size: int = DEFAULT_PAGE_SIZE,
    service: WebsiteService = Depends(get_website_service),
):
    return raise_for_failure(await service.get_all_websites(page=page, page_size=page_size))


@router.get("/by-url", response_model=WebsiteRetrieveResponse)
async def read_website_by_url(url: str, service: WebsiteService = Depends(get_website_service)):
    return require_data(await service.get_website_by_url(url))


@router.get("/{website_id}", response_model=WebsiteRetrieveResponse)
async def read_website(website_id: int, service: WebsiteService = Depends(get_website_service)):
    return require_data(await service.get_website_by_id(website_id))


@router.delete("/{website_id}", response_model=WebsiteDeleteResponse)
async def delete_website(website_id: int, service: WebsiteService = Depends(get_website_service)):
    """
    Delete a website with its boards and pins. Media files and tags are kept.
    """
    return require_data(await service.delete_website(website_id))
