import logging
from typing import Any, Optional

from constants import (
    DEFAULT_PAGE_NUMBER,
    DEFAULT_PAGE_SIZE,
    DEFAULT_WEBSITE_INCLUDES,
    DEFAULT_WEBSITE_ORDER_BY,
)
from repositories.base import Include, OrderBy, Where
from repositories.website import WebsiteRepository
from results import (
    CreateResult,
    DeleteResult,
    PaginatedResult,
    RetrieveResult,
    creation_error,
    creation_found_preexisting,
    creation_successful,
    deletion_error,
    deletion_not_found,
    deletion_successful,
    retrieval_error,
    retrieval_not_found,
    retrieval_successful,
)
from services.pagination import paginate
from validation import parse_non_empty_string, parse_positive_integer

logger = logging.getLogger(__name__)


class WebsiteService:
    def __init__(self, repository: WebsiteRepository):
        self.repository = repository

    async def create_website(self, url: str, name: Optional[str] = None) -> CreateResult:
        try:
            valid_url = parse_non_empty_string(url)
            pre_existing = await self.repository.get_by_url(valid_url)
            if pre_existing:
                return creation_found_preexisting(pre_existing, "Website")
            website = await self.repository.create(url=valid_url, name=name)
            logger.info("Created website %s (%s)", website.id, website.url)
            return creation_successful(website, "Website")
        except Exception as e:
            logger.warning("Could not create website %r: %s", url, e)
            return creation_error(e)

    async def get_website_by_id(self, website_id: Any) -> RetrieveResult:
        try:
            valid_id = parse_positive_integer(website_id)
            website = await self.repository.get_by_id(valid_id)
            if website:
                return retrieval_successful(website, "Website")
            return retrieval_not_found("Website")
        except Exception as e:
            logger.warning("Could not retrieve website %r: %s", website_id, e)
            return retrieval_error(e)

    async def get_website_by_url(self, url: str) -> RetrieveResult:
        try:
            website = await self.repository.get_by_url(parse_non_empty_string(url))
            if website:
                return retrieval_successful(website, "Website")
            return retrieval_not_found("Website")
        except Exception as e:
            logger.warning("Could not retrieve website %r: %s", url, e)
            return retrieval_error(e)

    async def delete_website(self, website_id: Any) -> DeleteResult:
        """Delete a website together with its boards and their pins.

        Media files referenced by those pins, and their tags, are kept.
        """
        try:
            valid_id = parse_positive_integer(website_id)
            website = await self.repository.get_by_id(valid_id)
            if not website:
                return deletion_not_found("Website")
            deleted = await self.repository.delete(website)
            logger.info("Deleted website %s", valid_id)
            return deletion_successful(deleted, "Website")
        except Exception as e:
            logger.warning("Could not delete website %r: %s", website_id, e)
            return deletion_error(e)

    async def get_all_websites(
        self, page: Any = DEFAULT_PAGE_NUMBER, page_size: Any = DEFAULT_PAGE_SIZE
    ) -> PaginatedResult:
        """All websites, sorted by name."""
        return await self.get_paginated_websites(page=page, page_size=page_size)

    async def get_paginated_websites(
        self,
        where: Where = (),
        include: Include = DEFAULT_WEBSITE_INCLUDES,
        order_by: OrderBy = DEFAULT_WEBSITE_ORDER_BY,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        return await paginate(
            self.repository, where,
            include=include, order_by=order_by, page=page, page_size=page_size,
        )
