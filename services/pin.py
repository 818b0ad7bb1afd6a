import logging
from typing import Any, Optional

from constants import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, DEFAULT_PIN_INCLUDES, DEFAULT_PIN_ORDER_BY
from repositories.base import Include, OrderBy, Where
from repositories.board import BoardRepository
from repositories.media_file import MediaFileRepository
from repositories.pin import PinRepository
from results import (
    CreateResult,
    PaginatedResult,
    creation_error,
    creation_failure,
    creation_successful,
)
from schemas import PinCreate
from services.pagination import error_page, not_found_page, paginate
from validation import parse_positive_integer

logger = logging.getLogger(__name__)


class PinService:
    def __init__(self, pins: PinRepository, boards: BoardRepository, media_files: MediaFileRepository):
        self.pins = pins
        self.boards = boards
        self.media_files = media_files

    async def create_board_pin(
        self, board_id: Any, pin: PinCreate, media_file_id: Optional[Any] = None
    ) -> CreateResult:
        try:
            board = await self.boards.get_by_id(parse_positive_integer(board_id))
            if not board:
                return creation_failure("Board")
            linked_media_file_id = None
            if media_file_id is not None:
                media_file = await self.media_files.get_by_id(parse_positive_integer(media_file_id))
                if not media_file:
                    return creation_failure("Media File")
                linked_media_file_id = media_file.id
            new_pin = await self.pins.create(
                **pin.model_dump(), board_id=board.id, media_file_id=linked_media_file_id
            )
            return creation_successful(new_pin, "Pin")
        except Exception as e:
            logger.warning("Could not create pin on board %r: %s", board_id, e)
            return creation_error(e)

    async def get_board_pins(
        self,
        board_id: Any,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        """A board's pins with their media files, sorted by source url."""
        try:
            board = await self.boards.get_by_id(parse_positive_integer(board_id))
        except Exception as e:
            logger.warning("Could not look up board %r: %s", board_id, e)
            return error_page(e, page, page_size)
        if not board:
            return not_found_page("Board", page, page_size)
        return await self.get_paginated_pins(
            self.pins.for_board(board.id), page=page, page_size=page_size
        )

    async def get_paginated_pins(
        self,
        where: Where = (),
        include: Include = DEFAULT_PIN_INCLUDES,
        order_by: OrderBy = DEFAULT_PIN_ORDER_BY,
        page: Any = DEFAULT_PAGE_NUMBER,
        page_size: Any = DEFAULT_PAGE_SIZE,
    ) -> PaginatedResult:
        return await paginate(
            self.pins, where,
            include=include, order_by=order_by, page=page, page_size=page_size,
        )
