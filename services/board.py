import logging
from typing import Any, Optional

from sqlalchemy.orm import selectinload

from models import Board
from repositories.board import BoardRepository
from repositories.tag import TagRepository
from repositories.website import WebsiteRepository
from results import (
    CreateResult,
    DeleteResult,
    RetrieveResult,
    UpdateResult,
    creation_error,
    creation_failure,
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
from schemas import BoardCreate, BoardUpdate
from validation import parse_non_empty_string, parse_positive_integer

logger = logging.getLogger(__name__)


class BoardService:
    """Boards are addressed by (website id, board name), which is unique."""

    def __init__(self, boards: BoardRepository, websites: WebsiteRepository, tags: TagRepository):
        self.boards = boards
        self.websites = websites
        self.tags = tags

    async def create_website_board(
        self,
        website_id: Any,
        board: BoardCreate,
        parent_board_name: Optional[str] = None,
    ) -> CreateResult:
        """Create a board on a website, optionally under a named parent board.

        A tag carrying the board's name is created alongside it if none exists.
        """
        try:
            valid_website_id = parse_positive_integer(website_id)
            website = await self.websites.get_by_id(valid_website_id)
            if not website:
                # can't create a board without a valid website
                return creation_failure("Website")

            pre_existing = await self.boards.get_by_name(website.id, board.name)
            if pre_existing:
                return creation_found_preexisting(pre_existing, "Website/Board pair")

            parent_id = None
            if parent_board_name:
                parent = await self.boards.get_by_name(website.id, parent_board_name)
                if not parent:
                    return creation_failure("Parent Board on Website")
                parent_id = parent.id

            new_board = await self.boards.create(
                **board.model_dump(), website_id=website.id, parent_id=parent_id
            )
            await self.tags.ensure(new_board.name)
            logger.info("Created board %r on website %s", new_board.name, website.id)
            return creation_successful(new_board, "Board")
        except Exception as e:
            logger.warning("Could not create board on website %r: %s", website_id, e)
            return creation_error(e)

    async def get_website_board(self, website_id: Any, board_name: str) -> RetrieveResult:
        try:
            valid_website_id = parse_positive_integer(website_id)
            board = await self.boards.get_by_name(
                valid_website_id,
                parse_non_empty_string(board_name),
                include=(selectinload(Board.website), selectinload(Board.parent)),
            )
            if board:
                return retrieval_successful(board, "Board")
            return retrieval_not_found("Website/Board pair")
        except Exception as e:
            logger.warning("Could not retrieve board %r on website %r: %s", board_name, website_id, e)
            return retrieval_error(e)

    async def update_website_board(
        self, website_id: Any, board_name: str, update: BoardUpdate
    ) -> UpdateResult:
        try:
            valid_website_id = parse_positive_integer(website_id)
            valid_board_name = parse_non_empty_string(board_name)
            changes = update.model_dump(exclude_unset=True)
            if "name" in changes:
                # An explicit null would otherwise reach the NOT NULL column.
                changes["name"] = parse_non_empty_string(changes["name"])
            board = await self.boards.get_by_name(valid_website_id, valid_board_name)
            if not board:
                return update_not_found("Website/Board pair")
            old_name = board.name
            updated = await self.boards.update(board, **changes)
            if updated.name != old_name:
                # A renamed board gets a tag under its new name too.
                await self.tags.ensure(updated.name)
            return update_successful(updated, "Board")
        except Exception as e:
            logger.warning("Could not update board %r on website %r: %s", board_name, website_id, e)
            return update_error(e)

    async def delete_website_board(self, website_id: Any, board_name: str) -> DeleteResult:
        """Remove a board and its pins. Media files and tags are kept."""
        try:
            valid_website_id = parse_positive_integer(website_id)
            website = await self.websites.get_by_id(valid_website_id)
            if not website:
                return deletion_not_found("Website")
            board = await self.boards.get_by_name(website.id, parse_non_empty_string(board_name))
            if not board:
                return deletion_not_found("Website/Board pair")
            deleted = await self.boards.delete(board)
            logger.info("Deleted board %r from website %s", board_name, website.id)
            return deletion_successful(deleted, "Board")
        except Exception as e:
            logger.warning("Could not delete board %r on website %r: %s", board_name, website_id, e)
            return deletion_error(e)
