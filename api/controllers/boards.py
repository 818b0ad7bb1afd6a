from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.responses import require_data
from database import get_db
from repositories.board import BoardRepository
from repositories.tag import TagRepository
from repositories.website import WebsiteRepository
from services.board import BoardService
from schemas import (
    BoardCreate,
    BoardCreateRequest,
    BoardCreateResponse,
    BoardDeleteResponse,
    BoardRetrieveResponse,
    BoardUpdate,
    BoardUpdateResponse,
)

router = APIRouter(prefix="/websites/{website_id}/boards", tags=["Boards"])


def get_board_service(session: AsyncSession = Depends(get_db)) -> BoardService:
    return BoardService(BoardRepository(session), WebsiteRepository(session), TagRepository(session))


@router.post("/", response_model=BoardCreateResponse)
async def create_board(
    website_id: int,
    payload: BoardCreateRequest,
    service: BoardService = Depends(get_board_service),
):
    board = BoardCreate(**payload.model_dump(exclude={"parent_board_name"}))
    result = await service.create_website_board(website_id, board, payload.parent_board_name)
    # created=False without data means the website or parent board is missing
    return require_data(result)


@router.get("/{board_name}", response_model=BoardRetrieveResponse)
async def read_board(website_id: int, board_name: str, service: BoardService = Depends(get_board_service)):
    return require_data(await service.get_website_board(website_id, board_name))


@router.patch("/{board_name}", response_model=BoardUpdateResponse)
async def update_board(
    website_id: int,
    board_name: str,
    payload: BoardUpdate,
    service: BoardService = Depends(get_board_service),
):
    return require_data(await service.update_website_board(website_id, board_name, payload))


@router.delete("/{board_name}", response_model=BoardDeleteResponse)
async def delete_board(website_id: int, board_name: str, service: BoardService = Depends(get_board_service)):
    return require_data(await service.delete_website_board(website_id, board_name))
