from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.responses import raise_for_failure, require_data
from constants import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE
from database import get_db
from repositories.board import BoardRepository
from repositories.media_file import MediaFileRepository
from repositories.pin import PinRepository
from services.pin import PinService
from schemas import PaginatedPinsResponse, PinCreate, PinCreateRequest, PinCreateResponse

router = APIRouter(prefix="/boards/{board_id}/pins", tags=["Pins"])


def get_pin_service(session: AsyncSession = Depends(get_db)) -> PinService:
    return PinService(PinRepository(session), BoardRepository(session), MediaFileRepository(session))


@router.post("/", response_model=PinCreateResponse)
async def create_pin(board_id: int, payload: PinCreateRequest, service: PinService = Depends(get_pin_service)):
    pin = PinCreate(**payload.model_dump(exclude={"media_file_id"}))
    return require_data(await service.create_board_pin(board_id, pin, payload.media_file_id))


@router.get("/", response_model=PaginatedPinsResponse)
async def read_board_pins(
    board_id: int,
    page: int = DEFAULT_PAGE_NUMBER,
    page_size: int = DEFAULT_PAGE_SIZE,
    service: PinService = Depends(get_pin_service),
):
    return raise_for_failure(await service.get_board_pins(board_id, page=page, page_size=page_size))
