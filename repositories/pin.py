from sqlalchemy.ext.asyncio import AsyncSession
from models import Pin
from repositories.base import BaseRepository


class PinRepository(BaseRepository[Pin]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Pin)

    def for_board(self, board_id: int):
        return [self.model.board_id == board_id]
