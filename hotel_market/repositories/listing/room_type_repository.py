# hotel_market/repositories/listing/room_type_repository.py
from typing import List, Union

from sqlalchemy.orm import Session

from hotel_market.models.listing import RoomType
from hotel_market.repositories.base import BaseRepository


class RoomTypeRepository(BaseRepository[RoomType]):
    def __init__(self, session: Session):
        super().__init__(session, RoomType)

    def get_for_hotel(self, hotel_id: str, room_type_id: str) -> Union[RoomType, None]:
        stmt = self._base_select().where(
            RoomType.id == room_type_id,
            RoomType.hotel_id == hotel_id,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def list_for_hotel(self, hotel_id: str, *, available_only: bool = False) -> List[RoomType]:
        stmt = self._base_select().where(RoomType.hotel_id == hotel_id)
        if available_only:
            stmt = stmt.where(RoomType.is_available.is_(True))
        stmt = stmt.order_by(RoomType.base_price, RoomType.created_at)
        return list(self.session.execute(stmt).scalars().all())
