# hotel_market/repositories/listing/hotel_image_repository.py
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hotel_market.models.listing import HotelImage
from hotel_market.repositories.base import BaseRepository


class HotelImageRepository(BaseRepository[HotelImage]):
    def __init__(self, session: Session):
        super().__init__(session, HotelImage)

    def list_for_hotel(self, hotel_id: str) -> List[HotelImage]:
        stmt = (
            self._base_select()
            .where(HotelImage.hotel_id == hotel_id)
            .order_by(HotelImage.sort_order, HotelImage.is_main.desc(), HotelImage.created_at)
        )
        return list(self.session.execute(stmt).scalars().all())

    def next_sort_order(self, hotel_id: str) -> int:
        stmt = select(func.max(HotelImage.sort_order)).where(HotelImage.hotel_id == hotel_id)
        current = self.session.execute(stmt).scalar_one_or_none()
        return 0 if current is None else int(current) + 1
