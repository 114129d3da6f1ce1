# hotel_market/repositories/listing/hotel_repository.py
from typing import Any, Dict, List, Optional, Tuple, Union

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from hotel_market.models.base.enums import AuditStatus
from hotel_market.models.listing import Hotel
from hotel_market.repositories.base import BaseRepository


def like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in ``term`` taken literally."""
    escaped = (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


class HotelRepository(BaseRepository[Hotel]):
    def __init__(self, session: Session):
        super().__init__(session, Hotel)

    def list_candidates(
        self,
        *conditions: Any,
        city: Union[str, None] = None,
        keyword: Union[str, None] = None,
        star_rating: Union[int, None] = None,
    ) -> List[Hotel]:
        """
        Coarse SQL prefilter for search; callers refine in memory.

        Results are newest first, ties broken by id.
        """
        stmt = self._base_select().where(*conditions)

        if city:
            stmt = stmt.where(Hotel.city.ilike(like_pattern(city), escape="\\"))
        if keyword:
            pattern = like_pattern(keyword)
            stmt = stmt.where(
                or_(
                    Hotel.name.ilike(pattern, escape="\\"),
                    Hotel.name_en.ilike(pattern, escape="\\"),
                    Hotel.address.ilike(pattern, escape="\\"),
                    Hotel.description.ilike(pattern, escape="\\"),
                )
            )
        if star_rating is not None:
            stmt = stmt.where(Hotel.star_rating == star_rating)

        stmt = stmt.order_by(Hotel.created_at.desc(), Hotel.id)
        return list(self.session.execute(stmt).scalars().all())

    def list_by_merchant(self, merchant_id: str) -> List[Hotel]:
        stmt = (
            self._base_select()
            .where(Hotel.merchant_id == merchant_id)
            .order_by(Hotel.created_at.desc(), Hotel.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def list_by_filter(
        self,
        *,
        audit_status: Optional[AuditStatus] = None,
        merchant_id: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> Tuple[List[Hotel], int]:
        """Page of listings for administrators plus the unpaged total."""
        filters = []
        if audit_status is not None:
            filters.append(Hotel.audit_status == audit_status)
        if merchant_id is not None:
            filters.append(Hotel.merchant_id == merchant_id)

        total = self.count(*filters)
        items = self.list(
            *filters,
            order_by=(Hotel.created_at.desc(), Hotel.id),
            offset=offset,
            limit=limit,
        )
        return items, total

    def search_by_name(self, term: str, *conditions: Any, limit: int = 5) -> List[Hotel]:
        pattern = like_pattern(term)
        stmt = (
            self._base_select()
            .where(*conditions)
            .where(
                or_(
                    Hotel.name.ilike(pattern, escape="\\"),
                    Hotel.name_en.ilike(pattern, escape="\\"),
                )
            )
            .order_by(Hotel.star_rating.desc(), Hotel.created_at.desc())
            .limit(limit)
        )
        return list(self.session.execute(stmt).scalars().all())

    def city_counts(
        self,
        *conditions: Any,
        term: Optional[str] = None,
        limit: int = 10,
    ) -> List[Tuple[str, Optional[str], int]]:
        """(city, province, count) for cities, most listings first."""
        stmt = (
            select(Hotel.city, Hotel.province, func.count(Hotel.id).label("hotel_count"))
            .where(Hotel.is_deleted.is_(False), Hotel.city.is_not(None))
            .where(*conditions)
        )
        if term:
            stmt = stmt.where(Hotel.city.ilike(like_pattern(term), escape="\\"))
        stmt = (
            stmt.group_by(Hotel.city, Hotel.province)
            .order_by(func.count(Hotel.id).desc(), Hotel.city)
            .limit(limit)
        )
        return [(row[0], row[1], int(row[2])) for row in self.session.execute(stmt).all()]

    def count_by_audit_status(self, merchant_id: Optional[str] = None) -> Dict[str, int]:
        stmt = (
            select(Hotel.audit_status, func.count(Hotel.id))
            .where(Hotel.is_deleted.is_(False))
            .group_by(Hotel.audit_status)
        )
        if merchant_id is not None:
            stmt = stmt.where(Hotel.merchant_id == merchant_id)

        counts = {status.value: 0 for status in AuditStatus}
        for status, total in self.session.execute(stmt).all():
            key = status.value if hasattr(status, "value") else str(status)
            counts[key] = int(total)
        return counts

    def count_by_star(self, *conditions: Any) -> Dict[int, int]:
        stmt = (
            select(Hotel.star_rating, func.count(Hotel.id))
            .where(Hotel.is_deleted.is_(False), Hotel.star_rating.is_not(None))
            .where(*conditions)
            .group_by(Hotel.star_rating)
            .order_by(Hotel.star_rating.desc())
        )
        return {int(star): int(total) for star, total in self.session.execute(stmt).all()}
