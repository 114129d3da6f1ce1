# hotel_market/services/listing/listing_admin_view_service.py
from __future__ import annotations

from typing import Callable, List, Optional, Union

from sqlalchemy.orm import Session

from hotel_market.models.base.enums import AuditStatus
from hotel_market.models.listing import Hotel
from hotel_market.repositories.listing import HotelRepository, ListingAuditLogRepository
from hotel_market.schemas.common.pagination import PaginatedResponse, PaginationParams
from hotel_market.schemas.listing import (
    AuditLogResponse,
    CityCount,
    ListingStatusStats,
    ListingSummary,
)
from hotel_market.services.common import UnitOfWork, errors
from hotel_market.services.common.pagination import calculate_offset, paginate

TOP_CITIES_LIMIT = 10


class ListingAdminViewService:
    """
    Read-only views for administrators (and merchant dashboards).

    - Review queue: listings by audit status, paginated
    - Audit trail of one listing
    - Counts per status, star rating and city
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_hotel_repo(self, uow: UnitOfWork) -> HotelRepository:
        return uow.get_repo(HotelRepository)

    def _get_audit_repo(self, uow: UnitOfWork) -> ListingAuditLogRepository:
        return uow.get_repo(ListingAuditLogRepository)

    # ------------------------------------------------------------------ #
    # Listings
    # ------------------------------------------------------------------ #
    def list_listings(
        self,
        audit_status: Optional[Union[AuditStatus, str]] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> PaginatedResponse[ListingSummary]:
        """All non-withdrawn listings, optionally narrowed to one audit status."""
        try:
            status = AuditStatus(audit_status) if audit_status else None
        except ValueError:
            raise errors.ValidationError(
                f"Unknown audit status '{audit_status}'",
                field="audit_status",
            ) from None

        window = {"page": page}
        if page_size is not None:
            window["page_size"] = page_size
        try:
            params = PaginationParams(**window)
        except ValueError as exc:
            raise errors.ValidationError(str(exc), field="pagination") from None

        with UnitOfWork(self._session_factory) as uow:
            hotels, total = self._get_hotel_repo(uow).list_by_filter(
                audit_status=status,
                offset=calculate_offset(params.page, params.page_size),
                limit=params.page_size,
            )
            return paginate(
                items=hotels,
                total_items=total,
                params=params,
                mapper=ListingSummary.model_validate,
            )

    def audit_trail(self, listing_id: str) -> List[AuditLogResponse]:
        """Audit entries of a listing, newest first."""
        with UnitOfWork(self._session_factory) as uow:
            if self._get_hotel_repo(uow).get(listing_id) is None:
                raise errors.NotFoundError("Listing", listing_id)

            entries = self._get_audit_repo(uow).list_for_hotel(listing_id)
            return [AuditLogResponse.model_validate(e) for e in entries]

    # ------------------------------------------------------------------ #
    # Statistics
    # ------------------------------------------------------------------ #
    def status_stats(self, merchant_id: Optional[str] = None) -> ListingStatusStats:
        """
        Counts per audit status.

        With ``merchant_id`` the counts cover that merchant only; without it
        approved listings are also broken down by star rating and city.
        """
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_hotel_repo(uow)
            by_status = repo.count_by_audit_status(merchant_id)

            stats = ListingStatusStats(
                merchant_id=merchant_id,
                total=sum(by_status.values()),
                by_status=by_status,
            )
            if merchant_id is None:
                approved = Hotel.audit_status == AuditStatus.APPROVED
                stats.by_star = repo.count_by_star(approved)
                stats.top_cities = [
                    CityCount(city=city, province=province, hotel_count=count)
                    for city, province, count in repo.city_counts(approved, limit=TOP_CITIES_LIMIT)
                ]
            return stats
