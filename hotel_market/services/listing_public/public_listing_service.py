# hotel_market/services/listing_public/public_listing_service.py
from __future__ import annotations

from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from hotel_market.config.settings import settings
from hotel_market.core.logging import get_logger
from hotel_market.models.listing import Hotel, RoomType
from hotel_market.repositories.listing import HotelRepository
from hotel_market.schemas.listing import (
    ListingDetail,
    PricedRoomType,
    PriceRange,
    PublicImage,
    RecommendedListing,
)
from hotel_market.services.common import UnitOfWork, errors
from hotel_market.services.listing import pricing, publish_gate

logger = get_logger(__name__)

REASON_TOP_STAR = "Top luxury hotel"
REASON_DISCOUNT = "Special discount"
REASON_RATED = "Highly rated"


class PublicListingService:
    """
    Guest-facing reads of visible listings.

    Listings that are not approved, online and live are reported as
    missing, never as forbidden.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_hotel_repo(self, uow: UnitOfWork) -> HotelRepository:
        return uow.get_repo(HotelRepository)

    def _load_visible(self, uow: UnitOfWork, listing_id: str) -> Hotel:
        hotel = self._get_hotel_repo(uow).get(listing_id)
        if hotel is None or not publish_gate.is_publicly_visible(hotel):
            raise errors.NotFoundError("Listing", listing_id)
        return hotel

    # ------------------------------------------------------------------ #
    # Detail
    # ------------------------------------------------------------------ #
    @staticmethod
    def _stay_nights(check_in: Optional[date], check_out: Optional[date]) -> Optional[int]:
        if check_in is None and check_out is None:
            return None
        if check_in is None or check_out is None:
            raise errors.ValidationError(
                "check_in and check_out must be given together",
                field="check_in" if check_in is None else "check_out",
            )
        return pricing.nights_between(check_in, check_out)

    @staticmethod
    def _price_room(room_type: RoomType, guests: Optional[int], nights: Optional[int]) -> PricedRoomType:
        nightly = pricing.discounted_price(room_type)
        return PricedRoomType(
            id=room_type.id,
            name=room_type.name,
            description=room_type.description,
            area=room_type.area,
            max_guests=room_type.max_guests,
            bed_type=room_type.bed_type,
            facilities=list(room_type.facilities or []),
            base_price=room_type.base_price,
            discount_rate=room_type.discount_rate,
            discounted_price=nightly,
            discount_percentage=pricing.discount_percentage(room_type),
            available_count=room_type.available_count,
            is_available_for_guests=guests is None or room_type.max_guests >= guests,
            nights=nights,
            total_price=pricing.stay_total(nightly, nights) if nights else None,
        )

    def get_public_detail(
        self,
        listing_id: str,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None,
        guests: Optional[int] = None,
    ) -> ListingDetail:
        """
        Public detail view with per-room pricing.

        Room prices are always listed; ``guests`` only marks which rooms
        fit the party and narrows the listing-level price summary.

        Raises:
            NotFoundError: listing missing or not publicly visible
            ValidationError: incomplete or inverted date pair, guests < 1
        """
        if guests is not None and guests < 1:
            raise errors.ValidationError("guests must be at least 1", field="guests")
        nights = self._stay_nights(check_in, check_out)

        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_visible(uow, listing_id)

            available = [rt for rt in hotel.room_types if rt.is_available]
            available.sort(key=lambda rt: rt.base_price)
            rooms = [self._price_room(rt, guests, nights) for rt in available]

            span = pricing.price_range(hotel.room_types, guests)
            discount = pricing.discount_summary(hotel.room_types)

            images = sorted(hotel.images, key=lambda img: (img.sort_order, not img.is_main))

            detail = ListingDetail(
                id=hotel.id,
                name=hotel.name,
                name_en=hotel.name_en,
                description=hotel.description,
                address=hotel.address,
                city=hotel.city,
                province=hotel.province,
                latitude=hotel.latitude,
                longitude=hotel.longitude,
                star_rating=hotel.star_rating,
                opening_year=hotel.opening_year,
                facilities=list(hotel.facilities or []),
                contact_phone=hotel.contact_phone,
                contact_email=hotel.contact_email,
                check_in_time=hotel.check_in_time,
                check_out_time=hotel.check_out_time,
                policy=hotel.policy,
                images=[PublicImage.model_validate(img) for img in images],
                room_types=rooms,
                min_price=span.min_price,
                max_price=span.max_price,
                avg_price=pricing.average_price(hotel.room_types, guests),
                has_discount=discount.has_discount,
                max_discount=discount.max_discount,
                check_in=check_in,
                check_out=check_out,
                guests=guests,
                nights=nights,
                estimated_total=(
                    pricing.stay_total(span.min_price, nights)
                    if nights and span.min_price is not None
                    else None
                ),
                created_at=hotel.created_at,
            )

        logger.debug(
            f"Public detail served for listing {listing_id}",
            extra={"listing_id": listing_id, "nights": nights, "guests": guests},
        )
        return detail

    def price_range(self, listing_id: str) -> Optional[PriceRange]:
        """Discounted price span of available rooms; None when nothing is bookable."""
        with UnitOfWork(self._session_factory) as uow:
            hotel = self._load_visible(uow, listing_id)
            span = pricing.price_range(hotel.room_types)
        return None if span.is_empty else span

    # ------------------------------------------------------------------ #
    # Recommendations
    # ------------------------------------------------------------------ #
    @staticmethod
    def _reason(hotel: Hotel) -> str:
        if hotel.star_rating == 5:
            return REASON_TOP_STAR
        if pricing.discount_summary(hotel.room_types).has_discount:
            return REASON_DISCOUNT
        return REASON_RATED

    def recommended(self, city: Optional[str] = None, limit: int = 6) -> List[RecommendedListing]:
        """Highly rated visible listings, best rated then newest."""
        limit = max(1, min(limit, settings.MAX_PAGE_SIZE))

        with UnitOfWork(self._session_factory) as uow:
            hotels = self._get_hotel_repo(uow).list_candidates(
                publish_gate.visible_clause(Hotel),
                Hotel.star_rating >= settings.RECOMMENDED_MIN_STARS,
                city=city or None,
            )
            # candidates arrive newest first; stable sort keeps that within a star tier
            hotels.sort(key=lambda h: h.star_rating, reverse=True)

            return [
                RecommendedListing(
                    id=h.id,
                    name=h.name,
                    name_en=h.name_en,
                    city=h.city,
                    star_rating=h.star_rating,
                    main_image=h.main_image_url,
                    min_price=pricing.price_range(h.room_types).min_price,
                    recommendation_reason=self._reason(h),
                )
                for h in hotels[:limit]
            ]
