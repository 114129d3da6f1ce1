# hotel_market/services/listing_public/listing_search_service.py
from __future__ import annotations

from decimal import Decimal
from math import ceil, floor
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from hotel_market.config.settings import settings
from hotel_market.core.logging import get_logger
from hotel_market.models.base.enums import SortField, SortOrder
from hotel_market.models.listing import Hotel
from hotel_market.repositories.listing import HotelRepository
from hotel_market.schemas.listing import (
    CityCount,
    ListingCard,
    ListingSearchCriteria,
    ListingSearchResponse,
    PopularCity,
    PriceBucket,
    PriceRangeStats,
    QuickSearchHotel,
    QuickSearchResult,
)
from hotel_market.services.common import UnitOfWork, errors
from hotel_market.services.common.pagination import (
    calculate_total_pages,
    has_more_pages,
    slice_page,
)
from hotel_market.services.listing import pricing, publish_gate

logger = get_logger(__name__)

QUICK_SEARCH_CITY_LIMIT = 3
QUICK_SEARCH_SUGGESTION_LIMIT = 5
PRICE_BUCKET_COUNT = 4

# (low, high, label); high None means open-ended
SUGGESTED_PRICE_RANGES = (
    (0, 300, "Economy"),
    (300, 600, "Comfort"),
    (600, 1000, "Luxury"),
    (1000, None, "Premium"),
)


class ListingSearchService:
    """
    Public listing search:

    - Coarse SQL prefilter (visibility, city, keyword, star rating)
    - Facility, capacity and price filters refined in Python, since
      prices are derived from room types
    - Sorting and pagination over the refined result set
    - Autocomplete, popular cities and price distribution helpers
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _get_hotel_repo(self, uow: UnitOfWork) -> HotelRepository:
        return uow.get_repo(HotelRepository)

    # ------------------------------------------------------------------ #
    # Criteria
    # ------------------------------------------------------------------ #
    @staticmethod
    def _coerce_criteria(
        criteria: Union[ListingSearchCriteria, Mapping[str, Any], None],
    ) -> ListingSearchCriteria:
        if isinstance(criteria, ListingSearchCriteria):
            return criteria
        try:
            return ListingSearchCriteria.model_validate(dict(criteria or {}))
        except SchemaValidationError as exc:
            first = exc.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            raise errors.ValidationError(
                f"Invalid search criteria: {first.get('msg')}",
                field=field,
            ) from None

    @staticmethod
    def _validate_criteria(criteria: ListingSearchCriteria) -> Optional[int]:
        """Cross-field checks; returns the number of nights when dates are given."""
        if (
            criteria.min_price is not None
            and criteria.max_price is not None
            and criteria.min_price > criteria.max_price
        ):
            raise errors.ValidationError(
                "min_price cannot be greater than max_price",
                field="min_price",
                details={"min_price": str(criteria.min_price), "max_price": str(criteria.max_price)},
            )

        if (criteria.check_in is None) != (criteria.check_out is None):
            missing = "check_out" if criteria.check_out is None else "check_in"
            raise errors.ValidationError(
                "check_in and check_out must be given together",
                field=missing,
            )

        if criteria.check_in is not None:
            return pricing.nights_between(criteria.check_in, criteria.check_out)
        return None

    # ------------------------------------------------------------------ #
    # Mapping helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _has_facilities(hotel: Hotel, required: List[str]) -> bool:
        if not required:
            return True
        return set(required).issubset(hotel.facilities or [])

    @staticmethod
    def _in_price_window(price: Decimal, criteria: ListingSearchCriteria) -> bool:
        if criteria.min_price is not None and price < criteria.min_price:
            return False
        if criteria.max_price is not None and price > criteria.max_price:
            return False
        return True

    @staticmethod
    def _to_card(hotel: Hotel, prices: List[Decimal], nights: Optional[int]) -> ListingCard:
        min_price = min(prices) if prices else None
        discount = pricing.discount_summary(hotel.room_types)
        return ListingCard(
            id=hotel.id,
            name=hotel.name,
            name_en=hotel.name_en,
            city=hotel.city,
            province=hotel.province,
            address=hotel.address,
            star_rating=hotel.star_rating,
            facilities=list(hotel.facilities or []),
            main_image=hotel.main_image_url,
            min_price=min_price,
            max_price=max(prices) if prices else None,
            has_discount=discount.has_discount,
            max_discount=discount.max_discount,
            nights=nights,
            estimated_total=(
                pricing.stay_total(min_price, nights)
                if min_price is not None and nights
                else None
            ),
            created_at=hotel.created_at,
        )

    @staticmethod
    def _sort(cards: List[ListingCard], sort_by: SortField, order: SortOrder) -> List[ListingCard]:
        """
        Sort cards; items lacking the sort value go last in either direction.

        Ties keep the base order: newest first, then id.
        """
        ordered = sorted(cards, key=lambda c: c.id)
        ordered.sort(key=lambda c: c.created_at, reverse=True)

        descending = order == SortOrder.DESC
        if sort_by == SortField.CREATED_AT:
            if not descending:
                ordered.sort(key=lambda c: c.created_at)
            return ordered

        attr = "min_price" if sort_by == SortField.PRICE else "star_rating"
        present = [c for c in ordered if getattr(c, attr) is not None]
        missing = [c for c in ordered if getattr(c, attr) is None]
        present.sort(key=lambda c: getattr(c, attr), reverse=descending)
        return present + missing

    # ------------------------------------------------------------------ #
    # Search
    # ------------------------------------------------------------------ #
    def search(
        self,
        criteria: Union[ListingSearchCriteria, Mapping[str, Any], None] = None,
    ) -> ListingSearchResponse:
        """
        Filter, price, sort and paginate publicly visible listings.

        Raises:
            ValidationError: malformed criteria, ``min_price > max_price``,
                or an incomplete / inverted date pair
        """
        criteria = self._coerce_criteria(criteria)
        nights = self._validate_criteria(criteria)

        with UnitOfWork(self._session_factory) as uow:
            candidates = self._get_hotel_repo(uow).list_candidates(
                publish_gate.visible_clause(Hotel),
                city=criteria.city,
                keyword=criteria.keyword,
                star_rating=criteria.star_rating,
            )

            cards: List[ListingCard] = []
            for hotel in candidates:
                if not self._has_facilities(hotel, criteria.facilities):
                    continue

                prices = [
                    pricing.discounted_price(rt)
                    for rt in pricing.qualifying_room_types(hotel.room_types, criteria.guests)
                ]
                if criteria.has_price_filter and not any(
                    self._in_price_window(p, criteria) for p in prices
                ):
                    continue

                cards.append(self._to_card(hotel, prices, nights))

        ordered = self._sort(cards, criteria.sort_by, criteria.effective_order)
        total = len(ordered)

        logger.debug(
            f"Listing search matched {total} of {len(candidates)} candidates",
            extra={"filters": sorted(criteria.applied_filters())},
        )

        return ListingSearchResponse(
            items=slice_page(ordered, criteria.page, criteria.limit),
            total=total,
            page=criteria.page,
            limit=criteria.limit,
            total_pages=calculate_total_pages(total, criteria.limit),
            has_more=has_more_pages(criteria.page, criteria.limit, total),
            filters_applied=criteria.applied_filters(),
        )

    # ------------------------------------------------------------------ #
    # Autocomplete & aggregates
    # ------------------------------------------------------------------ #
    def quick_search(self, q: Optional[str], limit: int = 5) -> QuickSearchResult:
        """
        Autocomplete over visible listings.

        Returns nothing for terms shorter than the configured minimum.
        """
        term = (q or "").strip()
        if len(term) < settings.QUICK_SEARCH_MIN_LENGTH:
            return QuickSearchResult()
        limit = max(1, min(limit, settings.MAX_PAGE_SIZE))

        visible = publish_gate.visible_clause(Hotel)
        with UnitOfWork(self._session_factory) as uow:
            repo = self._get_hotel_repo(uow)

            hotels = [
                QuickSearchHotel(
                    id=h.id,
                    name=h.name,
                    name_en=h.name_en,
                    city=h.city,
                    star_rating=h.star_rating,
                    min_price=pricing.price_range(h.room_types).min_price,
                    main_image=h.main_image_url,
                )
                for h in repo.search_by_name(term, visible, limit=limit)
            ]
            cities = [
                CityCount(city=city, province=province, hotel_count=count)
                for city, province, count in repo.city_counts(
                    visible, term=term, limit=QUICK_SEARCH_CITY_LIMIT
                )
            ]

        suggestions = [f"{h.name} ({h.city})" if h.city else h.name for h in hotels]
        suggestions += [f"{c.city} ({c.province})" if c.province else c.city for c in cities]

        return QuickSearchResult(
            hotels=hotels,
            cities=cities,
            suggestions=suggestions[:QUICK_SEARCH_SUGGESTION_LIMIT],
        )

    def popular_cities(self, limit: int = 10) -> List[PopularCity]:
        """Cities with the most visible listings, with the lowest nightly price."""
        groups: Dict[Tuple[str, Optional[str]], List[Optional[Decimal]]] = {}

        with UnitOfWork(self._session_factory) as uow:
            for hotel in self._get_hotel_repo(uow).list_candidates(publish_gate.visible_clause(Hotel)):
                if not hotel.city:
                    continue
                key = (hotel.city, hotel.province)
                groups.setdefault(key, []).append(pricing.price_range(hotel.room_types).min_price)

        cities = []
        for (city, province), prices in groups.items():
            known = [p for p in prices if p is not None]
            cities.append(
                PopularCity(
                    city=city,
                    province=province,
                    hotel_count=len(prices),
                    min_price=min(known) if known else None,
                )
            )
        cities.sort(key=lambda c: (-c.hotel_count, c.city))
        return cities[:limit]

    def price_range_stats(self, city: Optional[str] = None) -> PriceRangeStats:
        """
        Distribution of listing start prices in equal-width buckets.

        Listings without a bookable room are left out.
        """
        with UnitOfWork(self._session_factory) as uow:
            hotels = self._get_hotel_repo(uow).list_candidates(
                publish_gate.visible_clause(Hotel),
                city=city or None,
            )
            prices = [
                p for p in (pricing.price_range(h.room_types).min_price for h in hotels)
                if p is not None
            ]

        suggested = [
            PriceBucket(
                min_price=Decimal(low),
                max_price=Decimal(high) if high is not None else None,
                label=self._bucket_label(label, low, high),
            )
            for low, high, label in SUGGESTED_PRICE_RANGES
        ]

        if not prices:
            return PriceRangeStats(suggested_ranges=suggested)

        low = floor(min(prices))
        high = ceil(max(prices))
        width = max(1, ceil((high - low) / PRICE_BUCKET_COUNT))

        buckets = []
        for index in range(PRICE_BUCKET_COUNT):
            start = low + index * width
            if start > high:
                break
            last = index == PRICE_BUCKET_COUNT - 1 or start + width >= high
            end = high if last else start + width
            count = sum(
                1 for p in prices
                if p >= start and (p <= end if last else p < end)
            )
            buckets.append(
                PriceBucket(
                    min_price=Decimal(start),
                    max_price=Decimal(end),
                    label=self._bucket_label(None, start, end),
                    count=count,
                )
            )
            if last:
                break

        return PriceRangeStats(
            min_price=min(prices),
            max_price=max(prices),
            buckets=buckets,
            suggested_ranges=suggested,
        )

    @staticmethod
    def _bucket_label(name: Optional[str], low: int, high: Optional[int]) -> str:
        span = f"{settings.CURRENCY} {low}+" if high is None else f"{settings.CURRENCY} {low} - {high}"
        return f"{name} ({span})" if name else span
