# --- File: hotel_market/schemas/listing/search.py ---
"""
Listing search schemas: criteria, result cards and search aggregates.
"""

from datetime import date as Date
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Dict, List, Union

from pydantic import Field, field_validator

from hotel_market.config.settings import settings
from hotel_market.models.base.enums import SortField, SortOrder
from hotel_market.schemas.common.base import BaseFilterSchema, BaseSchema, Money
from hotel_market.schemas.listing.room_type import split_tags

__all__ = [
    "ListingSearchCriteria",
    "ListingCard",
    "ListingSearchResponse",
    "QuickSearchHotel",
    "CityCount",
    "QuickSearchResult",
    "PopularCity",
    "PriceBucket",
    "PriceRangeStats",
]

FILTER_FIELDS = (
    "city",
    "keyword",
    "check_in",
    "check_out",
    "guests",
    "star_rating",
    "facilities",
    "min_price",
    "max_price",
)


class ListingSearchCriteria(BaseFilterSchema):
    """
    Public listing search request.

    Field-level bounds are checked here; relations between fields
    (price bounds, date pair) are checked by the search service.
    """

    # Text search
    city: Union[str, None] = Field(
        default=None,
        max_length=100,
        description="City substring, case-insensitive",
    )
    keyword: Union[str, None] = Field(
        default=None,
        max_length=200,
        description="Matches name, alternate name, address or description",
    )

    # Stay
    check_in: Union[Date, None] = Field(default=None, description="Arrival date")
    check_out: Union[Date, None] = Field(default=None, description="Departure date")
    guests: Union[int, None] = Field(
        default_factory=lambda: settings.DEFAULT_GUESTS,
        ge=1,
        le=20,
        description="Party size; room types must hold at least this many",
    )

    # Listing filters
    star_rating: Union[int, None] = Field(default=None, ge=1, le=5)
    facilities: List[str] = Field(
        default_factory=list,
        description="Required facilities (all must be present)",
    )

    # Price filter
    min_price: Union[Annotated[Decimal, Field(ge=0)], None] = None
    max_price: Union[Annotated[Decimal, Field(ge=0)], None] = None

    # Sort
    sort_by: SortField = Field(default=SortField.CREATED_AT)
    order: Union[SortOrder, None] = Field(
        default=None,
        description="Defaults to asc for price, desc otherwise",
    )

    # Pagination
    page: int = Field(default=1, ge=1, description="Page number")
    limit: int = Field(
        default_factory=lambda: settings.DEFAULT_PAGE_SIZE,
        ge=1,
        description="Results per page",
    )

    @field_validator("city", "keyword", mode="after")
    @classmethod
    def blank_to_none(cls, v):
        return v or None

    @field_validator("facilities", mode="before")
    @classmethod
    def parse_facilities(cls, v):
        return split_tags(v) or []

    @field_validator("limit")
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v > settings.MAX_PAGE_SIZE:
            raise ValueError(f"limit must be between 1 and {settings.MAX_PAGE_SIZE}")
        return v

    @property
    def has_price_filter(self) -> bool:
        return self.min_price is not None or self.max_price is not None

    @property
    def effective_order(self) -> SortOrder:
        if self.order is not None:
            return self.order
        return SortOrder.ASC if self.sort_by == SortField.PRICE else SortOrder.DESC

    def applied_filters(self) -> Dict[str, Any]:
        """Filters the caller actually set, for echoing back in responses."""
        applied: Dict[str, Any] = {}
        for name in FILTER_FIELDS:
            value = getattr(self, name)
            if value is None or value == []:
                continue
            applied[name] = value
        return applied


class ListingCard(BaseSchema):
    """Search result item: listing essentials enriched with computed prices."""

    id: str
    name: str
    name_en: Union[str, None] = None
    city: Union[str, None] = None
    province: Union[str, None] = None
    address: Union[str, None] = None
    star_rating: Union[int, None] = None
    facilities: List[str] = Field(default_factory=list)
    main_image: Union[str, None] = None

    min_price: Union[Money, None] = Field(default=None, description="Lowest qualifying discounted price")
    max_price: Union[Money, None] = Field(default=None, description="Highest qualifying discounted price")
    has_discount: bool = False
    max_discount: int = Field(default=0, description="Deepest discount in percent")

    nights: Union[int, None] = None
    estimated_total: Union[Money, None] = Field(
        default=None,
        description="min_price times nights, when dates were given",
    )

    created_at: datetime


class ListingSearchResponse(BaseSchema):
    """One page of search results."""

    items: List[ListingCard] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Matches across all pages")
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    has_more: bool
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class QuickSearchHotel(BaseSchema):
    id: str
    name: str
    name_en: Union[str, None] = None
    city: Union[str, None] = None
    star_rating: Union[int, None] = None
    min_price: Union[Money, None] = None
    main_image: Union[str, None] = None


class CityCount(BaseSchema):
    city: str
    province: Union[str, None] = None
    hotel_count: int = Field(..., ge=0)


class QuickSearchResult(BaseSchema):
    """Autocomplete payload."""

    hotels: List[QuickSearchHotel] = Field(default_factory=list)
    cities: List[CityCount] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class PopularCity(CityCount):
    min_price: Union[Money, None] = None


class PriceBucket(BaseSchema):
    """Price band; ``max_price`` None means open-ended."""

    min_price: Money
    max_price: Union[Money, None] = None
    label: str
    count: Union[int, None] = Field(default=None, ge=0)


class PriceRangeStats(BaseSchema):
    """Distribution of listing start prices."""

    min_price: Union[Money, None] = None
    max_price: Union[Money, None] = None
    buckets: List[PriceBucket] = Field(default_factory=list)
    suggested_ranges: List[PriceBucket] = Field(default_factory=list)
