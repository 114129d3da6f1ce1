# --- File: hotel_market/schemas/listing/public.py ---
"""
Public (guest-facing) listing schemas with computed prices.
"""

from datetime import date as Date
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Union

from pydantic import Field

from hotel_market.schemas.common.base import BaseSchema, Money

__all__ = [
    "PriceRange",
    "DiscountSummary",
    "PricedRoomType",
    "PublicImage",
    "ListingDetail",
    "RecommendedListing",
    "FacilityOption",
    "FacilityCatalog",
]


class PriceRange(BaseSchema):
    """Lowest and highest discounted nightly price; both None when nothing qualifies."""

    min_price: Union[Money, None] = None
    max_price: Union[Money, None] = None

    @property
    def is_empty(self) -> bool:
        return self.min_price is None


class DiscountSummary(BaseSchema):
    has_discount: bool = False
    max_discount: int = Field(default=0, ge=0, le=100, description="Deepest discount in percent")


class PricedRoomType(BaseSchema):
    """Room type as shown to guests."""

    id: str
    name: str
    description: Union[str, None] = None
    area: Union[Decimal, None] = None
    max_guests: int
    bed_type: Union[str, None] = None
    facilities: List[str] = Field(default_factory=list)
    base_price: Money
    discount_rate: Decimal
    discounted_price: Money
    discount_percentage: int = Field(default=0, ge=0, le=100)
    available_count: int
    is_available_for_guests: bool = True
    nights: Union[int, None] = None
    total_price: Union[Money, None] = None


class PublicImage(BaseSchema):
    url: str
    alt_text: Union[str, None] = None
    is_main: bool = False
    sort_order: int = 0


class ListingDetail(BaseSchema):
    """Public detail view of a visible listing."""

    id: str
    name: str
    name_en: Union[str, None] = None
    description: Union[str, None] = None
    address: Union[str, None] = None
    city: Union[str, None] = None
    province: Union[str, None] = None
    latitude: Union[Decimal, None] = None
    longitude: Union[Decimal, None] = None
    star_rating: Union[int, None] = None
    opening_year: Union[int, None] = None
    facilities: List[str] = Field(default_factory=list)
    contact_phone: Union[str, None] = None
    contact_email: Union[str, None] = None
    check_in_time: str
    check_out_time: str
    policy: Union[str, None] = None

    images: List[PublicImage] = Field(default_factory=list)
    room_types: List[PricedRoomType] = Field(default_factory=list)

    min_price: Union[Money, None] = None
    max_price: Union[Money, None] = None
    avg_price: Union[Money, None] = None
    has_discount: bool = False
    max_discount: int = 0

    check_in: Union[Date, None] = None
    check_out: Union[Date, None] = None
    guests: Union[int, None] = None
    nights: Union[int, None] = None
    estimated_total: Union[Money, None] = None

    created_at: datetime


class RecommendedListing(BaseSchema):
    id: str
    name: str
    name_en: Union[str, None] = None
    city: Union[str, None] = None
    star_rating: Union[int, None] = None
    main_image: Union[str, None] = None
    min_price: Union[Money, None] = None
    recommendation_reason: str


class FacilityOption(BaseSchema):
    """Reference facility for pickers; listings may use any tag."""

    id: str
    name: str
    icon: str
    category: str


class FacilityCatalog(BaseSchema):
    facilities: List[FacilityOption] = Field(default_factory=list)
    categorized: Dict[str, List[FacilityOption]] = Field(default_factory=dict)
    categories: List[str] = Field(default_factory=list)
