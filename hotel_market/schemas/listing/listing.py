# --- File: hotel_market/schemas/listing/listing.py ---
"""
Hotel listing schemas for merchant create/update and service responses.
"""

from datetime import date
from decimal import Decimal
from typing import Annotated, List, Union

from pydantic import Field, field_validator

from hotel_market.models.base.enums import AuditStatus, PublishStatus
from hotel_market.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseUpdateSchema,
)
from hotel_market.schemas.listing.image import ImageCreate, ImageResponse
from hotel_market.schemas.listing.room_type import (
    RoomTypeCreate,
    RoomTypeResponse,
    split_tags,
)

__all__ = [
    "ListingCreate",
    "ListingUpdate",
    "ListingResponse",
    "ListingSummary",
]

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def _validate_opening_year(v):
    if v is not None and not 1900 <= v <= date.today().year:
        raise ValueError(f"opening_year must be between 1900 and {date.today().year}")
    return v


class ListingCreate(BaseCreateSchema):
    """
    New listing as entered by a merchant.

    Only the name is required here; address, city and star rating are
    checked when the listing is submitted for review.
    """

    name: str = Field(..., min_length=2, max_length=200, description="Hotel name (local script)")
    name_en: Union[str, None] = Field(default=None, max_length=200, description="Alternate-script name")
    description: Union[str, None] = None
    address: Union[str, None] = Field(default=None, max_length=500)
    city: Union[str, None] = Field(default=None, max_length=100)
    province: Union[str, None] = Field(default=None, max_length=100)
    latitude: Union[Annotated[Decimal, Field(ge=-90, le=90)], None] = None
    longitude: Union[Annotated[Decimal, Field(ge=-180, le=180)], None] = None
    star_rating: Union[int, None] = Field(default=3, ge=1, le=5)
    opening_year: Union[int, None] = None
    facilities: List[str] = Field(default_factory=list, description="Facility tags")
    contact_phone: Union[str, None] = Field(default=None, max_length=30)
    contact_email: Union[str, None] = Field(default=None, max_length=255)
    check_in_time: str = Field(default="14:00", pattern=TIME_PATTERN)
    check_out_time: str = Field(default="12:00", pattern=TIME_PATTERN)
    policy: Union[str, None] = None

    room_types: List[RoomTypeCreate] = Field(default_factory=list)
    images: List[ImageCreate] = Field(default_factory=list)

    @field_validator("facilities", mode="before")
    @classmethod
    def normalize_facilities(cls, v):
        return split_tags(v) or []

    @field_validator("opening_year")
    @classmethod
    def validate_opening_year(cls, v):
        return _validate_opening_year(v)


class ListingUpdate(BaseUpdateSchema):
    """
    Partial edit of a listing's descriptive fields.

    Lifecycle fields are deliberately absent: edits never change
    audit or publish status.
    """

    name: Union[str, None] = Field(default=None, min_length=2, max_length=200)
    name_en: Union[str, None] = Field(default=None, max_length=200)
    description: Union[str, None] = None
    address: Union[str, None] = Field(default=None, max_length=500)
    city: Union[str, None] = Field(default=None, max_length=100)
    province: Union[str, None] = Field(default=None, max_length=100)
    latitude: Union[Annotated[Decimal, Field(ge=-90, le=90)], None] = None
    longitude: Union[Annotated[Decimal, Field(ge=-180, le=180)], None] = None
    star_rating: Union[int, None] = Field(default=None, ge=1, le=5)
    opening_year: Union[int, None] = None
    facilities: Union[List[str], None] = None
    contact_phone: Union[str, None] = Field(default=None, max_length=30)
    contact_email: Union[str, None] = Field(default=None, max_length=255)
    check_in_time: Union[str, None] = Field(default=None, pattern=TIME_PATTERN)
    check_out_time: Union[str, None] = Field(default=None, pattern=TIME_PATTERN)
    policy: Union[str, None] = None

    @field_validator("facilities", mode="before")
    @classmethod
    def normalize_facilities(cls, v):
        return split_tags(v)

    @field_validator("opening_year")
    @classmethod
    def validate_opening_year(cls, v):
        return _validate_opening_year(v)


class ListingSummary(BaseResponseSchema):
    """Listing row for merchant and admin lists."""

    merchant_id: str
    name: str
    name_en: Union[str, None] = None
    city: Union[str, None] = None
    province: Union[str, None] = None
    star_rating: Union[int, None] = None
    audit_status: AuditStatus
    publish_status: PublishStatus
    rejection_reason: Union[str, None] = None


class ListingResponse(ListingSummary):
    """Full listing as stored, including room types and images."""

    description: Union[str, None] = None
    address: Union[str, None] = None
    latitude: Union[Decimal, None] = None
    longitude: Union[Decimal, None] = None
    opening_year: Union[int, None] = None
    facilities: List[str] = Field(default_factory=list)
    contact_phone: Union[str, None] = None
    contact_email: Union[str, None] = None
    check_in_time: str
    check_out_time: str
    policy: Union[str, None] = None
    version: int

    room_types: List[RoomTypeResponse] = Field(default_factory=list)
    images: List[ImageResponse] = Field(default_factory=list)
