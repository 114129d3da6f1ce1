# --- File: hotel_market/schemas/listing/room_type.py ---
"""
Room type schemas for create, update and response operations.
"""

from decimal import Decimal
from typing import Annotated, List, Union

from pydantic import Field, field_validator

from hotel_market.schemas.common.base import (
    BaseCreateSchema,
    BaseResponseSchema,
    BaseUpdateSchema,
    Money,
)

__all__ = [
    "RoomTypeCreate",
    "RoomTypeUpdate",
    "RoomTypeResponse",
    "split_tags",
]


def split_tags(value):
    """Accept a comma separated string or a list; return stripped, de-duplicated tags."""
    if value is None:
        return value
    if isinstance(value, str):
        value = value.split(",")
    tags: List[str] = []
    for item in value:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


class RoomTypeCreate(BaseCreateSchema):
    """Room type offered by a listing."""

    name: str = Field(..., min_length=1, max_length=100, description="Room type name")
    description: Union[str, None] = Field(default=None, description="Room description")
    area: Union[Annotated[Decimal, Field(gt=0, le=10000)], None] = Field(
        default=None,
        description="Floor area in square meters",
    )
    max_guests: int = Field(default=2, ge=1, le=20, description="Maximum occupancy")
    bed_type: Union[str, None] = Field(default=None, max_length=50)
    facilities: List[str] = Field(default_factory=list, description="Room facility tags")
    base_price: Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)] = Field(
        ...,
        description="Nightly base price",
    )
    discount_rate: Annotated[Decimal, Field(ge=Decimal("0.10"), le=Decimal("1.00"))] = Field(
        default=Decimal("1.00"),
        description="Price multiplier; 0.85 means 15% off",
    )
    available_count: int = Field(default=10, ge=0, description="Rooms available")
    is_available: bool = Field(default=True, description="Bookable flag")

    @field_validator("facilities", mode="before")
    @classmethod
    def normalize_facilities(cls, v):
        return split_tags(v) or []


class RoomTypeUpdate(BaseUpdateSchema):
    """Partial room type update."""

    name: Union[str, None] = Field(default=None, min_length=1, max_length=100)
    description: Union[str, None] = None
    area: Union[Annotated[Decimal, Field(gt=0, le=10000)], None] = None
    max_guests: Union[int, None] = Field(default=None, ge=1, le=20)
    bed_type: Union[str, None] = Field(default=None, max_length=50)
    facilities: Union[List[str], None] = None
    base_price: Union[Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)], None] = None
    discount_rate: Union[Annotated[Decimal, Field(ge=Decimal("0.10"), le=Decimal("1.00"))], None] = None
    available_count: Union[int, None] = Field(default=None, ge=0)
    is_available: Union[bool, None] = None

    @field_validator("facilities", mode="before")
    @classmethod
    def normalize_facilities(cls, v):
        return split_tags(v)


class RoomTypeResponse(BaseResponseSchema):
    """Stored room type."""

    hotel_id: str
    name: str
    description: Union[str, None] = None
    area: Union[Decimal, None] = None
    max_guests: int
    bed_type: Union[str, None] = None
    facilities: List[str] = Field(default_factory=list)
    base_price: Money
    discount_rate: Decimal
    available_count: int
    is_available: bool
