# --- File: hotel_market/schemas/listing/image.py ---
"""
Listing image schemas.
"""

from typing import Union

from pydantic import Field

from hotel_market.schemas.common.base import BaseCreateSchema, BaseResponseSchema

__all__ = ["ImageCreate", "ImageResponse"]


class ImageCreate(BaseCreateSchema):
    """Reference to an already stored image."""

    url: str = Field(..., min_length=1, max_length=500, description="Image URL")
    alt_text: Union[str, None] = Field(default=None, max_length=200)
    is_main: bool = Field(default=False, description="Cover image flag")
    sort_order: Union[int, None] = Field(
        default=None,
        ge=0,
        description="Display position; appended last when omitted",
    )


class ImageResponse(BaseResponseSchema):
    hotel_id: str
    url: str
    alt_text: Union[str, None] = None
    is_main: bool
    sort_order: int
