# --- File: hotel_market/schemas/listing/stats.py ---
"""
Listing statistics for administrator and merchant dashboards.
"""

from typing import Dict, List, Union

from pydantic import Field

from hotel_market.schemas.common.base import BaseSchema
from hotel_market.schemas.listing.search import CityCount

__all__ = ["ListingStatusStats"]


class ListingStatusStats(BaseSchema):
    """
    Listing counts per audit status.

    ``by_star`` and ``top_cities`` cover approved listings and are only
    filled for the marketplace-wide (admin) view.
    """

    merchant_id: Union[str, None] = None
    total: int = Field(..., ge=0)
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_star: Dict[int, int] = Field(default_factory=dict)
    top_cities: List[CityCount] = Field(default_factory=list)
