"""
Guest-facing listing reads: search, detail, recommendations and facility
reference data.
"""

from hotel_market.services.listing_public import facility_catalog
from hotel_market.services.listing_public.listing_search_service import ListingSearchService
from hotel_market.services.listing_public.public_listing_service import PublicListingService

__all__ = [
    "facility_catalog",
    "ListingSearchService",
    "PublicListingService",
]
