"""
Listing lifecycle, merchant management, pricing and admin views.
"""

from hotel_market.services.listing import pricing, publish_gate
from hotel_market.services.listing.listing_admin_view_service import ListingAdminViewService
from hotel_market.services.listing.listing_lifecycle_service import ListingLifecycleService
from hotel_market.services.listing.listing_service import ListingService

__all__ = [
    "pricing",
    "publish_gate",
    "ListingAdminViewService",
    "ListingLifecycleService",
    "ListingService",
]
