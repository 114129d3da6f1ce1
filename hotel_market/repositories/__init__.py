"""
Data-access layer for listings.
"""

from hotel_market.repositories.base import BaseRepository
from hotel_market.repositories.listing import (
    HotelImageRepository,
    HotelRepository,
    ListingAuditLogRepository,
    RoomTypeRepository,
)

__all__ = [
    "BaseRepository",
    "HotelRepository",
    "RoomTypeRepository",
    "HotelImageRepository",
    "ListingAuditLogRepository",
]
