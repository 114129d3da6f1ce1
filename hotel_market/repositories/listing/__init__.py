from hotel_market.repositories.listing.audit_log_repository import ListingAuditLogRepository
from hotel_market.repositories.listing.hotel_image_repository import HotelImageRepository
from hotel_market.repositories.listing.hotel_repository import HotelRepository, like_pattern
from hotel_market.repositories.listing.room_type_repository import RoomTypeRepository

__all__ = [
    "HotelRepository",
    "RoomTypeRepository",
    "HotelImageRepository",
    "ListingAuditLogRepository",
    "like_pattern",
]
