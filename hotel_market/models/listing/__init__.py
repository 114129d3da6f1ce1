"""
Hotel listing models.
"""

from hotel_market.models.listing.hotel import Hotel
from hotel_market.models.listing.hotel_image import HotelImage
from hotel_market.models.listing.room_type import RoomType

__all__ = ["Hotel", "HotelImage", "RoomType"]
