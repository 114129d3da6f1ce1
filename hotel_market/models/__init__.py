"""
SQLAlchemy models for the hotel listing marketplace.

Importing this package registers every table on ``Base.metadata``.
"""

from hotel_market.models.base import Base, BaseModel, TimestampModel
from hotel_market.models.base.enums import (
    AuditAction,
    AuditStatus,
    DecisionOutcome,
    PublishStatus,
)
from hotel_market.models.listing import Hotel, HotelImage, RoomType
from hotel_market.models.audit import ListingAuditLog

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "AuditAction",
    "AuditStatus",
    "DecisionOutcome",
    "PublishStatus",
    "Hotel",
    "HotelImage",
    "RoomType",
    "ListingAuditLog",
]
