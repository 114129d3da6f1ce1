"""
Hotel listing model with audit/publish state and relationships.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    CheckConstraint,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from hotel_market.models.base.base_model import TimestampModel
from hotel_market.models.base.enums import AuditStatus, PublishStatus
from hotel_market.models.base.mixins import SoftDeleteMixin
from hotel_market.models.base.types import TagListType, string_enum

if TYPE_CHECKING:
    from hotel_market.models.audit.listing_audit_log import ListingAuditLog
    from hotel_market.models.listing.hotel_image import HotelImage
    from hotel_market.models.listing.room_type import RoomType


class Hotel(TimestampModel, SoftDeleteMixin):
    """
    Hotel listing owned by a merchant.

    ``audit_status`` and ``publish_status`` are only ever changed by the
    lifecycle service; merchant edits touch the descriptive fields.
    """

    __tablename__ = "hotels"

    # Ownership
    merchant_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Owning merchant identifier",
    )

    # Basic Information
    name: Mapped[str] = mapped_column(
        String(200),
        nullable=False,
        index=True,
        comment="Hotel name (local script)",
    )
    name_en: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
        comment="Hotel name (alternate script)",
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Location
    address: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
        comment="Street address; required before review",
    )
    city: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
        index=True,
    )
    province: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    latitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 7),
        nullable=True,
    )
    longitude: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(10, 7),
        nullable=True,
    )

    # Classification
    star_rating: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
        default=3,
        index=True,
        comment="Star rating 1-5",
    )
    opening_year: Mapped[Optional[int]] = mapped_column(
        Integer,
        nullable=True,
    )
    facilities: Mapped[List[str]] = mapped_column(
        TagListType,
        nullable=False,
        default=list,
        comment="Free-form facility tags",
    )

    # Lifecycle
    audit_status: Mapped[AuditStatus] = mapped_column(
        string_enum(AuditStatus, "hotel_audit_status"),
        nullable=False,
        default=AuditStatus.DRAFT,
        index=True,
    )
    publish_status: Mapped[PublishStatus] = mapped_column(
        string_enum(PublishStatus, "hotel_publish_status"),
        nullable=False,
        default=PublishStatus.OFFLINE,
        index=True,
    )
    rejection_reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Contact & policies
    contact_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    check_in_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        default="14:00",
    )
    check_out_time: Mapped[str] = mapped_column(
        String(5),
        nullable=False,
        default="12:00",
    )
    policy: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Row version for optimistic locking",
    )

    # Relationships
    room_types: Mapped[List["RoomType"]] = relationship(
        "RoomType",
        back_populates="hotel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="RoomType.base_price",
    )
    images: Mapped[List["HotelImage"]] = relationship(
        "HotelImage",
        back_populates="hotel",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="HotelImage.sort_order",
    )
    audit_logs: Mapped[List["ListingAuditLog"]] = relationship(
        "ListingAuditLog",
        lazy="select",
        viewonly=True,
        order_by="ListingAuditLog.created_at.desc()",
    )

    __mapper_args__ = {"version_id_col": version}

    __table_args__ = (
        Index("idx_hotel_visibility", "audit_status", "publish_status", "is_deleted"),
        Index("idx_hotel_merchant_created", "merchant_id", "created_at"),
        CheckConstraint(
            "star_rating IS NULL OR (star_rating >= 1 AND star_rating <= 5)",
            name="check_hotel_star_rating_range",
        ),
        CheckConstraint(
            "publish_status = 'offline' OR audit_status = 'approved'",
            name="check_hotel_online_requires_approved",
        ),
        CheckConstraint(
            "(audit_status = 'rejected' AND rejection_reason IS NOT NULL "
            "AND rejection_reason <> '') "
            "OR (audit_status <> 'rejected' AND rejection_reason IS NULL)",
            name="check_hotel_rejection_reason",
        ),
    )

    @validates("star_rating")
    def validate_star_rating(self, key: str, value: Optional[int]) -> Optional[int]:
        if value is not None and not 1 <= value <= 5:
            raise ValueError("star_rating must be between 1 and 5")
        return value

    @property
    def main_image_url(self) -> Optional[str]:
        """First image flagged main, else the first image by order."""
        if not self.images:
            return None
        for image in self.images:
            if image.is_main:
                return image.url
        return self.images[0].url

    def __repr__(self) -> str:
        return (
            f"<Hotel(id={self.id}, name={self.name!r}, "
            f"audit={self.audit_status}, publish={self.publish_status})>"
        )
