"""
Room type model: priced, capacity-bounded offerings of a hotel.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_market.models.base.base_model import TimestampModel
from hotel_market.models.base.types import MoneyType, RateType, TagListType

if TYPE_CHECKING:
    from hotel_market.models.listing.hotel import Hotel


class RoomType(TimestampModel):
    """
    Room type offered by a hotel.

    The price shown to guests is ``base_price * discount_rate``; a rate of
    1.00 means no discount.
    """

    __tablename__ = "room_types"

    hotel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Room type name",
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    area: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(6, 2),
        nullable=True,
        comment="Floor area in square meters",
    )
    max_guests: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=2,
    )
    bed_type: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    facilities: Mapped[List[str]] = mapped_column(
        TagListType,
        nullable=False,
        default=list,
    )

    # Pricing
    base_price: Mapped[Decimal] = mapped_column(
        MoneyType,
        nullable=False,
        comment="Nightly base price",
    )
    discount_rate: Mapped[Decimal] = mapped_column(
        RateType,
        nullable=False,
        default=Decimal("1.00"),
        comment="Price multiplier in [0.10, 1.00]",
    )

    # Availability
    available_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=10,
    )
    is_available: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )

    # Relationships
    hotel: Mapped["Hotel"] = relationship(
        "Hotel",
        back_populates="room_types",
    )

    __table_args__ = (
        Index("idx_room_type_hotel_price", "hotel_id", "base_price"),
        CheckConstraint("base_price > 0", name="check_room_type_base_price_positive"),
        CheckConstraint(
            "discount_rate >= 0.10 AND discount_rate <= 1.00",
            name="check_room_type_discount_rate_range",
        ),
        CheckConstraint("max_guests >= 1", name="check_room_type_max_guests_positive"),
        CheckConstraint("available_count >= 0", name="check_room_type_available_count"),
    )

    def __repr__(self) -> str:
        return f"<RoomType(id={self.id}, name={self.name!r}, base_price={self.base_price})>"
