"""
Hotel image model.
"""

from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_market.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from hotel_market.models.listing.hotel import Hotel


class HotelImage(TimestampModel):
    """Image reference attached to a hotel; storage is external."""

    __tablename__ = "hotel_images"

    hotel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )
    alt_text: Mapped[Optional[str]] = mapped_column(
        String(200),
        nullable=True,
    )
    # Several images may carry the flag; readers pick the first by order
    is_main: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    sort_order: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    hotel: Mapped["Hotel"] = relationship(
        "Hotel",
        back_populates="images",
    )
