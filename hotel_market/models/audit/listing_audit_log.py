"""
Audit log of administrative decisions on hotel listings.

Entries are append-only: once flushed, an entry can be neither updated
nor deleted through the ORM.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, event
from sqlalchemy.exc import InvalidRequestError
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hotel_market.models.base.base_model import BaseModel, utcnow
from hotel_market.models.base.enums import AuditAction, AuditStatus
from hotel_market.models.base.types import string_enum

if TYPE_CHECKING:
    from hotel_market.models.listing.hotel import Hotel


class ListingAuditLog(BaseModel):
    """
    One administrative action on a listing.

    Records who acted, the audit status before and after, and the
    reason given (mandatory for rejections).
    """

    __tablename__ = "listing_audit_logs"

    hotel_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("hotels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    admin_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="Administrator who performed the action",
    )
    action: Mapped[AuditAction] = mapped_column(
        string_enum(AuditAction, "listing_audit_action"),
        nullable=False,
        index=True,
    )
    old_status: Mapped[Optional[AuditStatus]] = mapped_column(
        string_enum(AuditStatus, "listing_audit_old_status"),
        nullable=True,
    )
    new_status: Mapped[Optional[AuditStatus]] = mapped_column(
        string_enum(AuditStatus, "listing_audit_new_status"),
        nullable=True,
    )
    reason: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    # Request context
    ip_address: Mapped[Optional[str]] = mapped_column(
        String(45),
        nullable=True,
        comment="IP address of the request (IPv4 or IPv6)",
    )
    user_agent: Mapped[Optional[str]] = mapped_column(
        String(500),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=utcnow,
        index=True,
    )

    hotel: Mapped["Hotel"] = relationship("Hotel")

    __table_args__ = (
        Index("idx_listing_audit_hotel_created", "hotel_id", "created_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<ListingAuditLog(id={self.id}, hotel_id={self.hotel_id}, "
            f"action={self.action})>"
        )


@event.listens_for(ListingAuditLog, "before_update")
def _refuse_audit_update(mapper, connection, target):
    raise InvalidRequestError("listing audit log entries are append-only")


@event.listens_for(ListingAuditLog, "before_delete")
def _refuse_audit_delete(mapper, connection, target):
    raise InvalidRequestError("listing audit log entries cannot be deleted")
