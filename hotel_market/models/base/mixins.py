"""
SQLAlchemy model mixins for reusable functionality.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from hotel_market.models.base.base_model import utcnow


class SoftDeleteMixin:
    """
    Mixin for soft delete capability.

    Provides is_deleted flag and deleted_at timestamp
    for logical deletion without data loss.
    """

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True,
        comment="Soft delete flag"
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime,
        nullable=True,
        comment="Deletion timestamp (UTC)"
    )

    def mark_deleted(self) -> None:
        """Flag the record as deleted; the row itself is kept."""
        self.is_deleted = True
        self.deleted_at = utcnow()
