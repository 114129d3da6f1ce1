# hotel_market/services/listing/publish_gate.py
"""
Public visibility rules for listings.

``is_publicly_visible`` and ``visible_clause`` express the same predicate,
once for loaded rows and once for SQL queries.
"""
from __future__ import annotations

from typing import Any, Type

from sqlalchemy import and_
from sqlalchemy.sql.elements import ColumnElement

from hotel_market.models.base.enums import AuditStatus, PublishStatus
from hotel_market.models.listing import Hotel


def is_publicly_visible(listing: Any) -> bool:
    """Approved, online and not withdrawn."""
    return (
        listing.audit_status == AuditStatus.APPROVED
        and listing.publish_status == PublishStatus.ONLINE
        and not getattr(listing, "is_deleted", False)
    )


def can_toggle_publish(listing: Any) -> bool:
    return listing.audit_status == AuditStatus.APPROVED


def visible_clause(model: Type[Hotel] = Hotel) -> ColumnElement[bool]:
    return and_(
        model.audit_status == AuditStatus.APPROVED,
        model.publish_status == PublishStatus.ONLINE,
        model.is_deleted.is_(False),
    )
