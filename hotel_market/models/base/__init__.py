"""
Base model classes, mixins and enums.
"""

from hotel_market.models.base.base_model import Base, BaseModel, TimestampModel, utcnow
from hotel_market.models.base.enums import (
    EDITABLE_AUDIT_STATUSES,
    SUBMITTABLE_AUDIT_STATUSES,
    AuditAction,
    AuditStatus,
    DecisionOutcome,
    PublishStatus,
    SortField,
    SortOrder,
    ViewerRole,
)
from hotel_market.models.base.mixins import SoftDeleteMixin

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "utcnow",
    "SoftDeleteMixin",
    "AuditAction",
    "AuditStatus",
    "DecisionOutcome",
    "PublishStatus",
    "SortField",
    "SortOrder",
    "ViewerRole",
    "EDITABLE_AUDIT_STATUSES",
    "SUBMITTABLE_AUDIT_STATUSES",
]
