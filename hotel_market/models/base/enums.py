"""
Database enums mirroring schema enums.

Provides SQLAlchemy-compatible enum definitions that match
the Pydantic schema enums for consistency.
"""

import enum


class AuditStatus(str, enum.Enum):
    """Audit (moderation) status of a listing."""
    DRAFT = "draft"
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PublishStatus(str, enum.Enum):
    """Public visibility toggle, meaningful only once approved."""
    ONLINE = "online"
    OFFLINE = "offline"


class AuditAction(str, enum.Enum):
    """Administrative action recorded in the audit log."""
    APPROVE = "approve"
    REJECT = "reject"
    SUSPEND = "suspend"
    ACTIVATE = "activate"


class DecisionOutcome(str, enum.Enum):
    """Outcomes an administrator may choose when deciding a pending listing."""
    APPROVED = "approved"
    REJECTED = "rejected"


class ViewerRole(str, enum.Enum):
    """Role of the caller, as supplied by the transport layer."""
    MERCHANT = "merchant"
    ADMIN = "admin"
    GUEST = "guest"


class SortField(str, enum.Enum):
    """Sortable fields for listing search."""
    CREATED_AT = "created_at"
    PRICE = "price"
    STAR_RATING = "star_rating"


class SortOrder(str, enum.Enum):
    """Sort direction."""
    ASC = "asc"
    DESC = "desc"


# Editable states for merchant edits
EDITABLE_AUDIT_STATUSES = frozenset(
    {AuditStatus.DRAFT, AuditStatus.PENDING, AuditStatus.REJECTED}
)

# States from which a merchant may submit for review
SUBMITTABLE_AUDIT_STATUSES = frozenset({AuditStatus.DRAFT, AuditStatus.REJECTED})
