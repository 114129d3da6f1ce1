# --- File: hotel_market/schemas/listing/audit.py ---
"""
Audit trail schemas.
"""

from datetime import datetime
from typing import Union

from pydantic import Field

from hotel_market.models.base.enums import AuditAction, AuditStatus
from hotel_market.schemas.common.base import BaseSchema

__all__ = ["AuditContext", "AuditLogResponse"]


class AuditContext(BaseSchema):
    """Optional request context recorded with an administrative decision."""

    ip_address: Union[str, None] = Field(default=None, max_length=45)
    user_agent: Union[str, None] = Field(default=None, max_length=500)


class AuditLogResponse(BaseSchema):
    """One entry of a listing's audit trail."""

    id: str
    hotel_id: str
    admin_id: str
    action: AuditAction
    old_status: Union[AuditStatus, None] = None
    new_status: Union[AuditStatus, None] = None
    reason: Union[str, None] = None
    ip_address: Union[str, None] = None
    user_agent: Union[str, None] = None
    created_at: datetime
