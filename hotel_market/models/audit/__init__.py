"""
Audit trail models.
"""

from hotel_market.models.audit.listing_audit_log import ListingAuditLog

__all__ = ["ListingAuditLog"]
