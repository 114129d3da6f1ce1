"""
Shared service-layer building blocks: errors, unit of work, pagination.
"""

from hotel_market.services.common.errors import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ServiceError,
    StoreError,
    TransactionError,
    ValidationError,
)
from hotel_market.services.common.unit_of_work import UnitOfWork

__all__ = [
    "ServiceError",
    "ValidationError",
    "InvalidStateError",
    "NotFoundError",
    "AuthorizationError",
    "StoreError",
    "TransactionError",
    "ConflictError",
    "UnitOfWork",
]
