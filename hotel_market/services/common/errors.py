# hotel_market/services/common/errors.py
"""
Service-layer exceptions.

These exceptions are raised by service methods and are meant to be
translated by the (external) transport layer into its own responses.
"""
from __future__ import annotations

from typing import Any, Optional


class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(ServiceError):
    """Raised when a requested resource does not exist (or was withdrawn)."""

    def __init__(
        self,
        resource_type: str,
        identifier: str | int,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with identifier '{identifier}' not found"
        super().__init__(message, details)
        self.resource_type = resource_type
        self.identifier = identifier


class ValidationError(ServiceError):
    """Raised when input is malformed or a listing is incomplete."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field


class InvalidStateError(ServiceError):
    """Raised when an operation is not allowed in the listing's current state."""

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.current_state = current_state


class AuthorizationError(ServiceError):
    """Raised when the caller does not own the listing."""

    def __init__(
        self,
        message: str = "Authorization failed",
        required_permission: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, details)
        self.required_permission = required_permission


class StoreError(ServiceError):
    """Raised when the listing store fails to read or persist."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        details = {"error_type": type(original_error).__name__} if original_error else {}
        super().__init__(message, details)
        self.original_error = original_error


class TransactionError(StoreError):
    """Raised when a database transaction fails to flush or commit."""


class ConflictError(StoreError):
    """Raised when a concurrent writer changed the row first."""
