# --- File: hotel_market/schemas/common/base.py ---
"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "BaseDBSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
    "BaseFilterSchema",
    "Money",
]

# Money amounts keep Decimal precision in Python and dump as "850.00"
Money = Annotated[
    Decimal,
    PlainSerializer(lambda v: f"{v:.2f}", return_type=str, when_used="json"),
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All schemas inherit from this to get ORM loading, stripped strings
    and validation on assignment.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Keep enums as Enum instances; callers use `.value` when needed.
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last update timestamp",
    )


class BaseDBSchema(BaseSchema, TimestampMixin):
    """Base schema for database entities with ID and timestamps."""

    id: str = Field(..., description="Unique identifier")


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""
    pass


class BaseUpdateSchema(BaseSchema):
    """
    Base schema for update operations.

    Subclasses declare every field Optional; only fields explicitly set
    by the caller are applied (``model_dump(exclude_unset=True)``).
    """
    pass


class BaseResponseSchema(BaseDBSchema):
    """Base schema for service responses."""
    pass


class BaseFilterSchema(BaseSchema):
    """Base schema for filter parameters."""
    pass
