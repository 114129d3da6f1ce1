# hotel_market/services/common/pagination.py
"""
Pagination utilities for service layer.

Provides helpers to build paginated responses and to slice
in-memory result sets that were filtered after the query.
"""
from __future__ import annotations

from typing import Callable, List, Sequence, TypeVar

from hotel_market.config.settings import settings
from hotel_market.schemas.common.base import BaseSchema
from hotel_market.schemas.common.pagination import PaginatedResponse, PaginationParams

from .errors import ValidationError

TModel = TypeVar("TModel")
TSchema = TypeVar("TSchema", bound=BaseSchema)
TItem = TypeVar("TItem")


class PaginationError(ValidationError):
    """Raised when pagination parameters are invalid."""


def validate_page_window(page: int, page_size: int) -> None:
    """
    Validate a page / page size pair.

    Raises:
        PaginationError: If parameters are invalid
    """
    if page < 1:
        raise PaginationError(
            "Page number must be >= 1",
            field="page",
            details={"page": page},
        )

    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        raise PaginationError(
            f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}",
            field="page_size",
            details={"page_size": page_size, "max": settings.MAX_PAGE_SIZE},
        )


def paginate(
    *,
    items: Sequence[TModel],
    total_items: int,
    params: PaginationParams,
    mapper: Callable[[TModel], TSchema],
) -> PaginatedResponse[TSchema]:
    """
    Build a paginated response from models.

    Args:
        items: Current page of ORM model instances
        total_items: Total count across all pages
        params: Pagination parameters (page, page_size)
        mapper: Function to convert model to schema
    """
    validate_page_window(params.page, params.page_size)

    schema_items: list[TSchema] = [mapper(item) for item in items]

    return PaginatedResponse[TSchema].create(
        items=schema_items,
        total_items=total_items,
        page=params.page,
        page_size=params.page_size,
    )


def slice_page(items: Sequence[TItem], page: int, page_size: int) -> List[TItem]:
    """Return one page of an already filtered and sorted sequence."""
    offset = calculate_offset(page, page_size)
    return list(items[offset:offset + page_size])


def calculate_offset(page: int, page_size: int) -> int:
    """
    Calculate query offset.

    Example:
        >>> calculate_offset(page=3, page_size=20)
        40
    """
    return (page - 1) * page_size


def calculate_total_pages(total_items: int, page_size: int) -> int:
    """
    Calculate total number of pages.

    Example:
        >>> calculate_total_pages(total_items=95, page_size=20)
        5
    """
    if page_size <= 0:
        return 0
    return (total_items + page_size - 1) // page_size


def has_more_pages(page: int, page_size: int, total_items: int) -> bool:
    return page * page_size < total_items
