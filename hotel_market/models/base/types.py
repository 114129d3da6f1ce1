"""
Custom SQLAlchemy types for listing data.

Provides column types for two-place money amounts, facility tag
sets stored as JSON arrays, and string-backed enums that behave
the same on SQLite and PostgreSQL.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List, Optional, Type
import enum

from sqlalchemy import JSON, Enum as SQLEnum, Numeric, TypeDecorator

TWO_PLACES = Decimal("0.01")


class MoneyType(TypeDecorator):
    """
    Fixed two-decimal money amount.

    Values are quantized with ROUND_HALF_UP on the way in and out, so
    a backend without a native decimal (SQLite) still hands back exact
    ``Decimal`` cents.
    """

    impl = Numeric(10, 2)
    cache_ok = True

    def process_bind_param(self, value: Optional[Any], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    def process_result_value(self, value: Optional[Any], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


class RateType(TypeDecorator):
    """Discount multiplier stored with two decimals (0.85 = 15% off)."""

    impl = Numeric(3, 2)
    cache_ok = True

    def process_bind_param(self, value: Optional[Any], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)

    def process_result_value(self, value: Optional[Any], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(str(value)).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def normalize_tags(values: Optional[Iterable[Any]]) -> List[str]:
    """Strip, drop blanks and de-duplicate while keeping first-seen order."""
    seen: List[str] = []
    for value in values or []:
        tag = str(value).strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class TagListType(TypeDecorator):
    """
    Free-form facility tags stored as a JSON array.

    The list is treated as a set: blanks and duplicates never reach
    the database.
    """

    impl = JSON
    cache_ok = True

    def process_bind_param(self, value: Optional[Iterable[Any]], dialect) -> List[str]:
        return normalize_tags(value)

    def process_result_value(self, value: Optional[List[Any]], dialect) -> List[str]:
        return normalize_tags(value)


def string_enum(enum_cls: Type[enum.Enum], name: str, length: int = 20) -> SQLEnum:
    """
    Enum column stored as its ``value`` string, without a native DB type.
    """
    return SQLEnum(
        enum_cls,
        name=name,
        native_enum=False,
        length=length,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )
