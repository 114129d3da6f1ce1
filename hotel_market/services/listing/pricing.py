# hotel_market/services/listing/pricing.py
"""
Room pricing calculations.

Pure functions over anything exposing ``base_price``, ``discount_rate``,
``max_guests`` and ``is_available`` (ORM rows or schemas). Every currency
value is rounded to two places, half up, where it is computed.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from math import ceil
from typing import Any, Iterable, List, Optional, Union

from hotel_market.schemas.listing.public import DiscountSummary, PriceRange
from hotel_market.services.common.errors import ValidationError

TWO_PLACES = Decimal("0.01")
ONE = Decimal("1")
SECONDS_PER_DAY = 86400

StayDate = Union[date, datetime]


def to_money(value: Any) -> Decimal:
    """Round any numeric value to a two-place Decimal."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _rate(room_type: Any) -> Decimal:
    rate = room_type.discount_rate
    if rate is None:
        return ONE
    return rate if isinstance(rate, Decimal) else Decimal(str(rate))


def discounted_price(room_type: Any) -> Decimal:
    """
    Nightly price after discount: base 1000 at rate 0.85 gives 850.00.
    """
    base = room_type.base_price
    if not isinstance(base, Decimal):
        base = Decimal(str(base))
    return to_money(base * _rate(room_type))


def discount_percentage(room_type: Any) -> int:
    """Discount as a whole percentage; 0 when the rate is 1.00."""
    off = (ONE - _rate(room_type)) * 100
    return int(off.quantize(ONE, rounding=ROUND_HALF_UP))


def qualifying_room_types(room_types: Iterable[Any], guests: Optional[int] = None) -> List[Any]:
    """Available room types that can hold ``guests`` (any size when None)."""
    return [
        rt for rt in room_types
        if rt.is_available and (guests is None or rt.max_guests >= guests)
    ]


def price_range(room_types: Iterable[Any], guests: Optional[int] = None) -> PriceRange:
    """Min and max discounted price over qualifying room types."""
    prices = [discounted_price(rt) for rt in qualifying_room_types(room_types, guests)]
    if not prices:
        return PriceRange(min_price=None, max_price=None)
    return PriceRange(min_price=min(prices), max_price=max(prices))


def average_price(room_types: Iterable[Any], guests: Optional[int] = None) -> Optional[Decimal]:
    prices = [discounted_price(rt) for rt in qualifying_room_types(room_types, guests)]
    if not prices:
        return None
    return to_money(sum(prices) / len(prices))


def nights_between(check_in: StayDate, check_out: StayDate) -> int:
    """
    Number of nights for a stay, rounding a partial day up.

    Raises:
        ValidationError: If check_out is not after check_in
    """
    if check_out <= check_in:
        raise ValidationError(
            "check_out must be after check_in",
            field="check_out",
            details={"check_in": str(check_in), "check_out": str(check_out)},
        )

    delta = check_out - check_in
    return ceil(delta.total_seconds() / SECONDS_PER_DAY)


def stay_total(nightly_price: Decimal, nights: int) -> Decimal:
    return to_money(nightly_price * nights)


def estimated_total(room_type: Any, check_in: StayDate, check_out: StayDate) -> Decimal:
    """Discounted nightly price times the number of nights."""
    return stay_total(discounted_price(room_type), nights_between(check_in, check_out))


def discount_summary(room_types: Iterable[Any]) -> DiscountSummary:
    """Whether any available room is discounted, and the deepest discount."""
    percentages = [
        discount_percentage(rt)
        for rt in room_types
        if rt.is_available
    ]
    deepest = max(percentages, default=0)
    return DiscountSummary(has_discount=deepest > 0, max_discount=deepest)
