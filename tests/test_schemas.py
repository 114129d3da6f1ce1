"""
Tests — Schemas
===============
Field-level validation and money serialization.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from hotel_market.models.base.enums import SortField, SortOrder
from hotel_market.schemas.common.pagination import PaginatedResponse, PaginationParams
from hotel_market.schemas.listing import (
    ListingCreate,
    ListingSearchCriteria,
    PriceRange,
    RoomTypeCreate,
)


class TestListingCreate:
    def test_name_length(self):
        with pytest.raises(ValidationError):
            ListingCreate(name="A")
        assert ListingCreate(name="  Ab  ").name == "Ab"

    @pytest.mark.parametrize("value", ["24:00", "9:00", "noon"])
    def test_time_format(self, value):
        with pytest.raises(ValidationError):
            ListingCreate(name="Hotel", check_in_time=value)

    def test_star_range(self):
        with pytest.raises(ValidationError):
            ListingCreate(name="Hotel", star_rating=6)

    def test_opening_year_not_in_future(self):
        with pytest.raises(ValidationError):
            ListingCreate(name="Hotel", opening_year=date.today().year + 1)
        assert ListingCreate(name="Hotel", opening_year=1999).opening_year == 1999

    def test_facilities_from_string(self):
        assert ListingCreate(name="Hotel", facilities=" wifi ,,pool,wifi").facilities == ["wifi", "pool"]


class TestRoomTypeCreate:
    @pytest.mark.parametrize("rate", ["0.09", "1.01"])
    def test_discount_rate_bounds(self, rate):
        with pytest.raises(ValidationError):
            RoomTypeCreate(name="Twin", base_price=Decimal("100"), discount_rate=Decimal(rate))

    def test_price_must_be_positive(self):
        with pytest.raises(ValidationError):
            RoomTypeCreate(name="Twin", base_price=Decimal("0"))

    def test_defaults(self):
        rt = RoomTypeCreate(name="Twin", base_price=Decimal("100"))
        assert rt.discount_rate == Decimal("1.00")
        assert rt.max_guests == 2
        assert rt.available_count == 10
        assert rt.is_available is True


class TestSearchCriteria:
    def test_defaults(self):
        criteria = ListingSearchCriteria()
        assert criteria.page == 1
        assert criteria.limit == 10
        assert criteria.guests is None
        assert criteria.sort_by == SortField.CREATED_AT
        assert criteria.effective_order == SortOrder.DESC
        assert criteria.has_price_filter is False
        assert criteria.applied_filters() == {}

    def test_price_sort_defaults_ascending(self):
        assert ListingSearchCriteria(sort_by="price").effective_order == SortOrder.ASC
        assert ListingSearchCriteria(sort_by="price", order="desc").effective_order == SortOrder.DESC

    def test_blank_text_ignored(self):
        criteria = ListingSearchCriteria(city="  ", keyword="")
        assert criteria.city is None
        assert criteria.keyword is None

    def test_negative_price(self):
        with pytest.raises(ValidationError):
            ListingSearchCriteria(min_price=-1)


class TestMoney:
    def test_json_dump_keeps_two_places(self):
        span = PriceRange(min_price=Decimal("850"), max_price=Decimal("1620.5"))
        assert span.model_dump(mode="json") == {"min_price": "850.00", "max_price": "1620.50"}
        assert span.model_dump()["min_price"] == Decimal("850")


class TestPagination:
    def test_offset_and_meta(self):
        params = PaginationParams(page=3, page_size=20)
        assert params.offset == 40

        page = PaginatedResponse[int].create(items=[1, 2], total_items=42, page=3, page_size=20)
        assert page.meta.total_pages == 3
        assert page.meta.has_next is False
        assert page.meta.has_previous is True
