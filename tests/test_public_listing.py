"""
Tests — Public listing reads
============================
Detail view pricing, per-listing price range, recommendations and the
facility reference catalog.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from hotel_market.models import AuditStatus, PublishStatus
from hotel_market.services.common import errors
from hotel_market.services.listing_public import facility_catalog

from tests.conftest import room


@pytest.fixture
def hotel_id(make_listing):
    return make_listing(
        name="Garden Hotel",
        star_rating=4,
        rooms=[
            room("1000", "0.85", max_guests=2, name="Deluxe"),
            room("600", max_guests=1, name="Single"),
            room("1800", "0.90", max_guests=4, name="Family"),
            room("300", is_available=False, name="Closed"),
        ],
        images=[
            {"url": "https://img.example/b.jpg", "sort_order": 1},
            {"url": "https://img.example/a.jpg", "sort_order": 0},
            {"url": "https://img.example/main.jpg", "sort_order": 1, "is_main": True},
        ],
    )


class TestPublicDetail:
    def test_room_pricing(self, public, hotel_id):
        detail = public.get_public_detail(hotel_id)

        assert [rt.name for rt in detail.room_types] == ["Single", "Deluxe", "Family"]
        deluxe = detail.room_types[1]
        assert deluxe.discounted_price == Decimal("850.00")
        assert deluxe.discount_percentage == 15
        assert deluxe.total_price is None

        assert detail.min_price == Decimal("600.00")
        assert detail.max_price == Decimal("1620.00")
        assert detail.avg_price == Decimal("1023.33")
        assert detail.has_discount is True
        assert detail.max_discount == 15

    def test_images_ordered(self, public, hotel_id):
        detail = public.get_public_detail(hotel_id)
        assert [img.url for img in detail.images] == [
            "https://img.example/a.jpg",
            "https://img.example/main.jpg",
            "https://img.example/b.jpg",
        ]

    def test_stay_totals(self, public, hotel_id):
        detail = public.get_public_detail(
            hotel_id, check_in=date(2024, 5, 1), check_out=date(2024, 5, 3)
        )

        assert detail.nights == 2
        assert detail.estimated_total == Decimal("1200.00")
        assert [rt.total_price for rt in detail.room_types] == [
            Decimal("1200.00"),
            Decimal("1700.00"),
            Decimal("3240.00"),
        ]

    def test_guests_mark_fitting_rooms(self, public, hotel_id):
        detail = public.get_public_detail(hotel_id, guests=2)

        fits = {rt.name: rt.is_available_for_guests for rt in detail.room_types}
        assert fits == {"Single": False, "Deluxe": True, "Family": True}
        assert detail.min_price == Decimal("850.00")
        assert detail.guests == 2

    def test_invalid_stay(self, public, hotel_id):
        with pytest.raises(errors.ValidationError):
            public.get_public_detail(hotel_id, check_in=date(2024, 5, 3), check_out=date(2024, 5, 3))
        with pytest.raises(errors.ValidationError) as exc_info:
            public.get_public_detail(hotel_id, check_out=date(2024, 5, 3))
        assert exc_info.value.field == "check_in"
        with pytest.raises(errors.ValidationError):
            public.get_public_detail(hotel_id, guests=0)

    @pytest.mark.parametrize(
        "overrides",
        [
            {"audit_status": AuditStatus.PENDING},
            {"publish_status": PublishStatus.OFFLINE},
            {"is_deleted": True},
        ],
    )
    def test_hidden_listing_is_not_found(self, public, make_listing, overrides):
        listing_id = make_listing(**overrides)
        with pytest.raises(errors.NotFoundError):
            public.get_public_detail(listing_id)


class TestPriceRange:
    def test_span_of_available_rooms(self, public, hotel_id):
        span = public.price_range(hotel_id)
        assert span.min_price == Decimal("600.00")
        assert span.max_price == Decimal("1620.00")

    def test_none_without_bookable_rooms(self, public, make_listing):
        listing_id = make_listing(rooms=[room("300", is_available=False)])
        assert public.price_range(listing_id) is None

    def test_hidden_listing(self, public, make_listing):
        listing_id = make_listing(audit_status=AuditStatus.DRAFT)
        with pytest.raises(errors.NotFoundError):
            public.price_range(listing_id)


class TestRecommended:
    def test_high_rated_best_first(self, public, make_listing):
        make_listing(star_rating=3)
        old_four = make_listing(star_rating=4, rooms=[room("500", "0.80")])
        five = make_listing(star_rating=5)
        new_four = make_listing(star_rating=4)
        make_listing(star_rating=5, audit_status=AuditStatus.PENDING)

        picks = public.recommended()

        assert [p.id for p in picks] == [five, new_four, old_four]
        reasons = {p.id: p.recommendation_reason for p in picks}
        assert reasons[five] == "Top luxury hotel"
        assert reasons[old_four] == "Special discount"
        assert reasons[new_four] == "Highly rated"

    def test_city_and_limit(self, public, make_listing):
        for _ in range(3):
            make_listing(star_rating=5, city="Xiamen")
        make_listing(star_rating=5, city="Nanjing")

        picks = public.recommended(city="xiamen", limit=2)

        assert len(picks) == 2
        assert all(p.city == "Xiamen" for p in picks)


class TestFacilityCatalog:
    def test_catalog_groups_by_category(self):
        catalog = facility_catalog.facility_catalog()

        assert len(catalog.facilities) == len(facility_catalog.FACILITY_OPTIONS)
        assert catalog.categories[0] == "Internet"
        assert sum(len(v) for v in catalog.categorized.values()) == len(catalog.facilities)

    def test_lookup(self):
        assert facility_catalog.get_facility("wifi").category == "Internet"
        assert facility_catalog.get_facility("helipad") is None
