"""
Tests — Listing search
======================
Visibility, text and facility filters, guest capacity, price window,
sorting, pagination and the autocomplete / aggregate helpers.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from hotel_market.models import AuditStatus, PublishStatus
from hotel_market.schemas.listing import ListingCreate, ListingSearchCriteria, RoomTypeCreate
from hotel_market.services.common import errors

from tests.conftest import ADMIN, MERCHANT, room


def ids(response):
    return [card.id for card in response.items]


class TestVisibility:
    def test_only_visible_listings_are_returned(self, search, make_listing):
        visible = make_listing()
        make_listing(publish_status=PublishStatus.OFFLINE)
        make_listing(audit_status=AuditStatus.DRAFT)
        make_listing(audit_status=AuditStatus.PENDING)
        make_listing(audit_status=AuditStatus.REJECTED)
        make_listing(is_deleted=True)

        response = search.search()

        assert ids(response) == [visible]
        assert response.total == 1


class TestPagination:
    def test_pages_cover_every_listing_once(self, search, make_listing):
        created = [make_listing() for _ in range(25)]

        pages = [search.search({"page": page, "limit": 10}) for page in (1, 2, 3)]

        assert [len(p.items) for p in pages] == [10, 10, 5]
        assert [p.has_more for p in pages] == [True, True, False]
        assert all(p.total == 25 and p.total_pages == 3 for p in pages)
        assert [card_id for p in pages for card_id in ids(p)] == list(reversed(created))

    def test_first_page_has_more(self, search, make_listing):
        created = [make_listing() for _ in range(12)]

        response = search.search({"limit": 10})

        assert ids(response) == list(reversed(created))[:10]
        assert response.has_more is True

    def test_page_beyond_end_is_empty(self, search, make_listing):
        make_listing()
        response = search.search({"page": 5})
        assert response.items == []
        assert response.total == 1

    @pytest.mark.parametrize("field,value", [("page", 0), ("limit", 0), ("limit", 101)])
    def test_invalid_window(self, search, field, value):
        with pytest.raises(errors.ValidationError) as exc_info:
            search.search({field: value})
        assert exc_info.value.field == field


class TestTextFilters:
    def test_city_is_case_insensitive_substring(self, search, make_listing):
        hangzhou = make_listing(city="Hangzhou")
        make_listing(city="Beijing")

        assert ids(search.search({"city": "hang"})) == [hangzhou]

    def test_keyword_matches_name_and_address(self, search, make_listing):
        by_name = make_listing(name="Lakeside Retreat")
        by_address = make_listing(address="8 Lakeside Avenue")
        make_listing(name="City Centre Inn", address="1 Main Street")

        assert set(ids(search.search({"keyword": "lakeside"}))) == {by_name, by_address}

    def test_wildcards_are_literal(self, search, make_listing):
        make_listing(name="Plain Hotel")
        assert search.search({"keyword": "%"}).total == 0

    def test_star_rating(self, search, make_listing):
        five = make_listing(star_rating=5)
        make_listing(star_rating=4)
        assert ids(search.search({"star_rating": 5})) == [five]


class TestFacilities:
    def test_all_requested_facilities_required(self, search, make_listing):
        both = make_listing(facilities=["wifi", "pool", "gym"])
        make_listing(facilities=["wifi"])
        make_listing(facilities=[])

        assert ids(search.search({"facilities": "wifi,pool"})) == [both]
        assert ids(search.search({"facilities": ["pool", "wifi"]})) == [both]


class TestGuests:
    def test_listing_without_fitting_room_kept_without_price(self, search, make_listing):
        small = make_listing(rooms=[room("300", max_guests=2)])
        large = make_listing(rooms=[room("900", max_guests=4)])

        response = search.search({"guests": 3})
        cards = {card.id: card for card in response.items}

        assert set(cards) == {small, large}
        assert cards[small].min_price is None
        assert cards[large].min_price == Decimal("900.00")

    def test_price_filter_drops_listing_without_fitting_room(self, search, make_listing):
        make_listing(rooms=[room("300", max_guests=2)])
        large = make_listing(rooms=[room("900", max_guests=4)])

        response = search.search({"guests": 3, "min_price": 0})

        assert ids(response) == [large]


class TestPriceWindow:
    def test_any_room_in_range_matches(self, search, make_listing):
        discounted = make_listing(rooms=[room("1200", "0.80"), room("2000")])
        edge = make_listing(rooms=[room("700")])
        make_listing(rooms=[room("650")])
        make_listing(rooms=[room("1001")])
        make_listing(rooms=[room("800", is_available=False)])

        response = search.search({"min_price": 700, "max_price": 1000})

        assert set(ids(response)) == {discounted, edge}
        card = next(c for c in response.items if c.id == discounted)
        assert card.min_price == Decimal("960.00")
        assert card.max_price == Decimal("2000.00")
        assert card.has_discount is True
        assert card.max_discount == 20

    def test_min_above_max_rejected(self, search):
        with pytest.raises(errors.ValidationError) as exc_info:
            search.search({"min_price": 500, "max_price": 100})
        assert exc_info.value.field == "min_price"


class TestStayDates:
    def test_nights_and_estimated_total(self, search, make_listing):
        make_listing(rooms=[room("1000", "0.85"), room("1500")])

        card = search.search(
            {"check_in": date(2024, 5, 1), "check_out": date(2024, 5, 4)}
        ).items[0]

        assert card.nights == 3
        assert card.estimated_total == Decimal("2550.00")

    def test_without_dates_no_total(self, search, make_listing):
        make_listing()
        card = search.search().items[0]
        assert card.nights is None
        assert card.estimated_total is None

    def test_half_pair_rejected(self, search):
        with pytest.raises(errors.ValidationError) as exc_info:
            search.search({"check_in": date(2024, 5, 1)})
        assert exc_info.value.field == "check_out"

    def test_inverted_dates_rejected(self, search):
        with pytest.raises(errors.ValidationError) as exc_info:
            search.search({"check_in": date(2024, 5, 4), "check_out": date(2024, 5, 1)})
        assert exc_info.value.field == "check_out"


class TestSorting:
    def test_default_is_newest_first(self, search, make_listing):
        first = make_listing()
        second = make_listing()
        assert ids(search.search()) == [second, first]

    def test_price_ascending_puts_unpriced_last(self, search, make_listing):
        unpriced = make_listing(rooms=[])
        dear = make_listing(rooms=[room("900")])
        cheap = make_listing(rooms=[room("300")])

        assert ids(search.search({"sort_by": "price"})) == [cheap, dear, unpriced]

    def test_price_descending_puts_unpriced_last(self, search, make_listing):
        unpriced = make_listing(rooms=[])
        dear = make_listing(rooms=[room("900")])
        cheap = make_listing(rooms=[room("300")])

        response = search.search({"sort_by": "price", "order": "desc"})
        assert ids(response) == [dear, cheap, unpriced]

    def test_star_ties_broken_by_newest(self, search, make_listing):
        old_four = make_listing(star_rating=4)
        five = make_listing(star_rating=5)
        new_four = make_listing(star_rating=4)

        response = search.search({"sort_by": "star_rating"})
        assert ids(response) == [five, new_four, old_four]

    def test_oldest_first(self, search, make_listing):
        first = make_listing()
        second = make_listing()
        assert ids(search.search({"order": "asc"})) == [first, second]


class TestCriteria:
    def test_filters_applied_echoes_set_filters(self, search, make_listing):
        make_listing(city="Shanghai")
        response = search.search(ListingSearchCriteria(city="shang", facilities="wifi"))
        assert response.filters_applied == {"city": "shang", "facilities": ["wifi"]}

    def test_unknown_sort_field(self, search):
        with pytest.raises(errors.ValidationError) as exc_info:
            search.search({"sort_by": "popularity"})
        assert exc_info.value.field == "sort_by"


class TestQuickSearch:
    def test_short_term_returns_nothing(self, search, make_listing):
        make_listing(name="Peace Hotel")
        result = search.quick_search(" p ")
        assert result.hotels == []
        assert result.cities == []
        assert result.suggestions == []

    def test_matches_names_and_cities(self, search, make_listing):
        make_listing(name="Peace Hotel", city="Shanghai", province="Shanghai", star_rating=5)
        make_listing(name="Peach Garden", city="Pearl Bay", province="Guangdong")
        make_listing(name="Peace Draft", audit_status=AuditStatus.DRAFT)

        result = search.quick_search("pea")

        assert [h.name for h in result.hotels] == ["Peace Hotel", "Peach Garden"]
        assert result.hotels[0].min_price == Decimal("500.00")
        assert [c.city for c in result.cities] == ["Pearl Bay"]
        assert result.suggestions == [
            "Peace Hotel (Shanghai)",
            "Peach Garden (Pearl Bay)",
            "Pearl Bay (Guangdong)",
        ]

    def test_suggestions_capped(self, search, make_listing):
        for index in range(6):
            make_listing(name=f"Grand {index}", city=f"Grandville {index}", province="North")

        result = search.quick_search("grand", limit=6)

        assert len(result.hotels) == 6
        assert len(result.cities) == 3
        assert len(result.suggestions) == 5


class TestPopularCities:
    def test_ranked_by_listing_count(self, search, make_listing):
        make_listing(city="Chengdu", province="Sichuan", rooms=[room("400")])
        make_listing(city="Chengdu", province="Sichuan", rooms=[room("1000", "0.25")])
        make_listing(city="Xian", province="Shaanxi", rooms=[])
        make_listing(city="Lhasa", province="Tibet", audit_status=AuditStatus.PENDING)

        cities = search.popular_cities()

        assert [(c.city, c.hotel_count) for c in cities] == [("Chengdu", 2), ("Xian", 1)]
        assert cities[0].min_price == Decimal("250.00")
        assert cities[1].min_price is None

    def test_limit(self, search, make_listing):
        for city in ("A-town", "B-town", "C-town"):
            make_listing(city=city)
        assert len(search.popular_cities(limit=2)) == 2


class TestPriceRangeStats:
    def test_no_prices(self, search, make_listing):
        make_listing(rooms=[])

        stats = search.price_range_stats()

        assert stats.min_price is None
        assert stats.max_price is None
        assert stats.buckets == []
        assert len(stats.suggested_ranges) == 4
        assert stats.suggested_ranges[-1].max_price is None

    def test_four_equal_buckets(self, search, make_listing):
        for price in ("100", "200", "300", "500"):
            make_listing(rooms=[room(price)])

        stats = search.price_range_stats()

        assert stats.min_price == Decimal("100.00")
        assert stats.max_price == Decimal("500.00")
        assert [(b.min_price, b.max_price, b.count) for b in stats.buckets] == [
            (Decimal(100), Decimal(200), 1),
            (Decimal(200), Decimal(300), 1),
            (Decimal(300), Decimal(400), 1),
            (Decimal(400), Decimal(500), 1),
        ]

    def test_city_filter(self, search, make_listing):
        make_listing(city="Suzhou", rooms=[room("300")])
        make_listing(city="Beijing", rooms=[room("900")])

        stats = search.price_range_stats(city="Suzhou")
        assert stats.max_price == Decimal("300.00")
        assert sum(b.count for b in stats.buckets) == 1


class TestEndToEnd:
    def test_published_listing_is_searchable(self, search, listings, lifecycle):
        created = listings.create_listing(
            MERCHANT,
            ListingCreate(
                name="Riverside Lodge",
                city="Guilin",
                address="3 Li River Road",
                star_rating=4,
                facilities=["wifi", "parking"],
                room_types=[
                    RoomTypeCreate(name="Deluxe", base_price=Decimal("1000"), discount_rate=Decimal("0.85")),
                    RoomTypeCreate(name="Single", base_price=Decimal("600")),
                    RoomTypeCreate(name="Suite", base_price=Decimal("1200")),
                ],
            ),
        )
        assert search.search({"city": "guilin"}).total == 0

        lifecycle.submit_for_review(created.id, MERCHANT)
        lifecycle.decide(created.id, "approved", None, ADMIN)
        assert search.search({"city": "guilin"}).total == 0

        lifecycle.toggle_publish(created.id, ADMIN)
        response = search.search({"city": "guilin", "min_price": 700, "max_price": 1000})

        assert ids(response) == [created.id]
        card = response.items[0]
        assert (card.min_price, card.max_price) == (Decimal("600.00"), Decimal("1200.00"))
        assert search.search({"facilities": "wifi,parking"}).total == 1
        assert search.search({"facilities": "wifi,pool"}).total == 0

    def test_rejected_listing_never_searchable(self, search, listings, lifecycle):
        created = listings.create_listing(
            MERCHANT,
            ListingCreate(name="Half Done", city="Guilin", address="?", star_rating=3),
        )
        lifecycle.submit_for_review(created.id, MERCHANT)
        rejected = lifecycle.decide(created.id, "rejected", "incomplete address", ADMIN)

        assert rejected.audit_status == AuditStatus.REJECTED
        assert rejected.publish_status == PublishStatus.OFFLINE
        assert rejected.rejection_reason == "incomplete address"
        assert search.search({"city": "guilin"}).total == 0
