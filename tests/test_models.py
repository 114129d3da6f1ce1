"""
Tests — Listing store
=====================
Column types, table constraints and the append-only audit log.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError, InvalidRequestError

from hotel_market.models import (
    AuditAction,
    AuditStatus,
    Hotel,
    ListingAuditLog,
    PublishStatus,
    RoomType,
)
from hotel_market.repositories.listing import ListingAuditLogRepository

from tests.conftest import ADMIN, room


@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()


class TestHotel:
    def test_online_requires_approval(self, session):
        session.add(
            Hotel(
                merchant_id="m",
                name="Too early",
                audit_status=AuditStatus.PENDING,
                publish_status=PublishStatus.ONLINE,
            )
        )
        with pytest.raises(IntegrityError):
            session.commit()

    def test_rejection_needs_reason(self, session):
        session.add(Hotel(merchant_id="m", name="No reason", audit_status=AuditStatus.REJECTED))
        with pytest.raises(IntegrityError):
            session.commit()

    def test_star_rating_validated(self):
        with pytest.raises(ValueError):
            Hotel(merchant_id="m", name="Six stars", star_rating=6)

    def test_facilities_normalized(self, session, make_listing):
        listing_id = make_listing(facilities=[" wifi", "wifi", "", "pool "])
        assert session.get(Hotel, listing_id).facilities == ["wifi", "pool"]

    def test_version_increments(self, session, make_listing):
        hotel = session.get(Hotel, make_listing())
        assert hotel.version == 1
        hotel.name = "Renamed"
        session.commit()
        assert hotel.version == 2

    def test_main_image_fallback(self, session, make_listing):
        listing_id = make_listing(
            images=[{"url": "first.jpg", "sort_order": 0}, {"url": "second.jpg", "sort_order": 1}]
        )
        assert session.get(Hotel, listing_id).main_image_url == "first.jpg"


class TestRoomType:
    def test_money_round_trip_is_exact(self, session, make_listing):
        listing_id = make_listing(rooms=[room("199.999", "0.855")])
        rt = session.get(Hotel, listing_id).room_types[0]
        assert rt.base_price == Decimal("200.00")
        assert rt.discount_rate == Decimal("0.86")

    def test_rate_range_enforced(self, session, make_listing):
        hotel = session.get(Hotel, make_listing())
        hotel.room_types.append(RoomType(name="Free", base_price=Decimal("100"), discount_rate=Decimal("0.05")))
        with pytest.raises(IntegrityError):
            session.commit()


class TestAuditLog:
    def test_entries_are_append_only(self, session, make_listing):
        entry = ListingAuditLog(
            hotel_id=make_listing(),
            admin_id=ADMIN,
            action=AuditAction.APPROVE,
            old_status=AuditStatus.PENDING,
            new_status=AuditStatus.APPROVED,
        )
        session.add(entry)
        session.commit()

        entry.reason = "changed my mind"
        with pytest.raises(InvalidRequestError):
            session.commit()
        session.rollback()

        session.delete(entry)
        with pytest.raises(InvalidRequestError):
            session.commit()

    def test_repository_refuses_changes(self, session, make_listing):
        entry = ListingAuditLog(
            hotel_id=make_listing(),
            admin_id=ADMIN,
            action=AuditAction.REJECT,
            old_status=AuditStatus.PENDING,
            new_status=AuditStatus.REJECTED,
            reason="Photos are missing",
        )
        repo = ListingAuditLogRepository(session)
        repo.append(entry)

        with pytest.raises(InvalidRequestError):
            repo.save(entry)
        with pytest.raises(InvalidRequestError):
            repo.delete(entry)
        assert repo.list_for_hotel(entry.hotel_id) == [entry]
