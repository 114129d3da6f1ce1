"""
Shared fixtures: an in-memory SQLite store, a private event bus and
factories that seed listings directly through the ORM.
"""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

import pytest
from sqlalchemy.pool import StaticPool

from hotel_market.config.settings import Settings
from hotel_market.core.events import EventBus, ListingStatusChanged
from hotel_market.db import build_engine, build_session_factory, init_db
from hotel_market.models import AuditStatus, Hotel, HotelImage, PublishStatus, RoomType
from hotel_market.services.listing import (
    ListingAdminViewService,
    ListingLifecycleService,
    ListingService,
)
from hotel_market.services.listing_public import ListingSearchService, PublicListingService

MERCHANT = "merchant-1"
OTHER_MERCHANT = "merchant-2"
ADMIN = "admin-1"

T0 = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture
def engine():
    engine = build_engine(Settings(DATABASE_URL="sqlite://"), poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def events(bus) -> List[ListingStatusChanged]:
    received: List[ListingStatusChanged] = []
    bus.subscribe(ListingStatusChanged, received.append)
    return received


# ---------------------------------------------------------------------- #
# Services
# ---------------------------------------------------------------------- #
@pytest.fixture
def lifecycle(session_factory, bus) -> ListingLifecycleService:
    return ListingLifecycleService(session_factory, bus=bus)


@pytest.fixture
def listings(session_factory) -> ListingService:
    return ListingService(session_factory)


@pytest.fixture
def admin_views(session_factory) -> ListingAdminViewService:
    return ListingAdminViewService(session_factory)


@pytest.fixture
def search(session_factory) -> ListingSearchService:
    return ListingSearchService(session_factory)


@pytest.fixture
def public(session_factory) -> PublicListingService:
    return PublicListingService(session_factory)


# ---------------------------------------------------------------------- #
# Seeding
# ---------------------------------------------------------------------- #
def room(
    base_price: Any = "500.00",
    discount_rate: Any = "1.00",
    max_guests: int = 2,
    is_available: bool = True,
    name: str = "Standard",
    **fields: Any,
) -> Dict[str, Any]:
    return dict(
        name=name,
        base_price=Decimal(str(base_price)),
        discount_rate=Decimal(str(discount_rate)),
        max_guests=max_guests,
        is_available=is_available,
        **fields,
    )


@pytest.fixture
def make_listing(session_factory):
    """
    Insert a listing and return its id.

    Each call is one minute newer than the previous one unless
    ``created_at`` is given.
    """
    clock = itertools.count()

    def _make(
        *,
        merchant_id: str = MERCHANT,
        name: Optional[str] = None,
        audit_status: AuditStatus = AuditStatus.APPROVED,
        publish_status: Optional[PublishStatus] = None,
        rooms: Optional[Iterable[Dict[str, Any]]] = None,
        images: Iterable[Dict[str, Any]] = (),
        created_at: Optional[datetime] = None,
        is_deleted: bool = False,
        **fields: Any,
    ) -> str:
        tick = next(clock)
        if publish_status is None:
            publish_status = (
                PublishStatus.ONLINE
                if audit_status == AuditStatus.APPROVED
                else PublishStatus.OFFLINE
            )
        if audit_status == AuditStatus.REJECTED:
            fields.setdefault("rejection_reason", "Photos are missing")

        fields.setdefault("city", "Shanghai")
        fields.setdefault("province", "Shanghai")
        fields.setdefault("address", f"{tick + 1} Nanjing Road")
        fields.setdefault("star_rating", 3)

        hotel = Hotel(
            merchant_id=merchant_id,
            name=name or f"Hotel {tick + 1}",
            audit_status=audit_status,
            publish_status=publish_status,
            **fields,
        )
        hotel.created_at = created_at or T0 + timedelta(minutes=tick)
        hotel.updated_at = hotel.created_at
        hotel.room_types = [RoomType(**r) for r in (rooms if rooms is not None else [room()])]
        hotel.images = [HotelImage(**img) for img in images]
        if is_deleted:
            hotel.mark_deleted()

        session = session_factory()
        try:
            session.add(hotel)
            session.commit()
            return hotel.id
        finally:
            session.close()

    return _make


@pytest.fixture
def load_hotel(session_factory):
    """Read a listing row (withdrawn ones included) in a throwaway session."""

    def _load(listing_id: str) -> Hotel:
        session = session_factory()
        try:
            hotel = session.get(Hotel, listing_id)
            session.expunge(hotel)
            return hotel
        finally:
            session.close()

    return _load
