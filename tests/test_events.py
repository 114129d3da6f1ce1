"""
Tests — Event bus
=================
Subscription matching, failure isolation and event serialization.
"""

from __future__ import annotations

import json

from hotel_market.core.events import (
    BaseDomainEvent,
    EventBus,
    EventCategory,
    ListingStatusChanged,
)


def changed(**overrides):
    fields = dict(
        listing_id="hotel-1",
        status_field="audit_status",
        old_status="draft",
        new_status="pending",
        actor_id="merchant-1",
    )
    fields.update(overrides)
    return ListingStatusChanged(**fields)


class TestListingStatusChanged:
    def test_metadata_filled(self):
        event = changed()
        assert event.event_type == "ListingStatusChanged"
        assert event.event_category == EventCategory.LISTING
        assert event.entity_type == "hotel"
        assert event.entity_id == "hotel-1"
        assert event.withdrawn is False

    def test_json(self):
        payload = json.loads(changed(withdrawn=True).to_json())
        assert payload["event_category"] == "listing"
        assert payload["listing_id"] == "hotel-1"
        assert payload["withdrawn"] is True


class TestEventBus:
    def test_delivers_to_subscribers(self):
        bus = EventBus()
        received = []
        bus.subscribe(ListingStatusChanged, received.append)

        event = changed()
        assert bus.publish(event) == 1
        assert received == [event]

    def test_base_class_subscription_sees_subclasses(self):
        bus = EventBus()
        received = []
        bus.subscribe(BaseDomainEvent, received.append)

        bus.publish(changed())
        assert len(received) == 1

    def test_failing_handler_is_isolated(self):
        bus = EventBus()
        received = []

        def broken(event):
            raise RuntimeError("boom")

        bus.subscribe(ListingStatusChanged, broken)
        bus.subscribe(ListingStatusChanged, received.append)

        assert bus.publish(changed()) == 1
        assert len(received) == 1

    def test_duplicate_subscription_ignored(self):
        bus = EventBus()
        received = []
        bus.subscribe(ListingStatusChanged, received.append)
        bus.subscribe(ListingStatusChanged, received.append)

        bus.publish(changed())
        assert len(received) == 1

    def test_unsubscribe_and_clear(self):
        bus = EventBus()
        received = []
        bus.subscribe(ListingStatusChanged, received.append)
        bus.unsubscribe(ListingStatusChanged, received.append)
        assert bus.publish(changed()) == 0

        bus.subscribe(ListingStatusChanged, received.append)
        assert bus.get_stats()["registered_handlers"] == {"ListingStatusChanged": 1}
        bus.clear()
        assert bus.publish(changed()) == 0
        assert received == []
