"""
Event system for the listing engine.
"""

from .domain_events import BaseDomainEvent, EventCategory, ListingStatusChanged
from .event_bus import EventBus, event_bus

__all__ = [
    "BaseDomainEvent",
    "EventCategory",
    "ListingStatusChanged",
    "EventBus",
    "event_bus",
]
