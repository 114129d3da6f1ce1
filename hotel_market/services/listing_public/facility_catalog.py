# hotel_market/services/listing_public/facility_catalog.py
"""
Reference facility vocabulary.

Used to populate pickers and suggestions only; listings store free-form
tags and are never validated against this list.
"""
from __future__ import annotations

from typing import Dict, List, Optional

from hotel_market.schemas.listing import FacilityCatalog, FacilityOption

_FACILITIES = (
    ("wifi", "Free WiFi", "wifi", "Internet"),
    ("parking", "Parking", "parking", "Transport"),
    ("pool", "Swimming pool", "pool", "Leisure"),
    ("gym", "Gym", "gym", "Wellness"),
    ("spa", "Spa", "spa", "Wellness"),
    ("restaurant", "Restaurant", "restaurant", "Dining"),
    ("bar", "Bar", "bar", "Dining"),
    ("breakfast", "Free breakfast", "breakfast", "Dining"),
    ("airport_shuttle", "Airport shuttle", "shuttle", "Transport"),
    ("meeting_rooms", "Meeting rooms", "meeting", "Business"),
    ("business_center", "Business center", "business", "Business"),
    ("laundry", "Laundry service", "laundry", "Services"),
    ("room_service", "Room service", "room-service", "Services"),
    ("concierge", "Concierge", "concierge", "Services"),
    ("family_rooms", "Family rooms", "family", "Rooms"),
    ("non_smoking", "Non-smoking rooms", "non-smoking", "Rooms"),
    ("pet_friendly", "Pet friendly", "pet", "Other"),
    ("accessible", "Accessible facilities", "accessible", "Other"),
)

FACILITY_OPTIONS: List[FacilityOption] = [
    FacilityOption(id=fid, name=name, icon=icon, category=category)
    for fid, name, icon, category in _FACILITIES
]


def list_facilities() -> List[FacilityOption]:
    return list(FACILITY_OPTIONS)


def get_facility(facility_id: str) -> Optional[FacilityOption]:
    for option in FACILITY_OPTIONS:
        if option.id == facility_id:
            return option
    return None


def facilities_by_category() -> Dict[str, List[FacilityOption]]:
    """Options grouped by category, categories in first-seen order."""
    grouped: Dict[str, List[FacilityOption]] = {}
    for option in FACILITY_OPTIONS:
        grouped.setdefault(option.category, []).append(option)
    return grouped


def facility_catalog() -> FacilityCatalog:
    grouped = facilities_by_category()
    return FacilityCatalog(
        facilities=list_facilities(),
        categorized=grouped,
        categories=list(grouped),
    )
