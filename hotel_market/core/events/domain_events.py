import json
import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class EventCategory(Enum):
    """Event category for domain events"""
    LISTING = "listing"
    AUDIT = "audit"
    SYSTEM = "system"


@dataclass
class BaseDomainEvent:
    """Base domain event class"""

    # Metadata fields
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: Optional[str] = None
    event_category: EventCategory = EventCategory.SYSTEM
    timestamp: float = field(default_factory=time.time)
    version: str = "1.0"
    source: str = "core"
    correlation_id: Optional[str] = None

    # Data fields
    entity_id: Optional[str] = None
    entity_type: Optional[str] = None
    actor_id: Optional[str] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Post initialization to set event_type"""
        if self.event_type is None:
            self.event_type = self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary"""
        event_dict = asdict(self)
        event_dict['event_category'] = self.event_category.value
        return event_dict

    def to_json(self) -> str:
        """Convert event to JSON string"""
        return json.dumps(self.to_dict(), default=str)


@dataclass
class ListingStatusChanged(BaseDomainEvent):
    """
    Emitted after a committed lifecycle transition.

    ``status_field`` is either ``audit_status`` or ``publish_status``; a
    withdrawal is reported on ``publish_status`` with ``withdrawn`` set.
    """

    listing_id: str = ""
    status_field: str = "audit_status"
    old_status: Optional[str] = None
    new_status: Optional[str] = None
    withdrawn: bool = False

    def __post_init__(self):
        super().__post_init__()
        self.event_category = EventCategory.LISTING
        self.entity_type = "hotel"
        self.entity_id = self.listing_id
