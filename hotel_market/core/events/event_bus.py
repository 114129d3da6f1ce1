"""
In-process event bus for listing state notifications.

Handlers run synchronously in the publishing call, after the publishing
transaction has committed. A failing handler is logged and does not affect
other handlers or the publisher.
"""
from collections import defaultdict
from typing import Any, Callable, Dict, List, Type

import structlog

from .domain_events import BaseDomainEvent

logger = structlog.get_logger(__name__)

EventHandler = Callable[[BaseDomainEvent], Any]


class EventBus:
    """
    Event bus for handling application events.

    Handlers subscribe to an event class; they also receive events of its
    subclasses, so subscribing to ``BaseDomainEvent`` sees everything.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[BaseDomainEvent], List[EventHandler]] = defaultdict(list)

    def subscribe(self, event_cls: Type[BaseDomainEvent], handler: EventHandler) -> None:
        """
        Subscribe a handler to an event class.

        Args:
            event_cls: The event class to subscribe to
            handler: Callable receiving the event instance
        """
        if handler not in self._handlers[event_cls]:
            self._handlers[event_cls].append(handler)
        logger.debug("handler_registered", event_type=event_cls.__name__)

    def unsubscribe(self, event_cls: Type[BaseDomainEvent], handler: EventHandler) -> None:
        """
        Unsubscribe a handler from an event class.

        Args:
            event_cls: The event class to unsubscribe from
            handler: The handler to remove
        """
        handlers = self._handlers.get(event_cls, [])
        if handler in handlers:
            handlers.remove(handler)

    def publish(self, event: BaseDomainEvent) -> int:
        """
        Deliver an event to every matching handler.

        Args:
            event: The event to publish

        Returns:
            Number of handlers that completed without raising
        """
        delivered = 0
        for handler in self._handlers_for(event):
            try:
                handler(event)
                delivered += 1
            except Exception:
                logger.error(
                    "event_handler_failed",
                    event_type=event.event_type,
                    event_id=event.event_id,
                    handler=getattr(handler, "__name__", repr(handler)),
                    exc_info=True,
                )

        logger.debug(
            "event_published",
            event_type=event.event_type,
            entity_id=event.entity_id,
            handlers=delivered,
        )
        return delivered

    def _handlers_for(self, event: BaseDomainEvent) -> List[EventHandler]:
        matched: List[EventHandler] = []
        for event_cls, handlers in list(self._handlers.items()):
            if isinstance(event, event_cls):
                matched.extend(h for h in handlers if h not in matched)
        return matched

    def clear(self) -> None:
        """Drop all subscriptions."""
        self._handlers.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics about the event bus."""
        return {
            "registered_handlers": {
                event_cls.__name__: len(handlers)
                for event_cls, handlers in self._handlers.items()
            }
        }


# Global event bus instance
event_bus = EventBus()

