"""
Event bus system for Mindful Garden.
Enables decoupled communication between modules through domain events.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar
from uuid import uuid4

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='DomainEvent')

WILDCARD = "*"


@dataclass
class DomainEvent:
    """
    Base class for all domain events.
    Events represent something that happened in the domain.
    """
    event_id: str = ""
    event_type: str = ""
    aggregate_id: str = ""
    aggregate_type: str = ""
    user_id: Optional[str] = None
    timestamp: Optional[datetime] = None
    version: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.event_id:
            self.event_id = str(uuid4())
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc)

    def get_correlation_id(self) -> Optional[str]:
        return self.metadata.get('correlation_id')

    def set_correlation_id(self, correlation_id: str):
        self.metadata['correlation_id'] = correlation_id


class EventHandler(ABC, Generic[T]):
    """
    Abstract base class for event handlers.
    Each handler processes specific types of domain events.
    """

    @property
    @abstractmethod
    def event_type(self) -> str:
        """Event type this handler processes ("*" for every event)."""
        pass

    @abstractmethod
    async def handle(self, event: T) -> bool:
        """
        Handle the domain event.

        Returns:
            bool: True if handled successfully
        """
        pass

    async def on_error(self, event: T, error: Exception):
        """Handle errors during event processing."""
        logger.error(f"Error handling event {event.event_id}: {error}", exc_info=True)


class EventBus:
    """
    Event bus for publishing and subscribing to domain events.

    Delivery is in-process and happens inside ``publish``, after the
    state change that produced the event has been committed. A failing
    handler is reported through its ``on_error`` and does not affect
    other handlers or the publisher.
    """

    def __init__(self):
        self.subscriptions: Dict[str, List[EventHandler]] = {}

    def subscribe(self, handler: EventHandler, event_type: Optional[str] = None):
        """Subscribe handler to an event type (defaults to handler.event_type)."""
        if event_type is None:
            event_type = handler.event_type

        self.subscriptions.setdefault(event_type, []).append(handler)
        logger.info(f"Handler {handler.__class__.__name__} subscribed to {event_type}")

    async def publish(self, event: DomainEvent, correlation_id: Optional[str] = None):
        """
        Publish event to every subscribed handler.

        Args:
            event: Domain event to publish
            correlation_id: Optional correlation ID for tracing
        """
        if correlation_id:
            event.set_correlation_id(correlation_id)

        handlers = self.subscriptions.get(event.event_type, []) + self.subscriptions.get(WILDCARD, [])
        for handler in handlers:
            await self._execute_handler(event, handler)

        logger.debug(f"Event published: {event.event_type} - {event.event_id}")

    async def publish_all(self, events: List[DomainEvent], correlation_id: Optional[str] = None):
        for event in events:
            await self.publish(event, correlation_id)

    async def _execute_handler(self, event: DomainEvent, handler: EventHandler):
        try:
            success = await handler.handle(event)
            if not success:
                raise RuntimeError("Handler returned False")
        except Exception as e:
            logger.warning(
                f"Handler {handler.__class__.__name__} failed for event {event.event_id}: {e}"
            )
            await handler.on_error(event, e)


# Global event bus instance
_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global event bus instance.

    Returns:
        EventBus: Event bus instance
    """
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Drop the global bus and its subscriptions (tests, app shutdown)."""
    global _event_bus
    _event_bus = None
