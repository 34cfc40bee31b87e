"""
Core utilities package for Mindful Garden.
Provides exceptions, the clock and the in-process event bus.
"""

from .clock import Clock, FixedClock, SystemClock, calendar_days_between, start_of_day

from .exceptions import (
    MindfulGardenException,
    ValidationError,
    NotFoundError,
    PlantNotFoundError,
    DuplicateResourceError,
    ConflictError,
    ConcurrencyConflictError,
    DatabaseError,
    RepositoryError,
    TransactionError,
)

from .event_bus import (
    EventBus,
    DomainEvent,
    EventHandler,
    get_event_bus,
)

__all__ = [
    # Clock
    "Clock",
    "FixedClock",
    "SystemClock",
    "calendar_days_between",
    "start_of_day",

    # Exceptions
    "MindfulGardenException",
    "ValidationError",
    "NotFoundError",
    "PlantNotFoundError",
    "DuplicateResourceError",
    "ConflictError",
    "ConcurrencyConflictError",
    "DatabaseError",
    "RepositoryError",
    "TransactionError",

    # Events
    "EventBus",
    "DomainEvent",
    "EventHandler",
    "get_event_bus",
]
