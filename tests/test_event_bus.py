"""
In-process event bus and error body tests.
"""

from typing import List

import pytest

from app.shared.core.event_bus import DomainEvent, EventBus, EventHandler, get_event_bus
from app.shared.core.exceptions import ConcurrencyConflictError, PlantNotFoundError


class _Collector(EventHandler):

    def __init__(self, event_type: str):
        self._event_type = event_type
        self.seen: List[str] = []

    @property
    def event_type(self) -> str:
        return self._event_type

    async def handle(self, event: DomainEvent) -> bool:
        self.seen.append(event.event_type)
        return True


class _Broken(_Collector):

    def __init__(self):
        super().__init__("plant.wilting")
        self.errors: List[Exception] = []

    async def handle(self, event: DomainEvent) -> bool:
        raise RuntimeError("subscriber down")

    async def on_error(self, event: DomainEvent, error: Exception):
        self.errors.append(error)


@pytest.mark.asyncio
async def test_handlers_receive_their_type_and_wildcard_receives_all():
    bus = EventBus()
    wilting = _Collector("plant.wilting")
    everything = _Collector("*")
    bus.subscribe(wilting)
    bus.subscribe(everything)

    await bus.publish_all([
        DomainEvent(event_type="plant.wilting"),
        DomainEvent(event_type="plant.stage_advanced"),
    ])

    assert wilting.seen == ["plant.wilting"]
    assert everything.seen == ["plant.wilting", "plant.stage_advanced"]


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_delivery():
    bus = EventBus()
    broken = _Broken()
    healthy = _Collector("plant.wilting")
    bus.subscribe(broken)
    bus.subscribe(healthy)

    await bus.publish(DomainEvent(event_type="plant.wilting"))

    assert len(broken.errors) == 1
    assert healthy.seen == ["plant.wilting"]


@pytest.mark.asyncio
async def test_publish_sets_correlation_id():
    event = DomainEvent(event_type="plant.initialized")
    await EventBus().publish(event, correlation_id="entry-7")

    assert event.get_correlation_id() == "entry-7"
    assert event.event_id
    assert event.timestamp.tzinfo is not None


def test_global_bus_is_shared():
    assert get_event_bus() is get_event_bus()


def test_error_body_carries_code_message_and_details():
    body = PlantNotFoundError("ghost").to_dict()["error"]

    assert body["code"] == "NOT_FOUND"
    assert body["details"]["user_id"] == "ghost"
    assert set(body) == {"code", "message", "details"}


def test_conflict_error_code():
    assert ConcurrencyConflictError("u", 3).to_dict()["error"]["code"] == "CONCURRENT_MODIFICATION"
