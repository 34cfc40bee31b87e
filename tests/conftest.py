"""
Shared fixtures for the Mindful Garden test suite.

Provides a frozen clock, a seeded reward RNG, an in-memory plant
repository with the same compare-and-swap contract as the SQLAlchemy
one, and an in-memory SQLite engine for repository tests.
"""

import os
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.modules.plant_growth.application.handlers.command_handlers import UserLockRegistry
from app.modules.plant_growth.domain.models.plant import PlantState
from app.modules.plant_growth.domain.repositories.plant_repository import PlantRepository
from app.modules.plant_growth.domain.services.plant_state_machine import PlantStateMachine
from app.modules.plant_growth.domain.services.reward_generator import RewardGenerator
from app.modules.plant_growth.infrastructure.database.models import PlantStateModel  # noqa: F401
from app.shared.config.database import build_engine_kwargs
from app.shared.config.settings import get_settings
from app.shared.core.clock import FixedClock
from app.shared.core.event_bus import DomainEvent, EventBus, EventHandler, reset_event_bus
from app.shared.core.exceptions import (
    ConcurrencyConflictError,
    DuplicateResourceError,
    PlantNotFoundError,
)
from app.shared.infrastructure.database.connection import Base

UTC = timezone.utc

# Friday morning, well clear of any day boundary
START = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)


class InMemoryPlantRepository(PlantRepository):
    """
    Dict-backed PlantRepository.

    ``inject_conflicts`` makes the next N saves lose the compare-and-swap
    as if another writer had committed first.
    """

    def __init__(self):
        self.plants: Dict[str, PlantState] = {}
        self.save_calls = 0
        self.inject_conflicts = 0

    async def get_by_user_id(self, user_id: str) -> Optional[PlantState]:
        state = self.plants.get(user_id)
        return state.model_copy(deep=True) if state else None

    async def exists(self, user_id: str) -> bool:
        return user_id in self.plants

    async def create(self, state: PlantState) -> PlantState:
        if state.user_id in self.plants:
            raise DuplicateResourceError(
                message=f"Plant already exists for user: {state.user_id}",
                resource_type="plant",
                field="user_id",
                value=state.user_id,
            )
        stored = state.model_copy(update={"version": 1}, deep=True)
        self.plants[state.user_id] = stored
        return stored.model_copy(deep=True)

    async def save(self, state: PlantState, expected_version: int) -> PlantState:
        self.save_calls += 1
        current = self.plants.get(state.user_id)
        if current is None:
            raise PlantNotFoundError(state.user_id)

        if self.inject_conflicts > 0:
            self.inject_conflicts -= 1
            current.version += 1
            raise ConcurrencyConflictError(state.user_id, expected_version)

        if current.version != expected_version:
            raise ConcurrencyConflictError(state.user_id, expected_version)

        stored = state.model_copy(update={"version": expected_version + 1}, deep=True)
        self.plants[state.user_id] = stored
        return stored.model_copy(deep=True)

    async def list_user_ids_with_entries(self, limit: int, after_user_id: Optional[str] = None) -> List[str]:
        ids = sorted(
            uid for uid, s in self.plants.items()
            if s.last_entry_at is not None and (after_user_id is None or uid > after_user_id)
        )
        return ids[:limit]


class RecordingHandler(EventHandler):
    """Collects every published event."""

    def __init__(self):
        self.events: List[DomainEvent] = []

    @property
    def event_type(self) -> str:
        return "*"

    async def handle(self, event: DomainEvent) -> bool:
        self.events.append(event)
        return True

    def types(self) -> List[str]:
        return [e.event_type for e in self.events]


def make_state(**overrides) -> PlantState:
    """PlantState for ``user-1`` created at START, with field overrides."""
    fields = {
        "user_id": "user-1",
        "created_at": START,
        "updated_at": START,
        "version": 1,
    }
    fields.update(overrides)
    return PlantState(**fields)


@pytest.fixture(autouse=True)
def _fresh_event_bus():
    reset_event_bus()
    yield
    reset_event_bus()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(START)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def state_machine(rng) -> PlantStateMachine:
    return PlantStateMachine(RewardGenerator(rng))


@pytest.fixture
def repository() -> InMemoryPlantRepository:
    return InMemoryPlantRepository()


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorder(event_bus) -> RecordingHandler:
    handler = RecordingHandler()
    event_bus.subscribe(handler)
    return handler


@pytest.fixture
def locks() -> UserLockRegistry:
    return UserLockRegistry()


@pytest_asyncio.fixture
async def db_engine():
    url = "sqlite+aiosqlite:///:memory:"
    engine = create_async_engine(url, **build_engine_kwargs(get_settings(), url))
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False)
