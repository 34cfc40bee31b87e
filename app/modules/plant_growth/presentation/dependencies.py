# 📄 File: app/modules/plant_growth/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands each plant endpoint the tools it needs (the database-backed plant store, the gardener
# logic and the clock) so endpoints never build them by hand.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers for the plant growth module. The repository is bound to the
# request-scoped AsyncSession; the state machine and its seeded reward RNG are process-wide.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy AsyncSession, app.shared.infrastructure.database.session,
# plant growth application handlers and infrastructure repository
# 🔄 Connected Modules / Calls From:
# app.modules.plant_growth.presentation.api.v1.plants, API tests (dependency overrides)

import random
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.plant_growth.application.handlers.command_handlers import (
    CheckPlantHealthCommandHandler,
    InitializePlantCommandHandler,
    RecalculatePlantStageCommandHandler,
    RecordJournalEntryCommandHandler,
)
from app.modules.plant_growth.application.handlers.query_handlers import GetPlantQueryHandler
from app.modules.plant_growth.domain.repositories.plant_repository import PlantRepository
from app.modules.plant_growth.domain.services.plant_state_machine import PlantStateMachine
from app.modules.plant_growth.domain.services.reward_generator import RewardGenerator
from app.modules.plant_growth.infrastructure.database.plant_repository_impl import PlantRepositoryImpl
from app.shared.config.settings import get_settings
from app.shared.core.clock import Clock, SystemClock
from app.shared.core.event_bus import EventBus, get_event_bus
from app.shared.infrastructure.database.session import get_db_session


async def get_plant_repository(
    session: AsyncSession = Depends(get_db_session),
) -> PlantRepository:
    return PlantRepositoryImpl(session)


@lru_cache()
def get_state_machine() -> PlantStateMachine:
    """Process-wide state machine; reward picks follow REWARD_RANDOM_SEED when set."""
    rng = random.Random(get_settings().REWARD_RANDOM_SEED)
    return PlantStateMachine(RewardGenerator(rng))


def get_clock() -> Clock:
    return SystemClock()


def get_plant_event_bus() -> EventBus:
    return get_event_bus()


def get_initialize_plant_handler(
    repository: PlantRepository = Depends(get_plant_repository),
    event_bus: EventBus = Depends(get_plant_event_bus),
    clock: Clock = Depends(get_clock),
) -> InitializePlantCommandHandler:
    return InitializePlantCommandHandler(repository, event_bus=event_bus, clock=clock)


def get_record_entry_handler(
    repository: PlantRepository = Depends(get_plant_repository),
    state_machine: PlantStateMachine = Depends(get_state_machine),
    event_bus: EventBus = Depends(get_plant_event_bus),
    clock: Clock = Depends(get_clock),
) -> RecordJournalEntryCommandHandler:
    return RecordJournalEntryCommandHandler(
        repository, state_machine=state_machine, event_bus=event_bus, clock=clock
    )


def get_health_check_handler(
    repository: PlantRepository = Depends(get_plant_repository),
    state_machine: PlantStateMachine = Depends(get_state_machine),
    event_bus: EventBus = Depends(get_plant_event_bus),
    clock: Clock = Depends(get_clock),
) -> CheckPlantHealthCommandHandler:
    return CheckPlantHealthCommandHandler(
        repository, state_machine=state_machine, event_bus=event_bus, clock=clock
    )


def get_recalculate_stage_handler(
    repository: PlantRepository = Depends(get_plant_repository),
    state_machine: PlantStateMachine = Depends(get_state_machine),
    event_bus: EventBus = Depends(get_plant_event_bus),
    clock: Clock = Depends(get_clock),
) -> RecalculatePlantStageCommandHandler:
    return RecalculatePlantStageCommandHandler(
        repository, state_machine=state_machine, event_bus=event_bus, clock=clock
    )


def get_plant_query_handler(
    repository: PlantRepository = Depends(get_plant_repository),
    health_check_handler: CheckPlantHealthCommandHandler = Depends(get_health_check_handler),
) -> GetPlantQueryHandler:
    return GetPlantQueryHandler(repository, health_check_handler=health_check_handler)
