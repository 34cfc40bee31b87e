# 📄 File: app/modules/plant_growth/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# The web endpoints for a user's plant: plant the seed at onboarding, look at the plant,
# tell it a journal entry was saved, check on its health and repair its stage.
#
# 🧪 Purpose (Technical Summary):
# FastAPI plant growth endpoints. Each endpoint maps its request onto a command or query,
# delegates to the application handler and returns PlantStateDTO. Domain exceptions
# (PlantNotFoundError, DuplicateResourceError, ConcurrencyConflictError, ...) propagate to the
# application-wide MindfulGardenException handler which renders the error envelope.
#
# 🔗 Dependencies:
# - FastAPI router, status codes, Query parameters
# - app.modules.plant_growth.application (commands, queries, handlers, DTOs)
# - app.modules.plant_growth.presentation.dependencies (handler wiring)
#
# 🔄 Connected Modules / Calls From:
# - app.api.v1.router (mounted under /plants)
# - Journaling service (entry notifications), mobile and web clients

"""
Plants API Endpoints

Endpoints:
- POST /{user_id}: Plant the seed for a newly onboarded user
- GET /{user_id}: Current plant state, optionally refreshing health first
- POST /{user_id}/entries: Apply a saved journal entry
- POST /{user_id}/health-check: Re-evaluate health for elapsed idle time
- POST /{user_id}/recalculate: Explicit stage repair
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from app.modules.plant_growth.application.commands.check_health import CheckPlantHealthCommand
from app.modules.plant_growth.application.commands.initialize_plant import InitializePlantCommand
from app.modules.plant_growth.application.commands.recalculate_stage import RecalculatePlantStageCommand
from app.modules.plant_growth.application.commands.record_entry import RecordJournalEntryCommand
from app.modules.plant_growth.application.dto.plant_dto import PlantStateDTO
from app.modules.plant_growth.application.handlers.command_handlers import (
    CheckPlantHealthCommandHandler,
    InitializePlantCommandHandler,
    RecalculatePlantStageCommandHandler,
    RecordJournalEntryCommandHandler,
)
from app.modules.plant_growth.application.handlers.query_handlers import GetPlantQueryHandler
from app.modules.plant_growth.application.queries.get_plant import GetPlantQuery
from app.modules.plant_growth.presentation.api.schemas.plant_schemas import (
    CreatePlantRequest,
    HealthCheckRequest,
    RecalculateStageRequest,
    RecordEntryRequest,
)
from app.modules.plant_growth.presentation.dependencies import (
    get_health_check_handler,
    get_initialize_plant_handler,
    get_plant_query_handler,
    get_recalculate_stage_handler,
    get_record_entry_handler,
)

logger = logging.getLogger(__name__)

plants_router = APIRouter()

UserId = Annotated[str, Path(min_length=1, max_length=128, description="External user identifier")]


@plants_router.post(
    "/{user_id}",
    response_model=PlantStateDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Plant a seed",
    description="Create the plant for a newly onboarded user",
    responses={
        201: {"description": "Plant created at the seed stage"},
        409: {"description": "The user already has a plant"},
    }
)
async def create_plant(
    user_id: UserId,
    request: Optional[CreatePlantRequest] = None,
    handler: InitializePlantCommandHandler = Depends(get_initialize_plant_handler),
) -> PlantStateDTO:
    command = InitializePlantCommand(
        user_id=user_id,
        timezone=request.timezone if request else None,
    )
    return await handler.handle(command)


@plants_router.get(
    "/{user_id}",
    response_model=PlantStateDTO,
    summary="Get plant",
    description="Current plant state with derived visual state and messages",
    responses={
        200: {"description": "Plant state"},
        404: {"description": "No plant for this user"},
    }
)
async def get_plant(
    user_id: UserId,
    refresh_health: bool = Query(False, description="Run the health check before reading"),
    handler: GetPlantQueryHandler = Depends(get_plant_query_handler),
) -> PlantStateDTO:
    return await handler.handle(GetPlantQuery(user_id=user_id, refresh_health=refresh_health))


@plants_router.post(
    "/{user_id}/entries",
    response_model=PlantStateDTO,
    summary="Record journal entry",
    description="Apply one saved journal entry to the plant",
    responses={
        200: {"description": "Updated plant state"},
        404: {"description": "No plant for this user"},
        409: {"description": "Concurrent modification could not be resolved"},
    }
)
async def record_entry(
    user_id: UserId,
    request: Optional[RecordEntryRequest] = None,
    handler: RecordJournalEntryCommandHandler = Depends(get_record_entry_handler),
) -> PlantStateDTO:
    request = request or RecordEntryRequest()
    command = RecordJournalEntryCommand(
        user_id=user_id,
        occurred_at=request.occurred_at,
        entry_id=request.entry_id,
    )
    return await handler.handle(command)


@plants_router.post(
    "/{user_id}/health-check",
    response_model=PlantStateDTO,
    summary="Check plant health",
    description="Re-evaluate health for the time elapsed since the last entry",
    responses={
        200: {"description": "Plant state after the check"},
        404: {"description": "No plant for this user"},
    }
)
async def check_health(
    user_id: UserId,
    request: Optional[HealthCheckRequest] = None,
    handler: CheckPlantHealthCommandHandler = Depends(get_health_check_handler),
) -> PlantStateDTO:
    command = CheckPlantHealthCommand(
        user_id=user_id,
        now=request.now if request else None,
    )
    return await handler.handle(command)


@plants_router.post(
    "/{user_id}/recalculate",
    response_model=PlantStateDTO,
    summary="Repair plant stage",
    description="Re-derive the stage from growth points and the current streak",
    responses={
        200: {"description": "Plant state after the repair"},
        404: {"description": "No plant for this user"},
    }
)
async def recalculate_stage(
    user_id: UserId,
    request: Optional[RecalculateStageRequest] = None,
    handler: RecalculatePlantStageCommandHandler = Depends(get_recalculate_stage_handler),
) -> PlantStateDTO:
    command = RecalculatePlantStageCommand(
        user_id=user_id,
        allow_downgrade=request.allow_downgrade if request else False,
    )
    logger.info(f"Stage repair requested for {user_id} (allow_downgrade={command.allow_downgrade})")
    return await handler.handle(command)
