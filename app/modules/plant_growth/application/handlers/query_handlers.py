# 📄 File: app/modules/plant_growth/application/handlers/query_handlers.py
# 🧭 Purpose (Layman Explanation):
# Fetches a user's plant for display, optionally letting it wilt first if it has been ignored.
#
# 🧪 Purpose (Technical Summary):
# CQRS query handler returning PlantStateDTO projections. With refresh_health the idle health
# check is delegated to the command handler so the write path keeps its locking and retries.
#
# 🔗 Dependencies:
# - app.modules.plant_growth.application.queries (query definitions)
# - app.modules.plant_growth.domain.repositories (repository interface)
#
# 🔄 Connected Modules / Calls From:
# - app.modules.plant_growth.presentation.api.v1.plants (GET plant endpoint)

__all__ = ["GetPlantQueryHandler"]

import logging
from typing import Optional

from app.modules.plant_growth.application.commands.check_health import CheckPlantHealthCommand
from app.modules.plant_growth.application.dto.plant_dto import PlantStateDTO
from app.modules.plant_growth.application.handlers.command_handlers import (
    CheckPlantHealthCommandHandler,
)
from app.modules.plant_growth.application.queries.get_plant import GetPlantQuery
from app.modules.plant_growth.domain.repositories.plant_repository import PlantRepository
from app.shared.core.exceptions import PlantNotFoundError

logger = logging.getLogger(__name__)


class GetPlantQueryHandler:
    """
    Handles plant lookups.

    A missing plant is an error; plants are only created at onboarding.
    """

    def __init__(
        self,
        repository: PlantRepository,
        health_check_handler: Optional[CheckPlantHealthCommandHandler] = None,
    ):
        self._repository = repository
        self._health_check_handler = health_check_handler

    async def handle(self, query: GetPlantQuery) -> PlantStateDTO:
        if query.refresh_health and self._health_check_handler is not None:
            state, _ = await self._health_check_handler.apply(
                CheckPlantHealthCommand(user_id=query.user_id)
            )
            return PlantStateDTO.from_domain(state)

        state = await self._repository.get_by_user_id(query.user_id)
        if state is None:
            logger.debug(f"Plant not found for user {query.user_id}")
            raise PlantNotFoundError(query.user_id)

        logger.debug(f"Loaded plant for user {query.user_id} at version {state.version}")
        return PlantStateDTO.from_domain(state)
