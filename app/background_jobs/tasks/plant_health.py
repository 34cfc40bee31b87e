# 📄 File: app/background_jobs/tasks/plant_health.py
# 🧭 Purpose (Layman Explanation):
# A gardener that walks past every plant on a timer and checks whether it has gone too long
# without a journal entry, so wilting shows up even when the user never opens the app.
#
# 🧪 Purpose (Technical Summary):
# Periodic health sweep. Pages through plants that have at least one entry and applies the
# health-check transition to each through CheckPlantHealthCommandHandler, so the sweep goes
# through the same per-user lock and compare-and-swap path as the API. One plant failing
# does not stop the sweep.
#
# 🔗 Dependencies:
# - celery (shared_task)
# - app.shared.infrastructure.database (session per page)
# - app.modules.plant_growth (handler, repository, state machine)
#
# 🔄 Connected Modules / Calls From:
# - celery_config beat schedule ("sweep-plant-health")
# - tests (run_health_sweep with an in-memory repository)

import asyncio
import random
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import AsyncContextManager, AsyncGenerator, Callable, Dict, List, Optional

from celery import shared_task

from app.modules.plant_growth.application.commands.check_health import CheckPlantHealthCommand
from app.modules.plant_growth.application.handlers.command_handlers import CheckPlantHealthCommandHandler
from app.modules.plant_growth.domain.repositories.plant_repository import PlantRepository
from app.modules.plant_growth.domain.services.plant_state_machine import PlantStateMachine
from app.modules.plant_growth.domain.services.reward_generator import RewardGenerator
from app.modules.plant_growth.infrastructure.database.plant_repository_impl import PlantRepositoryImpl
from app.shared.config.settings import get_settings
from app.shared.core.clock import Clock, SystemClock, ensure_aware
from app.shared.core.event_bus import EventBus
from app.shared.core.exceptions import MindfulGardenException
from app.shared.infrastructure.database.connection import close_database, initialize_database
from app.shared.infrastructure.database.session import database_session, session_manager
from app.shared.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

RepositoryFactory = Callable[[], AsyncContextManager[PlantRepository]]


@dataclass
class HealthSweepReport:
    """Tally of one sweep run."""
    started_at: datetime
    checked: int = 0
    changed: int = 0
    penalized: int = 0
    failed: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {
            "started_at": self.started_at.isoformat(),
            "checked": self.checked,
            "changed": self.changed,
            "penalized": self.penalized,
            "failed": list(self.failed),
        }


@asynccontextmanager
async def _database_repository() -> AsyncGenerator[PlantRepository, None]:
    async with database_session() as session:
        yield PlantRepositoryImpl(session)


async def run_health_sweep(
    repository_factory: RepositoryFactory = _database_repository,
    now: Optional[datetime] = None,
    batch_size: Optional[int] = None,
    state_machine: Optional[PlantStateMachine] = None,
    event_bus: Optional[EventBus] = None,
    clock: Optional[Clock] = None,
) -> HealthSweepReport:
    """
    Apply the health check to every plant that has an entry.

    All plants are evaluated at the same instant ``now``. Each page is
    read through its own repository (and database session).
    """
    settings = get_settings()
    clock = clock or SystemClock()
    now = ensure_aware(now) if now is not None else clock.now()
    batch_size = batch_size or settings.HEALTH_SWEEP_BATCH_SIZE
    state_machine = state_machine or PlantStateMachine(
        RewardGenerator(random.Random(settings.REWARD_RANDOM_SEED))
    )

    report = HealthSweepReport(started_at=now)
    last_user_id: Optional[str] = None

    while True:
        async with repository_factory() as repository:
            user_ids = await repository.list_user_ids_with_entries(
                limit=batch_size, after_user_id=last_user_id
            )
            handler = CheckPlantHealthCommandHandler(
                repository,
                state_machine=state_machine,
                event_bus=event_bus,
                clock=clock,
            )

            for user_id in user_ids:
                try:
                    _, outcome = await handler.apply(CheckPlantHealthCommand(user_id=user_id, now=now))
                except MindfulGardenException as e:
                    logger.warning(f"Health check failed for plant {user_id}: {e.message}", error_code=e.error_code)
                    report.failed.append(user_id)
                    continue

                report.checked += 1
                if outcome.decay is not None and outcome.decay.changed:
                    report.changed += 1
                if outcome.became_wilting:
                    report.penalized += 1

        if len(user_ids) < batch_size:
            break
        last_user_id = user_ids[-1]

    logger.log_business_event(
        "health_sweep_completed",
        f"Health sweep checked {report.checked} plants",
        extra=report.as_dict(),
    )
    return report


async def _sweep_with_database() -> HealthSweepReport:
    # Each asyncio.run gets its own loop, so the engine is created and disposed per run
    await initialize_database()
    session_manager.initialize()
    try:
        return await run_health_sweep()
    finally:
        session_manager.reset()
        await close_database()


@shared_task(name="app.background_jobs.tasks.plant_health.sweep_plant_health")
def sweep_plant_health() -> Dict[str, object]:
    """Celery entry point for the periodic plant health sweep."""
    setup_logging()
    report = asyncio.run(_sweep_with_database())
    return report.as_dict()
