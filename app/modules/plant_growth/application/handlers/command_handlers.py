# 📄 File: app/modules/plant_growth/application/handlers/command_handlers.py
# 🧭 Purpose (Layman Explanation):
# The "action processors" for the garden: they plant new seeds, apply journal entries, run health
# checks and repair stages, making sure two things never change the same plant at once.
#
# 🧪 Purpose (Technical Summary):
# CQRS command handlers orchestrating the plant state machine, the compare-and-swap repository
# and the event bus. Writes for one user are serialized with a per-user asyncio.Lock and lost
# compare-and-swap races are retried from a fresh read up to PLANT_UPDATE_MAX_RETRIES times.
#
# 🔗 Dependencies:
# - app.modules.plant_growth.application.commands (command definitions)
# - app.modules.plant_growth.domain (state machine, repository interface, events)
# - app.shared.core (clock, exceptions, event bus), app.shared.utils.logging
#
# 🔄 Connected Modules / Calls From:
# - app.modules.plant_growth.presentation.api.v1.plants (API endpoints invoke handlers)
# - app.modules.plant_growth.application.handlers.query_handlers (lazy health refresh)
# - app.background_jobs.tasks.plant_health (periodic sweep)

__all__ = [
    "UserLockRegistry",
    "plant_locks",
    "InitializePlantCommandHandler",
    "RecordJournalEntryCommandHandler",
    "CheckPlantHealthCommandHandler",
    "RecalculatePlantStageCommandHandler",
]

import asyncio
import weakref
from typing import Callable, Optional, Tuple

from app.modules.plant_growth.application.commands.check_health import CheckPlantHealthCommand
from app.modules.plant_growth.application.commands.initialize_plant import InitializePlantCommand
from app.modules.plant_growth.application.commands.recalculate_stage import RecalculatePlantStageCommand
from app.modules.plant_growth.application.commands.record_entry import RecordJournalEntryCommand
from app.modules.plant_growth.application.dto.plant_dto import PlantStateDTO
from app.modules.plant_growth.domain.events.plant_events import PlantInitialized, events_for_outcome
from app.modules.plant_growth.domain.models.plant import PlantState
from app.modules.plant_growth.domain.repositories.plant_repository import PlantRepository
from app.modules.plant_growth.domain.services.plant_state_machine import (
    PlantStateMachine,
    TransitionOutcome,
)
from app.shared.config.settings import get_settings
from app.shared.core.clock import Clock, SystemClock
from app.shared.core.event_bus import EventBus, get_event_bus
from app.shared.core.exceptions import (
    ConcurrencyConflictError,
    DuplicateResourceError,
    PlantNotFoundError,
)
from app.shared.utils.logging import get_logger, log_context

logger = get_logger(__name__)

Transition = Callable[[PlantState], Tuple[PlantState, TransitionOutcome]]

# Bookkeeping fields that do not count as a change on their own
_BOOKKEEPING_FIELDS = {"version", "updated_at", "last_health_check_at"}


class UserLockRegistry:
    """
    One asyncio.Lock per user id.

    Locks are held weakly and disappear once no coroutine is using them.
    """

    def __init__(self):
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    def __len__(self) -> int:
        return len(self._locks)


# Process-wide registry shared by every handler instance
plant_locks = UserLockRegistry()


class _PlantCommandHandler:
    """Read, transition and compare-and-swap loop shared by the mutating handlers."""

    def __init__(
        self,
        repository: PlantRepository,
        state_machine: Optional[PlantStateMachine] = None,
        event_bus: Optional[EventBus] = None,
        clock: Optional[Clock] = None,
        locks: Optional[UserLockRegistry] = None,
        max_retries: Optional[int] = None,
    ):
        self._repository = repository
        self._state_machine = state_machine or PlantStateMachine()
        self._event_bus = event_bus or get_event_bus()
        self._clock = clock or SystemClock()
        self._locks = locks or plant_locks
        self._max_retries = (
            max_retries if max_retries is not None else get_settings().PLANT_UPDATE_MAX_RETRIES
        )

    async def _apply(
        self,
        user_id: str,
        transition: Transition,
        correlation_id: Optional[str] = None,
        skip_unchanged: bool = False,
    ) -> Tuple[PlantState, TransitionOutcome]:
        async with self._locks.lock_for(user_id):
            attempt = 0
            while True:
                state = await self._repository.get_by_user_id(user_id)
                if state is None:
                    raise PlantNotFoundError(user_id)

                new_state, outcome = transition(state)

                if skip_unchanged and _same_plant(state, new_state):
                    logger.debug(f"No change for plant {user_id} ({outcome.transition})")
                    return state, outcome

                new_state.updated_at = self._clock.now()
                try:
                    stored = await self._repository.save(new_state, expected_version=state.version)
                    break
                except ConcurrencyConflictError:
                    attempt += 1
                    if attempt > self._max_retries:
                        logger.error(
                            f"Giving up on plant {user_id} after {attempt} conflicting writes",
                            transition=outcome.transition,
                        )
                        raise
                    logger.warning(
                        f"Concurrent write on plant {user_id}, retrying ({attempt}/{self._max_retries})",
                        transition=outcome.transition,
                    )

        self._log_outcome(stored, outcome)
        await self._event_bus.publish_all(events_for_outcome(stored, outcome), correlation_id)
        return stored, outcome

    def _log_outcome(self, state: PlantState, outcome: TransitionOutcome) -> None:
        if outcome.stage_changed:
            logger.log_business_event(
                outcome.transition,
                f"Plant {state.user_id} moved from {outcome.old_stage.value} to {outcome.new_stage.value}",
                entity_id=state.user_id,
                entity_type="plant",
            )
        if not outcome.rewards.is_empty():
            logger.log_business_event(
                "rewards_earned",
                f"Plant {state.user_id} earned rewards at streak {outcome.streak_after}",
                entity_id=state.user_id,
                entity_type="plant",
                extra=outcome.rewards.summary(),
            )
        if outcome.became_wilting:
            logger.log_business_event(
                "plant_wilting",
                f"Plant {state.user_id} lost {outcome.decay.health_lost} health after "
                f"{outcome.decay.days_since_last_entry} idle days",
                entity_id=state.user_id,
                entity_type="plant",
            )


def _same_plant(before: PlantState, after: PlantState) -> bool:
    return (
        before.model_dump(exclude=_BOOKKEEPING_FIELDS)
        == after.model_dump(exclude=_BOOKKEEPING_FIELDS)
    )


class InitializePlantCommandHandler:
    """
    Plants the seed for a newly onboarded user.

    Plants are never created implicitly by the other handlers.
    """

    def __init__(
        self,
        repository: PlantRepository,
        event_bus: Optional[EventBus] = None,
        clock: Optional[Clock] = None,
    ):
        self._repository = repository
        self._event_bus = event_bus or get_event_bus()
        self._clock = clock or SystemClock()

    async def handle(self, command: InitializePlantCommand) -> PlantStateDTO:
        with log_context(user_id=command.user_id):
            if await self._repository.exists(command.user_id):
                raise DuplicateResourceError(
                    message=f"Plant already exists for user: {command.user_id}",
                    resource_type="plant",
                    field="user_id",
                    value=command.user_id,
                )

            timezone_name = command.timezone or get_settings().DEFAULT_DAY_BOUNDARY_TIMEZONE
            state = PlantState.new(command.user_id, timezone_name, now=self._clock.now())
            created = await self._repository.create(state)

            logger.log_business_event(
                "plant_initialized",
                f"Seed planted for user {created.user_id}",
                entity_id=created.user_id,
                entity_type="plant",
                extra={"timezone": timezone_name},
            )
            await self._event_bus.publish(
                PlantInitialized(user_id=created.user_id, timezone=timezone_name)
            )
            return PlantStateDTO.from_domain(created)


class RecordJournalEntryCommandHandler(_PlantCommandHandler):
    """Applies the entry-added transition for one saved journal entry."""

    async def handle(self, command: RecordJournalEntryCommand) -> PlantStateDTO:
        state, _ = await self.apply(command)
        return PlantStateDTO.from_domain(state)

    async def apply(self, command: RecordJournalEntryCommand) -> Tuple[PlantState, TransitionOutcome]:
        occurred_at = command.occurred_at or self._clock.now()

        with log_context(user_id=command.user_id, correlation_id=command.entry_id):
            logger.info(
                f"Recording journal entry for {command.user_id}",
                entry_id=command.entry_id,
                occurred_at=occurred_at.isoformat(),
            )
            return await self._apply(
                command.user_id,
                lambda state: self._state_machine.on_entry_added(state, occurred_at),
                correlation_id=command.entry_id,
            )


class CheckPlantHealthCommandHandler(_PlantCommandHandler):
    """
    Applies the idle health check.

    A check that would change nothing is not written, so repeated checks
    and the periodic sweep stay cheap and never contend with entries.
    """

    async def handle(self, command: CheckPlantHealthCommand) -> PlantStateDTO:
        state, _ = await self.apply(command)
        return PlantStateDTO.from_domain(state)

    async def apply(self, command: CheckPlantHealthCommand) -> Tuple[PlantState, TransitionOutcome]:
        now = command.now or self._clock.now()

        with log_context(user_id=command.user_id):
            return await self._apply(
                command.user_id,
                lambda state: self._state_machine.on_health_check(state, now),
                skip_unchanged=True,
            )


class RecalculatePlantStageCommandHandler(_PlantCommandHandler):
    """Runs the explicit stage repair."""

    async def handle(self, command: RecalculatePlantStageCommand) -> PlantStateDTO:
        with log_context(user_id=command.user_id):
            logger.info(
                f"Recalculating stage for {command.user_id}",
                allow_downgrade=command.allow_downgrade,
            )
            state, outcome = await self._apply(
                command.user_id,
                lambda s: self._state_machine.recalculate_stage(s, command.allow_downgrade),
                skip_unchanged=True,
            )
            if outcome.revoked_fruits:
                logger.warning(
                    f"Revoked {len(outcome.revoked_fruits)} fruit from plant {command.user_id}"
                )
            return PlantStateDTO.from_domain(state)
