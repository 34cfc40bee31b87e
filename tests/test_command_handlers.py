"""
Plant command and query handler tests.

Handlers run against the in-memory repository so compare-and-swap
conflicts can be injected on demand.
"""

import asyncio
from datetime import timedelta

import pytest

from app.modules.plant_growth.application.commands import (
    CheckPlantHealthCommand,
    InitializePlantCommand,
    RecalculatePlantStageCommand,
    RecordJournalEntryCommand,
)
from app.modules.plant_growth.application.handlers.command_handlers import (
    CheckPlantHealthCommandHandler,
    InitializePlantCommandHandler,
    RecalculatePlantStageCommandHandler,
    RecordJournalEntryCommandHandler,
)
from app.modules.plant_growth.application.handlers.query_handlers import GetPlantQueryHandler
from app.modules.plant_growth.application.queries.get_plant import GetPlantQuery
from app.modules.plant_growth.domain.models.plant import PlantStage, VisualState
from app.shared.core.exceptions import (
    ConcurrencyConflictError,
    DuplicateResourceError,
    PlantNotFoundError,
)
from tests.conftest import START, make_state


@pytest.fixture
def handler_kwargs(state_machine, event_bus, clock, locks):
    return {
        "state_machine": state_machine,
        "event_bus": event_bus,
        "clock": clock,
        "locks": locks,
        "max_retries": 3,
    }


@pytest.fixture
def record_handler(repository, handler_kwargs):
    return RecordJournalEntryCommandHandler(repository, **handler_kwargs)


@pytest.fixture
def health_handler(repository, handler_kwargs):
    return CheckPlantHealthCommandHandler(repository, **handler_kwargs)


async def _seed(repository, **overrides):
    return await repository.create(make_state(**overrides))


class TestInitializePlant:

    @pytest.mark.asyncio
    async def test_plants_a_seed(self, repository, event_bus, recorder, clock):
        handler = InitializePlantCommandHandler(repository, event_bus=event_bus, clock=clock)
        dto = await handler.handle(InitializePlantCommand(user_id="new-user", timezone="Asia/Tokyo"))

        assert dto.stage == "seed"
        assert dto.health == 100
        assert dto.version == 1
        assert dto.timezone == "Asia/Tokyo"
        assert dto.created_at == START
        assert recorder.types() == ["plant.initialized"]

    @pytest.mark.asyncio
    async def test_defaults_to_configured_timezone(self, repository, event_bus, clock):
        handler = InitializePlantCommandHandler(repository, event_bus=event_bus, clock=clock)
        dto = await handler.handle(InitializePlantCommand(user_id="new-user"))
        assert dto.timezone == "UTC"

    @pytest.mark.asyncio
    async def test_second_initialize_is_duplicate(self, repository, event_bus, clock):
        handler = InitializePlantCommandHandler(repository, event_bus=event_bus, clock=clock)
        await handler.handle(InitializePlantCommand(user_id="new-user"))

        with pytest.raises(DuplicateResourceError):
            await handler.handle(InitializePlantCommand(user_id="new-user"))

    def test_unknown_timezone_is_rejected(self):
        with pytest.raises(ValueError):
            InitializePlantCommand(user_id="u", timezone="Mars/Olympus_Mons")


class TestRecordEntry:

    @pytest.mark.asyncio
    async def test_missing_plant_is_not_found(self, record_handler, repository):
        with pytest.raises(PlantNotFoundError):
            await record_handler.handle(RecordJournalEntryCommand(user_id="ghost", occurred_at=START))

        assert repository.plants == {}

    @pytest.mark.asyncio
    async def test_entry_is_stored_with_new_version(self, record_handler, repository, clock):
        await _seed(repository)
        clock.advance(minutes=5)

        dto = await record_handler.handle(RecordJournalEntryCommand(user_id="user-1"))

        stored = repository.plants["user-1"]
        assert dto.version == 2
        assert stored.growth_points == 1
        assert stored.last_entry_at == START + timedelta(minutes=5)
        assert stored.updated_at == START + timedelta(minutes=5)

    @pytest.mark.asyncio
    async def test_third_day_publishes_stage_and_reward_events(self, record_handler, repository, recorder):
        await _seed(repository)

        for day in range(3):
            await record_handler.handle(
                RecordJournalEntryCommand(user_id="user-1", occurred_at=START + timedelta(days=day))
            )

        assert recorder.types() == ["plant.stage_advanced", "plant.rewards_earned"]
        advanced = recorder.events[0]
        assert advanced.old_stage == "seed"
        assert advanced.new_stage == "sprout"
        assert advanced.aggregate_id == "user-1"

    @pytest.mark.asyncio
    async def test_entry_id_becomes_correlation_id(self, record_handler, repository, recorder):
        await _seed(repository, current_streak=2, longest_streak=2, last_entry_at=START - timedelta(days=1))

        await record_handler.handle(
            RecordJournalEntryCommand(user_id="user-1", occurred_at=START, entry_id="entry-42")
        )

        assert recorder.events
        assert all(e.get_correlation_id() == "entry-42" for e in recorder.events)

    @pytest.mark.asyncio
    async def test_lost_race_is_retried_from_fresh_read(self, record_handler, repository):
        await _seed(repository)
        repository.inject_conflicts = 2

        dto = await record_handler.handle(RecordJournalEntryCommand(user_id="user-1", occurred_at=START))

        assert repository.save_calls == 3
        assert dto.growth_points == 1
        # Two phantom writers plus ours
        assert dto.version == 4

    @pytest.mark.asyncio
    async def test_gives_up_after_retry_budget(self, record_handler, repository):
        await _seed(repository)
        repository.inject_conflicts = 10

        with pytest.raises(ConcurrencyConflictError):
            await record_handler.handle(RecordJournalEntryCommand(user_id="user-1", occurred_at=START))

        assert repository.save_calls == 4
        assert repository.plants["user-1"].growth_points == 0

    @pytest.mark.asyncio
    async def test_concurrent_entries_are_never_lost(self, repository, handler_kwargs):
        await _seed(repository)
        # Separate handler instances share only the lock registry
        handlers = [RecordJournalEntryCommandHandler(repository, **handler_kwargs) for _ in range(10)]

        await asyncio.gather(*(
            h.handle(RecordJournalEntryCommand(user_id="user-1", occurred_at=START + timedelta(minutes=i)))
            for i, h in enumerate(handlers)
        ))

        stored = repository.plants["user-1"]
        assert stored.total_entries == 10
        assert stored.growth_points == 10
        assert stored.version == 11


class TestCheckHealth:

    @pytest.mark.asyncio
    async def test_idle_plant_wilts_and_publishes(self, health_handler, repository, recorder):
        await _seed(repository, last_entry_at=START, current_streak=4, longest_streak=4)

        dto = await health_handler.handle(
            CheckPlantHealthCommand(user_id="user-1", now=START + timedelta(days=5))
        )

        assert dto.health == 76
        assert dto.current_streak == 0
        assert dto.visual_state == VisualState.WILTING
        assert recorder.types() == ["plant.wilting"]
        assert recorder.events[0].streak_forfeited == 4

    @pytest.mark.asyncio
    async def test_unchanged_check_writes_nothing(self, health_handler, repository, recorder):
        await _seed(repository, last_entry_at=START)

        dto = await health_handler.handle(
            CheckPlantHealthCommand(user_id="user-1", now=START + timedelta(hours=3))
        )

        assert repository.save_calls == 0
        assert dto.version == 1
        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_repeat_check_is_stored_once(self, health_handler, repository):
        await _seed(repository, last_entry_at=START)
        now = START + timedelta(days=4)

        first = await health_handler.handle(CheckPlantHealthCommand(user_id="user-1", now=now))
        second = await health_handler.handle(CheckPlantHealthCommand(user_id="user-1", now=now))

        assert repository.save_calls == 1
        assert first.health == second.health == 84
        assert second.version == 2

    @pytest.mark.asyncio
    async def test_missing_plant_is_not_found(self, health_handler):
        with pytest.raises(PlantNotFoundError):
            await health_handler.handle(CheckPlantHealthCommand(user_id="ghost", now=START))


class TestRecalculateStage:

    @pytest.mark.asyncio
    async def test_repair_publishes_recalculated_event(self, repository, handler_kwargs, recorder):
        await _seed(repository, growth_points=8, total_entries=8, current_streak=3, longest_streak=3)
        handler = RecalculatePlantStageCommandHandler(repository, **handler_kwargs)

        dto = await handler.handle(RecalculatePlantStageCommand(user_id="user-1"))

        assert dto.stage == PlantStage.PLANT.value
        assert recorder.types() == ["plant.stage_recalculated"]

    @pytest.mark.asyncio
    async def test_nothing_to_repair_is_not_written(self, repository, handler_kwargs, recorder):
        await _seed(repository)
        handler = RecalculatePlantStageCommandHandler(repository, **handler_kwargs)

        await handler.handle(RecalculatePlantStageCommand(user_id="user-1"))

        assert repository.save_calls == 0
        assert recorder.events == []


class TestGetPlant:

    @pytest.mark.asyncio
    async def test_missing_plant_is_not_found(self, repository):
        with pytest.raises(PlantNotFoundError):
            await GetPlantQueryHandler(repository).handle(GetPlantQuery(user_id="ghost"))

    @pytest.mark.asyncio
    async def test_plain_read_has_derived_fields(self, repository):
        await _seed(repository, growth_points=5, total_entries=5, stage=PlantStage.SPROUT)

        dto = await GetPlantQueryHandler(repository).handle(GetPlantQuery(user_id="user-1"))

        assert dto.stage_display_name == "Sprout"
        assert dto.points_until_next_stage == 2
        assert dto.visual_state == VisualState.HEALTHY

    @pytest.mark.asyncio
    async def test_refresh_health_runs_the_check_first(self, repository, health_handler, clock):
        await _seed(repository, last_entry_at=START)
        clock.set(START + timedelta(days=3))

        dto = await GetPlantQueryHandler(repository, health_check_handler=health_handler).handle(
            GetPlantQuery(user_id="user-1", refresh_health=True)
        )

        assert dto.health == 92
        assert dto.wilting_started is True
