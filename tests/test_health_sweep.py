"""
Periodic health sweep tests.
"""

from contextlib import asynccontextmanager
from datetime import timedelta

import pytest

from app.background_jobs.tasks.plant_health import run_health_sweep
from app.shared.core.exceptions import RepositoryError
from tests.conftest import START, InMemoryPlantRepository, make_state


def _factory(repository):
    @asynccontextmanager
    async def factory():
        yield repository
    return factory


class FlakyRepository(InMemoryPlantRepository):
    """Fails every save for the given users."""

    def __init__(self, broken):
        super().__init__()
        self.broken = set(broken)

    async def save(self, state, expected_version):
        if state.user_id in self.broken:
            raise RepositoryError("disk on fire", operation="save", entity="plant")
        return await super().save(state, expected_version)


class GrowingRepository(InMemoryPlantRepository):
    """Onboards a plant that sorts first once the first page has been read."""

    def __init__(self, newcomer):
        super().__init__()
        self.newcomer = newcomer
        self.pages_served = 0

    async def list_user_ids_with_entries(self, limit, after_user_id=None):
        page = await super().list_user_ids_with_entries(limit, after_user_id)
        self.pages_served += 1
        if self.pages_served == 1:
            await self.create(make_state(user_id=self.newcomer, last_entry_at=START))
        return page


async def _add(repository, user_id, **overrides):
    await repository.create(make_state(user_id=user_id, **overrides))


@pytest.mark.asyncio
async def test_sweep_checks_every_plant_with_entries(repository, state_machine, event_bus, recorder, clock):
    await _add(repository, "idle", last_entry_at=START, current_streak=2, longest_streak=2)
    await _add(repository, "active", last_entry_at=START + timedelta(days=5))
    await _add(repository, "never-wrote")

    report = await run_health_sweep(
        repository_factory=_factory(repository),
        now=START + timedelta(days=5, hours=2),
        batch_size=1,
        state_machine=state_machine,
        event_bus=event_bus,
        clock=clock,
    )

    assert report.checked == 2
    assert report.changed == 1
    assert report.penalized == 1
    assert report.failed == []
    assert repository.plants["idle"].health == 76
    assert repository.plants["active"].health == 100
    assert repository.plants["never-wrote"].version == 1
    assert recorder.types() == ["plant.wilting"]


@pytest.mark.asyncio
async def test_second_sweep_at_same_instant_changes_nothing(repository, state_machine, event_bus, clock):
    await _add(repository, "idle", last_entry_at=START)
    now = START + timedelta(days=6)
    kwargs = dict(
        repository_factory=_factory(repository),
        now=now,
        state_machine=state_machine,
        event_bus=event_bus,
        clock=clock,
    )

    await run_health_sweep(**kwargs)
    saves = repository.save_calls
    report = await run_health_sweep(**kwargs)

    assert repository.save_calls == saves
    assert report.penalized == 0
    assert repository.plants["idle"].health == 68


@pytest.mark.asyncio
async def test_one_failing_plant_does_not_stop_the_sweep(state_machine, event_bus, clock):
    repository = FlakyRepository(broken=["bad"])
    await _add(repository, "bad", last_entry_at=START)
    await _add(repository, "good", last_entry_at=START)

    report = await run_health_sweep(
        repository_factory=_factory(repository),
        now=START + timedelta(days=4),
        state_machine=state_machine,
        event_bus=event_bus,
        clock=clock,
    )

    assert report.failed == ["bad"]
    assert report.checked == 1
    assert repository.plants["good"].health == 84
    assert report.as_dict()["failed"] == ["bad"]


@pytest.mark.asyncio
async def test_plant_created_mid_sweep_does_not_repeat_checked_plants(state_machine, event_bus, clock):
    repository = GrowingRepository(newcomer="aaron")
    await _add(repository, "bob", last_entry_at=START)
    await _add(repository, "carol", last_entry_at=START)

    report = await run_health_sweep(
        repository_factory=_factory(repository),
        now=START + timedelta(days=4),
        batch_size=1,
        state_machine=state_machine,
        event_bus=event_bus,
        clock=clock,
    )

    assert report.checked == 2
    assert repository.plants["bob"].health == 84
    assert repository.plants["carol"].health == 84
    assert repository.plants["bob"].version == 2
