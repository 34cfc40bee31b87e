"""
SQLAlchemy plant repository tests against in-memory SQLite.
"""

from datetime import timedelta

import pytest

from app.modules.plant_growth.domain.models.plant import Flower, PlantStage, PlantState
from app.modules.plant_growth.infrastructure.database.plant_repository_impl import PlantRepositoryImpl
from app.shared.core.exceptions import (
    ConcurrencyConflictError,
    DuplicateResourceError,
    PlantNotFoundError,
)
from tests.conftest import START


@pytest.mark.asyncio
async def test_create_stores_version_one(session_factory):
    async with session_factory() as session:
        repo = PlantRepositoryImpl(session)
        created = await repo.create(PlantState.new("alice", "Europe/Berlin", now=START))

    assert created.version == 1

    async with session_factory() as session:
        loaded = await PlantRepositoryImpl(session).get_by_user_id("alice")

    assert loaded is not None
    assert loaded.version == 1
    assert loaded.timezone == "Europe/Berlin"
    assert loaded.stage == PlantStage.SEED
    assert loaded.health == 100
    assert loaded.created_at == START


@pytest.mark.asyncio
async def test_missing_plant_reads_as_none(session_factory):
    async with session_factory() as session:
        repo = PlantRepositoryImpl(session)
        assert await repo.get_by_user_id("nobody") is None
        assert await repo.exists("nobody") is False


@pytest.mark.asyncio
async def test_duplicate_create_is_rejected(session_factory):
    async with session_factory() as session:
        await PlantRepositoryImpl(session).create(PlantState.new("alice", now=START))

    async with session_factory() as session:
        with pytest.raises(DuplicateResourceError):
            await PlantRepositoryImpl(session).create(PlantState.new("alice", now=START))


@pytest.mark.asyncio
async def test_save_bumps_version_and_round_trips_rewards(session_factory):
    async with session_factory() as session:
        repo = PlantRepositoryImpl(session)
        created = await repo.create(PlantState.new("alice", now=START))

        changed = created.model_copy(update={
            "growth_points": 3,
            "total_entries": 3,
            "current_streak": 3,
            "longest_streak": 3,
            "stage": PlantStage.SPROUT,
            "last_entry_at": START + timedelta(days=2),
            "flowers": [Flower(type="tulip", streak_at_award=3, awarded_at=START + timedelta(days=2))],
        })
        saved = await repo.save(changed, expected_version=1)

    assert saved.version == 2

    async with session_factory() as session:
        loaded = await PlantRepositoryImpl(session).get_by_user_id("alice")

    assert loaded.version == 2
    assert loaded.stage == PlantStage.SPROUT
    assert loaded.last_entry_at == START + timedelta(days=2)
    assert loaded.last_entry_at.tzinfo is not None
    assert loaded.flowers == changed.flowers


@pytest.mark.asyncio
async def test_stale_version_loses_compare_and_swap(session_factory):
    async with session_factory() as session:
        repo = PlantRepositoryImpl(session)
        created = await repo.create(PlantState.new("alice", now=START))

        await repo.save(created.model_copy(update={"growth_points": 1}), expected_version=1)

        with pytest.raises(ConcurrencyConflictError) as exc_info:
            await repo.save(created.model_copy(update={"growth_points": 5}), expected_version=1)

        assert exc_info.value.expected_version == 1
        stored = await repo.get_by_user_id("alice")

    # The losing write left nothing behind
    assert stored.growth_points == 1
    assert stored.version == 2


@pytest.mark.asyncio
async def test_save_for_unknown_user_is_not_found(session_factory):
    async with session_factory() as session:
        repo = PlantRepositoryImpl(session)
        with pytest.raises(PlantNotFoundError):
            await repo.save(PlantState.new("ghost", now=START), expected_version=1)


@pytest.mark.asyncio
async def test_list_user_ids_with_entries_pages_in_id_order(session_factory):
    async with session_factory() as session:
        repo = PlantRepositoryImpl(session)
        for user_id in ["carol", "alice", "dave", "bob"]:
            state = PlantState.new(user_id, now=START)
            if user_id != "dave":
                state.last_entry_at = START
            await repo.create(state)

        first = await repo.list_user_ids_with_entries(limit=2)
        second = await repo.list_user_ids_with_entries(limit=2, after_user_id=first[-1])

    assert first == ["alice", "bob"]
    assert second == ["carol"]
