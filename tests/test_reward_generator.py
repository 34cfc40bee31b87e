"""
Reward generator tests.

The RNG is seeded, so which flower appears is fixed per test run but
the assertions only look at whether a reward appears and its palette.
"""

import random
from datetime import datetime, timezone

import pytest

from app.modules.plant_growth.domain.models.plant import PlantStage
from app.modules.plant_growth.domain.services.reward_generator import (
    FLOWER_TYPES,
    FRUIT_TYPES,
    GLOW_EFFECT_DURATION_MS,
    RewardGenerator,
)

AWARDED_AT = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def generator():
    return RewardGenerator(random.Random(7))


@pytest.mark.parametrize("streak", range(0, 31))
def test_flower_iff_streak_is_positive_multiple_of_three(generator, streak):
    rewards = generator.generate(streak, PlantStage.TREE, PlantStage.TREE, AWARDED_AT)
    expected = streak > 0 and streak % 3 == 0

    assert (len(rewards.flowers) == 1) is expected
    assert len(rewards.flowers) <= 1


@pytest.mark.parametrize("streak", range(0, 31))
@pytest.mark.parametrize("stage", [PlantStage.TREE, PlantStage.FRUITING_TREE])
def test_fruit_only_on_fruiting_tree_at_multiples_of_five(generator, streak, stage):
    rewards = generator.generate(streak, stage, stage, AWARDED_AT)
    expected = streak > 0 and streak % 5 == 0 and stage == PlantStage.FRUITING_TREE

    assert (len(rewards.fruits) == 1) is expected


def test_reward_records_streak_and_time(generator):
    rewards = generator.generate(15, PlantStage.FRUITING_TREE, PlantStage.FRUITING_TREE, AWARDED_AT)

    assert rewards.flowers[0].type in FLOWER_TYPES
    assert rewards.flowers[0].streak_at_award == 15
    assert rewards.fruits[0].type in FRUIT_TYPES
    assert rewards.fruits[0].awarded_at == AWARDED_AT


def test_glow_effect_on_stage_change(generator):
    rewards = generator.generate(5, PlantStage.BLOOMING, PlantStage.PLANT, AWARDED_AT)

    assert len(rewards.effects) == 1
    effect = rewards.effects[0]
    assert effect.type == "glow"
    assert effect.duration_ms == GLOW_EFFECT_DURATION_MS == 3000
    assert "Plant" in effect.reason and "Blooming" in effect.reason


def test_no_effect_without_stage_change(generator):
    rewards = generator.generate(4, PlantStage.PLANT, PlantStage.PLANT, AWARDED_AT)
    assert rewards.is_empty()


def test_same_seed_gives_same_picks():
    first = RewardGenerator(random.Random(99)).generate(3, PlantStage.SEED, PlantStage.SEED, AWARDED_AT)
    second = RewardGenerator(random.Random(99)).generate(3, PlantStage.SEED, PlantStage.SEED, AWARDED_AT)

    assert first.flowers[0].type == second.flowers[0].type


def test_summary_lists_types(generator):
    rewards = generator.generate(3, PlantStage.SPROUT, PlantStage.SEED, AWARDED_AT)
    summary = rewards.summary()

    assert len(summary["flowers"]) == 1
    assert summary["fruits"] == []
    assert summary["effects"] == ["glow"]
