"""
Health and decay model tests.
"""

from datetime import timedelta

import pytest

from app.modules.plant_growth.domain.models.plant import Flower, Fruit, SpecialEffect, VisualState
from app.modules.plant_growth.domain.services.health_model import (
    apply_decay,
    apply_entry_boost,
    decay_amount,
    visual_state,
)
from tests.conftest import START, make_state


def _flower(kind: str, streak: int) -> Flower:
    return Flower(type=kind, streak_at_award=streak, awarded_at=START)


def _glow() -> SpecialEffect:
    return SpecialEffect(
        type="glow", intensity="medium", duration_ms=3000, reason="Grew", awarded_at=START
    )


class TestEntryBoost:

    def test_boost_adds_ten(self):
        assert apply_entry_boost(60) == 70

    def test_boost_is_capped(self):
        assert apply_entry_boost(95) == 100
        assert apply_entry_boost(100) == 100


@pytest.mark.parametrize("days,expected", [
    (0, 0), (2, 0), (3, 8), (5, 24), (7, 40), (8, 48), (9, 50), (30, 50),
])
def test_decay_amount(days, expected):
    assert decay_amount(days) == expected


class TestApplyDecay:

    def test_no_entries_is_a_no_op(self):
        state = make_state()
        updated, result = apply_decay(state, START + timedelta(days=30))

        assert updated == state
        assert not result.changed

    def test_under_three_days_only_updates_day_count(self):
        state = make_state(last_entry_at=START, current_streak=4, longest_streak=4, health=90)
        updated, result = apply_decay(state, START + timedelta(days=2))

        assert updated.days_since_last_entry == 2
        assert updated.health == 90
        assert updated.current_streak == 4
        assert updated.wilting_started is False
        assert not result.penalty_applied

    def test_five_idle_days(self):
        state = make_state(last_entry_at=START, current_streak=4, longest_streak=4, health=100)
        updated, result = apply_decay(state, START + timedelta(days=5))

        assert updated.health == 76
        assert updated.current_streak == 0
        assert updated.longest_streak == 4
        assert updated.wilting_started is True
        assert result.health_lost == 24
        assert result.streak_forfeited == 4

    def test_severe_neglect_prunes_last_flower_and_effects(self):
        flowers = [_flower("rose", 3), _flower("tulip", 6)]
        fruits = [Fruit(type="apple", streak_at_award=10, awarded_at=START)]
        state = make_state(
            last_entry_at=START,
            health=100,
            flowers=flowers,
            fruits=fruits,
            special_effects=[_glow()],
        )
        updated, result = apply_decay(state, START + timedelta(days=7))

        assert [f.type for f in updated.flowers] == ["rose"]
        assert result.flower_removed.type == "tulip"
        assert updated.special_effects == []
        assert len(updated.fruits) == 1
        assert updated.health == 60

    def test_recheck_at_same_severe_day_count_keeps_remaining_flowers(self):
        state = make_state(
            last_entry_at=START,
            flowers=[_flower("rose", 3), _flower("tulip", 6)],
            special_effects=[_glow()],
        )
        checked, _ = apply_decay(state, START + timedelta(days=7))
        rechecked, result = apply_decay(checked, START + timedelta(days=7, hours=5))

        assert [f.type for f in rechecked.flowers] == ["rose"]
        assert result.flower_removed is None
        assert not result.penalty_applied
        assert rechecked.health == 60

    def test_input_state_is_not_mutated(self):
        state = make_state(last_entry_at=START, flowers=[_flower("rose", 3)], special_effects=[_glow()])
        apply_decay(state, START + timedelta(days=8))

        assert len(state.flowers) == 1
        assert len(state.special_effects) == 1
        assert state.health == 100

    def test_repeat_check_at_same_day_count_does_not_compound(self):
        state = make_state(last_entry_at=START, health=100)
        now = START + timedelta(days=5)

        once, _ = apply_decay(state, now)
        twice, result = apply_decay(once, now)

        assert twice == once
        assert not result.penalty_applied

    def test_later_check_subtracts_from_stored_health(self):
        state = make_state(last_entry_at=START, health=100)

        day5, _ = apply_decay(state, START + timedelta(days=5))
        day6, result = apply_decay(day5, START + timedelta(days=6))

        # 100 - 24, then 76 - min(50, 4 * 8)
        assert day5.health == 76
        assert day6.health == 44
        assert result.penalty_applied
        assert day6.last_decay_days == 6

    def test_health_never_goes_below_zero(self):
        state = make_state(last_entry_at=START, health=30)
        updated, _ = apply_decay(state, START + timedelta(days=20))
        assert updated.health == 0

    def test_timezone_shifts_day_count(self):
        # 20:00 UTC is already the next day in Tokyo
        state = make_state(last_entry_at=START.replace(hour=20), timezone="Asia/Tokyo")
        updated, _ = apply_decay(state, START.replace(hour=20) + timedelta(days=3, hours=-12))

        assert updated.days_since_last_entry == 2


@pytest.mark.parametrize("health,wilting,expected", [
    (100, False, VisualState.HEALTHY),
    (51, False, VisualState.HEALTHY),
    (51, True, VisualState.WILTING),
    (50, False, VisualState.WILTING),
    (21, False, VisualState.WILTING),
    (20, False, VisualState.DEAD),
    (0, True, VisualState.DEAD),
])
def test_visual_state(health, wilting, expected):
    assert visual_state(health, wilting) == expected
