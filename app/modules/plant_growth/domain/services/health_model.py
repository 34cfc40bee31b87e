# 📄 File: app/modules/plant_growth/domain/services/health_model.py
# 🧭 Purpose (Layman Explanation):
# Keeps track of how healthy the plant is. Writing gives it a drink, and going several
# days without writing makes it wilt, lose its streak, and eventually drop a flower.
# 🧪 Purpose (Technical Summary):
# Entry boost and idle-decay rules over the PlantState aggregate, plus the derived visual
# state. Decay is charged against the stored health and gated on the last penalised day
# count so repeated checks at the same elapsed-day value never compound.
# 🔗 Dependencies:
# app.shared.core.clock, plant domain models
# 🔄 Connected Modules / Calls From:
# plant_state_machine.py, application DTO mapping, tests

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from app.shared.core.clock import calendar_days_between

from ..models.plant import Flower, PlantState, VisualState

MAX_HEALTH = 100
ENTRY_HEALTH_BOOST = 10

WILTING_AFTER_DAYS = 3
SEVERE_NEGLECT_AFTER_DAYS = 7
DECAY_PER_DAY = 8
MAX_DECAY = 50

DEAD_HEALTH_THRESHOLD = 20
WILTING_HEALTH_THRESHOLD = 50


@dataclass
class DecayResult:
    days_since_last_entry: int
    health_before: int
    health_after: int
    penalty_applied: bool = False
    streak_forfeited: int = 0
    flower_removed: Optional[Flower] = None
    effects_cleared: int = 0

    @property
    def health_lost(self) -> int:
        return self.health_before - self.health_after

    @property
    def changed(self) -> bool:
        return bool(
            self.penalty_applied
            or self.streak_forfeited
            or self.effects_cleared
        )


def apply_entry_boost(health: int) -> int:
    return min(MAX_HEALTH, health + ENTRY_HEALTH_BOOST)


def decay_amount(days_since: int) -> int:
    """Health lost for a gap of ``days_since`` calendar days (0 below the wilting point)."""
    if days_since < WILTING_AFTER_DAYS:
        return 0
    return min(MAX_DECAY, (days_since - 2) * DECAY_PER_DAY)


def apply_decay(state: PlantState, now: datetime) -> Tuple[PlantState, DecayResult]:
    """
    Re-evaluate health for the time elapsed since the last entry.

    Returns a new state; ``state`` is left untouched. A penalty is charged
    against the stored health only when the elapsed day count has grown
    past the last one already penalised, so running the check twice for
    the same ``now`` changes nothing the second time.
    """
    updated = state.model_copy(deep=True)

    if state.last_entry_at is None:
        return updated, DecayResult(0, state.health, state.health)

    days_since = calendar_days_between(state.last_entry_at, now, state.timezone)
    updated.days_since_last_entry = days_since
    result = DecayResult(days_since, state.health, state.health)

    if days_since < WILTING_AFTER_DAYS:
        return updated, result

    if days_since > state.last_decay_days:
        updated.health = max(0, state.health - decay_amount(days_since))
        if days_since >= SEVERE_NEGLECT_AFTER_DAYS and updated.flowers:
            result.flower_removed = updated.flowers.pop()
        updated.last_decay_days = days_since
        result.penalty_applied = True
        result.health_after = updated.health

    result.streak_forfeited = state.current_streak
    updated.current_streak = 0
    updated.wilting_started = True

    if days_since >= SEVERE_NEGLECT_AFTER_DAYS:
        result.effects_cleared = len(updated.special_effects)
        updated.special_effects = []

    return updated, result


def visual_state(health: int, wilting_started: bool) -> VisualState:
    if health <= DEAD_HEALTH_THRESHOLD:
        return VisualState.DEAD
    if health <= WILTING_HEALTH_THRESHOLD or wilting_started:
        return VisualState.WILTING
    return VisualState.HEALTHY
