# 📄 File: app/modules/plant_growth/domain/services/plant_state_machine.py
# 🧭 Purpose (Layman Explanation):
# The gardener of the app: when a journal entry arrives it waters the plant, updates the streak,
# lets the plant grow and hands out prizes; when time passes it checks whether the plant is wilting.
# 🧪 Purpose (Technical Summary):
# Orchestrates the streak calculator, stage resolver, reward generator and health model into
# the two engine transitions (entry added, health check) plus an explicit stage repair.
# Every transition returns a new PlantState and a TransitionOutcome; inputs are never mutated.
# 🔗 Dependencies:
# Domain services in this package, app.shared.core.clock
# 🔄 Connected Modules / Calls From:
# Plant growth command handlers, tests

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from app.shared.core.clock import ensure_aware

from ..models.plant import Fruit, PlantStage, PlantState
from .health_model import DecayResult, apply_decay, apply_entry_boost
from .reward_generator import RewardBundle, RewardGenerator
from .stage_resolver import calculate_stage_from_scratch, resolve_stage
from .streak_calculator import compute_streak, update_longest_streak

logger = logging.getLogger(__name__)


@dataclass
class TransitionOutcome:
    """What a single transition did, for events and logging."""
    transition: str
    old_stage: PlantStage
    new_stage: PlantStage
    streak_before: int
    streak_after: int
    health_before: int
    health_after: int
    rewards: RewardBundle = field(default_factory=RewardBundle)
    decay: Optional[DecayResult] = None
    revoked_fruits: List[Fruit] = field(default_factory=list)

    @property
    def stage_changed(self) -> bool:
        return self.old_stage != self.new_stage

    @property
    def became_wilting(self) -> bool:
        return bool(self.decay and self.decay.penalty_applied)


class PlantStateMachine:
    """
    Applies engine transitions to a PlantState.

    The only transitions are ``on_entry_added`` and ``on_health_check``.
    ``recalculate_stage`` is a separately named repair and is never part
    of normal operation.
    """

    def __init__(self, reward_generator: Optional[RewardGenerator] = None):
        self.reward_generator = reward_generator or RewardGenerator()

    def on_entry_added(
        self,
        state: PlantState,
        occurred_at: datetime
    ) -> Tuple[PlantState, TransitionOutcome]:
        occurred_at = ensure_aware(occurred_at)
        updated = state.model_copy(deep=True)

        updated.total_entries += 1
        updated.growth_points += 1

        streak = compute_streak(state.current_streak, state.last_entry_at, occurred_at, state.timezone)
        updated.current_streak = streak
        updated.longest_streak = update_longest_streak(state.longest_streak, streak)

        updated.stage = resolve_stage(state.stage, updated.growth_points, streak)
        rewards = self.reward_generator.generate(streak, updated.stage, state.stage, occurred_at)

        updated.health = apply_entry_boost(state.health)

        updated.flowers.extend(rewards.flowers)
        updated.fruits.extend(rewards.fruits)
        updated.special_effects.extend(rewards.effects)

        # Only a newer entry restarts the decay clock. A late-arriving older one keeps
        # the penalised day count, or the next check would charge the same days again.
        if state.last_entry_at is None or occurred_at > ensure_aware(state.last_entry_at):
            updated.last_entry_at = occurred_at
            updated.days_since_last_entry = 0
            updated.wilting_started = False
            updated.last_decay_days = 0

        outcome = TransitionOutcome(
            transition="entry_added",
            old_stage=state.stage,
            new_stage=updated.stage,
            streak_before=state.current_streak,
            streak_after=streak,
            health_before=state.health,
            health_after=updated.health,
            rewards=rewards,
        )

        logger.debug(
            f"Entry applied for {state.user_id}: streak {state.current_streak}->{streak}, "
            f"stage {state.stage.value}->{updated.stage.value}"
        )
        return updated, outcome

    def on_health_check(
        self,
        state: PlantState,
        now: datetime
    ) -> Tuple[PlantState, TransitionOutcome]:
        now = ensure_aware(now)
        updated, decay = apply_decay(state, now)
        updated.last_health_check_at = now

        outcome = TransitionOutcome(
            transition="health_check",
            old_stage=state.stage,
            new_stage=updated.stage,
            streak_before=state.current_streak,
            streak_after=updated.current_streak,
            health_before=state.health,
            health_after=updated.health,
            decay=decay,
        )
        return updated, outcome

    def recalculate_stage(
        self,
        state: PlantState,
        allow_downgrade: bool = False
    ) -> Tuple[PlantState, TransitionOutcome]:
        """
        Re-derive the stage from the current counters.

        By default the stage can only move up (repairing a stage that lags
        its counters). With ``allow_downgrade`` it may also move down, and
        fruit is revoked once the plant is no longer a fruiting tree.
        Flowers are always kept.
        """
        updated = state.model_copy(deep=True)
        target = calculate_stage_from_scratch(state.growth_points, state.current_streak)
        revoked: List[Fruit] = []

        if target.order > state.stage.order:
            updated.stage = target
        elif target.order < state.stage.order and allow_downgrade:
            updated.stage = target
            if target != PlantStage.FRUITING_TREE:
                revoked = list(updated.fruits)
                updated.fruits = []

        outcome = TransitionOutcome(
            transition="stage_recalculated",
            old_stage=state.stage,
            new_stage=updated.stage,
            streak_before=state.current_streak,
            streak_after=state.current_streak,
            health_before=state.health,
            health_after=state.health,
            revoked_fruits=revoked,
        )
        return updated, outcome
