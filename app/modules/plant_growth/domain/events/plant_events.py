# 📄 File: app/modules/plant_growth/domain/events/plant_events.py
# 🧭 Purpose (Layman Explanation):
# Announcements the garden makes when something worth noticing happens - a new seed is planted,
# the plant grows, prizes are earned, or the plant starts to wilt.
# 🧪 Purpose (Technical Summary):
# Domain events for the plant aggregate, published on the in-process event bus after the
# state change has been stored, plus the factory that derives them from a TransitionOutcome.
# 🔗 Dependencies:
# app.shared.core.event_bus.DomainEvent, plant domain models and state machine outcome
# 🔄 Connected Modules / Calls From:
# Plant growth command handlers, event subscribers, tests

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.shared.core.event_bus import DomainEvent

from ..models.plant import PlantState
from ..services.plant_state_machine import TransitionOutcome


@dataclass
class PlantEvent(DomainEvent):
    """Base class for plant-related events."""

    def __post_init__(self):
        super().__post_init__()
        self.aggregate_type = "plant"
        if not self.aggregate_id and self.user_id:
            self.aggregate_id = self.user_id


@dataclass
class PlantInitialized(PlantEvent):
    timezone: Optional[str] = None

    def __post_init__(self):
        super().__post_init__()
        self.event_type = "plant.initialized"


@dataclass
class PlantStageAdvanced(PlantEvent):
    old_stage: Optional[str] = None
    new_stage: Optional[str] = None
    growth_points: int = 0
    current_streak: int = 0

    def __post_init__(self):
        super().__post_init__()
        if self.old_stage is None or self.new_stage is None:
            raise ValueError("old_stage and new_stage are required for PlantStageAdvanced")
        self.event_type = "plant.stage_advanced"


@dataclass
class RewardsEarned(PlantEvent):
    flowers: List[str] = field(default_factory=list)
    fruits: List[str] = field(default_factory=list)
    effects: List[str] = field(default_factory=list)
    streak: int = 0

    def __post_init__(self):
        super().__post_init__()
        self.event_type = "plant.rewards_earned"


@dataclass
class PlantWilting(PlantEvent):
    days_since_last_entry: int = 0
    health_before: int = 0
    health_after: int = 0
    streak_forfeited: int = 0
    flower_removed: Optional[str] = None
    effects_cleared: int = 0

    def __post_init__(self):
        super().__post_init__()
        self.event_type = "plant.wilting"


@dataclass
class PlantStageRecalculated(PlantEvent):
    old_stage: Optional[str] = None
    new_stage: Optional[str] = None
    revoked_fruits: List[str] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        if self.old_stage is None or self.new_stage is None:
            raise ValueError("old_stage and new_stage are required for PlantStageRecalculated")
        self.event_type = "plant.stage_recalculated"


def events_for_outcome(state: PlantState, outcome: TransitionOutcome) -> List[PlantEvent]:
    """Domain events implied by one stored transition, in publication order."""
    events: List[PlantEvent] = []
    metadata: Dict[str, Any] = {"transition": outcome.transition}

    if outcome.transition == "stage_recalculated":
        if outcome.stage_changed:
            events.append(PlantStageRecalculated(
                user_id=state.user_id,
                old_stage=outcome.old_stage.value,
                new_stage=outcome.new_stage.value,
                revoked_fruits=[f.type for f in outcome.revoked_fruits],
                metadata=dict(metadata),
            ))
        return events

    if outcome.stage_changed:
        events.append(PlantStageAdvanced(
            user_id=state.user_id,
            old_stage=outcome.old_stage.value,
            new_stage=outcome.new_stage.value,
            growth_points=state.growth_points,
            current_streak=state.current_streak,
            metadata=dict(metadata),
        ))

    if not outcome.rewards.is_empty():
        summary = outcome.rewards.summary()
        events.append(RewardsEarned(
            user_id=state.user_id,
            flowers=summary["flowers"],
            fruits=summary["fruits"],
            effects=summary["effects"],
            streak=outcome.streak_after,
            metadata=dict(metadata),
        ))

    if outcome.became_wilting:
        decay = outcome.decay
        events.append(PlantWilting(
            user_id=state.user_id,
            days_since_last_entry=decay.days_since_last_entry,
            health_before=decay.health_before,
            health_after=decay.health_after,
            streak_forfeited=decay.streak_forfeited,
            flower_removed=decay.flower_removed.type if decay.flower_removed else None,
            effects_cleared=decay.effects_cleared,
            metadata=dict(metadata),
        ))

    return events
