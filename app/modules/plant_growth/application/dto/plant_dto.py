# 📄 File: app/modules/plant_growth/application/dto/plant_dto.py
# 🧭 Purpose (Layman Explanation):
# The "display card" for a plant: everything the app needs to draw it and cheer the user on,
# including how close it is to growing and what message to show.
#
# 🧪 Purpose (Technical Summary):
# Data transfer objects projecting the PlantState aggregate plus derived read-only values
# (visual state, display name, stage progress, streak and encouragement messages).
#
# 🔗 Dependencies:
# - pydantic for DTO serialization
# - plant growth domain models and projection services
#
# 🔄 Connected Modules / Calls From:
# - application.handlers (handlers return PlantStateDTO)
# - presentation.api.v1.plants (response bodies)

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.modules.plant_growth.domain.models.plant import (
    Flower,
    Fruit,
    PlantStage,
    PlantState,
    SpecialEffect,
    VisualState,
)
from app.modules.plant_growth.domain.services.encouragement import (
    encouragement_message,
    streak_message,
)
from app.modules.plant_growth.domain.services.health_model import visual_state
from app.modules.plant_growth.domain.services.stage_resolver import (
    points_until_next_stage,
    stage_progress,
)


class RewardDTO(BaseModel):
    type: str
    streak_at_award: int
    awarded_at: datetime


class SpecialEffectDTO(BaseModel):
    type: str
    intensity: str
    duration_ms: int
    reason: str
    awarded_at: datetime


class EncouragementDTO(BaseModel):
    title: str
    text: str


class PlantStateDTO(BaseModel):
    """
    Plant state as seen by clients.

    Stored fields are copied verbatim; everything below ``visual_state``
    is derived at read time and never persisted.
    """

    model_config = ConfigDict(use_enum_values=True)

    user_id: str
    timezone: str
    stage: PlantStage
    health: int = Field(ge=0, le=100)
    last_entry_at: Optional[datetime] = None
    days_since_last_entry: int
    total_entries: int
    current_streak: int
    longest_streak: int
    growth_points: int
    flowers: List[RewardDTO] = Field(default_factory=list)
    fruits: List[RewardDTO] = Field(default_factory=list)
    special_effects: List[SpecialEffectDTO] = Field(default_factory=list)
    wilting_started: bool
    version: int
    created_at: datetime
    updated_at: datetime
    last_health_check_at: Optional[datetime] = None

    # Derived projections
    visual_state: VisualState
    stage_display_name: str
    points_until_next_stage: Optional[int] = None
    stage_progress: float
    streak_message: str
    encouragement: EncouragementDTO

    @classmethod
    def from_domain(cls, state: PlantState) -> "PlantStateDTO":
        message = encouragement_message(state)
        return cls(
            user_id=state.user_id,
            timezone=state.timezone,
            stage=state.stage,
            health=state.health,
            last_entry_at=state.last_entry_at,
            days_since_last_entry=state.days_since_last_entry,
            total_entries=state.total_entries,
            current_streak=state.current_streak,
            longest_streak=state.longest_streak,
            growth_points=state.growth_points,
            flowers=[_reward_dto(f) for f in state.flowers],
            fruits=[_reward_dto(f) for f in state.fruits],
            special_effects=[_effect_dto(e) for e in state.special_effects],
            wilting_started=state.wilting_started,
            version=state.version,
            created_at=state.created_at,
            updated_at=state.updated_at,
            last_health_check_at=state.last_health_check_at,
            visual_state=visual_state(state.health, state.wilting_started),
            stage_display_name=state.stage.display_name,
            points_until_next_stage=points_until_next_stage(state.stage, state.growth_points),
            stage_progress=stage_progress(state.stage, state.growth_points),
            streak_message=streak_message(state.current_streak),
            encouragement=EncouragementDTO(title=message.title, text=message.text),
        )


def _reward_dto(reward) -> RewardDTO:
    return RewardDTO(
        type=reward.type,
        streak_at_award=reward.streak_at_award,
        awarded_at=reward.awarded_at,
    )


def _effect_dto(effect: SpecialEffect) -> SpecialEffectDTO:
    return SpecialEffectDTO(
        type=effect.type,
        intensity=effect.intensity,
        duration_ms=effect.duration_ms,
        reason=effect.reason,
        awarded_at=effect.awarded_at,
    )
