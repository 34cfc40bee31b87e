# 📄 File: app/modules/plant_growth/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# Defines what a user's plant is - how grown it is, how healthy it is, how long their journaling
# streak runs, and which flowers, fruit and sparkles it has earned along the way.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for the PlantState aggregate (one per user), its reward value objects,
# the ordered PlantStage enum and the JournalEntryEvent input, with invariant validation.
# 🔗 Dependencies:
# pydantic, datetime, enum, typing
# 🔄 Connected Modules / Calls From:
# Plant growth domain services, state machine, repository interface and SQLAlchemy mapping,
# application DTOs and handlers

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PlantStage(str, Enum):
    """Growth stages in ascending order"""
    SEED = "seed"
    SPROUT = "sprout"
    PLANT = "plant"
    BLOOMING = "blooming"
    TREE = "tree"
    FRUITING_TREE = "fruiting_tree"

    @property
    def order(self) -> int:
        return _STAGE_ORDER.index(self)

    @property
    def display_name(self) -> str:
        return _STAGE_DISPLAY_NAMES[self]

    @property
    def next_stage(self) -> Optional["PlantStage"]:
        position = self.order + 1
        return _STAGE_ORDER[position] if position < len(_STAGE_ORDER) else None

    @classmethod
    def ordered(cls) -> List["PlantStage"]:
        return list(_STAGE_ORDER)


_STAGE_ORDER = [
    PlantStage.SEED,
    PlantStage.SPROUT,
    PlantStage.PLANT,
    PlantStage.BLOOMING,
    PlantStage.TREE,
    PlantStage.FRUITING_TREE,
]

_STAGE_DISPLAY_NAMES = {
    PlantStage.SEED: "Seed",
    PlantStage.SPROUT: "Sprout",
    PlantStage.PLANT: "Young Plant",
    PlantStage.BLOOMING: "Blooming Plant",
    PlantStage.TREE: "Mature Tree",
    PlantStage.FRUITING_TREE: "Fruit-bearing Tree",
}


class VisualState(str, Enum):
    """Derived look of the plant; never stored"""
    HEALTHY = "healthy"
    WILTING = "wilting"
    DEAD = "dead"


# =============================================================================
# REWARD VALUE OBJECTS
# =============================================================================

class Flower(BaseModel):
    """Awarded on every third consecutive day"""
    model_config = ConfigDict(frozen=True)

    type: str
    streak_at_award: int = Field(ge=1)
    awarded_at: datetime


class Fruit(BaseModel):
    """Awarded on every fifth consecutive day once the plant is a fruiting tree"""
    model_config = ConfigDict(frozen=True)

    type: str
    streak_at_award: int = Field(ge=1)
    awarded_at: datetime


class SpecialEffect(BaseModel):
    """Transient celebration shown after a stage change"""
    model_config = ConfigDict(frozen=True)

    type: str
    intensity: str
    duration_ms: int = Field(ge=0)
    reason: str
    awarded_at: datetime


# =============================================================================
# PLANT STATE AGGREGATE
# =============================================================================

class PlantState(BaseModel):
    """
    Growth state of a single user's plant.

    One record per user, keyed by ``user_id``. It is created once at
    onboarding and afterwards changed only by the plant state machine:
    - entries raise ``growth_points``, ``total_entries`` and health
    - idle health checks lower health, forfeit the streak and prune rewards

    ``version`` increases with every stored write and is what the
    repository compares before replacing a record.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(min_length=1, max_length=128)
    timezone: str = "UTC"

    stage: PlantStage = PlantStage.SEED
    health: int = Field(default=100, ge=0, le=100)

    last_entry_at: Optional[datetime] = None
    days_since_last_entry: int = Field(default=0, ge=0)
    last_decay_days: int = Field(default=0, ge=0)

    total_entries: int = Field(default=0, ge=0)
    growth_points: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)

    flowers: List[Flower] = Field(default_factory=list)
    fruits: List[Fruit] = Field(default_factory=list)
    special_effects: List[SpecialEffect] = Field(default_factory=list)
    wilting_started: bool = False

    version: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_health_check_at: Optional[datetime] = None

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_id is required")
        return v

    @model_validator(mode="after")
    def validate_streaks(self) -> "PlantState":
        if self.longest_streak < self.current_streak:
            raise ValueError("longest_streak cannot be lower than current_streak")
        return self

    @classmethod
    def new(cls, user_id: str, timezone_name: str = "UTC", now: Optional[datetime] = None) -> "PlantState":
        """Fresh seedling for a newly onboarded user"""
        created = now or datetime.now(timezone.utc)
        return cls(
            user_id=user_id,
            timezone=timezone_name,
            created_at=created,
            updated_at=created,
        )

    def has_entries(self) -> bool:
        return self.last_entry_at is not None

    def is_fully_grown(self) -> bool:
        return self.stage == PlantStage.FRUITING_TREE


class JournalEntryEvent(BaseModel):
    """A journal entry was saved; content never reaches the engine"""

    occurred_at: datetime
    entry_id: Optional[str] = None
