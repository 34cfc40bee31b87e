"""
Plant growth domain services.

Pure functions and small classes; none of them touches storage.
"""

from .health_model import apply_decay, apply_entry_boost, visual_state
from .plant_state_machine import PlantStateMachine, TransitionOutcome
from .reward_generator import RewardBundle, RewardGenerator
from .stage_resolver import (
    calculate_stage_from_scratch,
    points_until_next_stage,
    resolve_stage,
    stage_progress,
)
from .streak_calculator import compute_streak, streak_from_dates

__all__ = [
    "apply_decay",
    "apply_entry_boost",
    "visual_state",
    "PlantStateMachine",
    "TransitionOutcome",
    "RewardBundle",
    "RewardGenerator",
    "calculate_stage_from_scratch",
    "points_until_next_stage",
    "resolve_stage",
    "stage_progress",
    "compute_streak",
    "streak_from_dates",
]
