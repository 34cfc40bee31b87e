# 📄 File: app/modules/plant_growth/domain/services/stage_resolver.py
# 🧭 Purpose (Layman Explanation):
# Decides when the plant is ready to grow into its next form. It needs both enough
# journal entries and a long enough streak, and it grows one step at a time.
# 🧪 Purpose (Technical Summary):
# Stage threshold table with a one-step, forward-only resolver, progress projections
# for display, and a from-scratch computation used only by the stage repair operation.
# 🔗 Dependencies:
# PlantStage domain enum
# 🔄 Connected Modules / Calls From:
# plant_state_machine.py, application DTO mapping, tests

from dataclasses import dataclass
from typing import Dict, Optional

from ..models.plant import PlantStage


@dataclass(frozen=True)
class StageRequirement:
    points: int
    streak: int

    def is_met(self, growth_points: int, streak: int) -> bool:
        return growth_points >= self.points and streak >= self.streak


STAGE_REQUIREMENTS: Dict[PlantStage, StageRequirement] = {
    PlantStage.SEED: StageRequirement(points=1, streak=1),
    PlantStage.SPROUT: StageRequirement(points=3, streak=2),
    PlantStage.PLANT: StageRequirement(points=7, streak=3),
    PlantStage.BLOOMING: StageRequirement(points=15, streak=5),
    PlantStage.TREE: StageRequirement(points=25, streak=7),
    PlantStage.FRUITING_TREE: StageRequirement(points=40, streak=10),
}


def resolve_stage(current_stage: PlantStage, growth_points: int, streak: int) -> PlantStage:
    """
    Stage after one entry: the next stage if both its thresholds are met,
    otherwise ``current_stage``. Moves at most one step and never backwards,
    however far ahead the counters already are.
    """
    candidate = current_stage.next_stage
    if candidate is not None and STAGE_REQUIREMENTS[candidate].is_met(growth_points, streak):
        return candidate
    return current_stage


def calculate_stage_from_scratch(growth_points: int, streak: int) -> PlantStage:
    """Highest stage whose thresholds are both met, ignoring history (Seed if none)."""
    best = PlantStage.SEED
    for stage in PlantStage.ordered():
        if STAGE_REQUIREMENTS[stage].is_met(growth_points, streak):
            best = stage
    return best


# =============================================================================
# PROGRESS PROJECTIONS
# =============================================================================

def points_until_next_stage(stage: PlantStage, growth_points: int) -> Optional[int]:
    next_stage = stage.next_stage
    if next_stage is None:
        return None
    return max(0, STAGE_REQUIREMENTS[next_stage].points - growth_points)


def stage_progress(stage: PlantStage, growth_points: int) -> float:
    """Percentage of the way from this stage's point threshold to the next one."""
    next_stage = stage.next_stage
    if next_stage is None:
        return 100.0

    floor = STAGE_REQUIREMENTS[stage].points
    ceiling = STAGE_REQUIREMENTS[next_stage].points
    progress = (growth_points - floor) / (ceiling - floor) * 100
    return round(min(100.0, max(0.0, progress)), 1)
