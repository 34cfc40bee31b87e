# 📄 File: app/modules/plant_growth/domain/services/encouragement.py
# 🧭 Purpose (Layman Explanation):
# Picks the kind words shown under the plant - a cheer for the current streak and a short
# message that fits how grown and how healthy the plant is right now.
# 🧪 Purpose (Technical Summary):
# Read-only presentation projections over PlantState: streak message and the
# stage/visual-state encouragement title and text. No state is changed here.
# 🔗 Dependencies:
# health_model.visual_state, plant domain models
# 🔄 Connected Modules / Calls From:
# application DTO mapping (GET plant), tests

from dataclasses import dataclass

from ..models.plant import PlantStage, PlantState, VisualState
from .health_model import visual_state


@dataclass(frozen=True)
class EncouragementMessage:
    title: str
    text: str


HEALTHY_MESSAGES = {
    PlantStage.SEED: EncouragementMessage(
        "Your journey begins",
        "A tiny seed holds infinite potential. Keep nurturing with your words.",
    ),
    PlantStage.SPROUT: EncouragementMessage(
        "Growth emerges",
        "Your thoughts are taking root. Each entry strengthens your foundation.",
    ),
    PlantStage.PLANT: EncouragementMessage(
        "Steady progress",
        "Your words have nourished this growth. The leaves reach toward light.",
    ),
    PlantStage.BLOOMING: EncouragementMessage(
        "Beauty unfolds",
        "Your consistent care brings forth flowers. Your mind garden flourishes.",
    ),
    PlantStage.TREE: EncouragementMessage(
        "Wisdom takes form",
        "Strong roots, reaching branches. Your reflection has grown into wisdom.",
    ),
    PlantStage.FRUITING_TREE: EncouragementMessage(
        "Abundance flows",
        "Your dedication bears fruit. This garden reflects your inner growth.",
    ),
}

WILTING_TITLE = "Your garden awaits"
WILTING_RECENT_TEXT = "A few gentle words can revive what's fading. Your plant remembers your care."
WILTING_LONG_TEXT = "Even the strongest gardens need tending. A moment of reflection can restore vitality."
WILTING_RECENT_DAYS = 5

DEAD_MESSAGE = EncouragementMessage(
    "New beginnings",
    "Every ending is a chance to start anew. Plant fresh seeds with your next entry.",
)


def streak_message(current_streak: int) -> str:
    if current_streak >= 10:
        return f"🌟 {current_streak} days of mindful growth!"
    if current_streak >= 7:
        return "✨ Week-long journey of reflection"
    if current_streak >= 3:
        return f"🌱 Building momentum with {current_streak} days"
    if current_streak >= 1:
        return "🌿 Growing stronger each day"
    return ""


def encouragement_message(state: PlantState) -> EncouragementMessage:
    look = visual_state(state.health, state.wilting_started)

    if look == VisualState.HEALTHY:
        return HEALTHY_MESSAGES.get(state.stage, HEALTHY_MESSAGES[PlantStage.SEED])

    if look == VisualState.WILTING:
        if state.days_since_last_entry <= WILTING_RECENT_DAYS:
            return EncouragementMessage(WILTING_TITLE, WILTING_RECENT_TEXT)
        return EncouragementMessage(WILTING_TITLE, WILTING_LONG_TEXT)

    return DEAD_MESSAGE
