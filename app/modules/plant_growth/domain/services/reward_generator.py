# 📄 File: app/modules/plant_growth/domain/services/reward_generator.py
# 🧭 Purpose (Layman Explanation):
# Hands out little prizes for steady journaling: a flower every third day in a row,
# fruit every fifth day once the tree is fully grown, and a glow when the plant grows.
# 🧪 Purpose (Technical Summary):
# Milestone-based reward generation with an injected random.Random so reward kinds are
# reproducible under a seed. At most one reward of each kind per entry event.
# 🔗 Dependencies:
# random, plant domain models
# 🔄 Connected Modules / Calls From:
# plant_state_machine.py, application handler factory, tests

import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..models.plant import Flower, Fruit, PlantStage, SpecialEffect

FLOWER_TYPES = ["cherry", "daisy", "rose", "sunflower", "tulip"]
FRUIT_TYPES = ["apple", "orange", "pear", "plum", "cherry"]

FLOWER_STREAK_INTERVAL = 3
FRUIT_STREAK_INTERVAL = 5

GLOW_EFFECT_TYPE = "glow"
GLOW_EFFECT_INTENSITY = "medium"
GLOW_EFFECT_DURATION_MS = 3000


@dataclass
class RewardBundle:
    flowers: List[Flower] = field(default_factory=list)
    fruits: List[Fruit] = field(default_factory=list)
    effects: List[SpecialEffect] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.flowers or self.fruits or self.effects)

    def summary(self) -> dict:
        return {
            "flowers": [f.type for f in self.flowers],
            "fruits": [f.type for f in self.fruits],
            "effects": [e.type for e in self.effects],
        }


class RewardGenerator:
    """
    Generates rewards for a single entry event.

    Milestones look at the current streak value only; passing several
    multiples between two entries still yields at most one flower.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate(
        self,
        streak: int,
        new_stage: PlantStage,
        old_stage: PlantStage,
        awarded_at: datetime
    ) -> RewardBundle:
        rewards = RewardBundle()

        if streak > 0 and streak % FLOWER_STREAK_INTERVAL == 0:
            rewards.flowers.append(Flower(
                type=self._rng.choice(FLOWER_TYPES),
                streak_at_award=streak,
                awarded_at=awarded_at,
            ))

        if (
            streak > 0
            and streak % FRUIT_STREAK_INTERVAL == 0
            and new_stage == PlantStage.FRUITING_TREE
        ):
            rewards.fruits.append(Fruit(
                type=self._rng.choice(FRUIT_TYPES),
                streak_at_award=streak,
                awarded_at=awarded_at,
            ))

        if new_stage != old_stage:
            rewards.effects.append(SpecialEffect(
                type=GLOW_EFFECT_TYPE,
                intensity=GLOW_EFFECT_INTENSITY,
                duration_ms=GLOW_EFFECT_DURATION_MS,
                reason=f"Grew from {old_stage.display_name} to {new_stage.display_name}",
                awarded_at=awarded_at,
            ))

        return rewards
