from .plant_events import (
    PlantEvent,
    PlantInitialized,
    PlantStageAdvanced,
    PlantStageRecalculated,
    PlantWilting,
    RewardsEarned,
    events_for_outcome,
)

__all__ = [
    "PlantEvent",
    "PlantInitialized",
    "PlantStageAdvanced",
    "PlantStageRecalculated",
    "PlantWilting",
    "RewardsEarned",
    "events_for_outcome",
]
