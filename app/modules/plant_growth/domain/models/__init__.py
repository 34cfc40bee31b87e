# 📄 File: app/modules/plant_growth/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the descriptions of the plant and its rewards in one place.
# 🧪 Purpose (Technical Summary):
# Package exports for the plant domain models.
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, application layer, infrastructure layer

from .plant import (
    Flower,
    Fruit,
    JournalEntryEvent,
    PlantStage,
    PlantState,
    SpecialEffect,
    VisualState,
)

__all__ = [
    "Flower",
    "Fruit",
    "JournalEntryEvent",
    "PlantStage",
    "PlantState",
    "SpecialEffect",
    "VisualState",
]
