# 📄 File: app/modules/plant_growth/application/queries/get_plant.py
# 🧭 Purpose (Layman Explanation):
# Asks to see a user's plant, optionally checking first whether it has wilted since last time.
#
# 🧪 Purpose (Technical Summary):
# CQRS query for a PlantState projection; ``refresh_health`` runs the idle health check
# before the read (lazy check on display).
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.query_handlers (GetPlantQueryHandler)
# - presentation.api.v1.plants (get plant endpoint)

from pydantic import BaseModel, Field


class GetPlantQuery(BaseModel):
    """Query for a single user's plant."""

    user_id: str = Field(..., min_length=1, max_length=128)
    refresh_health: bool = Field(default=False, description="Run the health check before reading")
