# 📄 File: app/modules/plant_growth/application/commands/check_health.py
# 🧭 Purpose (Layman Explanation):
# Asks the garden to look at a plant and see whether it has been left alone long enough to wilt.
#
# 🧪 Purpose (Technical Summary):
# CQRS command for the idle health-check transition; safe to retry for a fixed ``now``.
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (CheckPlantHealthCommandHandler)
# - presentation.api.v1.plants, background_jobs.tasks.plant_health

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CheckPlantHealthCommand(BaseModel):
    """Command re-evaluating a plant's health for the time elapsed since its last entry."""

    user_id: str = Field(..., min_length=1, max_length=128)
    now: Optional[datetime] = Field(
        default=None,
        description="Instant to evaluate at (defaults to the current time)"
    )
