# 📄 File: app/modules/plant_growth/application/commands/initialize_plant.py
# 🧭 Purpose (Layman Explanation):
# The "plant a seed" request sent when a new user joins, carrying who they are and which
# timezone decides where one journaling day ends and the next begins.
#
# 🧪 Purpose (Technical Summary):
# CQRS command for onboarding a PlantState with validation of the user id and IANA timezone.
#
# 🔗 Dependencies:
# - pydantic for command validation
# - zoneinfo for timezone validation
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (InitializePlantCommandHandler)
# - presentation.api.v1.plants (create plant endpoint)

from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator


class InitializePlantCommand(BaseModel):
    """Command for planting the seed of a newly onboarded user."""

    user_id: str = Field(..., min_length=1, max_length=128, description="External user identifier")
    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone for day boundaries (defaults to the configured zone)"
    )

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("user_id cannot be blank")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v
