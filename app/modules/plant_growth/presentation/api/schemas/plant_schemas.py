# 📄 File: app/modules/plant_growth/presentation/api/schemas/plant_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the app may send when it plants a seed, reports a journal entry,
# asks for a health check or asks for the plant's stage to be repaired.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request bodies for the plant growth endpoints. Responses reuse PlantStateDTO
# from the application layer so the read model has a single definition.
#
# 🔗 Dependencies:
# - pydantic for request validation
# - zoneinfo for IANA timezone validation
#
# 🔄 Connected Modules / Calls From:
# - app.modules.plant_growth.presentation.api.v1.plants (request bodies)

"""
Plant Growth API Schemas

Request Schemas:
- CreatePlantRequest: plant the seed for an onboarded user
- RecordEntryRequest: apply one saved journal entry
- HealthCheckRequest: re-evaluate health for elapsed idle time
- RecalculateStageRequest: explicit stage repair
"""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CreatePlantRequest(BaseModel):
    """Request body for planting a new seed."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"timezone": "Europe/Berlin"}}
    )

    timezone: Optional[str] = Field(
        default=None,
        description="IANA timezone whose midnight separates journaling days"
    )

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


class RecordEntryRequest(BaseModel):
    """Request body for a saved journal entry."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"occurred_at": "2024-03-01T20:15:00+01:00", "entry_id": "entry-42"}
        }
    )

    occurred_at: Optional[datetime] = Field(
        default=None,
        description="When the entry was written; defaults to the time of the request"
    )
    entry_id: Optional[str] = Field(
        default=None,
        max_length=128,
        description="Journal entry identifier, used to correlate emitted events"
    )


class HealthCheckRequest(BaseModel):
    """Request body for an explicit health check."""

    now: Optional[datetime] = Field(
        default=None,
        description="Instant to evaluate at; defaults to the time of the request"
    )


class RecalculateStageRequest(BaseModel):
    """Request body for the stage repair operation."""

    allow_downgrade: bool = Field(
        default=False,
        description="Let the stage move down; fruit is revoked below fruiting tree"
    )
