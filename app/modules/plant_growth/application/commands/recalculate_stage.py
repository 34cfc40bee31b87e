# 📄 File: app/modules/plant_growth/application/commands/recalculate_stage.py
# 🧭 Purpose (Layman Explanation):
# A support tool that re-works out which stage a plant should be at from its counters,
# for fixing plants whose stage got out of step.
#
# 🧪 Purpose (Technical Summary):
# CQRS command for the explicit stage repair operation. Downgrades only happen when asked for.
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (RecalculatePlantStageCommandHandler)
# - presentation.api.v1.plants (recalculate endpoint)

from pydantic import BaseModel, Field


class RecalculatePlantStageCommand(BaseModel):
    """Command re-deriving the stage from growth points and the current streak."""

    user_id: str = Field(..., min_length=1, max_length=128)
    allow_downgrade: bool = Field(
        default=False,
        description="Allow the stage to move down (revokes fruit below fruiting tree)"
    )
