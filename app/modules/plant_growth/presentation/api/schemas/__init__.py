# 📄 File: app/modules/plant_growth/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# The forms the plant endpoints accept.
# 🧪 Purpose (Technical Summary):
# Request schema exports for the plant growth API.
# 🔗 Dependencies:
# plant_schemas
# 🔄 Connected Modules / Calls From:
# presentation.api.v1.plants

from .plant_schemas import (
    CreatePlantRequest,
    HealthCheckRequest,
    RecalculateStageRequest,
    RecordEntryRequest,
)

__all__ = [
    "CreatePlantRequest",
    "HealthCheckRequest",
    "RecalculateStageRequest",
    "RecordEntryRequest",
]
