"""
Plant growth command and query handlers.
"""

from .command_handlers import (
    CheckPlantHealthCommandHandler,
    InitializePlantCommandHandler,
    RecalculatePlantStageCommandHandler,
    RecordJournalEntryCommandHandler,
    UserLockRegistry,
    plant_locks,
)
from .query_handlers import GetPlantQueryHandler

__all__ = [
    "CheckPlantHealthCommandHandler",
    "InitializePlantCommandHandler",
    "RecalculatePlantStageCommandHandler",
    "RecordJournalEntryCommandHandler",
    "UserLockRegistry",
    "plant_locks",
    "GetPlantQueryHandler",
]
