"""
Plant growth commands (CQRS write side).
"""

from .check_health import CheckPlantHealthCommand
from .initialize_plant import InitializePlantCommand
from .recalculate_stage import RecalculatePlantStageCommand
from .record_entry import RecordJournalEntryCommand

__all__ = [
    "CheckPlantHealthCommand",
    "InitializePlantCommand",
    "RecalculatePlantStageCommand",
    "RecordJournalEntryCommand",
]
