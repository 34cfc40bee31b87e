# 📄 File: app/modules/plant_growth/application/commands/record_entry.py
# 🧭 Purpose (Layman Explanation):
# The "I just wrote in my journal" message. It says when the entry was written, never what it says.
#
# 🧪 Purpose (Technical Summary):
# CQRS command carrying one JournalEntryEvent for the entry-added transition. The engine does
# not de-duplicate; entry_id is carried for log correlation only.
#
# 🔗 Dependencies:
# - pydantic for command validation
#
# 🔄 Connected Modules / Calls From:
# - application.handlers.command_handlers (RecordJournalEntryCommandHandler)
# - presentation.api.v1.plants (record entry endpoint)

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RecordJournalEntryCommand(BaseModel):
    """Command applying one saved journal entry to the user's plant."""

    user_id: str = Field(..., min_length=1, max_length=128)
    occurred_at: Optional[datetime] = Field(
        default=None,
        description="When the entry was written (defaults to now)"
    )
    entry_id: Optional[str] = Field(default=None, max_length=128)
