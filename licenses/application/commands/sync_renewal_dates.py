"""
SyncRenewalDatesCommand.

Command to roll stored renewal dates forward past today.
"""
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class SyncRenewalDatesCommand:
    """
    Command to resynchronize renewal dates.

    With ``license_id`` only that license is processed; otherwise every
    license with a non-manual renewal cycle. ``dry_run`` computes without
    saving.
    """

    license_id: Optional[uuid.UUID] = None
    today: Optional[date] = None
    dry_run: bool = False
