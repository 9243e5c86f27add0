"""
UpdateSeatKeyCommand.

Command to store or clear the individual key of a seat.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class UpdateSeatKeyCommand:
    """Command to set a seat key. A blank key clears it."""

    seat_id: int
    key: Optional[str]
    actor: Optional[str] = None
