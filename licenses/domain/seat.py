"""
Seat domain entity.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Seat:
    """
    One unit of capacity of a key-based license.

    ``assigned_to`` holds the employee of the active assignment using the
    seat, if any.
    """

    id: int
    license_id: uuid.UUID
    key: Optional[str] = None
    assigned_to: Optional[uuid.UUID] = None

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to is not None

    @property
    def has_key(self) -> bool:
        return bool(self.key)
