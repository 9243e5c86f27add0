"""
License DTOs for API responses.
"""
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from assignments.domain.assignment import Assignment
from licenses.domain.license import License


@dataclass
class LicenseDTO:
    """License with its usage figures."""

    license: License
    assigned_quantity: int

    @property
    def remaining_quantity(self) -> int:
        return max(0, self.license.total_quantity - self.assigned_quantity)


@dataclass
class SeatDTO:
    """Seat of a key-based license with its current assignee."""

    id: int
    key: Optional[str]
    assigned_to: Optional[uuid.UUID] = None
    assignee_name: Optional[str] = None


@dataclass
class LicenseDetailDTO:
    """DTO for the license detail view."""

    summary: LicenseDTO
    seats: List[SeatDTO] = field(default_factory=list)
    assignments: List[Assignment] = field(default_factory=list)


@dataclass
class SeatKeyCheckDTO:
    """Result of a seat key duplicate check."""

    duplicate: bool
    license_name: Optional[str] = None


@dataclass
class RenewalSyncDTO:
    """Result of a renewal date sweep."""

    checked: int
    updated: int
    dry_run: bool = False
