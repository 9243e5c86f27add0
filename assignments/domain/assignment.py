"""
Assignment domain entities.

An assignment binds a license, and for key-based licenses one of its seats,
to an employee. Returning an assignment keeps it for history.
"""
import dataclasses
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional

from core.domain.exceptions import AssignmentAlreadyReturnedError

MANUAL_REASON = "Manual assignment"
MANUAL_RETURN_REASON = "Manual unassignment"
IMPORT_REASON = "CSV Import"


class HistoryAction(Enum):
    """Actions kept in the assignment history."""

    ASSIGNED = "ASSIGNED"
    RETURNED = "RETURNED"


def group_reason(group_name: str, license_type_label: str, via_import: bool = False) -> str:
    """Reason recorded for assignments made through a default group."""
    reason = f"Auto-assigned via Group: {group_name} ({license_type_label})"
    if via_import:
        return f"CSV Import - {reason}"
    return reason


@dataclass(frozen=True)
class Assignment:
    """
    Assignment domain entity.

    ``license_name``, ``employee_name``, ``employee_email`` and ``seat_key``
    are read-model attributes filled by the repository when listing.
    """

    id: uuid.UUID
    license_id: uuid.UUID
    employee_id: uuid.UUID
    assigned_date: date
    seat_id: Optional[int] = None
    returned_date: Optional[date] = None
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    license_name: Optional[str] = None
    employee_name: Optional[str] = None
    employee_email: Optional[str] = None
    seat_key: Optional[str] = None

    @classmethod
    def create(
        cls,
        license_id: uuid.UUID,
        employee_id: uuid.UUID,
        seat_id: Optional[int] = None,
        reason: Optional[str] = None,
        assigned_date: Optional[date] = None,
    ) -> "Assignment":
        """Create a new active assignment."""
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid.uuid4(),
            license_id=license_id,
            employee_id=employee_id,
            seat_id=seat_id,
            assigned_date=assigned_date or now.date(),
            reason=reason,
            created_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.returned_date is None

    def returned(self, on: date) -> "Assignment":
        """
        Return the assignment.

        Raises:
            AssignmentAlreadyReturnedError: If it was returned before
        """
        if not self.is_active:
            raise AssignmentAlreadyReturnedError()
        return dataclasses.replace(self, returned_date=on)


@dataclass(frozen=True)
class AssignmentHistoryEntry:
    """One assign or return event of an employee/license pair."""

    id: uuid.UUID
    license_id: uuid.UUID
    employee_id: uuid.UUID
    action: HistoryAction
    assignment_id: Optional[uuid.UUID] = None
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    license_name: Optional[str] = None

    @classmethod
    def for_assignment(
        cls, assignment: Assignment, action: HistoryAction, reason: Optional[str] = None
    ) -> "AssignmentHistoryEntry":
        return cls(
            id=uuid.uuid4(),
            assignment_id=assignment.id,
            license_id=assignment.license_id,
            employee_id=assignment.employee_id,
            action=action,
            reason=reason if reason is not None else assignment.reason,
            created_at=datetime.now(timezone.utc),
        )
