"""
Assignment commands and queries.
"""
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from assignments.domain.assignment import MANUAL_REASON


@dataclass
class AssignLicensesCommand:
    """Command to assign several licenses to one employee."""

    employee_id: uuid.UUID
    license_ids: List[uuid.UUID] = field(default_factory=list)
    reason: str = MANUAL_REASON
    actor: Optional[str] = None


@dataclass
class UnassignLicensesCommand:
    """Command to return several assignments of one employee."""

    employee_id: uuid.UUID
    assignment_ids: List[uuid.UUID] = field(default_factory=list)
    actor: Optional[str] = None


@dataclass
class ReturnAssignmentCommand:
    """Command to return a single assignment."""

    assignment_id: uuid.UUID
    actor: Optional[str] = None


@dataclass
class DeleteAssignmentCommand:
    """Command to hard delete an assignment."""

    assignment_id: uuid.UUID
    actor: Optional[str] = None


@dataclass
class ListAssignmentsQuery:
    """Query for assignments filtered by license, employee or state."""

    license_id: Optional[uuid.UUID] = None
    employee_id: Optional[uuid.UUID] = None
    active_only: bool = False
