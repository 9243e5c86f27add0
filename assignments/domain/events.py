"""
Assignment domain events.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class LicensesAssigned(DomainEvent):
    """Event raised when licenses were assigned to an employee."""

    def __init__(
        self,
        employee_id: uuid.UUID,
        count: int,
        source: str = "manual",
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(employee_id), occurred_at=occurred_at)
        self.employee_id = employee_id
        self.count = count
        self.source = source

    def payload(self) -> Dict[str, Any]:
        return {"count": self.count, "source": self.source}


class LicensesReturned(DomainEvent):
    """Event raised when assignments of an employee were returned."""

    def __init__(self, employee_id: uuid.UUID, count: int, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(employee_id), occurred_at=occurred_at)
        self.employee_id = employee_id
        self.count = count

    def payload(self) -> Dict[str, Any]:
        return {"count": self.count}


class AssignmentDeleted(DomainEvent):
    """Event raised when an assignment row was removed."""

    def __init__(
        self,
        assignment_id: uuid.UUID,
        license_id: uuid.UUID,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(assignment_id), occurred_at=occurred_at)
        self.assignment_id = assignment_id
        self.license_id = license_id

    def payload(self) -> Dict[str, Any]:
        return {"license_id": str(self.license_id)}
