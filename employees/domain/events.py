"""
Employee domain events.
"""
import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class EmployeeCreated(DomainEvent):
    """Event raised when an employee is registered."""

    def __init__(
        self,
        employee_id: uuid.UUID,
        auto_assigned: int = 0,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(employee_id), occurred_at=occurred_at)
        self.employee_id = employee_id
        self.auto_assigned = auto_assigned

    def payload(self) -> Dict[str, Any]:
        return {"auto_assigned": self.auto_assigned}


class EmployeeUpdated(DomainEvent):
    """Event raised when employee attributes change."""

    def __init__(self, employee_id: uuid.UUID, changed_fields: tuple,
                 occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(employee_id), occurred_at=occurred_at)
        self.employee_id = employee_id
        self.changed_fields = tuple(changed_fields)

    def payload(self) -> Dict[str, Any]:
        return {"changed_fields": list(self.changed_fields)}


class EmployeeDeleted(DomainEvent):
    """Event raised when an employee is removed."""

    def __init__(self, employee_id: uuid.UUID, name: str, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(employee_id), occurred_at=occurred_at)
        self.employee_id = employee_id
        self.name = name

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name}
