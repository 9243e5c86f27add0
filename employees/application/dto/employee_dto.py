"""
Employee DTOs for API responses.
"""
from dataclasses import dataclass, field
from typing import List

from assignments.domain.assignment import Assignment, AssignmentHistoryEntry
from employees.domain.employee import Employee


@dataclass
class CreatedEmployeeDTO:
    """A created employee and the number of licenses assigned through default groups."""

    employee: Employee
    auto_assigned: int = 0


@dataclass
class EmployeeDetailDTO:
    """DTO for the employee detail view."""

    employee: Employee
    assignments: List[Assignment] = field(default_factory=list)
    history: List[AssignmentHistoryEntry] = field(default_factory=list)
