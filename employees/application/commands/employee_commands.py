"""
Employee commands and queries.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class CreateEmployeeCommand:
    """Command to register an employee."""

    name: str
    department: str
    email: Optional[str] = None
    title: Optional[str] = None
    actor: Optional[str] = None


@dataclass
class UpdateEmployeeCommand:
    """Command to replace the attributes of an employee."""

    employee_id: uuid.UUID
    name: str
    department: str
    email: Optional[str] = None
    title: Optional[str] = None
    actor: Optional[str] = None


@dataclass
class DeleteEmployeeCommand:
    """Command to delete an employee and their assignments."""

    employee_id: uuid.UUID
    actor: Optional[str] = None


@dataclass
class GetEmployeeQuery:
    """Query for one employee with assignments and history."""

    employee_id: uuid.UUID


@dataclass
class ListEmployeesQuery:
    """Query for all employees."""
