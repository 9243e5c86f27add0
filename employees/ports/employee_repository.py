"""
Employee repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from employees.domain.employee import Employee


class EmployeeRepository(ABC):
    """Abstract repository for Employee entities."""

    @abstractmethod
    def save(self, employee: Employee) -> Employee:
        """Insert or update an employee."""

    @abstractmethod
    def find_by_id(self, employee_id: uuid.UUID) -> Optional[Employee]:
        """Find an employee by ID."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[Employee]:
        """Find an employee by email, case-insensitively."""

    @abstractmethod
    def find_by_emails(self, emails: Iterable[str]) -> Dict[str, Employee]:
        """Map lower-cased email to employee for the given addresses."""

    @abstractmethod
    def list_all(self) -> List[Employee]:
        """All employees ordered by name."""

    @abstractmethod
    def delete(self, employee_id: uuid.UUID) -> None:
        """Delete an employee with their assignments."""
