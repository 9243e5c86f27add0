"""
Assignment repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set, Tuple

from assignments.domain.assignment import Assignment, AssignmentHistoryEntry


class AssignmentRepository(ABC):
    """
    Abstract repository for assignments and their history.

    Methods are synchronous and join the caller's transaction.
    """

    @abstractmethod
    def save(self, assignment: Assignment) -> Assignment:
        """Insert or update an assignment."""

    @abstractmethod
    def find_by_id(self, assignment_id: uuid.UUID) -> Optional[Assignment]:
        """Find an assignment by ID."""

    @abstractmethod
    def find_by_ids(self, assignment_ids: Iterable[uuid.UUID]) -> List[Assignment]:
        """Assignments with the given ids, in no particular order."""

    @abstractmethod
    def find_active(self, license_id: uuid.UUID, employee_id: uuid.UUID) -> Optional[Assignment]:
        """The active assignment of a license to an employee, if any."""

    @abstractmethod
    def active_pairs(
        self, license_ids: Iterable[uuid.UUID], employee_ids: Iterable[uuid.UUID]
    ) -> Set[Tuple[uuid.UUID, uuid.UUID]]:
        """``(license_id, employee_id)`` pairs with an active assignment."""

    @abstractmethod
    def list(
        self,
        license_id: Optional[uuid.UUID] = None,
        employee_id: Optional[uuid.UUID] = None,
        active_only: bool = False,
    ) -> List[Assignment]:
        """
        Assignments matching the filters, newest first.

        Returned entities carry license, employee and seat display attributes.
        """

    @abstractmethod
    def delete(self, assignment_id: uuid.UUID) -> None:
        """Hard delete an assignment. History rows are kept."""

    @abstractmethod
    def record_history(self, entry: AssignmentHistoryEntry) -> AssignmentHistoryEntry:
        """Append a history entry."""

    @abstractmethod
    def history_for_employee(self, employee_id: uuid.UUID) -> List[AssignmentHistoryEntry]:
        """History of an employee, newest first, with license names."""
