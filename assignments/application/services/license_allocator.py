"""
License allocator.

Applies the capacity rule when binding licenses to employees. Used by manual
assignment, group auto-assignment and CSV imports. All methods are
synchronous and run inside the caller's transaction.
"""
import logging
import uuid
from datetime import date
from typing import Iterable, Optional, Tuple

from django.utils import timezone

from assignments.domain.assignment import (
    MANUAL_RETURN_REASON,
    Assignment,
    AssignmentHistoryEntry,
    HistoryAction,
    group_reason,
)
from assignments.ports.assignment_repository import AssignmentRepository
from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType
from audit.ports.audit_log_repository import AuditLogRepository
from groups.domain.group import LicenseGroup
from licenses.domain.license import License
from licenses.domain.services import pick_free_seat
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.seat_repository import SeatRepository

logger = logging.getLogger(__name__)

SKIP_ALREADY_ASSIGNED = "already assigned"
SKIP_NO_CAPACITY = "no remaining quantity"


class LicenseAllocator:
    """Application service creating and returning assignments."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        assignment_repository: AssignmentRepository,
        audit_repository: AuditLogRepository,
    ):
        self.license_repository = license_repository
        self.seat_repository = seat_repository
        self.assignment_repository = assignment_repository
        self.audit_repository = audit_repository

    def find_capacity(self, license: License) -> Tuple[bool, Optional[int]]:
        """
        Check whether the license can take one more assignment.

        Returns:
            ``(has_capacity, seat_id)``; the seat is set for key-based licenses
        """
        if license.is_key_based:
            seat = pick_free_seat(self.seat_repository.list_for_license(license.id))
            if seat is None:
                return False, None
            return True, seat.id
        active = self.license_repository.count_active_assignments(license.id)
        return active < license.total_quantity, None

    def try_assign(
        self,
        license: License,
        employee_id: uuid.UUID,
        reason: str,
        actor: Optional[str] = None,
        assigned_date: Optional[date] = None,
    ) -> Tuple[Optional[Assignment], Optional[str]]:
        """
        Assign a license unless it is already assigned or full.

        Returns:
            ``(assignment, None)`` on success, ``(None, skip_reason)`` otherwise
        """
        if self.assignment_repository.find_active(license.id, employee_id):
            return None, SKIP_ALREADY_ASSIGNED
        has_capacity, seat_id = self.find_capacity(license)
        if not has_capacity:
            return None, SKIP_NO_CAPACITY

        assignment = self.assignment_repository.save(
            Assignment.create(
                license_id=license.id,
                employee_id=employee_id,
                seat_id=seat_id,
                reason=reason,
                assigned_date=assigned_date,
            )
        )
        self.assignment_repository.record_history(
            AssignmentHistoryEntry.for_assignment(assignment, HistoryAction.ASSIGNED)
        )
        self.audit_repository.record(
            AuditEntry.create(
                EntityType.ASSIGNMENT,
                assignment.id,
                AuditAction.ASSIGNED,
                actor=actor,
                details={
                    "license_id": str(license.id),
                    "license_name": license.name,
                    "employee_id": str(employee_id),
                    "seat_id": seat_id,
                    "reason": reason,
                },
            )
        )
        logger.debug(
            "Assigned license %s to employee %s",
            license.id,
            employee_id,
            extra={"license_id": str(license.id), "employee_id": str(employee_id)},
        )
        return assignment, None

    def assign_from_groups(
        self,
        groups: Iterable[LicenseGroup],
        employee_id: uuid.UUID,
        actor: Optional[str] = None,
        via_import: bool = False,
    ) -> int:
        """
        Assign every license of ``groups`` to an employee.

        Licenses that are full or already assigned are skipped silently.

        Returns:
            Number of assignments created
        """
        groups = list(groups)
        license_ids = [license_id for group in groups for license_id in group.license_ids]
        licenses = self.license_repository.find_by_ids(license_ids)
        assigned = 0
        for group in groups:
            for license_id in group.license_ids:
                license = licenses.get(license_id)
                if license is None:
                    continue
                reason = group_reason(group.name, license.license_type.label, via_import)
                assignment, _ = self.try_assign(license, employee_id, reason, actor=actor)
                if assignment is not None:
                    assigned += 1
        return assigned

    def release(
        self,
        assignment: Assignment,
        actor: Optional[str] = None,
        reason: str = MANUAL_RETURN_REASON,
    ) -> Assignment:
        """
        Return an active assignment, keeping the row.

        Raises:
            AssignmentAlreadyReturnedError: If it was returned before
        """
        returned = self.assignment_repository.save(
            assignment.returned(timezone.localdate())
        )
        self.assignment_repository.record_history(
            AssignmentHistoryEntry.for_assignment(returned, HistoryAction.RETURNED, reason)
        )
        self.audit_repository.record(
            AuditEntry.create(
                EntityType.ASSIGNMENT,
                returned.id,
                AuditAction.UNASSIGNED,
                actor=actor,
                details={
                    "license_id": str(returned.license_id),
                    "employee_id": str(returned.employee_id),
                    "seat_id": returned.seat_id,
                    "reason": reason,
                },
            )
        )
        return returned
