"""
Assignment handlers.

Handlers for assigning licenses to employees, returning and deleting
assignments and listing them.
"""
import logging
from typing import List

from assignments.application.commands.assignment_commands import (
    AssignLicensesCommand,
    DeleteAssignmentCommand,
    ListAssignmentsQuery,
    ReturnAssignmentCommand,
    UnassignLicensesCommand,
)
from assignments.application.dto.assignment_dto import AssignmentResultDTO
from assignments.application.services.license_allocator import LicenseAllocator
from assignments.domain.assignment import Assignment
from assignments.domain.events import AssignmentDeleted, LicensesAssigned, LicensesReturned
from assignments.ports.assignment_repository import AssignmentRepository
from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import (
    AssignmentNotFoundError,
    EmployeeNotFoundError,
    NothingAssignedError,
    NothingReturnedError,
    ValidationError,
)
from core.infrastructure.database import run_in_transaction, run_sync
from core.infrastructure.events import event_bus
from employees.ports.employee_repository import EmployeeRepository
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.seat_repository import SeatRepository

logger = logging.getLogger(__name__)


class AssignLicensesHandler:
    """Handler for AssignLicensesCommand."""

    def __init__(
        self,
        employee_repository: EmployeeRepository,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        assignment_repository: AssignmentRepository,
        audit_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.employee_repository = employee_repository
        self.license_repository = license_repository
        self.allocator = LicenseAllocator(
            license_repository, seat_repository, assignment_repository, audit_repository
        )

    async def handle(self, command: AssignLicensesCommand) -> AssignmentResultDTO:
        """
        Handle assign licenses command.

        Missing, already assigned and full licenses are skipped.

        Returns:
            AssignmentResultDTO

        Raises:
            ValidationError: If no license was selected
            EmployeeNotFoundError: If employee not found
            NothingAssignedError: If every license was skipped
        """
        if not command.license_ids:
            raise ValidationError("Select at least one license to assign", field="license_ids")

        assigned, skipped = await run_in_transaction(self._assign, command)

        await event_bus.publish(
            LicensesAssigned(employee_id=command.employee_id, count=assigned)
        )
        message = f"{assigned} license(s) assigned"
        if skipped:
            message += f" ({len(skipped)} skipped: {', '.join(skipped)})"
        return AssignmentResultDTO(success=True, message=message, count=assigned, skipped=skipped)

    def _assign(self, command: AssignLicensesCommand):
        if not self.employee_repository.find_by_id(command.employee_id):
            raise EmployeeNotFoundError(f"Employee {command.employee_id} not found")

        licenses = self.license_repository.find_by_ids(command.license_ids)
        assigned = 0
        skipped: List[str] = []
        for license_id in dict.fromkeys(command.license_ids):
            license = licenses.get(license_id)
            if license is None:
                skipped.append(f"ID {license_id}: not found")
                continue
            assignment, reason = self.allocator.try_assign(
                license, command.employee_id, command.reason, actor=command.actor
            )
            if assignment is None:
                skipped.append(f"{license.name}: {reason}")
                continue
            assigned += 1

        if assigned == 0 and skipped:
            raise NothingAssignedError(skipped)
        return assigned, skipped


class UnassignLicensesHandler:
    """Handler for UnassignLicensesCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        assignment_repository: AssignmentRepository,
        audit_repository: AuditLogRepository,
    ):
        self.assignment_repository = assignment_repository
        self.allocator = LicenseAllocator(
            license_repository, seat_repository, assignment_repository, audit_repository
        )

    async def handle(self, command: UnassignLicensesCommand) -> AssignmentResultDTO:
        """
        Handle unassign licenses command.

        Assignments of other employees and returned ones are ignored.

        Raises:
            ValidationError: If no assignment was selected
            NothingReturnedError: If none could be returned
        """
        if not command.assignment_ids:
            raise ValidationError(
                "Select at least one assignment to return", field="assignment_ids"
            )

        returned = await run_in_transaction(self._unassign, command)

        await event_bus.publish(LicensesReturned(employee_id=command.employee_id, count=returned))
        return AssignmentResultDTO(
            success=True, message=f"{returned} assignment(s) returned", count=returned
        )

    def _unassign(self, command: UnassignLicensesCommand) -> int:
        returned = 0
        for assignment in self.assignment_repository.find_by_ids(command.assignment_ids):
            if assignment.employee_id != command.employee_id or not assignment.is_active:
                continue
            self.allocator.release(assignment, actor=command.actor)
            returned += 1
        if returned == 0:
            raise NothingReturnedError()
        return returned


class ReturnAssignmentHandler:
    """Handler for ReturnAssignmentCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        assignment_repository: AssignmentRepository,
        audit_repository: AuditLogRepository,
    ):
        self.assignment_repository = assignment_repository
        self.allocator = LicenseAllocator(
            license_repository, seat_repository, assignment_repository, audit_repository
        )

    async def handle(self, command: ReturnAssignmentCommand) -> Assignment:
        """
        Handle return assignment command.

        Raises:
            AssignmentNotFoundError: If assignment not found
            AssignmentAlreadyReturnedError: If it was returned before
        """
        returned = await run_in_transaction(self._return, command)
        await event_bus.publish(LicensesReturned(employee_id=returned.employee_id, count=1))
        return returned

    def _return(self, command: ReturnAssignmentCommand) -> Assignment:
        assignment = self.assignment_repository.find_by_id(command.assignment_id)
        if not assignment:
            raise AssignmentNotFoundError(f"Assignment {command.assignment_id} not found")
        return self.allocator.release(assignment, actor=command.actor)


class DeleteAssignmentHandler:
    """Handler for DeleteAssignmentCommand."""

    def __init__(
        self, assignment_repository: AssignmentRepository, audit_repository: AuditLogRepository
    ):
        self.assignment_repository = assignment_repository
        self.audit_repository = audit_repository

    async def handle(self, command: DeleteAssignmentCommand) -> None:
        """
        Handle delete assignment command.

        Raises:
            AssignmentNotFoundError: If assignment not found
        """
        assignment = await run_in_transaction(self._delete, command)
        await event_bus.publish(
            AssignmentDeleted(assignment_id=assignment.id, license_id=assignment.license_id)
        )

    def _delete(self, command: DeleteAssignmentCommand) -> Assignment:
        assignment = self.assignment_repository.find_by_id(command.assignment_id)
        if not assignment:
            raise AssignmentNotFoundError(f"Assignment {command.assignment_id} not found")
        self.audit_repository.record(
            AuditEntry.create(
                EntityType.ASSIGNMENT,
                assignment.id,
                AuditAction.DELETED,
                actor=command.actor,
                details={
                    "license_id": str(assignment.license_id),
                    "employee_id": str(assignment.employee_id),
                    "was_active": assignment.is_active,
                },
            )
        )
        self.assignment_repository.delete(assignment.id)
        return assignment


class ListAssignmentsHandler:
    """Handler for ListAssignmentsQuery."""

    def __init__(self, assignment_repository: AssignmentRepository):
        self.assignment_repository = assignment_repository

    async def handle(self, query: ListAssignmentsQuery) -> List[Assignment]:
        return await run_sync(
            self.assignment_repository.list,
            license_id=query.license_id,
            employee_id=query.employee_id,
            active_only=query.active_only,
        )
