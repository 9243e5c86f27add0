"""
Employee handlers.
"""
import logging
from typing import List

from assignments.application.services.license_allocator import LicenseAllocator
from assignments.domain.events import LicensesAssigned
from assignments.ports.assignment_repository import AssignmentRepository
from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType, diff_fields
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import DuplicateEmailError, EmployeeNotFoundError
from core.infrastructure.database import run_in_transaction, run_sync
from core.infrastructure.events import event_bus
from employees.application.commands.employee_commands import (
    CreateEmployeeCommand,
    DeleteEmployeeCommand,
    GetEmployeeQuery,
    ListEmployeesQuery,
    UpdateEmployeeCommand,
)
from employees.application.dto.employee_dto import CreatedEmployeeDTO, EmployeeDetailDTO
from employees.domain.employee import Employee, normalize_email
from employees.domain.events import EmployeeCreated, EmployeeDeleted, EmployeeUpdated
from employees.ports.employee_repository import EmployeeRepository
from groups.ports.group_repository import GroupRepository
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.seat_repository import SeatRepository

logger = logging.getLogger(__name__)

AUDITED_FIELDS = ("name", "department", "email", "title")


def _ensure_email_free(repository: EmployeeRepository, email, employee_id=None) -> None:
    if not email:
        return
    holder = repository.find_by_email(email)
    if holder and holder.id != employee_id:
        raise DuplicateEmailError(email)


class CreateEmployeeHandler:
    """Handler for CreateEmployeeCommand."""

    def __init__(
        self,
        employee_repository: EmployeeRepository,
        group_repository: GroupRepository,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        assignment_repository: AssignmentRepository,
        audit_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.employee_repository = employee_repository
        self.group_repository = group_repository
        self.audit_repository = audit_repository
        self.allocator = LicenseAllocator(
            license_repository, seat_repository, assignment_repository, audit_repository
        )

    async def handle(self, command: CreateEmployeeCommand) -> CreatedEmployeeDTO:
        """
        Handle create employee command.

        Licenses of default groups are assigned in the same transaction.

        Returns:
            CreatedEmployeeDTO

        Raises:
            ValidationError: If name or department is missing
            DuplicateEmailError: If the email is held by another employee
        """
        result = await run_in_transaction(self._create, command)

        await event_bus.publish(
            EmployeeCreated(employee_id=result.employee.id, auto_assigned=result.auto_assigned)
        )
        if result.auto_assigned:
            await event_bus.publish(
                LicensesAssigned(
                    employee_id=result.employee.id, count=result.auto_assigned, source="group"
                )
            )
        return result

    def _create(self, command: CreateEmployeeCommand) -> CreatedEmployeeDTO:
        employee = Employee.create(
            name=command.name,
            department=command.department,
            email=command.email,
            title=command.title,
        )
        _ensure_email_free(self.employee_repository, employee.email)
        saved = self.employee_repository.save(employee)

        auto_assigned = self.allocator.assign_from_groups(
            self.group_repository.list_default(), saved.id, actor=command.actor
        )
        self.audit_repository.record(
            AuditEntry.create(
                EntityType.EMPLOYEE,
                saved.id,
                AuditAction.CREATED,
                actor=command.actor,
                details={
                    "summary": f"{saved.name} created",
                    "name": saved.name,
                    "department": saved.department,
                    "auto_assigned": auto_assigned,
                },
            )
        )
        logger.info(
            "Employee created: %s",
            saved.name,
            extra={"employee_id": str(saved.id), "auto_assigned": auto_assigned},
        )
        return CreatedEmployeeDTO(employee=saved, auto_assigned=auto_assigned)


class UpdateEmployeeHandler:
    """Handler for UpdateEmployeeCommand."""

    def __init__(self, employee_repository: EmployeeRepository, audit_repository: AuditLogRepository):
        self.employee_repository = employee_repository
        self.audit_repository = audit_repository

    async def handle(self, command: UpdateEmployeeCommand) -> Employee:
        """
        Handle update employee command.

        Raises:
            EmployeeNotFoundError: If employee not found
            DuplicateEmailError: If the email is held by another employee
        """
        employee, changes = await run_in_transaction(self._update, command)
        if changes:
            await event_bus.publish(
                EmployeeUpdated(employee_id=employee.id, changed_fields=tuple(changes))
            )
        return employee

    def _update(self, command: UpdateEmployeeCommand):
        current = self.employee_repository.find_by_id(command.employee_id)
        if not current:
            raise EmployeeNotFoundError(f"Employee {command.employee_id} not found")

        _ensure_email_free(self.employee_repository, normalize_email(command.email), current.id)
        updated = current.with_changes(
            name=(command.name or "").strip(),
            department=(command.department or "").strip(),
            email=command.email,
            title=(command.title or "").strip() or None,
        )
        saved = self.employee_repository.save(updated)

        changes = diff_fields(current, saved, AUDITED_FIELDS)
        if changes:
            self.audit_repository.record(
                AuditEntry.create(
                    EntityType.EMPLOYEE,
                    saved.id,
                    AuditAction.UPDATED,
                    actor=command.actor,
                    details={"summary": f"{saved.name} updated", "changes": changes},
                )
            )
        return saved, changes


class DeleteEmployeeHandler:
    """Handler for DeleteEmployeeCommand."""

    def __init__(self, employee_repository: EmployeeRepository, audit_repository: AuditLogRepository):
        self.employee_repository = employee_repository
        self.audit_repository = audit_repository

    async def handle(self, command: DeleteEmployeeCommand) -> None:
        """
        Handle delete employee command.

        Raises:
            EmployeeNotFoundError: If employee not found
        """
        employee = await run_in_transaction(self._delete, command)
        await event_bus.publish(EmployeeDeleted(employee_id=employee.id, name=employee.name))

    def _delete(self, command: DeleteEmployeeCommand) -> Employee:
        employee = self.employee_repository.find_by_id(command.employee_id)
        if not employee:
            raise EmployeeNotFoundError(f"Employee {command.employee_id} not found")
        self.audit_repository.record(
            AuditEntry.create(
                EntityType.EMPLOYEE,
                employee.id,
                AuditAction.DELETED,
                actor=command.actor,
                details={"summary": f"{employee.name} deleted", "name": employee.name},
            )
        )
        self.employee_repository.delete(employee.id)
        return employee


class GetEmployeeHandler:
    """Handler for GetEmployeeQuery."""

    def __init__(
        self, employee_repository: EmployeeRepository, assignment_repository: AssignmentRepository
    ):
        self.employee_repository = employee_repository
        self.assignment_repository = assignment_repository

    async def handle(self, query: GetEmployeeQuery) -> EmployeeDetailDTO:
        """
        Handle get employee query.

        Raises:
            EmployeeNotFoundError: If employee not found
        """
        return await run_sync(self._load, query)

    def _load(self, query: GetEmployeeQuery) -> EmployeeDetailDTO:
        employee = self.employee_repository.find_by_id(query.employee_id)
        if not employee:
            raise EmployeeNotFoundError(f"Employee {query.employee_id} not found")
        return EmployeeDetailDTO(
            employee=employee,
            assignments=self.assignment_repository.list(employee_id=employee.id, active_only=True),
            history=self.assignment_repository.history_for_employee(employee.id),
        )


class ListEmployeesHandler:
    """Handler for ListEmployeesQuery."""

    def __init__(self, employee_repository: EmployeeRepository):
        self.employee_repository = employee_repository

    async def handle(self, query: ListEmployeesQuery) -> List[Employee]:
        return await run_sync(self.employee_repository.list_all)
