"""
Importer base class.

An importer validates every row first and writes only when no row failed.
``run`` executes inside one transaction opened by the caller, so a domain
error raised while writing rolls the whole file back.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from assignments.application.services.license_allocator import LicenseAllocator
from assignments.ports.assignment_repository import AssignmentRepository
from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType
from audit.ports.audit_log_repository import AuditLogRepository
from employees.ports.employee_repository import EmployeeRepository
from groups.ports.group_repository import GroupRepository
from imports.domain.parsing import ImportResult, ImportType, RowError
from licenses.application.services.seat_inventory import SeatInventory
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.seat_repository import SeatRepository

logger = logging.getLogger(__name__)

_AUDIT_ENTITY = {
    ImportType.LICENSES: EntityType.LICENSE,
    ImportType.EMPLOYEES: EntityType.EMPLOYEE,
    ImportType.GROUPS: EntityType.GROUP,
    ImportType.ASSIGNMENTS: EntityType.ASSIGNMENT,
    ImportType.SEATS: EntityType.SEAT,
}


@dataclass
class ImportContext:
    """Repositories and actor shared by the importers."""

    license_repository: LicenseRepository
    seat_repository: SeatRepository
    employee_repository: EmployeeRepository
    group_repository: GroupRepository
    assignment_repository: AssignmentRepository
    audit_repository: AuditLogRepository
    actor: Optional[str] = None

    @property
    def seat_inventory(self) -> SeatInventory:
        return SeatInventory(self.license_repository, self.seat_repository)

    @property
    def allocator(self) -> LicenseAllocator:
        return LicenseAllocator(
            self.license_repository,
            self.seat_repository,
            self.assignment_repository,
            self.audit_repository,
        )


class Importer(ABC):
    """Two phase CSV importer."""

    import_type: ImportType

    def __init__(self, context: ImportContext):
        self.context = context

    @abstractmethod
    def validate(self, rows: List[Dict[str, str]], errors: List[RowError]) -> Any:
        """
        Parse and check every row, appending to ``errors``.

        Returns:
            The write plan; ignored when errors were recorded
        """

    @abstractmethod
    def write(self, plan: Any) -> ImportResult:
        """Apply a validated plan."""

    def run(self, rows: List[Dict[str, str]]) -> ImportResult:
        errors: List[RowError] = []
        plan = self.validate(rows, errors)
        if errors:
            logger.info(
                "%s import rejected with %d error(s)",
                self.import_type.value,
                len(errors),
                extra={"import_type": self.import_type.value, "error_count": len(errors)},
            )
            return ImportResult.invalid(errors)

        result = self.write(plan)
        self.context.audit_repository.record(
            AuditEntry.create(
                _AUDIT_ENTITY[self.import_type],
                f"import:{self.import_type.value}",
                AuditAction.IMPORTED,
                actor=self.context.actor,
                details={
                    "summary": f"CSV import of {self.import_type.value}",
                    "rows": len(rows),
                    "created": result.created,
                    "updated": result.updated,
                },
            )
        )
        return result
