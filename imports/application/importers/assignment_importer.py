"""
Assignment CSV importer.

Resolves licenses by name and employees by email, checks every pair and the
capacity of each license, then assigns in one pass.
"""
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from django.utils import timezone

from assignments.domain.assignment import IMPORT_REASON
from core.domain.exceptions import AssignmentException
from employees.domain.employee import Employee
from imports.application.importers.base import Importer
from imports.domain.parsing import (
    ImportResult,
    ImportType,
    RowError,
    clean,
    parse_date,
    require_field,
    row_number,
)
from licenses.domain.license import License
from licenses.domain.services import LicenseCapacity


@dataclass
class AssignmentRow:
    row: int
    license_name: Optional[str]
    employee_email: Optional[str]
    assigned_date: Optional[date]
    reason: Optional[str]
    license: Optional[License] = None
    employee: Optional[Employee] = None


class AssignmentImporter(Importer):
    """Importer for the ``assignments`` CSV."""

    import_type = ImportType.ASSIGNMENTS

    def _parse(self, raw: Dict[str, str], row: int, errors: List[RowError]) -> AssignmentRow:
        return AssignmentRow(
            row=row,
            license_name=require_field(raw.get("licenseName"), row, "licenseName", errors),
            employee_email=require_field(raw.get("employeeEmail"), row, "employeeEmail", errors),
            assigned_date=parse_date(raw.get("assignedDate"), row, "assignedDate", errors),
            reason=clean(raw.get("reason")),
        )

    def validate(self, rows, errors) -> Optional[List[AssignmentRow]]:
        parsed = [self._parse(raw, row_number(i), errors) for i, raw in enumerate(rows)]
        if errors:
            return None

        licenses = self.context.license_repository.find_by_names(
            {row.license_name for row in parsed}
        )
        employees = self.context.employee_repository.find_by_emails(
            {row.employee_email for row in parsed}
        )
        for row in parsed:
            row.license = licenses.get(row.license_name)
            row.employee = employees.get(row.employee_email.lower())
            if row.license is None:
                errors.append(
                    RowError(row.row, "licenseName", f'License "{row.license_name}" not found.')
                )
            if row.employee is None:
                errors.append(
                    RowError(row.row, "employeeEmail",
                             f'No employee with email "{row.employee_email}".')
                )

        resolved = [row for row in parsed if row.license and row.employee]
        active = self.context.assignment_repository.active_pairs(
            {row.license.id for row in resolved}, {row.employee.id for row in resolved}
        )
        seen: Dict[tuple, int] = {}
        candidates = []
        for row in resolved:
            pair = (row.license.id, row.employee.id)
            if pair in active:
                errors.append(
                    RowError(row.row, "employeeEmail",
                             f'"{row.license_name}" is already assigned to {row.employee.name}.')
                )
            elif pair in seen:
                errors.append(
                    RowError(row.row, "employeeEmail",
                             f"Duplicate assignment in CSV (first on row {seen[pair]}).")
                )
            else:
                seen[pair] = row.row
                candidates.append(row)

        self._check_capacity(candidates, errors)
        return parsed

    def _check_capacity(self, rows: List[AssignmentRow], errors: List[RowError]) -> None:
        by_license: Dict[object, List[AssignmentRow]] = defaultdict(list)
        for row in rows:
            by_license[row.license.id].append(row)
        if not by_license:
            return

        active = self.context.license_repository.active_assignment_counts(list(by_license))
        for license_rows in by_license.values():
            license = license_rows[0].license
            seats = ()
            if license.is_key_based:
                seats = self.context.seat_repository.list_for_license(license.id)
            free = LicenseCapacity.free_slots(license, active.get(license.id, 0), seats)
            for position, row in enumerate(license_rows[free:], start=free + 1):
                errors.append(
                    RowError(row.row, "licenseName",
                             f'"{license.name}" has {free} free unit(s); this is request '
                             f"{position} of {len(license_rows)}.")
                )

    def write(self, plan: List[AssignmentRow]) -> ImportResult:
        allocator = self.context.allocator
        today = timezone.localdate()
        created = 0

        for row in plan:
            assignment, skipped = allocator.try_assign(
                row.license,
                row.employee.id,
                row.reason or IMPORT_REASON,
                actor=self.context.actor,
                assigned_date=row.assigned_date or today,
            )
            if assignment is None:
                raise AssignmentException(
                    f'Row {row.row}: "{row.license_name}" could not be assigned ({skipped}).'
                )
            created += 1

        return ImportResult(success=True, created=created)
