"""
Employee CSV importer.

Upserts employees by email and assigns the licenses of the named group.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional

from core.domain.exceptions import ValidationError
from employees.domain.employee import Employee, normalize_email
from groups.domain.group import LicenseGroup
from imports.application.importers.base import Importer
from imports.domain.parsing import (
    ImportResult,
    ImportType,
    RowError,
    clean,
    require_field,
    row_number,
)


@dataclass
class EmployeeRow:
    row: int
    name: Optional[str]
    department: Optional[str]
    email: Optional[str]
    title: Optional[str]
    group_name: Optional[str]


@dataclass
class EmployeePlan:
    rows: List[EmployeeRow]
    groups: Dict[str, LicenseGroup]


class EmployeeImporter(Importer):
    """Importer for the ``employees`` CSV."""

    import_type = ImportType.EMPLOYEES

    def _parse(self, raw: Dict[str, str], row: int, errors: List[RowError]) -> EmployeeRow:
        email = None
        try:
            email = normalize_email(raw.get("email"))
        except ValidationError as exc:
            errors.append(RowError(row, "email", exc.message))
        return EmployeeRow(
            row=row,
            name=require_field(raw.get("name"), row, "name", errors),
            department=require_field(raw.get("department"), row, "department", errors),
            email=email,
            title=clean(raw.get("title")),
            group_name=clean(raw.get("groupName")),
        )

    def validate(self, rows, errors) -> Optional[EmployeePlan]:
        parsed = [self._parse(raw, row_number(i), errors) for i, raw in enumerate(rows)]
        if errors:
            return None

        names = {row.group_name for row in parsed if row.group_name}
        groups = self.context.group_repository.find_by_names(names) if names else {}
        for row in parsed:
            if row.group_name and row.group_name not in groups:
                errors.append(
                    RowError(row.row, "groupName", f'Group "{row.group_name}" does not exist.')
                )
        return EmployeePlan(rows=parsed, groups=groups)

    def write(self, plan: EmployeePlan) -> ImportResult:
        repo = self.context.employee_repository
        allocator = self.context.allocator
        created = updated = 0

        for row in plan.rows:
            current = repo.find_by_email(row.email) if row.email else None
            if current:
                employee = current.with_changes(
                    name=row.name,
                    department=row.department,
                    email=row.email,
                    title=row.title or current.title,
                )
                updated += 1
            else:
                employee = Employee.create(
                    name=row.name, department=row.department, email=row.email, title=row.title
                )
                created += 1
            saved = repo.save(employee)

            if row.group_name:
                allocator.assign_from_groups(
                    [plan.groups[row.group_name]],
                    saved.id,
                    actor=self.context.actor,
                    via_import=True,
                )

        return ImportResult(success=True, created=created, updated=updated)
