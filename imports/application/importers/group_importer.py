"""
Group CSV importer.

Upserts groups by name. A non-empty ``licenseNames`` cell replaces the
members of the group.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from groups.domain.group import LicenseGroup
from imports.application.importers.base import Importer
from imports.domain.parsing import (
    ImportResult,
    ImportType,
    RowError,
    clean,
    parse_boolean,
    require_field,
    row_number,
)
from licenses.domain.license import License

LICENSE_NAME_SEPARATOR = ";"


@dataclass
class GroupRow:
    row: int
    name: Optional[str]
    description: Optional[str]
    is_default: Optional[bool]
    license_names: List[str] = field(default_factory=list)


@dataclass
class GroupPlan:
    rows: List[GroupRow]
    licenses: Dict[str, License]


class GroupImporter(Importer):
    """Importer for the ``groups`` CSV."""

    import_type = ImportType.GROUPS

    def _parse(self, raw: Dict[str, str], row: int, errors: List[RowError]) -> GroupRow:
        names = clean(raw.get("licenseNames")) or ""
        return GroupRow(
            row=row,
            name=require_field(raw.get("name"), row, "name", errors),
            description=clean(raw.get("description")),
            is_default=parse_boolean(raw.get("isDefault"), row, "isDefault", errors),
            license_names=[
                name.strip() for name in names.split(LICENSE_NAME_SEPARATOR) if name.strip()
            ],
        )

    def validate(self, rows, errors) -> Optional[GroupPlan]:
        parsed = [self._parse(raw, row_number(i), errors) for i, raw in enumerate(rows)]
        if errors:
            return None

        wanted = {name for row in parsed for name in row.license_names}
        licenses = self.context.license_repository.find_by_names(wanted) if wanted else {}
        for row in parsed:
            missing = [name for name in row.license_names if name not in licenses]
            if missing:
                errors.append(
                    RowError(row.row, "licenseNames",
                             f"Unknown license(s): {', '.join(missing)}")
                )
        return GroupPlan(rows=parsed, licenses=licenses)

    def write(self, plan: GroupPlan) -> ImportResult:
        repo = self.context.group_repository
        created = updated = 0

        for row in plan.rows:
            license_ids = [plan.licenses[name].id for name in row.license_names]
            current = repo.find_by_name(row.name)
            if current:
                changes = {
                    "description": row.description,
                    "is_default": bool(row.is_default),
                }
                if license_ids:
                    changes["license_ids"] = tuple(license_ids)
                group = current.with_changes(**changes)
                updated += 1
            else:
                group = LicenseGroup.create(
                    name=row.name,
                    description=row.description,
                    is_default=bool(row.is_default),
                    license_ids=license_ids,
                )
                created += 1
            repo.save(group)

        return ImportResult(success=True, created=created, updated=updated)
