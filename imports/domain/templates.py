"""
CSV import templates.

Headers and sample rows offered for download, plus the headers each import
type requires.
"""
from dataclasses import dataclass
from typing import List, Tuple

from imports.domain.parsing import ImportType

BOM = "\ufeff"


@dataclass(frozen=True)
class Template:
    """Template of one import type."""

    label: str
    headers: Tuple[str, ...]
    required: Tuple[str, ...]
    sample_rows: Tuple[Tuple[str, ...], ...]

    def missing_headers(self, actual: List[str]) -> List[str]:
        return [header for header in self.required if header not in actual]


TEMPLATES = {
    ImportType.LICENSES: Template(
        label="Licenses",
        headers=(
            "name",
            "totalQuantity",
            "purchaseDate",
            "key",
            "licenseType",
            "price",
            "expiryDate",
            "contractDate",
            "noticePeriodDays",
            "adminName",
            "description",
        ),
        required=("name", "totalQuantity", "purchaseDate"),
        sample_rows=(
            ("Microsoft 365 Business", "50", "2024-01-15", "XXXXX-XXXXX-XXXXX", "VOLUME",
             "150000", "2025-01-15", "", "30", "Jane Admin", "Annual subscription"),
            ("Adobe Acrobat Pro", "1", "2024-03-01", "", "KEY_BASED",
             "250000", "2025-03-01", "", "", "", "Individual license"),
            ("GitHub Teams", "30", "2024-06-01", "", "NO_KEY",
             "500000", "2025-06-01", "", "90", "John Owner", "Account based service"),
        ),
    ),
    ImportType.EMPLOYEES: Template(
        label="Employees",
        headers=("name", "department", "email", "title", "groupName"),
        required=("name", "department"),
        sample_rows=(
            ("Gildong Hong", "Engineering", "hong@example.com", "Senior Engineer", "Default"),
            ("Chulsoo Kim", "Marketing", "kim@example.com", "", ""),
        ),
    ),
    ImportType.GROUPS: Template(
        label="Groups",
        headers=("name", "description", "isDefault", "licenseNames"),
        required=("name",),
        sample_rows=(
            ("Default", "Assigned to every new hire", "true", "Microsoft 365 Business;Slack"),
            ("Design", "Design team licenses", "false", "Adobe Creative Cloud"),
        ),
    ),
    ImportType.ASSIGNMENTS: Template(
        label="Assignments",
        headers=("licenseName", "employeeEmail", "assignedDate", "reason"),
        required=("licenseName", "employeeEmail"),
        sample_rows=(
            ("Microsoft 365 Business", "hong@example.com", "2024-06-01", "Onboarding"),
            ("Slack", "kim@example.com", "", ""),
        ),
    ),
    ImportType.SEATS: Template(
        label="Seats (keys)",
        headers=("licenseName", "key"),
        required=("licenseName", "key"),
        sample_rows=(
            ("Adobe Acrobat Pro", "ABCDE-12345-FGHIJ"),
            ("Adobe Acrobat Pro", "KLMNO-67890-PQRST"),
        ),
    ),
}


def _cell(value: str) -> str:
    if "," in value or ";" in value:
        return f'"{value}"'
    return value


def template_csv(import_type: ImportType) -> str:
    """Template file content, prefixed with a BOM so spreadsheet tools detect UTF-8."""
    template = TEMPLATES[import_type]
    lines = [",".join(template.headers)]
    lines.extend(",".join(_cell(value) for value in row) for row in template.sample_rows)
    return BOM + "\n".join(lines)
