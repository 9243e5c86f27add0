"""
CSV row parsing.

Every parser appends a RowError to ``errors`` instead of raising, so that a
whole file can be validated in one pass.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, List, Optional

from core.domain.value_objects import LicenseType

REQUIRED_MESSAGE = "This field is required."

TRUE_VALUES = {"true", "1", "yes", "y"}
FALSE_VALUES = {"false", "0", "no", "n"}


class ImportType(Enum):
    """Kinds of CSV imports."""

    LICENSES = "licenses"
    EMPLOYEES = "employees"
    GROUPS = "groups"
    ASSIGNMENTS = "assignments"
    SEATS = "seats"


@dataclass(frozen=True)
class RowError:
    """
    Validation error of one CSV cell.

    ``row`` is 1-based and counts the header line, so data row ``i``
    (0-based) is row ``i + 2``.
    """

    row: int
    column: str
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"row": self.row, "column": self.column, "message": self.message}


@dataclass
class ImportResult:
    """Outcome of an import."""

    success: bool
    created: int = 0
    updated: int = 0
    errors: List[RowError] = field(default_factory=list)
    message: Optional[str] = None

    @classmethod
    def rejected(cls, message: str) -> "ImportResult":
        return cls(success=False, message=message)

    @classmethod
    def invalid(cls, errors: List[RowError]) -> "ImportResult":
        return cls(
            success=False,
            errors=sorted(errors, key=lambda error: error.row),
            message=f"{len(errors)} validation error(s); nothing was imported.",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "created": self.created,
            "updated": self.updated,
            "errors": [error.to_dict() for error in self.errors],
            "message": self.message,
        }


def row_number(index: int) -> int:
    """Row number of the 0-based data row ``index`` as shown in a spreadsheet."""
    return index + 2


def clean(value: Optional[str]) -> Optional[str]:
    """Trimmed cell value, None when blank."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_field(value: Optional[str], row: int, column: str,
                  errors: List[RowError]) -> Optional[str]:
    """Trimmed value, or None with an error when blank."""
    value = clean(value)
    if value is None:
        errors.append(RowError(row, column, REQUIRED_MESSAGE))
    return value


def parse_date(value: Optional[str], row: int, column: str, errors: List[RowError],
               required: bool = False) -> Optional[date]:
    """Parse a ``YYYY-MM-DD`` date."""
    value = clean(value)
    if value is None:
        if required:
            errors.append(RowError(row, column, REQUIRED_MESSAGE))
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        errors.append(RowError(row, column, f'Invalid date: "{value}" (YYYY-MM-DD)'))
        return None


def parse_boolean(value: Optional[str], row: int, column: str,
                  errors: List[RowError]) -> Optional[bool]:
    """Parse true/false, 1/0, yes/no or y/n. Blank is None."""
    value = clean(value)
    if value is None:
        return None
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    errors.append(RowError(row, column, f'Invalid value: "{value}" (true/false, yes/no, 1/0)'))
    return None


def parse_number(value: Optional[str], row: int, column: str, errors: List[RowError],
                 required: bool = False) -> Optional[Decimal]:
    """Parse a decimal number."""
    value = clean(value)
    if value is None:
        if required:
            errors.append(RowError(row, column, REQUIRED_MESSAGE))
        return None
    try:
        number = Decimal(value.replace(",", ""))
    except InvalidOperation:
        number = None
    if number is None or not number.is_finite():
        errors.append(RowError(row, column, f'Not a number: "{value}"'))
        return None
    return number


def parse_integer(value: Optional[str], row: int, column: str, errors: List[RowError],
                  required: bool = False) -> Optional[int]:
    """Parse a whole number."""
    number = parse_number(value, row, column, errors, required)
    if number is None:
        return None
    if number != number.to_integral_value():
        errors.append(RowError(row, column, f'Not a whole number: "{clean(value)}"'))
        return None
    return int(number)


def parse_license_type(value: Optional[str], legacy_volume: Optional[str], row: int,
                       errors: List[RowError]) -> Optional[LicenseType]:
    """
    Parse the license type column.

    Files without ``licenseType`` may carry the older ``isVolumeLicense``
    flag: true is VOLUME, false is KEY_BASED. None when neither is given.
    """
    value = clean(value)
    if value is not None:
        try:
            return LicenseType(value.upper())
        except ValueError:
            allowed = "/".join(license_type.value for license_type in LicenseType)
            errors.append(RowError(row, "licenseType", f'Invalid license type: "{value}" ({allowed})'))
            return None
    is_volume = parse_boolean(legacy_volume, row, "isVolumeLicense", errors)
    if is_volume is None:
        return None
    return LicenseType.VOLUME if is_volume else LicenseType.KEY_BASED


def first_rows_by_key(rows, key_attr: str = "key") -> Dict[str, int]:
    """Map each key to the row it first appears on."""
    seen: Dict[str, int] = {}
    for row in rows:
        key = getattr(row, key_attr)
        if key and key not in seen:
            seen[key] = row.row
    return seen


def duplicate_key_errors(rows, key_attr: str = "key") -> List[RowError]:
    """Errors for keys repeated within the file, reported on the repeats."""
    errors = []
    seen: Dict[str, int] = {}
    for row in rows:
        key = getattr(row, key_attr)
        if not key:
            continue
        if key in seen:
            errors.append(
                RowError(row.row, "key", f'Duplicate key in CSV: "{key}" (first on row {seen[key]})')
            )
        else:
            seen[key] = row.row
    return errors
