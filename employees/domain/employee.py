"""
Employee domain entity.
"""
import dataclasses
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import Email


def normalize_email(value: Optional[str]) -> Optional[str]:
    """
    Trim an email address, returning None when blank.

    Raises:
        ValidationError: If the address is malformed
    """
    value = (value or "").strip()
    if not value:
        return None
    try:
        return str(Email(value))
    except ValueError as exc:
        raise ValidationError(str(exc), field="email") from exc


@dataclass(frozen=True)
class Employee:
    """
    Employee domain entity.

    Email is optional but unique when set.
    """

    id: uuid.UUID
    name: str
    department: str
    email: Optional[str] = None
    title: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate employee entity."""
        if not self.name or not self.name.strip():
            raise ValidationError("Name is required", field="name")
        if not self.department or not self.department.strip():
            raise ValidationError("Department is required", field="department")

    @classmethod
    def create(
        cls,
        name: str,
        department: str,
        email: Optional[str] = None,
        title: Optional[str] = None,
        employee_id: Optional[uuid.UUID] = None,
    ) -> "Employee":
        """Create a new Employee entity."""
        now = datetime.now(timezone.utc)
        return cls(
            id=employee_id or uuid.uuid4(),
            name=(name or "").strip(),
            department=(department or "").strip(),
            email=normalize_email(email),
            title=(title or "").strip() or None,
            created_at=now,
            updated_at=now,
        )

    def with_changes(self, **changes) -> "Employee":
        """Return a copy with the given attributes replaced."""
        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])
        changes.setdefault("updated_at", datetime.now(timezone.utc))
        return dataclasses.replace(self, **changes)
