"""
License group domain entity.
"""
import dataclasses
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from core.domain.exceptions import ValidationError


def unique_ids(ids: Iterable) -> Tuple:
    """De-duplicate ids keeping their first-seen order."""
    return tuple(dict.fromkeys(ids))


@dataclass(frozen=True)
class LicenseGroup:
    """
    Named bundle of licenses.

    Licenses of a default group are assigned to every new employee.
    """

    id: uuid.UUID
    name: str
    description: Optional[str] = None
    is_default: bool = False
    license_ids: Tuple[uuid.UUID, ...] = ()
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValidationError("Group name is required", field="name")
        object.__setattr__(self, "license_ids", unique_ids(self.license_ids))

    @classmethod
    def create(
        cls,
        name: str,
        description: Optional[str] = None,
        is_default: bool = False,
        license_ids: Iterable[uuid.UUID] = (),
    ) -> "LicenseGroup":
        """Create a new group."""
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid.uuid4(),
            name=(name or "").strip(),
            description=(description or "").strip() or None,
            is_default=is_default,
            license_ids=tuple(license_ids),
            created_at=now,
            updated_at=now,
        )

    def with_changes(self, **changes) -> "LicenseGroup":
        """Return a copy with the given attributes replaced."""
        changes.setdefault("updated_at", datetime.now(timezone.utc))
        return dataclasses.replace(self, **changes)
