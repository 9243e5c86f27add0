"""
License domain events.

Domain events represent something that happened in the license domain.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class LicenseCreated(DomainEvent):
    """Event raised when a license is registered."""

    def __init__(
        self,
        license_id: uuid.UUID,
        license_type: str,
        total_quantity: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.license_type = license_type
        self.total_quantity = total_quantity

    def payload(self) -> Dict[str, Any]:
        return {"license_type": self.license_type, "total_quantity": self.total_quantity}


class LicenseUpdated(DomainEvent):
    """Event raised when license attributes change."""

    def __init__(
        self,
        license_id: uuid.UUID,
        changed_fields: tuple,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.changed_fields = tuple(changed_fields)

    def payload(self) -> Dict[str, Any]:
        return {"changed_fields": list(self.changed_fields)}


class LicenseDeleted(DomainEvent):
    """Event raised when a license is removed."""

    def __init__(self, license_id: uuid.UUID, name: str, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.name = name

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name}


class SeatsSynced(DomainEvent):
    """Event raised when a seat inventory was reconciled with changes."""

    def __init__(
        self,
        license_id: uuid.UUID,
        created: int,
        deleted: int,
        deleted_with_key: int,
        occurred_at: Optional[datetime] = None,
    ):
        super().__init__(aggregate_id=str(license_id), occurred_at=occurred_at)
        self.license_id = license_id
        self.created = created
        self.deleted = deleted
        self.deleted_with_key = deleted_with_key

    def payload(self) -> Dict[str, Any]:
        return {
            "created": self.created,
            "deleted": self.deleted,
            "deleted_with_key": self.deleted_with_key,
        }


class RenewalDatesSynced(DomainEvent):
    """Event raised after a renewal date sweep."""

    def __init__(self, updated: int, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id="renewal-sweep", occurred_at=occurred_at)
        self.updated = updated

    def payload(self) -> Dict[str, Any]:
        return {"updated": self.updated}
