"""
DeleteLicenseCommand.
"""
import uuid
from dataclasses import dataclass
from typing import Optional


@dataclass
class DeleteLicenseCommand:
    """Command to delete a license with its seats and assignments."""

    license_id: uuid.UUID
    actor: Optional[str] = None
