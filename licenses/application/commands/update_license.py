"""
UpdateLicenseCommand.

Command to replace the attributes of a license.
"""
import uuid
from dataclasses import dataclass
from typing import Optional

from licenses.application.commands.create_license import LicenseFields


@dataclass
class UpdateLicenseCommand:
    """Command to update a license."""

    license_id: uuid.UUID
    fields: LicenseFields
    actor: Optional[str] = None
