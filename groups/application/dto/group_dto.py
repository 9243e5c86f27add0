"""
License group DTOs for API responses.
"""
from dataclasses import dataclass, field
from typing import List

from groups.domain.group import LicenseGroup
from licenses.domain.license import License


@dataclass
class GroupDTO:
    """Group with its member licenses resolved."""

    group: LicenseGroup
    licenses: List[License] = field(default_factory=list)
