"""
License group repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from groups.domain.group import LicenseGroup


class GroupRepository(ABC):
    """Abstract repository for license groups and their members."""

    @abstractmethod
    def save(self, group: LicenseGroup) -> LicenseGroup:
        """Insert or update a group, replacing its members with ``group.license_ids``."""

    @abstractmethod
    def find_by_id(self, group_id: uuid.UUID) -> Optional[LicenseGroup]:
        """Find a group by ID."""

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[LicenseGroup]:
        """Find a group by its unique name."""

    @abstractmethod
    def find_by_names(self, names: Iterable[str]) -> Dict[str, LicenseGroup]:
        """Map group name to group for the given names."""

    @abstractmethod
    def list_all(self) -> List[LicenseGroup]:
        """All groups ordered by name."""

    @abstractmethod
    def list_default(self) -> List[LicenseGroup]:
        """Groups flagged as default."""

    @abstractmethod
    def add_members(self, group_id: uuid.UUID, license_ids: Iterable[uuid.UUID]) -> int:
        """Add licenses not yet in the group. Returns the number added."""

    @abstractmethod
    def remove_members(self, group_id: uuid.UUID, license_ids: Iterable[uuid.UUID]) -> int:
        """Remove licenses from the group. Returns the number removed."""

    @abstractmethod
    def delete(self, group_id: uuid.UUID) -> None:
        """Delete a group and its memberships."""
