"""
License repository port (interface).

This defines the contract for license persistence operations.
Implementations are in the infrastructure layer. Methods are synchronous
so that several calls can share one database transaction; async callers
wrap a whole unit of work with ``core.infrastructure.database.run_in_transaction``.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

from licenses.domain.license import License


class LicenseRepository(ABC):
    """
    Abstract repository for License entities.

    This is a port in hexagonal architecture - it defines
    what operations are available, not how they're implemented.
    """

    @abstractmethod
    def save(self, license: License) -> License:
        """
        Insert or update a license entity.

        Args:
            license: License entity to save

        Returns:
            Saved license entity
        """

    @abstractmethod
    def find_by_id(self, license_id: uuid.UUID, for_update: bool = False) -> Optional[License]:
        """
        Find a license by ID.

        Args:
            license_id: License UUID
            for_update: Lock the row for the rest of the transaction

        Returns:
            License entity or None if not found
        """

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[License]:
        """Find the first license with the given name."""

    @abstractmethod
    def find_by_names(self, names: Iterable[str]) -> Dict[str, License]:
        """Map license name to license for the given names."""

    @abstractmethod
    def find_by_ids(self, license_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, License]:
        """Map id to license for the ids that exist."""

    @abstractmethod
    def find_key_owners(self, keys: Iterable[str]) -> Dict[str, str]:
        """Map license-level key to the name of the license holding it."""

    @abstractmethod
    def list_all(self) -> List[License]:
        """All licenses, newest first."""

    @abstractmethod
    def list_renewable(self) -> List[License]:
        """Licenses whose renewal cycle is not MANUAL."""

    @abstractmethod
    def count_active_assignments(self, license_id: uuid.UUID) -> int:
        """Number of assignments of the license that are not returned."""

    @abstractmethod
    def active_assignment_counts(self, license_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        """Active assignment count per license id."""

    @abstractmethod
    def delete(self, license_id: uuid.UUID) -> None:
        """Delete a license together with its seats and assignments."""
