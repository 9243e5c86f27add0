"""
Seat repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from licenses.domain.seat import Seat


class SeatRepository(ABC):
    """Abstract repository for the seats of key-based licenses."""

    @abstractmethod
    def list_for_license(self, license_id: uuid.UUID) -> List[Seat]:
        """
        Seats of a license in ascending id order.

        Each seat reports the employee of its active assignment, if any.
        """

    @abstractmethod
    def find_by_id(self, seat_id: int) -> Optional[Seat]:
        """Find a seat by ID."""

    @abstractmethod
    def create_empty(self, license_id: uuid.UUID, count: int) -> int:
        """Create ``count`` keyless seats. Returns the number created."""

    @abstractmethod
    def delete(self, seat_ids: Iterable[int]) -> int:
        """Delete seats by id. Returns the number deleted."""

    @abstractmethod
    def delete_for_license(self, license_id: uuid.UUID) -> int:
        """Delete every seat of a license."""

    @abstractmethod
    def set_key(self, seat_id: int, key: Optional[str]) -> Seat:
        """Store a key on a seat."""

    @abstractmethod
    def find_key_owner(self, key: str) -> Optional[Tuple[int, str]]:
        """Return ``(seat_id, license_name)`` of the seat holding ``key``."""

    @abstractmethod
    def find_key_owners(self, keys: Iterable[str]) -> Dict[str, str]:
        """Map seat key to the name of the license owning the seat."""

    @abstractmethod
    def assigned_seat_counts(self, license_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        """Number of seats with an active assignment, per license id."""
