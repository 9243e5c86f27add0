"""
Session store port (interface).
"""
from abc import ABC, abstractmethod


class SessionStore(ABC):
    """Server side login sessions."""

    @abstractmethod
    def revoke_for_user(self, account_id: int) -> int:
        """Delete every session of the account. Returns the number removed."""
