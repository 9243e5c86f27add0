"""
Account repository port (interface).
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from accounts.domain.account import Account


class AccountRepository(ABC):
    """Abstract repository for console accounts."""

    @abstractmethod
    def authenticate(self, username: str, password: str) -> Optional[Account]:
        """Return the active account matching the credentials, if any."""

    @abstractmethod
    def find_by_id(self, account_id: int) -> Optional[Account]:
        """Find an account by ID."""

    @abstractmethod
    def username_exists(self, username: str) -> bool:
        """Whether the username is taken."""

    @abstractmethod
    def list_all(self) -> List[Account]:
        """All accounts ordered by username."""

    @abstractmethod
    def create(self, account: Account, password: str) -> Account:
        """Insert an account with a hashed password."""

    @abstractmethod
    def save(self, account: Account) -> Account:
        """Update name, email, role and active flag."""

    @abstractmethod
    def set_password(self, account_id: int, password: str) -> None:
        """Hash and store a new password."""

    @abstractmethod
    def delete(self, account_id: int) -> None:
        """Delete an account."""
