"""
Console account domain entity.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from core.domain.exceptions import InvalidPasswordError, ValidationError

MIN_PASSWORD_LENGTH = 4


class Role(Enum):
    """Console roles. ``ADMIN`` is backed by the staff flag."""

    ADMIN = "ADMIN"
    USER = "USER"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> "Role":
        """Anything other than ADMIN is a plain user."""
        if isinstance(value, Role):
            return value
        return cls.ADMIN if str(value or "").strip().upper() == "ADMIN" else cls.USER


def validate_password(password: Optional[str]) -> str:
    """
    Raises:
        InvalidPasswordError: If the password is shorter than the minimum
    """
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise InvalidPasswordError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    return password


@dataclass(frozen=True)
class Account:
    """A console user."""

    id: Optional[int]
    username: str
    name: Optional[str] = None
    email: Optional[str] = None
    role: Role = Role.USER
    is_active: bool = True
    last_login: Optional[datetime] = None
    date_joined: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        username: Optional[str],
        name: Optional[str] = None,
        email: Optional[str] = None,
        role=Role.USER,
    ) -> "Account":
        username = (username or "").strip()
        if not username:
            raise ValidationError("Username is required", field="username")
        return cls(
            id=None,
            username=username,
            name=(name or "").strip() or None,
            email=(email or "").strip() or None,
            role=Role.parse(role),
        )

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    def with_changes(self, **changes) -> "Account":
        return replace(self, **changes)
