"""
Account commands and queries.
"""
from dataclasses import dataclass
from typing import Optional

from accounts.domain.account import Account


@dataclass
class LoginCommand:
    username: Optional[str]
    password: Optional[str]


@dataclass
class LogoutCommand:
    account: Account


@dataclass
class ListUsersQuery:
    actor: Account


@dataclass
class CreateUserCommand:
    """Command to create a console user."""

    actor: Account
    username: Optional[str]
    password: Optional[str]
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


@dataclass
class UpdateUserCommand:
    """Command to change name, email and role of a user."""

    actor: Account
    user_id: int
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


@dataclass
class ChangePasswordCommand:
    actor: Account
    user_id: int
    password: Optional[str]


@dataclass
class ToggleUserActiveCommand:
    actor: Account
    user_id: int


@dataclass
class DeleteUserCommand:
    actor: Account
    user_id: int
