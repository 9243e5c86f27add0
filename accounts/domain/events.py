"""
Account domain events.
"""
from datetime import datetime
from typing import Any, Dict, Optional

from core.domain.events import DomainEvent


class UserLoggedIn(DomainEvent):
    """Event raised when a console session starts."""

    def __init__(self, user_id: int, username: str, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(user_id), occurred_at=occurred_at)
        self.user_id = user_id
        self.username = username

    def payload(self) -> Dict[str, Any]:
        return {"username": self.username}


class UserLoggedOut(DomainEvent):
    """Event raised when a console session ends."""

    def __init__(self, user_id: int, username: str, occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(user_id), occurred_at=occurred_at)
        self.user_id = user_id
        self.username = username

    def payload(self) -> Dict[str, Any]:
        return {"username": self.username}


class UserAccountChanged(DomainEvent):
    """Event raised by admin console actions on a user."""

    def __init__(self, user_id: int, action: str, actor: str,
                 occurred_at: Optional[datetime] = None):
        super().__init__(aggregate_id=str(user_id), occurred_at=occurred_at)
        self.user_id = user_id
        self.action = action
        self.actor = actor

    def payload(self) -> Dict[str, Any]:
        return {"action": self.action, "actor": self.actor}
