"""
Login and logout handlers.

Session cookies are managed by the views; these handlers check credentials
and keep the audit trail.
"""
import logging

from accounts.application.commands.account_commands import LoginCommand, LogoutCommand
from accounts.domain.account import Account
from accounts.domain.events import UserLoggedIn, UserLoggedOut
from accounts.ports.account_repository import AccountRepository
from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import InvalidCredentialsError, ValidationError
from core.infrastructure.database import run_in_transaction
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)


class LoginHandler:
    """Handler for LoginCommand."""

    def __init__(self, account_repository: AccountRepository, audit_repository: AuditLogRepository):
        self.account_repository = account_repository
        self.audit_repository = audit_repository

    async def handle(self, command: LoginCommand) -> Account:
        """
        Handle login command.

        Raises:
            ValidationError: If username or password is missing
            InvalidCredentialsError: If the credentials are wrong or the user is inactive
        """
        username = (command.username or "").strip()
        if not username or not command.password:
            raise ValidationError("Username and password are required")

        account = await run_in_transaction(self._login, username, command.password)
        await event_bus.publish(UserLoggedIn(account.id, account.username))
        return account

    def _login(self, username: str, password: str) -> Account:
        account = self.account_repository.authenticate(username, password)
        if account is None:
            logger.warning("Failed login for %s", username, extra={"username": username})
            raise InvalidCredentialsError()

        self.audit_repository.record(
            AuditEntry.create(
                EntityType.AUTH,
                account.id,
                AuditAction.LOGIN,
                actor=account.username,
                details={"summary": f"{account.username} logged in"},
            )
        )
        return account


class LogoutHandler:
    """Handler for LogoutCommand."""

    def __init__(self, audit_repository: AuditLogRepository):
        self.audit_repository = audit_repository

    async def handle(self, command: LogoutCommand) -> None:
        account = command.account
        await run_in_transaction(
            self.audit_repository.record,
            AuditEntry.create(
                EntityType.AUTH,
                account.id,
                AuditAction.LOGOUT,
                actor=account.username,
                details={"summary": f"{account.username} logged out"},
            ),
        )
        await event_bus.publish(UserLoggedOut(account.id, account.username))
