"""
Admin console handlers for console users.

Every handler requires the acting account to hold the ADMIN role.
"""
import logging
from typing import Any, Dict, List

from accounts.application.commands.account_commands import (
    ChangePasswordCommand,
    CreateUserCommand,
    DeleteUserCommand,
    ListUsersQuery,
    ToggleUserActiveCommand,
    UpdateUserCommand,
)
from accounts.domain.account import Account, Role, validate_password
from accounts.domain.events import UserAccountChanged
from accounts.ports.account_repository import AccountRepository
from accounts.ports.session_store import SessionStore
from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType, diff_fields
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import (
    PermissionDeniedError,
    SelfModificationError,
    UsernameTakenError,
    UserNotFoundError,
)
from core.infrastructure.database import run_in_transaction, run_sync
from core.infrastructure.events import event_bus

logger = logging.getLogger(__name__)

AUDITED_FIELDS = ("name", "email", "role")


def require_admin(actor: Account) -> None:
    """
    Raises:
        PermissionDeniedError: If the actor is missing or not an admin
    """
    if actor is None or not actor.is_admin:
        raise PermissionDeniedError()


class _UserAdminHandler:
    def __init__(
        self,
        account_repository: AccountRepository,
        audit_repository: AuditLogRepository = None,
        session_store: SessionStore = None,
    ):
        self.account_repository = account_repository
        self.audit_repository = audit_repository
        self.session_store = session_store

    def _get(self, user_id: int) -> Account:
        account = self.account_repository.find_by_id(user_id)
        if not account:
            raise UserNotFoundError(f"User {user_id} not found")
        return account

    def _audit(self, actor: Account, target: Account, action: AuditAction,
               details: Dict[str, Any]) -> None:
        self.audit_repository.record(
            AuditEntry.create(
                EntityType.USER, target.id, action, actor=actor.username, details=details
            )
        )


class ListUsersHandler(_UserAdminHandler):
    """Handler for ListUsersQuery."""

    async def handle(self, query: ListUsersQuery) -> List[Account]:
        require_admin(query.actor)
        return await run_sync(self.account_repository.list_all)


class CreateUserHandler(_UserAdminHandler):
    """Handler for CreateUserCommand."""

    async def handle(self, command: CreateUserCommand) -> Account:
        """
        Handle create user command.

        Raises:
            PermissionDeniedError: If the actor is not an admin
            ValidationError: If the username is missing
            InvalidPasswordError: If the password is too short
            UsernameTakenError: If the username exists
        """
        require_admin(command.actor)
        account = Account.create(
            command.username, name=command.name, email=command.email, role=command.role
        )
        validate_password(command.password)

        created = await run_in_transaction(self._create, command, account)
        await event_bus.publish(UserAccountChanged(created.id, "created", command.actor.username))
        return created

    def _create(self, command: CreateUserCommand, account: Account) -> Account:
        if self.account_repository.username_exists(account.username):
            raise UsernameTakenError(account.username)
        created = self.account_repository.create(account, command.password)
        self._audit(
            command.actor,
            created,
            AuditAction.CREATED,
            {"summary": f"User {created.username} created", "role": created.role.value},
        )
        logger.info("User created: %s", created.username, extra={"user_id": created.id})
        return created


class UpdateUserHandler(_UserAdminHandler):
    """Handler for UpdateUserCommand."""

    async def handle(self, command: UpdateUserCommand) -> Account:
        """
        Raises:
            PermissionDeniedError: If the actor is not an admin
            UserNotFoundError: If the user does not exist
            SelfModificationError: If an admin drops their own admin role
        """
        require_admin(command.actor)
        role = Role.parse(command.role)
        if command.actor.id == command.user_id and role is not Role.ADMIN:
            raise SelfModificationError("You cannot remove your own admin role")

        account = await run_in_transaction(self._update, command, role)
        await event_bus.publish(UserAccountChanged(account.id, "updated", command.actor.username))
        return account

    def _update(self, command: UpdateUserCommand, role: Role) -> Account:
        current = self._get(command.user_id)
        updated = current.with_changes(
            name=(command.name or "").strip() or None,
            email=(command.email or "").strip() or None,
            role=role,
        )
        changes = diff_fields(current, updated, AUDITED_FIELDS)
        saved = self.account_repository.save(updated)
        if changes:
            self._audit(
                command.actor,
                saved,
                AuditAction.UPDATED,
                {"summary": f"User {saved.username} updated", "changes": changes},
            )
        return saved


class ChangePasswordHandler(_UserAdminHandler):
    """Handler for ChangePasswordCommand."""

    async def handle(self, command: ChangePasswordCommand) -> None:
        require_admin(command.actor)
        validate_password(command.password)
        await run_in_transaction(self._change, command)

    def _change(self, command: ChangePasswordCommand) -> None:
        account = self._get(command.user_id)
        self.account_repository.set_password(account.id, command.password)
        self._audit(
            command.actor,
            account,
            AuditAction.UPDATED,
            {"summary": f"Password of {account.username} changed"},
        )


class ToggleUserActiveHandler(_UserAdminHandler):
    """
    Handler for ToggleUserActiveCommand.

    Deactivating a user revokes all of their sessions.
    """

    async def handle(self, command: ToggleUserActiveCommand) -> Account:
        require_admin(command.actor)
        if command.actor.id == command.user_id:
            raise SelfModificationError("You cannot deactivate your own account")

        account = await run_in_transaction(self._toggle, command)
        action = "activated" if account.is_active else "deactivated"
        await event_bus.publish(UserAccountChanged(account.id, action, command.actor.username))
        return account

    def _toggle(self, command: ToggleUserActiveCommand) -> Account:
        current = self._get(command.user_id)
        saved = self.account_repository.save(current.with_changes(is_active=not current.is_active))

        revoked = 0
        if not saved.is_active:
            revoked = self.session_store.revoke_for_user(saved.id)
        state = "activated" if saved.is_active else "deactivated"
        self._audit(
            command.actor,
            saved,
            AuditAction.UPDATED,
            {
                "summary": f"User {saved.username} {state}",
                "is_active": saved.is_active,
                "sessions_revoked": revoked,
            },
        )
        return saved


class DeleteUserHandler(_UserAdminHandler):
    """Handler for DeleteUserCommand."""

    async def handle(self, command: DeleteUserCommand) -> None:
        require_admin(command.actor)
        if command.actor.id == command.user_id:
            raise SelfModificationError("You cannot delete your own account")

        account = await run_in_transaction(self._delete, command)
        await event_bus.publish(UserAccountChanged(account.id, "deleted", command.actor.username))

    def _delete(self, command: DeleteUserCommand) -> Account:
        account = self._get(command.user_id)
        self._audit(
            command.actor,
            account,
            AuditAction.DELETED,
            {"summary": f"User {account.username} deleted"},
        )
        self.account_repository.delete(account.id)
        logger.info("User deleted: %s", account.username, extra={"user_id": account.id})
        return account
