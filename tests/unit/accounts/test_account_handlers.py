"""
Tests for the login, logout and user administration handlers.
"""

import pytest
from asgiref.sync import async_to_sync
from django.contrib.sessions.backends.db import SessionStore as DatabaseSession
from django.contrib.sessions.models import Session

from accounts.application.commands.account_commands import (
    ChangePasswordCommand,
    CreateUserCommand,
    DeleteUserCommand,
    ListUsersQuery,
    LoginCommand,
    LogoutCommand,
    ToggleUserActiveCommand,
    UpdateUserCommand,
)
from accounts.application.handlers.auth_handlers import LoginHandler, LogoutHandler
from accounts.application.handlers.user_admin_handlers import (
    ChangePasswordHandler,
    CreateUserHandler,
    DeleteUserHandler,
    ListUsersHandler,
    ToggleUserActiveHandler,
    UpdateUserHandler,
)
from accounts.domain.account import Role
from accounts.infrastructure.sessions import DjangoSessionStore
from audit.domain.audit_entry import AuditAction, EntityType
from audit.ports.audit_log_repository import AuditSearchCriteria
from core.domain.exceptions import (
    InvalidCredentialsError,
    InvalidPasswordError,
    PermissionDeniedError,
    SelfModificationError,
    UsernameTakenError,
    UserNotFoundError,
    ValidationError,
)


def open_session(account_id):
    session = DatabaseSession()
    session["_auth_user_id"] = str(account_id)
    session.create()
    return session.session_key


def login(account_repository, audit_repository, username, password):
    return async_to_sync(LoginHandler(account_repository, audit_repository).handle)(
        LoginCommand(username=username, password=password)
    )


@pytest.mark.django_db
class TestLogin:
    """Tests for LoginHandler and LogoutHandler."""

    def test_login_and_logout_are_audited(self, admin_account, account_repository,
                                          audit_repository):
        account = login(account_repository, audit_repository, " admin ", "secret")
        async_to_sync(LogoutHandler(audit_repository).handle)(LogoutCommand(account))

        assert account.id == admin_account.id
        page = audit_repository.search(AuditSearchCriteria(entity_type=EntityType.AUTH), 1, 50)
        assert {entry.action for entry in page.entries} == {AuditAction.LOGIN, AuditAction.LOGOUT}
        assert all(entry.actor == "admin" for entry in page.entries)

    def test_wrong_password(self, admin_account, account_repository, audit_repository):
        with pytest.raises(InvalidCredentialsError):
            login(account_repository, audit_repository, "admin", "wrong")

    def test_missing_fields(self, account_repository, audit_repository):
        with pytest.raises(ValidationError):
            login(account_repository, audit_repository, "", "secret")

    def test_inactive_user_cannot_login(self, user_account, account_repository,
                                        audit_repository):
        account_repository.save(user_account.with_changes(is_active=False))

        with pytest.raises(InvalidCredentialsError):
            login(account_repository, audit_repository, "member", "secret")


@pytest.mark.django_db
class TestUserAdministration:
    """Tests for the admin console user handlers."""

    def test_only_admins(self, user_account, account_repository, audit_repository):
        with pytest.raises(PermissionDeniedError):
            async_to_sync(ListUsersHandler(account_repository).handle)(
                ListUsersQuery(actor=user_account)
            )
        with pytest.raises(PermissionDeniedError):
            async_to_sync(CreateUserHandler(account_repository, audit_repository).handle)(
                CreateUserCommand(actor=user_account, username="x", password="secret")
            )

    def test_create_user(self, admin_account, account_repository, audit_repository):
        handler = CreateUserHandler(account_repository, audit_repository)

        created = async_to_sync(handler.handle)(
            CreateUserCommand(
                actor=admin_account, username="jane", password="pass", name="Jane", role="admin"
            )
        )

        assert created.role is Role.ADMIN
        assert account_repository.authenticate("jane", "pass").id == created.id
        with pytest.raises(UsernameTakenError):
            async_to_sync(handler.handle)(
                CreateUserCommand(actor=admin_account, username="JANE", password="pass")
            )

    def test_create_user_short_password(self, admin_account, account_repository,
                                        audit_repository):
        with pytest.raises(InvalidPasswordError):
            async_to_sync(CreateUserHandler(account_repository, audit_repository).handle)(
                CreateUserCommand(actor=admin_account, username="jane", password="abc")
            )
        assert not account_repository.username_exists("jane")

    def test_update_user(self, admin_account, user_account, account_repository,
                         audit_repository):
        updated = async_to_sync(UpdateUserHandler(account_repository, audit_repository).handle)(
            UpdateUserCommand(
                actor=admin_account, user_id=user_account.id, name="Renamed",
                email="member@example.com", role="ADMIN",
            )
        )

        assert updated.name == "Renamed"
        assert updated.role is Role.ADMIN
        (entry,) = audit_repository.search(
            AuditSearchCriteria(entity_type=EntityType.USER, action=AuditAction.UPDATED), 1, 50
        ).entries
        assert set(entry.details["changes"]) == {"name", "email", "role"}

    def test_admin_cannot_demote_or_remove_self(self, admin_account, account_repository,
                                                audit_repository):
        with pytest.raises(SelfModificationError):
            async_to_sync(UpdateUserHandler(account_repository, audit_repository).handle)(
                UpdateUserCommand(actor=admin_account, user_id=admin_account.id, role="USER")
            )
        with pytest.raises(SelfModificationError):
            async_to_sync(
                ToggleUserActiveHandler(account_repository, audit_repository,
                                        DjangoSessionStore()).handle
            )(ToggleUserActiveCommand(actor=admin_account, user_id=admin_account.id))
        with pytest.raises(SelfModificationError):
            async_to_sync(DeleteUserHandler(account_repository, audit_repository).handle)(
                DeleteUserCommand(actor=admin_account, user_id=admin_account.id)
            )

    def test_deactivation_revokes_sessions(self, admin_account, user_account,
                                           account_repository, audit_repository):
        member_session = open_session(user_account.id)
        admin_session = open_session(admin_account.id)
        handler = ToggleUserActiveHandler(account_repository, audit_repository,
                                          DjangoSessionStore())

        deactivated = async_to_sync(handler.handle)(
            ToggleUserActiveCommand(actor=admin_account, user_id=user_account.id)
        )

        assert deactivated.is_active is False
        assert not Session.objects.filter(session_key=member_session).exists()
        assert Session.objects.filter(session_key=admin_session).exists()

        reactivated = async_to_sync(handler.handle)(
            ToggleUserActiveCommand(actor=admin_account, user_id=user_account.id)
        )
        assert reactivated.is_active is True

    def test_change_password(self, admin_account, user_account, account_repository,
                             audit_repository):
        async_to_sync(ChangePasswordHandler(account_repository, audit_repository).handle)(
            ChangePasswordCommand(actor=admin_account, user_id=user_account.id, password="newpw")
        )

        assert account_repository.authenticate("member", "secret") is None
        assert account_repository.authenticate("member", "newpw") is not None

    def test_delete_user(self, admin_account, user_account, account_repository,
                         audit_repository):
        handler = DeleteUserHandler(account_repository, audit_repository)

        async_to_sync(handler.handle)(
            DeleteUserCommand(actor=admin_account, user_id=user_account.id)
        )

        assert account_repository.find_by_id(user_account.id) is None
        with pytest.raises(UserNotFoundError):
            async_to_sync(handler.handle)(
                DeleteUserCommand(actor=admin_account, user_id=user_account.id)
            )
