"""
Console user administration API views.

The middleware already rejects non-admin sessions under /api/v1/admin/;
the handlers check the role again.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.account_commands import (
    ChangePasswordCommand,
    CreateUserCommand,
    DeleteUserCommand,
    ListUsersQuery,
    ToggleUserActiveCommand,
    UpdateUserCommand,
)
from accounts.application.handlers.user_admin_handlers import (
    ChangePasswordHandler,
    CreateUserHandler,
    DeleteUserHandler,
    ListUsersHandler,
    ToggleUserActiveHandler,
    UpdateUserHandler,
)
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from accounts.infrastructure.sessions import DjangoSessionStore
from api.v1.admin.serializers import (
    ChangePasswordRequestSerializer,
    CreateUserRequestSerializer,
    UpdateUserRequestSerializer,
)
from api.v1.auth.serializers import AccountSerializer
from api.v1.context import current_account
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer

_account_repo = DjangoAccountRepository()
_audit_repo = DjangoAuditLogRepository()
_session_store = DjangoSessionStore()

tracer = get_tracer(__name__)


class UserListView(APIView):
    """List and create console users."""

    @extend_schema(
        operation_id="list_users",
        summary="List Users",
        tags=["Admin"],
        responses={200: AccountSerializer(many=True)},
    )
    def get(self, request: Request) -> Response:
        return async_to_sync(self._handle_list)(request)

    async def _handle_list(self, request: Request) -> Response:
        with tracer.start_as_current_span("list_users"):
            users = await ListUsersHandler(_account_repo).handle(
                ListUsersQuery(current_account(request))
            )
            return Response(AccountSerializer(users, many=True).data)

    @extend_schema(
        operation_id="create_user",
        summary="Create User",
        tags=["Admin"],
        request=CreateUserRequestSerializer,
        responses={201: AccountSerializer, 409: {"description": "Username taken"}},
    )
    def post(self, request: Request) -> Response:
        return async_to_sync(self._handle_create)(request)

    async def _handle_create(self, request: Request) -> Response:
        with tracer.start_as_current_span("create_user") as span:
            serializer = CreateUserRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = CreateUserHandler(_account_repo, _audit_repo)
            user = await handler.handle(
                CreateUserCommand(actor=current_account(request), **serializer.validated_data)
            )
            span.set_attribute("user.id", user.id)
            return Response(AccountSerializer(user).data, status=status.HTTP_201_CREATED)


class UserDetailView(APIView):
    """Update or delete a console user."""

    @extend_schema(
        operation_id="update_user",
        summary="Update User",
        tags=["Admin"],
        request=UpdateUserRequestSerializer,
        responses={200: AccountSerializer, 404: {"description": "User not found"}},
    )
    def put(self, request: Request, user_id: int) -> Response:
        return async_to_sync(self._handle_update)(request, user_id)

    async def _handle_update(self, request: Request, user_id: int) -> Response:
        with tracer.start_as_current_span("update_user") as span:
            span.set_attribute("user.id", user_id)
            serializer = UpdateUserRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = UpdateUserHandler(_account_repo, _audit_repo)
            user = await handler.handle(
                UpdateUserCommand(
                    actor=current_account(request), user_id=user_id, **serializer.validated_data
                )
            )
            return Response(AccountSerializer(user).data)

    @extend_schema(
        operation_id="delete_user",
        summary="Delete User",
        tags=["Admin"],
        responses={204: None, 400: {"description": "Cannot delete yourself"}},
    )
    def delete(self, request: Request, user_id: int) -> Response:
        return async_to_sync(self._handle_delete)(request, user_id)

    async def _handle_delete(self, request: Request, user_id: int) -> Response:
        with tracer.start_as_current_span("delete_user") as span:
            span.set_attribute("user.id", user_id)
            await DeleteUserHandler(_account_repo, _audit_repo).handle(
                DeleteUserCommand(actor=current_account(request), user_id=user_id)
            )
            return Response(status=status.HTTP_204_NO_CONTENT)


class UserPasswordView(APIView):
    """Set a new password for a console user."""

    @extend_schema(
        operation_id="change_user_password",
        summary="Change Password",
        tags=["Admin"],
        request=ChangePasswordRequestSerializer,
        responses={204: None, 400: {"description": "Password too short"}},
    )
    def post(self, request: Request, user_id: int) -> Response:
        return async_to_sync(self._handle_change)(request, user_id)

    async def _handle_change(self, request: Request, user_id: int) -> Response:
        with tracer.start_as_current_span("change_user_password"):
            serializer = ChangePasswordRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            await ChangePasswordHandler(_account_repo, _audit_repo).handle(
                ChangePasswordCommand(
                    actor=current_account(request),
                    user_id=user_id,
                    password=serializer.validated_data["password"],
                )
            )
            return Response(status=status.HTTP_204_NO_CONTENT)


class UserToggleActiveView(APIView):
    """Flip the active flag; deactivation ends the user's sessions."""

    @extend_schema(
        operation_id="toggle_user_active",
        summary="Toggle Active",
        tags=["Admin"],
        request=None,
        responses={200: AccountSerializer},
    )
    def post(self, request: Request, user_id: int) -> Response:
        return async_to_sync(self._handle_toggle)(request, user_id)

    async def _handle_toggle(self, request: Request, user_id: int) -> Response:
        with tracer.start_as_current_span("toggle_user_active") as span:
            handler = ToggleUserActiveHandler(_account_repo, _audit_repo, _session_store)
            user = await handler.handle(
                ToggleUserActiveCommand(actor=current_account(request), user_id=user_id)
            )
            span.set_attribute("user.active", user.is_active)
            return Response(AccountSerializer(user).data)
