"""
Login, logout and current user API views.

The handlers run in an async context; the session itself is started and
flushed on the sync side because Django's login touches the ORM.
"""

from asgiref.sync import async_to_sync
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.application.commands.account_commands import LoginCommand, LogoutCommand
from accounts.application.handlers.auth_handlers import LoginHandler, LogoutHandler
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from accounts.infrastructure.sessions import end_session, start_session
from api.v1.auth.serializers import AccountSerializer, LoginRequestSerializer
from api.v1.context import current_account
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.instrumentation import get_tracer

_account_repo = DjangoAccountRepository()
_audit_repo = DjangoAuditLogRepository()

tracer = get_tracer(__name__)


class LoginView(APIView):
    """Exchange username and password for a session cookie."""

    authentication_classes = []

    @extend_schema(
        operation_id="login",
        summary="Log In",
        tags=["Auth"],
        request=LoginRequestSerializer,
        responses={200: AccountSerializer, 401: {"description": "Invalid credentials"}},
        auth=[],
    )
    def post(self, request: Request) -> Response:
        account = async_to_sync(self._handle_login)(request)
        start_session(request._request, account)
        request._request.account = account  # pylint: disable=protected-access
        return Response(AccountSerializer(account).data)

    async def _handle_login(self, request: Request):
        with tracer.start_as_current_span("login") as span:
            serializer = LoginRequestSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            handler = LoginHandler(_account_repo, _audit_repo)
            account = await handler.handle(LoginCommand(**serializer.validated_data))
            span.set_attribute("user.id", account.id)
            return account


class LogoutView(APIView):
    """Record the logout and flush the session."""

    @extend_schema(
        operation_id="logout",
        summary="Log Out",
        tags=["Auth"],
        request=None,
        responses={204: None},
    )
    def post(self, request: Request) -> Response:
        async_to_sync(self._handle_logout)(request)
        end_session(request._request)
        return Response(status=status.HTTP_204_NO_CONTENT)

    async def _handle_logout(self, request: Request) -> None:
        with tracer.start_as_current_span("logout"):
            await LogoutHandler(_audit_repo).handle(LogoutCommand(current_account(request)))


class MeView(APIView):
    """The logged in account."""

    @extend_schema(
        operation_id="me",
        summary="Current User",
        tags=["Auth"],
        responses={200: AccountSerializer},
    )
    def get(self, request: Request) -> Response:
        return Response(AccountSerializer(current_account(request)).data)
