"""
Session authentication middleware.

This middleware guards the console API with the Django session started by
the login endpoint. It runs after Django's ``AuthenticationMiddleware``.
"""

import logging
from typing import Optional

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.deprecation import MiddlewareMixin

from accounts.infrastructure.repositories.django_account_repository import to_account

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1/"
ADMIN_PREFIX = "/api/v1/admin/"
PUBLIC_PATHS = ("/api/v1/auth/login",)


def _error(status: int, code: str, message: str) -> JsonResponse:
    return JsonResponse({"error": {"code": code, "message": message}}, status=status)


class SessionAuthenticationMiddleware(MiddlewareMixin):
    """
    Middleware for session authentication.

    This middleware:
    1. Leaves everything outside /api/v1/ and the login endpoint alone
    2. Returns 401 for anonymous requests to the API
    3. Returns 403 for non-staff requests to /api/v1/admin/
    4. Exposes the signed-in account as ``request.account``
    """

    def process_request(self, request: HttpRequest) -> Optional[HttpResponse]:
        request.account = None  # type: ignore
        if not request.path.startswith(API_PREFIX) or self._is_public(request.path):
            return None

        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            return _error(401, "AUTHENTICATION_REQUIRED", "Authentication required")

        request.account = to_account(user)  # type: ignore
        if request.path.startswith(ADMIN_PREFIX) and not user.is_staff:
            logger.warning(
                "Non-admin %s denied %s",
                user.username,
                request.path,
                extra={"user_id": user.pk, "path": request.path},
            )
            return _error(403, "PERMISSION_DENIED", "Admin role required")
        return None

    def _is_public(self, path: str) -> bool:
        return any(path.rstrip("/") == public for public in PUBLIC_PATHS)
