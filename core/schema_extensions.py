"""
Schema extension for drf-spectacular describing session cookie authentication.
"""

from django.conf import settings
from drf_spectacular.extensions import OpenApiAuthenticationExtension


class SessionCookieAuthenticationExtension(OpenApiAuthenticationExtension):
    """Documents the session cookie checked by SessionAuthenticationMiddleware."""

    target_class = "api.authentication.SessionCookieAuthentication"
    name = "SessionCookieAuth"

    def get_security_definition(self, auto_schema):
        return {
            "type": "apiKey",
            "in": "cookie",
            "name": settings.SESSION_COOKIE_NAME,
            "description": "Session cookie set by POST /api/v1/auth/login.",
        }
