"""
DRF authentication backed by the Django session.

``SessionAuthenticationMiddleware`` already rejected anonymous API calls;
this class exposes the session user to DRF and applies Django's CSRF check
to unsafe methods. Login rotates the ``csrftoken`` cookie; clients echo it
in the ``X-CSRFToken`` header.
"""

from rest_framework.authentication import SessionAuthentication


class SessionCookieAuthentication(SessionAuthentication):
    """Session authentication that answers 401 rather than 403 when missing."""

    def authenticate_header(self, request):
        return "Session"
