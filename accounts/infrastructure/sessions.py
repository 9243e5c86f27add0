"""
Login sessions on Django's session framework.

``start_session`` and ``end_session`` are request bound and called by the
auth views. ``DjangoSessionStore`` revokes sessions outside of a request.
"""
import logging

from django.contrib.auth import get_user_model, login, logout
from django.contrib.sessions.models import Session
from django.http import HttpRequest
from django.utils import timezone

from accounts.domain.account import Account
from accounts.ports.session_store import SessionStore

logger = logging.getLogger(__name__)

MODEL_BACKEND = "django.contrib.auth.backends.ModelBackend"


def start_session(request: HttpRequest, account: Account) -> None:
    """Attach a fresh session for the account to the request."""
    user = get_user_model().objects.get(pk=account.id)
    login(request, user, backend=MODEL_BACKEND)


def end_session(request: HttpRequest) -> None:
    """Flush the session of the request."""
    logout(request)


class DjangoSessionStore(SessionStore):
    """Session store over ``django.contrib.sessions``."""

    def revoke_for_user(self, account_id: int) -> int:
        user_key = str(account_id)
        stale = [
            session.session_key
            for session in Session.objects.filter(expire_date__gte=timezone.now()).iterator()
            if session.get_decoded().get("_auth_user_id") == user_key
        ]
        if stale:
            Session.objects.filter(session_key__in=stale).delete()
        logger.info(
            "Revoked %d session(s) for user %s",
            len(stale),
            account_id,
            extra={"user_id": account_id, "revoked": len(stale)},
        )
        return len(stale)
