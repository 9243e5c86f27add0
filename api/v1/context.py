"""
Request helpers shared by the v1 views.
"""

from typing import Optional

from rest_framework.request import Request

from accounts.domain.account import Account


def current_account(request: Request) -> Optional[Account]:
    """Account set by SessionAuthenticationMiddleware."""
    return getattr(request, "account", None)


def actor(request: Request) -> Optional[str]:
    """Username recorded in the audit trail for this request."""
    account = current_account(request)
    return account.username if account else None
