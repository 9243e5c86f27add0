"""
Django implementation of AccountRepository over ``auth.User``.
"""
from typing import List, Optional

from django.contrib.auth import authenticate, get_user_model

from accounts.domain.account import Account, Role
from accounts.ports.account_repository import AccountRepository

User = get_user_model()


def to_account(model) -> Account:
    """Map an ``auth.User`` row to an Account."""
    return Account(
        id=model.pk,
        username=model.username,
        name=model.first_name or None,
        email=model.email or None,
        role=Role.ADMIN if model.is_staff else Role.USER,
        is_active=model.is_active,
        last_login=model.last_login,
        date_joined=model.date_joined,
    )


class DjangoAccountRepository(AccountRepository):
    """Django ORM implementation of AccountRepository."""

    def _to_domain(self, model) -> Account:
        return to_account(model)

    def authenticate(self, username: str, password: str) -> Optional[Account]:
        # ModelBackend rejects inactive users.
        user = authenticate(username=username, password=password)
        return self._to_domain(user) if user else None

    def find_by_id(self, account_id: int) -> Optional[Account]:
        try:
            return self._to_domain(User.objects.get(pk=account_id))
        except (User.DoesNotExist, ValueError, TypeError):
            return None

    def username_exists(self, username: str) -> bool:
        return User.objects.filter(username__iexact=username).exists()

    def list_all(self) -> List[Account]:
        return [self._to_domain(model) for model in User.objects.order_by("username")]

    def create(self, account: Account, password: str) -> Account:
        model = User.objects.create_user(
            username=account.username,
            email=account.email or "",
            password=password,
            first_name=account.name or "",
            is_staff=account.is_admin,
            is_active=account.is_active,
        )
        return self._to_domain(model)

    def save(self, account: Account) -> Account:
        model = User.objects.get(pk=account.id)
        model.first_name = account.name or ""
        model.email = account.email or ""
        model.is_staff = account.is_admin
        model.is_active = account.is_active
        model.save(update_fields=["first_name", "email", "is_staff", "is_active"])
        return self._to_domain(model)

    def set_password(self, account_id: int, password: str) -> None:
        model = User.objects.get(pk=account_id)
        model.set_password(password)
        model.save(update_fields=["password"])

    def delete(self, account_id: int) -> None:
        User.objects.filter(pk=account_id).delete()
