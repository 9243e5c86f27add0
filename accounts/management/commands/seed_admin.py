"""
Django management command to seed the first console admin.

Reads SEED_ADMIN_USERNAME and SEED_ADMIN_PASSWORD from the environment.
Running it again is a no-op once the user exists.
"""
import logging
import os

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.domain.account import Account, Role, validate_password
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from core.domain.exceptions import DomainException

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to seed an admin account."""

    help = "Create the admin account named by SEED_ADMIN_USERNAME if it does not exist"

    def handle(self, *args, **options):
        """Execute the command."""
        if settings.ENVIRONMENT == "production":
            raise CommandError("seed_admin is disabled when ENVIRONMENT=production")

        username = os.environ.get("SEED_ADMIN_USERNAME", "").strip()
        password = os.environ.get("SEED_ADMIN_PASSWORD", "")
        if not username or not password:
            raise CommandError("Set SEED_ADMIN_USERNAME and SEED_ADMIN_PASSWORD")

        repo = DjangoAccountRepository()
        try:
            validate_password(password)
            with transaction.atomic():
                if repo.username_exists(username):
                    # pylint: disable=no-member
                    self.stdout.write(self.style.WARNING(f"User '{username}' already exists"))
                    return
                account = repo.create(Account.create(username, role=Role.ADMIN), password)
        except DomainException as exc:
            raise CommandError(exc.message) from exc

        logger.info("Seeded admin %s", account.username, extra={"user_id": account.id})
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS(f"Created admin: {account.username}"))
