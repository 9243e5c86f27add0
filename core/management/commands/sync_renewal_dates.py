"""
Django management command to roll renewal dates forward.

The same sweep runs daily through Celery beat.
"""

import logging
import uuid

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand, CommandError

from core.domain.exceptions import LicenseNotFoundError
from licenses.application.commands.sync_renewal_dates import SyncRenewalDatesCommand
from licenses.application.handlers.renewal_handlers import SyncRenewalDatesHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    """Command to resynchronize renewal dates."""

    help = "Roll stored renewal dates forward by whole renewal cycles"

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Dry run mode - report changes without saving",
        )
        parser.add_argument(
            "--license",
            type=uuid.UUID,
            default=None,
            help="Only process the license with this ID",
        )

    def handle(self, *args, **options):
        handler = SyncRenewalDatesHandler(DjangoLicenseRepository())
        command = SyncRenewalDatesCommand(
            license_id=options["license"], dry_run=options["dry_run"]
        )
        try:
            result = async_to_sync(handler.handle)(command)
        except LicenseNotFoundError as exc:
            raise CommandError(exc.message) from exc

        if result.dry_run:
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("DRY RUN - No changes were saved"))
        # pylint: disable=no-member
        self.stdout.write(
            self.style.SUCCESS(
                f"Checked {result.checked} license(s), {result.updated} renewal date(s) "
                f"{'would change' if result.dry_run else 'updated'}"
            )
        )
