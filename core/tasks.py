"""
Celery tasks for background processing.
"""
import logging

from asgiref.sync import async_to_sync

from LicenseInventory.celery import app
from licenses.application.commands.sync_renewal_dates import SyncRenewalDatesCommand
from licenses.application.handlers.renewal_handlers import SyncRenewalDatesHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository

logger = logging.getLogger(__name__)


@app.task(bind=True, max_retries=3)
def sync_renewal_dates_task(self, dry_run: bool = False):
    """
    Daily sweep rolling renewal dates forward.

    Returns:
        Dict with the checked and updated counts
    """
    handler = SyncRenewalDatesHandler(DjangoLicenseRepository())
    try:
        result = async_to_sync(handler.handle)(SyncRenewalDatesCommand(dry_run=dry_run))
    except Exception as exc:
        logger.error("Renewal date sync failed: %s", exc, exc_info=True)
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)

    logger.info(
        "Renewal date sync finished",
        extra={"checked": result.checked, "updated": result.updated, "dry_run": dry_run},
    )
    return {"checked": result.checked, "updated": result.updated}
