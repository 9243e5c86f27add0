"""
Renewal date handler.

Stored renewal dates drift into the past as time passes; this handler rolls
them forward by whole cycles. It backs both the daily Celery task and the
``sync_renewal_dates`` management command.
"""
import logging
from typing import List

from django.utils import timezone

from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.database import run_in_transaction
from core.infrastructure.events import event_bus
from licenses.application.commands.sync_renewal_dates import SyncRenewalDatesCommand
from licenses.application.dto.license_dto import RenewalSyncDTO
from licenses.domain.events import RenewalDatesSynced
from licenses.domain.license import License
from licenses.domain.renewal import next_renewal_date
from licenses.ports.license_repository import LicenseRepository

logger = logging.getLogger(__name__)


class SyncRenewalDatesHandler:
    """Handler for SyncRenewalDatesCommand."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, command: SyncRenewalDatesCommand) -> RenewalSyncDTO:
        """
        Handle sync renewal dates command.

        Raises:
            LicenseNotFoundError: If a single license was requested and is missing
        """
        result = await run_in_transaction(self._sync, command)
        if result.updated and not result.dry_run:
            await event_bus.publish(RenewalDatesSynced(updated=result.updated))
        return result

    def _targets(self, command: SyncRenewalDatesCommand) -> List[License]:
        if command.license_id is None:
            return self.license_repository.list_renewable()
        license = self.license_repository.find_by_id(command.license_id, for_update=True)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")
        return [license]

    def _sync(self, command: SyncRenewalDatesCommand) -> RenewalSyncDTO:
        today = command.today or timezone.localdate()
        licenses = self._targets(command)
        updated = 0
        for license in licenses:
            target = next_renewal_date(license, today)
            if target == license.renewal_date:
                continue
            updated += 1
            logger.info(
                "Renewal date of %s: %s -> %s",
                license.name,
                license.renewal_date,
                target,
                extra={"license_id": str(license.id), "dry_run": command.dry_run},
            )
            if not command.dry_run:
                self.license_repository.save(license.with_changes(renewal_date=target))
        return RenewalSyncDTO(checked=len(licenses), updated=updated, dry_run=command.dry_run)
