"""
License write handlers.

Handlers for the create, update and delete license commands. Each command is
one database transaction; events are published after it commits.
"""
import logging

from django.utils import timezone

from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType, diff_fields
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import LicenseNotFoundError, LicenseTypeChangeBlockedError
from core.domain.value_objects import LicenseType
from core.infrastructure.database import run_in_transaction
from core.infrastructure.events import event_bus
from licenses.application.commands.create_license import CreateLicenseCommand
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.services.seat_inventory import SeatInventory, SeatSyncResult
from licenses.domain.events import LicenseCreated, LicenseDeleted, LicenseUpdated, SeatsSynced
from licenses.domain.license import License
from licenses.domain.services import LicenseCalculator
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.seat_repository import SeatRepository

logger = logging.getLogger(__name__)

AUDITED_FIELDS = (
    "name",
    "total_quantity",
    "license_type",
    "price",
    "notice_period_days",
    "admin_name",
    "key",
)


async def _publish_seat_changes(license: License, result: SeatSyncResult) -> None:
    if result.changed:
        await event_bus.publish(
            SeatsSynced(
                license_id=license.id,
                created=result.created,
                deleted=result.deleted,
                deleted_with_key=result.deleted_with_key,
            )
        )


class CreateLicenseHandler:
    """Handler for CreateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        audit_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.audit_repository = audit_repository
        self.seat_inventory = SeatInventory(license_repository, seat_repository)

    async def handle(self, command: CreateLicenseCommand) -> License:
        """
        Handle create license command.

        Args:
            command: CreateLicenseCommand

        Returns:
            Created License entity

        Raises:
            ValidationError: If a field violates a license rule
        """
        license, seats = await run_in_transaction(self._create, command)

        await event_bus.publish(
            LicenseCreated(
                license_id=license.id,
                license_type=license.license_type.value,
                total_quantity=license.total_quantity,
            )
        )
        await _publish_seat_changes(license, seats)
        return license

    def _create(self, command: CreateLicenseCommand):
        fields = command.fields
        license = License.create(
            name=fields.name,
            license_type=fields.license_type or LicenseType.KEY_BASED,
            total_quantity=fields.total_quantity,
            purchase_date=fields.purchase_date,
            **fields.as_kwargs(),
        )
        license = LicenseCalculator.with_derived_fields(license, timezone.localdate())
        saved = self.license_repository.save(license)
        seats = self.seat_inventory.sync_seats(saved.id, saved.total_quantity)

        self.audit_repository.record(
            AuditEntry.create(
                EntityType.LICENSE,
                saved.id,
                AuditAction.CREATED,
                actor=command.actor,
                details={
                    "summary": f"{saved.name} created",
                    "name": saved.name,
                    "license_type": saved.license_type.value,
                    "total_quantity": saved.total_quantity,
                },
            )
        )
        logger.info(
            "License created: %s",
            saved.name,
            extra={"license_id": str(saved.id), "license_type": saved.license_type.value},
        )
        return saved, seats


class UpdateLicenseHandler:
    """Handler for UpdateLicenseCommand."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        audit_repository: AuditLogRepository,
    ):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.audit_repository = audit_repository
        self.seat_inventory = SeatInventory(license_repository, seat_repository)

    async def handle(self, command: UpdateLicenseCommand) -> License:
        """
        Handle update license command.

        Args:
            command: UpdateLicenseCommand

        Returns:
            Updated License entity

        Raises:
            LicenseNotFoundError: If license not found
            LicenseTypeChangeBlockedError: If the type changes while assigned
            SeatsInUseError: If the new quantity would remove assigned seats
        """
        license, changes, seats = await run_in_transaction(self._update, command)

        if changes:
            await event_bus.publish(
                LicenseUpdated(license_id=license.id, changed_fields=tuple(changes))
            )
        await _publish_seat_changes(license, seats)
        return license

    def _update(self, command: UpdateLicenseCommand):
        current = self.license_repository.find_by_id(command.license_id, for_update=True)
        if not current:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        fields = command.fields
        license_type = fields.license_type or current.license_type
        if license_type is not current.license_type:
            active = self.license_repository.count_active_assignments(current.id)
            if active:
                raise LicenseTypeChangeBlockedError(active)

        updated = current.with_changes(
            name=(fields.name or "").strip(),
            license_type=license_type,
            total_quantity=fields.total_quantity,
            purchase_date=fields.purchase_date,
            **fields.as_kwargs(),
        )
        updated = LicenseCalculator.with_derived_fields(updated, timezone.localdate())
        saved = self.license_repository.save(updated)

        if current.is_key_based and not saved.is_key_based:
            seats = SeatSyncResult(deleted=self.seat_inventory.delete_all_seats(saved.id))
        else:
            seats = self.seat_inventory.sync_seats(saved.id, saved.total_quantity)

        changes = diff_fields(current, saved, AUDITED_FIELDS)
        if changes:
            self.audit_repository.record(
                AuditEntry.create(
                    EntityType.LICENSE,
                    saved.id,
                    AuditAction.UPDATED,
                    actor=command.actor,
                    details={"summary": f"{saved.name} updated", "changes": changes},
                )
            )
        return saved, changes, seats


class DeleteLicenseHandler:
    """Handler for DeleteLicenseCommand."""

    def __init__(self, license_repository: LicenseRepository, audit_repository: AuditLogRepository):
        """Initialize handler with repositories."""
        self.license_repository = license_repository
        self.audit_repository = audit_repository

    async def handle(self, command: DeleteLicenseCommand) -> None:
        """
        Handle delete license command.

        Seats, assignments and their history are removed with the license.

        Raises:
            LicenseNotFoundError: If license not found
        """
        license = await run_in_transaction(self._delete, command)
        await event_bus.publish(LicenseDeleted(license_id=license.id, name=license.name))

    def _delete(self, command: DeleteLicenseCommand) -> License:
        license = self.license_repository.find_by_id(command.license_id, for_update=True)
        if not license:
            raise LicenseNotFoundError(f"License {command.license_id} not found")

        self.audit_repository.record(
            AuditEntry.create(
                EntityType.LICENSE,
                license.id,
                AuditAction.DELETED,
                actor=command.actor,
                details={
                    "summary": f"{license.name} deleted",
                    "name": license.name,
                    "license_type": license.license_type.value,
                },
            )
        )
        self.license_repository.delete(license.id)
        logger.info("License deleted: %s", license.name, extra={"license_id": str(license.id)})
        return license
