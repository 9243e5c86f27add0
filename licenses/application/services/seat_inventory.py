"""
Seat inventory service.

Keeps the seats of key-based licenses in line with their quantity. Every
method is synchronous and must run inside the caller's transaction.
"""
import logging
import uuid
from dataclasses import dataclass

from licenses.domain.services import SeatReconciler
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.seat_repository import SeatRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeatSyncResult:
    """Outcome of a seat reconciliation."""

    created: int = 0
    deleted: int = 0
    deleted_with_key: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.created or self.deleted)


class SeatInventory:
    """Application service for seat reconciliation."""

    def __init__(self, license_repository: LicenseRepository, seat_repository: SeatRepository):
        self.license_repository = license_repository
        self.seat_repository = seat_repository

    def sync_seats(self, license_id: uuid.UUID, total_quantity: int) -> SeatSyncResult:
        """
        Create or remove seats until the license has ``total_quantity`` of them.

        Missing and non key-based licenses are left alone.

        Raises:
            SeatsInUseError: If the reduction would remove assigned seats
        """
        license = self.license_repository.find_by_id(license_id)
        if license is None or not license.is_key_based:
            return SeatSyncResult()

        seats = self.seat_repository.list_for_license(license_id)
        plan = SeatReconciler.plan(seats, total_quantity)
        if plan.is_noop:
            return SeatSyncResult()

        created = self.seat_repository.create_empty(license_id, plan.to_create)
        deleted = self.seat_repository.delete(seat.id for seat in plan.to_delete)
        result = SeatSyncResult(
            created=created, deleted=deleted, deleted_with_key=plan.deleted_with_key
        )
        logger.info(
            "Seats synced for license %s",
            license_id,
            extra={
                "license_id": str(license_id),
                "seats_created": result.created,
                "seats_deleted": result.deleted,
                "seats_deleted_with_key": result.deleted_with_key,
            },
        )
        return result

    def delete_all_seats(self, license_id: uuid.UUID) -> int:
        """
        Remove every seat of a license.

        Raises:
            SeatsInUseError: If any seat is still assigned
        """
        seats = self.seat_repository.list_for_license(license_id)
        SeatReconciler.ensure_all_removable(seats)
        keyed = sum(1 for seat in seats if seat.has_key)
        deleted = self.seat_repository.delete_for_license(license_id)
        if keyed:
            logger.warning(
                "Deleted %d seat(s) holding keys for license %s",
                keyed,
                license_id,
                extra={"license_id": str(license_id), "seats_deleted_with_key": keyed},
            )
        return deleted
