"""
Seat key handlers.
"""
from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType
from audit.ports.audit_log_repository import AuditLogRepository
from core.domain.exceptions import DuplicateSeatKeyError, SeatNotFoundError
from core.infrastructure.database import run_in_transaction, run_sync
from licenses.application.commands.update_seat_key import UpdateSeatKeyCommand
from licenses.application.dto.license_dto import SeatKeyCheckDTO
from licenses.application.queries.license_queries import CheckSeatKeyQuery
from licenses.domain.seat import Seat
from licenses.ports.seat_repository import SeatRepository


def _normalize_key(key):
    key = (key or "").strip()
    return key or None


class UpdateSeatKeyHandler:
    """Handler for UpdateSeatKeyCommand."""

    def __init__(self, seat_repository: SeatRepository, audit_repository: AuditLogRepository):
        self.seat_repository = seat_repository
        self.audit_repository = audit_repository

    async def handle(self, command: UpdateSeatKeyCommand) -> Seat:
        """
        Handle update seat key command.

        Raises:
            SeatNotFoundError: If the seat does not exist
            DuplicateSeatKeyError: If another seat holds the key
        """
        return await run_in_transaction(self._update, command)

    def _update(self, command: UpdateSeatKeyCommand) -> Seat:
        seat = self.seat_repository.find_by_id(command.seat_id)
        if not seat:
            raise SeatNotFoundError(f"Seat {command.seat_id} not found")

        key = _normalize_key(command.key)
        if key:
            owner = self.seat_repository.find_key_owner(key)
            if owner and owner[0] != seat.id:
                raise DuplicateSeatKeyError(owner[1])

        updated = self.seat_repository.set_key(seat.id, key)
        if seat.key != key:
            self.audit_repository.record(
                AuditEntry.create(
                    EntityType.SEAT,
                    seat.id,
                    AuditAction.UPDATED,
                    actor=command.actor,
                    details={
                        "license_id": str(seat.license_id),
                        "changes": {"key": {"from": seat.key, "to": key}},
                    },
                )
            )
        return updated


class CheckSeatKeyHandler:
    """Handler for CheckSeatKeyQuery."""

    def __init__(self, seat_repository: SeatRepository):
        self.seat_repository = seat_repository

    async def handle(self, query: CheckSeatKeyQuery) -> SeatKeyCheckDTO:
        key = _normalize_key(query.key)
        if not key:
            return SeatKeyCheckDTO(duplicate=False)
        owner = await run_sync(self.seat_repository.find_key_owner, key)
        if not owner or owner[0] == query.exclude_seat_id:
            return SeatKeyCheckDTO(duplicate=False)
        return SeatKeyCheckDTO(duplicate=True, license_name=owner[1])
