"""
Django implementation of SeatRepository port.
"""
import uuid
from typing import Dict, Iterable, List, Optional, Tuple

from django.db.models import OuterRef, Subquery, UUIDField

from assignments.infrastructure.models import Assignment
from core.domain.exceptions import SeatNotFoundError
from licenses.domain.seat import Seat
from licenses.infrastructure.models import LicenseSeat
from licenses.ports.seat_repository import SeatRepository


def _with_assignee(queryset):
    active = Assignment.objects.filter(seat=OuterRef("pk"), returned_date__isnull=True)
    return queryset.annotate(
        assigned_to=Subquery(active.values("employee_id")[:1], output_field=UUIDField())
    )


class DjangoSeatRepository(SeatRepository):
    """Django ORM implementation of SeatRepository."""

    def _to_domain(self, model: LicenseSeat) -> Seat:
        return Seat(
            id=model.id,
            license_id=model.license_id,
            key=model.key,
            assigned_to=getattr(model, "assigned_to", None),
        )

    def list_for_license(self, license_id: uuid.UUID) -> List[Seat]:
        queryset = _with_assignee(LicenseSeat.objects.filter(license_id=license_id)).order_by("id")
        return [self._to_domain(model) for model in queryset]

    def find_by_id(self, seat_id: int) -> Optional[Seat]:
        model = _with_assignee(LicenseSeat.objects.filter(id=seat_id)).first()
        return self._to_domain(model) if model else None

    def create_empty(self, license_id: uuid.UUID, count: int) -> int:
        if count <= 0:
            return 0
        # Saved one by one so ids keep creation order on every backend.
        for _ in range(count):
            LicenseSeat.objects.create(license_id=license_id)
        return count

    def delete(self, seat_ids: Iterable[int]) -> int:
        deleted, _ = LicenseSeat.objects.filter(id__in=list(seat_ids)).delete()
        return deleted

    def delete_for_license(self, license_id: uuid.UUID) -> int:
        deleted, _ = LicenseSeat.objects.filter(license_id=license_id).delete()
        return deleted

    def set_key(self, seat_id: int, key: Optional[str]) -> Seat:
        updated = LicenseSeat.objects.filter(id=seat_id).update(key=key)
        if not updated:
            raise SeatNotFoundError(f"Seat {seat_id} not found")
        return self.find_by_id(seat_id)

    def find_key_owner(self, key: str) -> Optional[Tuple[int, str]]:
        row = (
            LicenseSeat.objects.filter(key=key)
            .values_list("id", "license__name")
            .first()
        )
        return (row[0], row[1]) if row else None

    def find_key_owners(self, keys: Iterable[str]) -> Dict[str, str]:
        rows = LicenseSeat.objects.filter(key__in=list(keys)).values_list("key", "license__name")
        return {key: name for key, name in rows}

    def assigned_seat_counts(self, license_ids: Iterable[uuid.UUID]) -> Dict[uuid.UUID, int]:
        rows = (
            Assignment.objects.filter(
                seat__license_id__in=list(license_ids), returned_date__isnull=True
            )
            .order_by()
            .values_list("seat__license_id", "seat_id")
            .distinct()
        )
        counts: Dict[uuid.UUID, int] = {}
        for license_id, _seat_id in rows:
            counts[license_id] = counts.get(license_id, 0) + 1
        return counts
