"""
Django implementation of AssignmentRepository port.
"""
import uuid
from typing import Iterable, List, Optional, Set, Tuple

from assignments.domain.assignment import Assignment, AssignmentHistoryEntry, HistoryAction
from assignments.infrastructure.models import Assignment as AssignmentModel
from assignments.infrastructure.models import AssignmentHistory as AssignmentHistoryModel
from assignments.ports.assignment_repository import AssignmentRepository


class DjangoAssignmentRepository(AssignmentRepository):
    """Django ORM implementation of AssignmentRepository."""

    def _to_domain(self, model: AssignmentModel, with_names: bool = False) -> Assignment:
        """
        Convert Django model to domain entity.

        With ``with_names`` the related license, employee and seat must
        already be loaded through ``select_related``.
        """
        names = {}
        if with_names:
            names = {
                "license_name": model.license.name,
                "employee_name": model.employee.name,
                "employee_email": model.employee.email,
                "seat_key": model.seat.key if model.seat_id else None,
            }
        return Assignment(
            id=model.id,
            license_id=model.license_id,
            employee_id=model.employee_id,
            seat_id=model.seat_id,
            assigned_date=model.assigned_date,
            returned_date=model.returned_date,
            reason=model.reason,
            created_at=model.created_at,
            **names,
        )

    def save(self, assignment: Assignment) -> Assignment:
        model, _ = AssignmentModel.objects.update_or_create(
            id=assignment.id,
            defaults={
                "license_id": assignment.license_id,
                "employee_id": assignment.employee_id,
                "seat_id": assignment.seat_id,
                "assigned_date": assignment.assigned_date,
                "returned_date": assignment.returned_date,
                "reason": assignment.reason,
            },
        )
        return self._to_domain(model)

    def find_by_id(self, assignment_id: uuid.UUID) -> Optional[Assignment]:
        try:
            return self._to_domain(AssignmentModel.objects.get(id=assignment_id))
        except AssignmentModel.DoesNotExist:
            return None

    def find_by_ids(self, assignment_ids: Iterable[uuid.UUID]) -> List[Assignment]:
        queryset = AssignmentModel.objects.filter(id__in=list(assignment_ids))
        return [self._to_domain(model) for model in queryset]

    def find_active(self, license_id: uuid.UUID, employee_id: uuid.UUID) -> Optional[Assignment]:
        model = AssignmentModel.objects.filter(
            license_id=license_id, employee_id=employee_id, returned_date__isnull=True
        ).first()
        return self._to_domain(model) if model else None

    def active_pairs(
        self, license_ids: Iterable[uuid.UUID], employee_ids: Iterable[uuid.UUID]
    ) -> Set[Tuple[uuid.UUID, uuid.UUID]]:
        rows = AssignmentModel.objects.filter(
            license_id__in=list(license_ids),
            employee_id__in=list(employee_ids),
            returned_date__isnull=True,
        ).values_list("license_id", "employee_id")
        return set(rows)

    def list(
        self,
        license_id: Optional[uuid.UUID] = None,
        employee_id: Optional[uuid.UUID] = None,
        active_only: bool = False,
    ) -> List[Assignment]:
        queryset = AssignmentModel.objects.select_related("license", "employee", "seat")
        if license_id:
            queryset = queryset.filter(license_id=license_id)
        if employee_id:
            queryset = queryset.filter(employee_id=employee_id)
        if active_only:
            queryset = queryset.filter(returned_date__isnull=True)
        return [self._to_domain(model, with_names=True) for model in queryset]

    def delete(self, assignment_id: uuid.UUID) -> None:
        AssignmentModel.objects.filter(id=assignment_id).delete()

    def record_history(self, entry: AssignmentHistoryEntry) -> AssignmentHistoryEntry:
        AssignmentHistoryModel.objects.create(
            id=entry.id,
            assignment_id=entry.assignment_id,
            license_id=entry.license_id,
            employee_id=entry.employee_id,
            action=entry.action.value,
            reason=entry.reason,
            created_at=entry.created_at,
        )
        return entry

    def history_for_employee(self, employee_id: uuid.UUID) -> List[AssignmentHistoryEntry]:
        queryset = AssignmentHistoryModel.objects.filter(employee_id=employee_id).select_related(
            "license"
        )
        return [
            AssignmentHistoryEntry(
                id=model.id,
                assignment_id=model.assignment_id,
                license_id=model.license_id,
                employee_id=model.employee_id,
                action=HistoryAction(model.action),
                reason=model.reason,
                created_at=model.created_at,
                license_name=model.license.name,
            )
            for model in queryset
        ]
