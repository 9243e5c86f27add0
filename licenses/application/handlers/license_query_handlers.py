"""
License query handlers.

Read-side handlers for license listings, license details and the dashboard.
"""
from typing import Any, Dict, List

from django.utils import timezone

from assignments.ports.assignment_repository import AssignmentRepository
from core.domain.exceptions import LicenseNotFoundError
from core.infrastructure.database import run_sync
from licenses.application.dto.license_dto import LicenseDetailDTO, LicenseDTO, SeatDTO
from licenses.application.queries.license_queries import (
    GetDashboardQuery,
    GetLicenseQuery,
    ListLicensesQuery,
)
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.dashboard import summarize
from licenses.ports.license_repository import LicenseRepository
from licenses.ports.seat_repository import SeatRepository


class ListLicensesHandler:
    """Handler for ListLicensesQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: ListLicensesQuery) -> List[LicenseDTO]:
        return await run_sync(self._list)

    def _list(self) -> List[LicenseDTO]:
        licenses = self.license_repository.list_all()
        counts = self.license_repository.active_assignment_counts(lic.id for lic in licenses)
        return [LicenseDTO(license=lic, assigned_quantity=counts.get(lic.id, 0)) for lic in licenses]


class GetLicenseHandler:
    """Handler for GetLicenseQuery."""

    def __init__(
        self,
        license_repository: LicenseRepository,
        seat_repository: SeatRepository,
        assignment_repository: AssignmentRepository,
    ):
        self.license_repository = license_repository
        self.seat_repository = seat_repository
        self.assignment_repository = assignment_repository

    async def handle(self, query: GetLicenseQuery) -> LicenseDetailDTO:
        """
        Handle get license query.

        Raises:
            LicenseNotFoundError: If license not found
        """
        return await run_sync(self._load, query)

    def _load(self, query: GetLicenseQuery) -> LicenseDetailDTO:
        license = self.license_repository.find_by_id(query.license_id)
        if not license:
            raise LicenseNotFoundError(f"License {query.license_id} not found")

        active = self.assignment_repository.list(license_id=license.id, active_only=True)
        seats = []
        if license.is_key_based:
            assignees = {a.seat_id: a.employee_name for a in active if a.seat_id}
            seats = [
                SeatDTO(
                    id=seat.id,
                    key=seat.key,
                    assigned_to=seat.assigned_to,
                    assignee_name=assignees.get(seat.id),
                )
                for seat in self.seat_repository.list_for_license(license.id)
            ]
        return LicenseDetailDTO(
            summary=LicenseDTO(license=license, assigned_quantity=len(active)),
            seats=seats,
            assignments=active,
        )


class GetDashboardHandler:
    """Handler for GetDashboardQuery."""

    def __init__(self, license_repository: LicenseRepository):
        self.license_repository = license_repository

    async def handle(self, query: GetDashboardQuery) -> Dict[str, Any]:
        """
        Handle dashboard query.

        Returns:
            Summary dict, served from cache when computed for the same day
        """
        today = query.today or timezone.localdate()
        cached = await LicenseCacheService.get_dashboard(today)
        if cached is not None:
            return cached

        licenses = await run_sync(self.license_repository.list_all)
        summary = summarize(licenses, today).to_dict()
        await LicenseCacheService.set_dashboard(today, summary)
        return summary
