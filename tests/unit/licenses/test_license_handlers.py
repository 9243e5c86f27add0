"""
Tests for the license command and query handlers.
"""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest
from asgiref.sync import async_to_sync

from assignments.application.commands.assignment_commands import AssignLicensesCommand
from assignments.application.handlers.assignment_handlers import AssignLicensesHandler
from audit.domain.audit_entry import AuditAction, EntityType
from audit.ports.audit_log_repository import AuditSearchCriteria
from core.domain.exceptions import (
    DuplicateSeatKeyError,
    LicenseNotFoundError,
    LicenseTypeChangeBlockedError,
    SeatsInUseError,
)
from core.domain.value_objects import LicenseType, PaymentCycle, RenewalCycle
from licenses.application.commands.create_license import LicenseFields
from licenses.application.commands.delete_license import DeleteLicenseCommand
from licenses.application.commands.sync_renewal_dates import SyncRenewalDatesCommand
from licenses.application.commands.update_license import UpdateLicenseCommand
from licenses.application.commands.update_seat_key import UpdateSeatKeyCommand
from licenses.application.handlers.license_handlers import (
    DeleteLicenseHandler,
    UpdateLicenseHandler,
)
from licenses.application.handlers.license_query_handlers import (
    GetDashboardHandler,
    GetLicenseHandler,
)
from licenses.application.handlers.renewal_handlers import SyncRenewalDatesHandler
from licenses.application.handlers.seat_handlers import CheckSeatKeyHandler, UpdateSeatKeyHandler
from licenses.application.queries.license_queries import (
    CheckSeatKeyQuery,
    GetDashboardQuery,
    GetLicenseQuery,
)


def fields_of(license, **overrides):
    """Editable fields of a stored license with some replaced."""
    fields = LicenseFields(
        name=license.name,
        total_quantity=license.total_quantity,
        purchase_date=license.purchase_date,
        license_type=license.license_type,
        key=license.key,
        payment_cycle=license.payment_cycle,
        unit_price=license.unit_price,
        renewal_cycle=license.renewal_cycle,
    )
    return replace(fields, **overrides)


@pytest.fixture
def update_handler(license_repository, seat_repository, audit_repository):
    return UpdateLicenseHandler(license_repository, seat_repository, audit_repository)


@pytest.fixture
def assign(employee_repository, license_repository, seat_repository, assignment_repository,
           audit_repository):
    handler = AssignLicensesHandler(
        employee_repository, license_repository, seat_repository, assignment_repository,
        audit_repository,
    )

    def _assign(employee, *licenses):
        return async_to_sync(handler.handle)(
            AssignLicensesCommand(employee_id=employee.id, license_ids=[lic.id for lic in licenses])
        )

    return _assign


@pytest.mark.django_db
class TestCreateLicense:
    """Tests for CreateLicenseHandler."""

    def test_key_based_license_gets_one_seat_per_unit(self, make_license, seat_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=3)

        seats = seat_repository.list_for_license(license.id)
        assert len(seats) == 3
        assert all(not seat.has_key for seat in seats)

    def test_other_types_have_no_seats(self, make_license, seat_repository):
        license = make_license(license_type=LicenseType.VOLUME, total_quantity=3, key="VOL-1")

        assert seat_repository.list_for_license(license.id) == []
        assert license.key == "VOL-1"

    def test_derived_cost_and_audit(self, make_license, audit_repository):
        license = make_license(
            total_quantity=2,
            payment_cycle=PaymentCycle.MONTHLY,
            unit_price=Decimal("1000"),
        )

        assert license.total_amount_krw == 2200
        page = audit_repository.search(
            AuditSearchCriteria(entity_type=EntityType.LICENSE, entity_id=str(license.id)), 1, 50
        )
        assert [entry.action for entry in page.entries] == [AuditAction.CREATED]
        assert page.entries[0].actor == "tester"


@pytest.mark.django_db
class TestUpdateLicense:
    """Tests for UpdateLicenseHandler."""

    def test_quantity_change_reconciles_seats(self, make_license, update_handler, seat_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=2)

        async_to_sync(update_handler.handle)(
            UpdateLicenseCommand(license.id, fields_of(license, total_quantity=5))
        )
        assert len(seat_repository.list_for_license(license.id)) == 5

        async_to_sync(update_handler.handle)(
            UpdateLicenseCommand(license.id, fields_of(license, total_quantity=1))
        )
        assert len(seat_repository.list_for_license(license.id)) == 1

    def test_cannot_shrink_below_assigned_seats(self, make_license, make_employee, assign,
                                                update_handler, license_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=3)
        assign(make_employee(), license)
        assign(make_employee(), license)

        with pytest.raises(SeatsInUseError):
            async_to_sync(update_handler.handle)(
                UpdateLicenseCommand(license.id, fields_of(license, total_quantity=1))
            )
        assert license_repository.find_by_id(license.id).total_quantity == 3

    def test_leaving_key_based_drops_seats(self, make_license, update_handler, seat_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=2)

        updated = async_to_sync(update_handler.handle)(
            UpdateLicenseCommand(license.id, fields_of(license, license_type=LicenseType.NO_KEY))
        )

        assert updated.license_type is LicenseType.NO_KEY
        assert seat_repository.list_for_license(license.id) == []

    def test_type_change_blocked_while_assigned(self, make_license, make_employee, assign,
                                                update_handler):
        license = make_license(license_type=LicenseType.NO_KEY, total_quantity=2)
        assign(make_employee(), license)

        with pytest.raises(LicenseTypeChangeBlockedError):
            async_to_sync(update_handler.handle)(
                UpdateLicenseCommand(
                    license.id, fields_of(license, license_type=LicenseType.VOLUME)
                )
            )

    def test_missing_license(self, make_license, update_handler, license_repository):
        license = make_license()
        license_repository.delete(license.id)

        with pytest.raises(LicenseNotFoundError):
            async_to_sync(update_handler.handle)(UpdateLicenseCommand(license.id, fields_of(license)))


@pytest.mark.django_db
class TestDeleteLicense:
    """Tests for DeleteLicenseHandler."""

    def test_delete_removes_assignments(self, make_license, make_employee, assign,
                                        license_repository, assignment_repository,
                                        audit_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=1)
        employee = make_employee()
        assign(employee, license)

        async_to_sync(DeleteLicenseHandler(license_repository, audit_repository).handle)(
            DeleteLicenseCommand(license.id, actor="admin")
        )

        assert license_repository.find_by_id(license.id) is None
        assert assignment_repository.list(employee_id=employee.id) == []


@pytest.mark.django_db
class TestSeatKeys:
    """Tests for UpdateSeatKeyHandler and CheckSeatKeyHandler."""

    def test_set_and_check_key(self, make_license, seat_repository, audit_repository):
        first = make_license(name="Adobe", license_type=LicenseType.KEY_BASED, total_quantity=2)
        second = make_license(name="Autodesk", license_type=LicenseType.KEY_BASED, total_quantity=1)
        seat_a, seat_b = seat_repository.list_for_license(first.id)
        (seat_c,) = seat_repository.list_for_license(second.id)
        update = UpdateSeatKeyHandler(seat_repository, audit_repository)
        check = CheckSeatKeyHandler(seat_repository)

        updated = async_to_sync(update.handle)(UpdateSeatKeyCommand(seat_a.id, "  KEY-1 "))
        assert updated.key == "KEY-1"

        result = async_to_sync(check.handle)(CheckSeatKeyQuery(key="KEY-1"))
        assert result.duplicate is True
        assert result.license_name == "Adobe"
        excluded = async_to_sync(check.handle)(
            CheckSeatKeyQuery(key="KEY-1", exclude_seat_id=seat_a.id)
        )
        assert excluded.duplicate is False

        with pytest.raises(DuplicateSeatKeyError):
            async_to_sync(update.handle)(UpdateSeatKeyCommand(seat_c.id, "KEY-1"))

        cleared = async_to_sync(update.handle)(UpdateSeatKeyCommand(seat_a.id, ""))
        assert cleared.key is None
        moved = async_to_sync(update.handle)(UpdateSeatKeyCommand(seat_b.id, "KEY-1"))
        assert moved.key == "KEY-1"


@pytest.mark.django_db
class TestLicenseQueries:
    """Tests for the license query handlers."""

    def test_detail_includes_seats_and_usage(self, make_license, make_employee, assign,
                                             license_repository, seat_repository,
                                             assignment_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=2)
        employee = make_employee(name="Kim")
        assign(employee, license)

        detail = async_to_sync(
            GetLicenseHandler(license_repository, seat_repository, assignment_repository).handle
        )(GetLicenseQuery(license.id))

        assert detail.summary.assigned_quantity == 1
        assert detail.summary.remaining_quantity == 1
        assert len(detail.seats) == 2
        assert sorted(seat.assignee_name or "" for seat in detail.seats) == ["", "Kim"]
        assert [seat.assigned_to for seat in detail.seats if seat.assigned_to] == [employee.id]
        assert [a.employee_id for a in detail.assignments] == [employee.id]

    def test_dashboard_is_cached_until_invalidated(self, make_license, license_repository):
        make_license(expiry_date=date(2024, 6, 20))
        handler = GetDashboardHandler(license_repository)
        today = date(2024, 6, 15)

        first = async_to_sync(handler.handle)(GetDashboardQuery(today=today))
        make_license()
        second = async_to_sync(handler.handle)(GetDashboardQuery(today=today))

        assert first["total_licenses"] == 1
        assert first["expiring_30"] == 1
        # creating through the handler publishes LicenseCreated, which drops the cache
        assert second["total_licenses"] == 2


@pytest.mark.django_db
class TestSyncRenewalDates:
    """Tests for SyncRenewalDatesHandler."""

    def test_rolls_stale_dates_forward(self, make_license, license_repository):
        license = make_license(
            renewal_cycle=RenewalCycle.ANNUAL,
            purchase_date=date(2020, 3, 1),
        )
        manual = make_license()
        handler = SyncRenewalDatesHandler(license_repository)
        later = date(2040, 1, 1)

        dry = async_to_sync(handler.handle)(SyncRenewalDatesCommand(today=later, dry_run=True))
        assert dry.updated == 1
        assert license_repository.find_by_id(license.id).renewal_date == license.renewal_date

        result = async_to_sync(handler.handle)(SyncRenewalDatesCommand(today=later))
        assert result.checked == 1
        assert result.updated == 1
        assert license_repository.find_by_id(license.id).renewal_date == date(2040, 3, 1)
        assert license_repository.find_by_id(manual.id).renewal_date is None

    def test_single_missing_license(self, make_license, license_repository):
        license = make_license()
        license_repository.delete(license.id)

        with pytest.raises(LicenseNotFoundError):
            async_to_sync(SyncRenewalDatesHandler(license_repository).handle)(
                SyncRenewalDatesCommand(license_id=license.id)
            )
