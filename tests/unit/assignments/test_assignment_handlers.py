"""
Tests for the assignment handlers and the license allocator.
"""

import uuid

import pytest
from asgiref.sync import async_to_sync

from assignments.application.commands.assignment_commands import (
    AssignLicensesCommand,
    DeleteAssignmentCommand,
    ListAssignmentsQuery,
    ReturnAssignmentCommand,
    UnassignLicensesCommand,
)
from assignments.application.handlers.assignment_handlers import (
    AssignLicensesHandler,
    DeleteAssignmentHandler,
    ListAssignmentsHandler,
    ReturnAssignmentHandler,
    UnassignLicensesHandler,
)
from assignments.domain.assignment import MANUAL_REASON, HistoryAction
from core.domain.exceptions import (
    AssignmentAlreadyReturnedError,
    AssignmentNotFoundError,
    EmployeeNotFoundError,
    NothingAssignedError,
    NothingReturnedError,
    ValidationError,
)
from core.domain.value_objects import LicenseType


@pytest.fixture
def repos(license_repository, seat_repository, assignment_repository, audit_repository):
    return {
        "license_repository": license_repository,
        "seat_repository": seat_repository,
        "assignment_repository": assignment_repository,
        "audit_repository": audit_repository,
    }


@pytest.fixture
def assign_handler(employee_repository, repos):
    return AssignLicensesHandler(employee_repository, **repos)


@pytest.fixture
def unassign_handler(repos):
    return UnassignLicensesHandler(**repos)


def assign(handler, employee, *licenses):
    return async_to_sync(handler.handle)(
        AssignLicensesCommand(employee_id=employee.id, license_ids=[lic.id for lic in licenses])
    )


@pytest.mark.django_db
class TestAssignLicenses:
    """Tests for AssignLicensesHandler."""

    def test_key_based_assignment_takes_a_seat(self, make_license, make_employee, assign_handler,
                                               seat_repository, assignment_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=2)
        employee = make_employee()

        result = assign(assign_handler, employee, license)

        assert result.count == 1
        (assignment,) = assignment_repository.list(employee_id=employee.id)
        assert assignment.seat_id is not None
        assert assignment.reason == MANUAL_REASON
        seat = seat_repository.find_by_id(assignment.seat_id)
        assert seat.assigned_to == employee.id

    def test_keyed_seat_is_handed_out_first(self, make_license, make_employee, assign_handler,
                                            seat_repository, assignment_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=3)
        seats = seat_repository.list_for_license(license.id)
        seat_repository.set_key(seats[2].id, "KEY-3")
        employee = make_employee()

        assign(assign_handler, employee, license)

        (assignment,) = assignment_repository.list(employee_id=employee.id)
        assert assignment.seat_id == seats[2].id
        assert assignment.seat_key == "KEY-3"

    def test_skips_full_and_already_assigned(self, make_license, make_employee, assign_handler):
        full = make_license(name="Full", total_quantity=1)
        open_license = make_license(name="Open", total_quantity=5)
        first, second = make_employee(), make_employee()
        assign(assign_handler, first, full)

        result = assign(assign_handler, second, full, open_license)

        assert result.count == 1
        assert result.skipped == ["Full: no remaining quantity"]
        assert "1 skipped" in result.message

    def test_nothing_assigned_raises_with_reasons(self, make_license, make_employee,
                                                  assign_handler):
        license = make_license(name="Solo", total_quantity=1)
        employee = make_employee()
        assign(assign_handler, employee, license)

        with pytest.raises(NothingAssignedError) as exc_info:
            assign(assign_handler, employee, license)

        assert exc_info.value.skipped == ["Solo: already assigned"]

    def test_unknown_license_is_skipped(self, make_license, make_employee, assign_handler):
        license = make_license()
        missing = uuid.uuid4()

        result = async_to_sync(assign_handler.handle)(
            AssignLicensesCommand(employee_id=make_employee().id, license_ids=[missing, license.id])
        )

        assert result.count == 1
        assert result.skipped == [f"ID {missing}: not found"]

    def test_requires_licenses_and_employee(self, make_license, assign_handler):
        with pytest.raises(ValidationError):
            async_to_sync(assign_handler.handle)(AssignLicensesCommand(employee_id=uuid.uuid4()))
        with pytest.raises(EmployeeNotFoundError):
            async_to_sync(assign_handler.handle)(
                AssignLicensesCommand(employee_id=uuid.uuid4(), license_ids=[make_license().id])
            )


@pytest.mark.django_db
class TestReturnAssignments:
    """Tests for unassign, return and delete."""

    def test_unassign_frees_seat_and_records_history(self, make_license, make_employee,
                                                     assign_handler, unassign_handler,
                                                     seat_repository, assignment_repository):
        license = make_license(license_type=LicenseType.KEY_BASED, total_quantity=1)
        employee = make_employee()
        assign(assign_handler, employee, license)
        (assignment,) = assignment_repository.list(employee_id=employee.id)

        result = async_to_sync(unassign_handler.handle)(
            UnassignLicensesCommand(employee_id=employee.id, assignment_ids=[assignment.id])
        )

        assert result.count == 1
        returned = assignment_repository.find_by_id(assignment.id)
        assert returned.is_active is False
        assert seat_repository.find_by_id(assignment.seat_id).assigned_to is None
        history = assignment_repository.history_for_employee(employee.id)
        assert sorted(entry.action.value for entry in history) == ["ASSIGNED", "RETURNED"]
        assert any(entry.action is HistoryAction.RETURNED for entry in history)

    def test_unassign_ignores_other_employees(self, make_license, make_employee, assign_handler,
                                              unassign_handler, assignment_repository):
        license = make_license()
        owner, other = make_employee(), make_employee()
        assign(assign_handler, owner, license)
        (assignment,) = assignment_repository.list(employee_id=owner.id)

        with pytest.raises(NothingReturnedError):
            async_to_sync(unassign_handler.handle)(
                UnassignLicensesCommand(employee_id=other.id, assignment_ids=[assignment.id])
            )

    def test_return_twice_fails(self, make_license, make_employee, assign_handler, repos,
                                assignment_repository):
        license = make_license()
        employee = make_employee()
        assign(assign_handler, employee, license)
        (assignment,) = assignment_repository.list(employee_id=employee.id)
        handler = ReturnAssignmentHandler(**repos)

        async_to_sync(handler.handle)(ReturnAssignmentCommand(assignment.id))
        with pytest.raises(AssignmentAlreadyReturnedError):
            async_to_sync(handler.handle)(ReturnAssignmentCommand(assignment.id))

    def test_returned_capacity_is_reusable(self, make_license, make_employee, assign_handler,
                                           repos, assignment_repository):
        license = make_license(total_quantity=1)
        first, second = make_employee(), make_employee()
        assign(assign_handler, first, license)
        (assignment,) = assignment_repository.list(employee_id=first.id)
        async_to_sync(ReturnAssignmentHandler(**repos).handle)(
            ReturnAssignmentCommand(assignment.id)
        )

        assert assign(assign_handler, second, license).count == 1

    def test_delete_and_list(self, make_license, make_employee, assign_handler,
                             assignment_repository, audit_repository):
        license = make_license()
        employee = make_employee()
        assign(assign_handler, employee, license)
        list_handler = ListAssignmentsHandler(assignment_repository)
        (assignment,) = async_to_sync(list_handler.handle)(
            ListAssignmentsQuery(license_id=license.id, active_only=True)
        )

        async_to_sync(DeleteAssignmentHandler(assignment_repository, audit_repository).handle)(
            DeleteAssignmentCommand(assignment.id)
        )

        assert async_to_sync(list_handler.handle)(ListAssignmentsQuery(license_id=license.id)) == []
        with pytest.raises(AssignmentNotFoundError):
            async_to_sync(DeleteAssignmentHandler(assignment_repository, audit_repository).handle)(
                DeleteAssignmentCommand(assignment.id)
            )
