"""
Tests for ImportCsvHandler and the five importers.
"""

import pytest
from asgiref.sync import async_to_sync
from django.core.files.uploadedfile import SimpleUploadedFile

from assignments.domain.assignment import IMPORT_REASON
from audit.domain.audit_entry import AuditAction
from audit.ports.audit_log_repository import AuditSearchCriteria
from core.domain.value_objects import LicenseType
from imports.application.handlers.import_handlers import ImportCsvCommand, ImportCsvHandler
from imports.application.importers.base import ImportContext


@pytest.fixture
def run_import(license_repository, seat_repository, employee_repository, group_repository,
               assignment_repository, audit_repository):
    handler = ImportCsvHandler(
        ImportContext(
            license_repository=license_repository,
            seat_repository=seat_repository,
            employee_repository=employee_repository,
            group_repository=group_repository,
            assignment_repository=assignment_repository,
            audit_repository=audit_repository,
        )
    )

    def _run(import_type, content, filename="upload.csv"):
        upload = SimpleUploadedFile(filename, content.encode("utf-8"), content_type="text/csv")
        return async_to_sync(handler.handle)(
            ImportCsvCommand(import_type=import_type, upload=upload, actor="importer")
        )

    return _run


def error_columns(result):
    return [(error.row, error.column) for error in result.errors]


@pytest.mark.django_db
class TestUploadChecks:
    """Tests for rejections before any row is read."""

    def test_unknown_type(self, run_import):
        result = run_import("invoices", "name\nx\n")

        assert result.success is False
        assert "Select an import type" in result.message

    def test_not_a_csv(self, run_import):
        result = run_import("licenses", "name\nx\n", filename="upload.xlsx")

        assert result.success is False
        assert result.message == "Only CSV files can be uploaded."

    def test_missing_headers(self, run_import):
        result = run_import("licenses", "name,price\nSlack,10\n")

        assert result.success is False
        assert result.message.startswith("Missing required headers: totalQuantity, purchaseDate")

    def test_header_only_file(self, run_import):
        result = run_import("employees", "name,department\n\n")

        assert result.message == "The CSV file has no data rows."


@pytest.mark.django_db
class TestLicenseImport:
    """Tests for the licenses import."""

    HEADER = "name,totalQuantity,purchaseDate,licenseType,key,price\n"

    def test_creates_and_updates_by_name(self, run_import, make_license, license_repository,
                                         seat_repository, audit_repository):
        make_license(name="Slack", total_quantity=2)

        result = run_import(
            "licenses",
            self.HEADER
            + "Slack,5,2024-01-01,NO_KEY,,1200\n"
            + "Acrobat,2,2024-03-01,,,\n",
        )

        assert result.success is True
        assert (result.created, result.updated) == (1, 1)
        licenses = license_repository.find_by_names(["Slack", "Acrobat"])
        assert licenses["Slack"].total_quantity == 5
        assert licenses["Acrobat"].license_type is LicenseType.KEY_BASED
        assert len(seat_repository.list_for_license(licenses["Acrobat"].id)) == 2
        page = audit_repository.search(AuditSearchCriteria(action=AuditAction.IMPORTED), 1, 50)
        assert page.entries[0].entity_id == "import:licenses"
        assert page.entries[0].actor == "importer"

    def test_invalid_rows_write_nothing(self, run_import, license_repository):
        result = run_import(
            "licenses",
            self.HEADER
            + "Good,1,2024-01-01,NO_KEY,,\n"
            + ",0,01/02/2024,FLOATING,,-5\n",
        )

        assert result.success is False
        assert result.created == 0
        assert set(error_columns(result)) >= {
            (3, "name"),
            (3, "purchaseDate"),
            (3, "licenseType"),
        }
        assert license_repository.find_by_name("Good") is None

    def test_duplicate_key_in_file(self, run_import):
        result = run_import(
            "licenses",
            self.HEADER
            + "One,1,2024-01-01,VOLUME,SAME-KEY,\n"
            + "Two,1,2024-01-01,VOLUME,SAME-KEY,\n",
        )

        assert result.success is False
        assert (3, "key") in error_columns(result)

    def test_key_held_by_another_license(self, run_import, make_license, license_repository):
        make_license(name="Office", license_type=LicenseType.VOLUME, key="OFFICE-KEY")

        result = run_import("licenses", self.HEADER + "Word,1,2024-01-01,VOLUME,OFFICE-KEY,\n")

        assert result.success is False
        (error,) = result.errors
        assert (error.row, error.column) == (2, "key")
        assert "Office" in error.message
        assert license_repository.find_by_name("Word") is None

    def test_key_kept_by_its_own_license(self, run_import, make_license):
        make_license(name="Office", license_type=LicenseType.VOLUME, key="OFFICE-KEY")

        result = run_import("licenses", self.HEADER + "Office,3,2024-01-01,VOLUME,OFFICE-KEY,\n")

        assert result.success is True
        assert result.updated == 1

    def test_leaving_key_based_drops_seats(self, run_import, make_license, license_repository,
                                          seat_repository):
        license = make_license(name="IDE", license_type=LicenseType.KEY_BASED, total_quantity=2)
        assert len(seat_repository.list_for_license(license.id)) == 2

        result = run_import("licenses", self.HEADER + "IDE,2,2024-01-01,VOLUME,IDE-VOLUME,\n")

        assert result.success is True
        assert license_repository.find_by_id(license.id).license_type is LicenseType.VOLUME
        assert seat_repository.list_for_license(license.id) == []

    def test_quantity_below_assignments(self, run_import, make_license, make_employee,
                                        license_repository):
        license = make_license(name="Slack", total_quantity=2)
        employee = make_employee(email="a@example.com")
        assert run_import(
            "assignments", f"licenseName,employeeEmail\nSlack,{employee.email}\n"
        ).success

        result = run_import("licenses", self.HEADER + "Slack,0,2024-01-01,NO_KEY,,\n")
        assert result.success is False

        result = run_import("licenses", self.HEADER + "Slack,1,2024-01-01,KEY_BASED,,\n")
        assert result.success is False
        assert (2, "licenseType") in error_columns(result)
        assert license_repository.find_by_id(license.id).license_type is LicenseType.NO_KEY


@pytest.mark.django_db
class TestEmployeeAndGroupImport:
    """Tests for the employees and groups imports."""

    def test_groups_then_employees(self, run_import, make_license, group_repository,
                                   employee_repository, assignment_repository):
        make_license(name="Slack", total_quantity=5)
        make_license(name="Figma", total_quantity=5)

        groups = run_import(
            "groups",
            "name,description,isDefault,licenseNames\n"
            "Design,Design team,false,Slack;Figma\n",
        )
        assert groups.success and groups.created == 1

        employees = run_import(
            "employees",
            "name,department,email,title,groupName\n"
            "Jane,Design,jane@example.com,Designer,Design\n"
            "John,Sales,,,\n",
        )
        assert (employees.created, employees.updated) == (2, 0)

        jane = employee_repository.find_by_email("jane@example.com")
        reasons = {a.reason for a in assignment_repository.list(employee_id=jane.id)}
        assert reasons == {
            "CSV Import - Auto-assigned via Group: Design (No Key)",
        }
        assert len(assignment_repository.list(employee_id=jane.id)) == 2

    def test_employee_upsert_by_email(self, run_import, make_employee, employee_repository):
        make_employee(name="Jane", department="Sales", email="jane@example.com", title="Rep")

        result = run_import(
            "employees",
            "name,department,email\nJane Doe,Marketing,JANE@example.com\n",
        )

        assert (result.created, result.updated) == (0, 1)
        jane = employee_repository.find_by_email("jane@example.com")
        assert jane.department == "Marketing"
        assert jane.title == "Rep"

    def test_unknown_group_and_license_names(self, run_import):
        employees = run_import("employees", "name,department,groupName\nJane,Sales,Nope\n")
        assert error_columns(employees) == [(2, "groupName")]

        groups = run_import("groups", "name,licenseNames\nDesign,Missing\n")
        assert error_columns(groups) == [(2, "licenseNames")]

    def test_group_update_without_names_keeps_members(self, run_import, make_license,
                                                      group_repository):
        make_license(name="Slack")
        run_import("groups", "name,licenseNames\nBasics,Slack\n")

        result = run_import("groups", "name,description,isDefault\nBasics,Everyone,yes\n")

        assert result.updated == 1
        group = group_repository.find_by_name("Basics")
        assert group.is_default is True
        assert len(group.license_ids) == 1


@pytest.mark.django_db
class TestAssignmentAndSeatImport:
    """Tests for the assignments and seats imports."""

    def test_assignments_respect_capacity(self, run_import, make_license, make_employee,
                                          assignment_repository):
        license = make_license(name="Slack", total_quantity=1)
        make_employee(name="A", email="a@example.com")
        make_employee(name="B", email="b@example.com")

        result = run_import(
            "assignments",
            "licenseName,employeeEmail\nSlack,a@example.com\nSlack,b@example.com\n",
        )

        assert result.success is False
        assert error_columns(result) == [(3, "licenseName")]
        assert assignment_repository.list(license_id=license.id) == []

    def test_assignments_created(self, run_import, make_license, make_employee,
                                 assignment_repository):
        license = make_license(name="Slack", total_quantity=2)
        make_employee(name="A", email="a@example.com")

        result = run_import(
            "assignments",
            "licenseName,employeeEmail,assignedDate,reason\n"
            "Slack,A@example.com,2024-05-01,\n",
        )

        assert result.created == 1
        (assignment,) = assignment_repository.list(license_id=license.id)
        assert assignment.reason == IMPORT_REASON
        assert assignment.assigned_date.isoformat() == "2024-05-01"

    def test_duplicate_and_unknown_rows(self, run_import, make_license, make_employee):
        make_license(name="Slack", total_quantity=5)
        make_employee(email="a@example.com")

        result = run_import(
            "assignments",
            "licenseName,employeeEmail\n"
            "Slack,a@example.com\n"
            "Slack,a@example.com\n"
            "Nope,nobody@example.com\n",
        )

        assert error_columns(result) == [
            (3, "employeeEmail"),
            (4, "licenseName"),
            (4, "employeeEmail"),
        ]

    def test_seat_keys_fill_empty_seats(self, run_import, make_license, seat_repository):
        license = make_license(name="Acrobat", license_type=LicenseType.KEY_BASED,
                               total_quantity=2)

        result = run_import("seats", "licenseName,key\nAcrobat,KEY-1\nAcrobat,KEY-2\n")

        assert result.updated == 2
        keys = [seat.key for seat in seat_repository.list_for_license(license.id)]
        assert keys == ["KEY-1", "KEY-2"]

    def test_seat_keys_rejected_for_other_types_and_overflow(self, run_import, make_license):
        make_license(name="Slack", license_type=LicenseType.NO_KEY)
        make_license(name="Acrobat", license_type=LicenseType.KEY_BASED, total_quantity=1)

        result = run_import(
            "seats", "licenseName,key\nSlack,K-1\nAcrobat,K-2\nAcrobat,K-3\n"
        )

        assert error_columns(result) == [(2, "licenseName"), (4, "key")]
