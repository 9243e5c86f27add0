"""
Pytest configuration and shared fixtures.
"""

import uuid
from datetime import date

import pytest
from asgiref.sync import async_to_sync
from django.core.cache import cache

from accounts.domain.account import Account, Role
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from assignments.infrastructure.repositories.django_assignment_repository import (
    DjangoAssignmentRepository,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.domain.value_objects import LicenseType
from employees.domain.employee import Employee
from employees.infrastructure.repositories.django_employee_repository import (
    DjangoEmployeeRepository,
)
from groups.infrastructure.repositories.django_group_repository import DjangoGroupRepository
from licenses.application.commands.create_license import CreateLicenseCommand, LicenseFields
from licenses.application.handlers.license_handlers import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_seat_repository import DjangoSeatRepository


@pytest.fixture(autouse=True)
def clear_cache():
    """Every test starts with an empty dashboard cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def license_repository():
    """Fixture for LicenseRepository."""
    return DjangoLicenseRepository()


@pytest.fixture
def seat_repository():
    """Fixture for SeatRepository."""
    return DjangoSeatRepository()


@pytest.fixture
def assignment_repository():
    """Fixture for AssignmentRepository."""
    return DjangoAssignmentRepository()


@pytest.fixture
def employee_repository():
    """Fixture for EmployeeRepository."""
    return DjangoEmployeeRepository()


@pytest.fixture
def group_repository():
    """Fixture for GroupRepository."""
    return DjangoGroupRepository()


@pytest.fixture
def audit_repository():
    """Fixture for AuditLogRepository."""
    return DjangoAuditLogRepository()


@pytest.fixture
def account_repository():
    """Fixture for AccountRepository."""
    return DjangoAccountRepository()


@pytest.fixture
def make_license(db, license_repository, seat_repository, audit_repository):
    """Factory creating licenses through the create handler, seats included."""
    handler = CreateLicenseHandler(license_repository, seat_repository, audit_repository)

    def _make(name=None, license_type=LicenseType.NO_KEY, total_quantity=3, **fields):
        license_fields = LicenseFields(
            name=name or f"License {uuid.uuid4().hex[:8]}",
            license_type=license_type,
            total_quantity=total_quantity,
            purchase_date=fields.pop("purchase_date", date(2024, 1, 1)),
            **fields,
        )
        return async_to_sync(handler.handle)(CreateLicenseCommand(license_fields, actor="tester"))

    return _make


@pytest.fixture
def make_employee(db, employee_repository):
    """Factory saving employees directly, without default group assignment."""

    def _make(name="Test Employee", department="Engineering", email=None, title=None):
        employee = Employee.create(
            name=name,
            department=department,
            email=email or f"{uuid.uuid4().hex[:8]}@example.com",
            title=title,
        )
        return employee_repository.save(employee)

    return _make


@pytest.fixture
def admin_account(db, account_repository):
    """Admin console user with password ``secret``."""
    return account_repository.create(
        Account.create("admin", name="Administrator", role=Role.ADMIN), "secret"
    )


@pytest.fixture
def user_account(db, account_repository):
    """Plain console user with password ``secret``."""
    return account_repository.create(Account.create("member", name="Member"), "secret")


@pytest.fixture
def api_client():
    """Fixture for DRF API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def admin_client(api_client, admin_account):
    """API client logged in as the admin."""
    api_client.login(username="admin", password="secret")
    return api_client


@pytest.fixture
def user_client(api_client, user_account):
    """API client logged in as a plain user."""
    api_client.login(username="member", password="secret")
    return api_client
