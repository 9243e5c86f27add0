"""
Django management command to create demo data for development.

Creates:
- An admin console user (admin/admin)
- A few licenses of every type
- A default license group
- Employees, who receive the default group licenses on creation
"""

import logging
from datetime import date
from decimal import Decimal

from asgiref.sync import async_to_sync
from django.core.management.base import BaseCommand

from accounts.domain.account import Account, Role
from accounts.infrastructure.repositories.django_account_repository import (
    DjangoAccountRepository,
)
from assignments.infrastructure.repositories.django_assignment_repository import (
    DjangoAssignmentRepository,
)
from audit.infrastructure.repositories.django_audit_log_repository import DjangoAuditLogRepository
from core.domain.value_objects import Currency, LicenseType, PaymentCycle, RenewalCycle
from employees.application.commands.employee_commands import CreateEmployeeCommand
from employees.application.handlers.employee_handlers import CreateEmployeeHandler
from employees.infrastructure.repositories.django_employee_repository import (
    DjangoEmployeeRepository,
)
from groups.application.commands.group_commands import CreateGroupCommand
from groups.application.handlers.group_handlers import CreateGroupHandler
from groups.infrastructure.repositories.django_group_repository import DjangoGroupRepository
from licenses.application.commands.create_license import CreateLicenseCommand, LicenseFields
from licenses.application.handlers.license_handlers import CreateLicenseHandler
from licenses.infrastructure.repositories.django_license_repository import DjangoLicenseRepository
from licenses.infrastructure.repositories.django_seat_repository import DjangoSeatRepository

logger = logging.getLogger(__name__)

ACTOR = "create_test_data"

DEMO_LICENSES = [
    LicenseFields(
        name="Adobe Creative Cloud",
        license_type=LicenseType.KEY_BASED,
        total_quantity=3,
        purchase_date=date(2024, 1, 15),
        payment_cycle=PaymentCycle.YEARLY,
        unit_price=Decimal("780"),
        currency=Currency.USD,
        exchange_rate=Decimal("1350"),
        renewal_cycle=RenewalCycle.ANNUAL,
        first_purchased_at=date(2024, 1, 15),
        admin_name="IT Team",
    ),
    LicenseFields(
        name="Microsoft 365 Business",
        license_type=LicenseType.VOLUME,
        key="M365-VOLUME-DEMO",
        total_quantity=10,
        purchase_date=date(2024, 3, 1),
        payment_cycle=PaymentCycle.MONTHLY,
        unit_price=Decimal("16500"),
        is_vat_included=True,
        renewal_cycle=RenewalCycle.MONTHLY,
        first_purchased_at=date(2024, 3, 1),
    ),
    LicenseFields(
        name="Slack Pro",
        license_type=LicenseType.NO_KEY,
        total_quantity=20,
        purchase_date=date(2024, 6, 1),
        expiry_date=date(2025, 5, 31),
        price=Decimal("1200000"),
    ),
]

DEMO_EMPLOYEES = [
    ("Kim Minjun", "Engineering", "minjun.kim@example.com", "Backend Engineer"),
    ("Lee Seoyeon", "Design", "seoyeon.lee@example.com", "Product Designer"),
    ("Park Jiho", "Sales", "jiho.park@example.com", None),
]


class Command(BaseCommand):
    """Command to create demo data."""

    help = "Create demo data (admin user, licenses, default group, employees)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-admin",
            action="store_true",
            help="Skip creating the admin user",
        )

    def handle(self, *args, **options):
        if not options["skip_admin"]:
            self.create_admin()

        license_repo = DjangoLicenseRepository()
        seat_repo = DjangoSeatRepository()
        audit_repo = DjangoAuditLogRepository()
        group_repo = DjangoGroupRepository()
        employee_repo = DjangoEmployeeRepository()

        licenses = self.create_licenses(license_repo, seat_repo, audit_repo)
        self.create_default_group(group_repo, license_repo, audit_repo, licenses)
        self.create_employees(
            CreateEmployeeHandler(
                employee_repo,
                group_repo,
                license_repo,
                seat_repo,
                DjangoAssignmentRepository(),
                audit_repo,
            ),
            employee_repo,
        )
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Demo data ready"))

    def create_admin(self):
        repo = DjangoAccountRepository()
        if repo.username_exists("admin"):
            # pylint: disable=no-member
            self.stdout.write(self.style.WARNING("User 'admin' already exists"))
            return
        repo.create(Account.create("admin", name="Administrator", role=Role.ADMIN), "admin")
        # pylint: disable=no-member
        self.stdout.write(self.style.SUCCESS("Created admin user: admin / admin"))

    def create_licenses(self, license_repo, seat_repo, audit_repo):
        handler = CreateLicenseHandler(license_repo, seat_repo, audit_repo)
        existing = license_repo.find_by_names(fields.name for fields in DEMO_LICENSES)
        licenses = []
        for fields in DEMO_LICENSES:
            if fields.name in existing:
                licenses.append(existing[fields.name])
                continue
            license = async_to_sync(handler.handle)(CreateLicenseCommand(fields, actor=ACTOR))
            licenses.append(license)
            self.stdout.write(f"  - License {license.name} ({license.license_type.value})")
        return licenses

    def create_default_group(self, group_repo, license_repo, audit_repo, licenses):
        name = "New Hire Basics"
        if group_repo.find_by_name(name):
            return
        handler = CreateGroupHandler(group_repo, license_repo, audit_repo)
        async_to_sync(handler.handle)(
            CreateGroupCommand(
                name=name,
                description="Assigned to every new employee",
                is_default=True,
                license_ids=[
                    license.id for license in licenses if license.license_type is not LicenseType.KEY_BASED
                ],
                actor=ACTOR,
            )
        )
        self.stdout.write(f"  - Default group {name}")

    def create_employees(self, handler, employee_repo):
        for name, department, email, title in DEMO_EMPLOYEES:
            if employee_repo.find_by_email(email):
                continue
            result = async_to_sync(handler.handle)(
                CreateEmployeeCommand(
                    name=name, department=department, email=email, title=title, actor=ACTOR
                )
            )
            self.stdout.write(
                f"  - Employee {name} ({result.auto_assigned} license(s) auto-assigned)"
            )
