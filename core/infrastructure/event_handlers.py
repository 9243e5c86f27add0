"""
Event handlers for domain events.

These handlers process domain events after commit for side effects:
audit logging, dashboard cache invalidation and business metrics.
"""

import logging

from accounts.domain.events import UserAccountChanged, UserLoggedIn, UserLoggedOut
from assignments.domain.events import AssignmentDeleted, LicensesAssigned, LicensesReturned
from core.domain.events import DomainEvent, EventHandler
from core.metrics import (
    assignments_total,
    licenses_created_total,
    licenses_deleted_total,
    seats_reconciled_total,
)
from employees.domain.events import EmployeeCreated, EmployeeDeleted, EmployeeUpdated
from imports.domain.events import CsvImported
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import (
    LicenseCreated,
    LicenseDeleted,
    LicenseUpdated,
    RenewalDatesSynced,
    SeatsSynced,
)

logger = logging.getLogger(__name__)

LICENSE_EVENTS = (LicenseCreated, LicenseUpdated, LicenseDeleted, SeatsSynced, RenewalDatesSynced)
ASSIGNMENT_EVENTS = (LicensesAssigned, LicensesReturned, AssignmentDeleted)
EMPLOYEE_EVENTS = (EmployeeCreated, EmployeeUpdated, EmployeeDeleted)
ACCOUNT_EVENTS = (UserLoggedIn, UserLoggedOut, UserAccountChanged)

# Events that change numbers shown on the dashboard.
DASHBOARD_EVENTS = LICENSE_EVENTS + ASSIGNMENT_EVENTS + EMPLOYEE_EVENTS + (CsvImported,)


class AuditLogEventHandler(EventHandler):
    """
    Event handler for audit logging.

    The durable audit trail is written inside each unit of work; this
    handler emits the structured log line for the committed event.
    """

    async def handle(self, event: DomainEvent) -> None:
        extra = {
            "event_id": str(event.event_id),
            "event_type": event.event_type,
            "aggregate_id": event.aggregate_id,
            "occurred_at": event.occurred_at.isoformat(),
        }
        extra.update({f"event_{key}": value for key, value in event.payload().items()})
        logger.info("Audit log: %s - %s", event.event_type, event.aggregate_id, extra=extra)


class DashboardCacheInvalidationHandler(EventHandler):
    """Drops the cached dashboard summary when inventory data changes."""

    async def handle(self, event: DomainEvent) -> None:
        await LicenseCacheService.invalidate_dashboard()
        logger.debug("Dashboard cache invalidated (event: %s)", event.event_type)


class BusinessMetricsHandler(EventHandler):
    """Increments the Prometheus business counters."""

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, LicenseCreated):
            licenses_created_total.labels(license_type=event.license_type).inc()
        elif isinstance(event, LicenseDeleted):
            licenses_deleted_total.inc()
        elif isinstance(event, SeatsSynced):
            if event.created:
                seats_reconciled_total.labels(operation="created").inc(event.created)
            if event.deleted:
                seats_reconciled_total.labels(operation="deleted").inc(event.deleted)
        elif isinstance(event, LicensesAssigned):
            assignments_total.labels(action="assigned").inc(event.count)
        elif isinstance(event, LicensesReturned):
            assignments_total.labels(action="returned").inc(event.count)
        elif isinstance(event, AssignmentDeleted):
            assignments_total.labels(action="deleted").inc()


def register_event_handlers(bus=None):
    """Register all event handlers with the event bus."""
    if bus is None:
        from core.infrastructure.events import event_bus as bus

    audit_handler = AuditLogEventHandler()
    cache_handler = DashboardCacheInvalidationHandler()
    metrics_handler = BusinessMetricsHandler()

    for event_type in DASHBOARD_EVENTS + ACCOUNT_EVENTS:
        bus.subscribe(event_type, audit_handler)
    for event_type in DASHBOARD_EVENTS:
        bus.subscribe(event_type, cache_handler)
    for event_type in LICENSE_EVENTS + ASSIGNMENT_EVENTS:
        bus.subscribe(event_type, metrics_handler)

    logger.info("Event handlers registered")
