"""
Unit tests for the in-memory event bus and the event handlers.
"""
import uuid
from datetime import date

import pytest
from prometheus_client import REGISTRY

from assignments.domain.events import LicensesAssigned
from core.domain.events import EventHandler
from core.infrastructure.event_handlers import (
    BusinessMetricsHandler,
    DashboardCacheInvalidationHandler,
    register_event_handlers,
)
from core.infrastructure.events import InMemoryEventBus
from licenses.application.services.license_cache_service import LicenseCacheService
from licenses.domain.events import LicenseCreated, LicenseDeleted, SeatsSynced


class RecordingHandler(EventHandler):
    def __init__(self):
        self.events = []

    async def handle(self, event):
        self.events.append(event)


class FailingHandler(EventHandler):
    async def handle(self, event):
        raise RuntimeError("boom")


def sample(name, **labels):
    return REGISTRY.get_sample_value(name, labels) or 0


@pytest.mark.asyncio
class TestInMemoryEventBus:
    """Tests for InMemoryEventBus."""

    async def test_publish_reaches_subscribers(self):
        bus = InMemoryEventBus()
        handler = RecordingHandler()
        bus.subscribe(LicenseDeleted, handler)

        event = LicenseDeleted(license_id=uuid.uuid4(), name="Slack")
        await bus.publish(event)

        assert handler.events == [event]

    async def test_publish_without_subscribers(self):
        await InMemoryEventBus().publish(LicenseDeleted(license_id=uuid.uuid4(), name="x"))

    async def test_failing_handler_does_not_block_others(self):
        bus = InMemoryEventBus()
        recorder = RecordingHandler()
        bus.subscribe(LicenseDeleted, FailingHandler())
        bus.subscribe(LicenseDeleted, recorder)

        await bus.publish(LicenseDeleted(license_id=uuid.uuid4(), name="x"))

        assert len(recorder.events) == 1

    async def test_subscribe_ignores_duplicate_handler_types(self):
        bus = InMemoryEventBus()
        recorder = RecordingHandler()
        bus.subscribe(LicenseDeleted, recorder)
        bus.subscribe(LicenseDeleted, RecordingHandler())

        await bus.publish(LicenseDeleted(license_id=uuid.uuid4(), name="x"))

        assert len(recorder.events) == 1


@pytest.mark.asyncio
class TestEventHandlers:
    """Tests for the registered event handlers."""

    async def test_business_metrics(self):
        handler = BusinessMetricsHandler()
        created_before = sample("licenses_created_total", license_type="VOLUME")
        seats_before = sample("seats_reconciled_total", operation="created")
        assigned_before = sample("assignments_total", action="assigned")

        await handler.handle(
            LicenseCreated(license_id=uuid.uuid4(), license_type="VOLUME", total_quantity=5)
        )
        await handler.handle(
            SeatsSynced(license_id=uuid.uuid4(), created=4, deleted=0, deleted_with_key=0)
        )
        await handler.handle(LicensesAssigned(employee_id=uuid.uuid4(), count=2))

        assert sample("licenses_created_total", license_type="VOLUME") == created_before + 1
        assert sample("seats_reconciled_total", operation="created") == seats_before + 4
        assert sample("assignments_total", action="assigned") == assigned_before + 2

    async def test_dashboard_cache_invalidation(self):
        today = date(2024, 6, 1)
        await LicenseCacheService.set_dashboard(today, {"total_licenses": 1})
        assert await LicenseCacheService.get_dashboard(today) == {"total_licenses": 1}

        await DashboardCacheInvalidationHandler().handle(
            LicenseDeleted(license_id=uuid.uuid4(), name="x")
        )

        assert await LicenseCacheService.get_dashboard(today) is None


def test_register_event_handlers_subscribes_all_groups():
    bus = InMemoryEventBus()
    register_event_handlers(bus)

    handlers = {type(h).__name__ for h in bus._handlers[LicenseCreated]}  # pylint: disable=protected-access
    assert handlers == {
        "AuditLogEventHandler",
        "DashboardCacheInvalidationHandler",
        "BusinessMetricsHandler",
    }
