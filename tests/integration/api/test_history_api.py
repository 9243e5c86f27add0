"""
Integration tests for the history and dashboard endpoints.
"""

from dataclasses import replace
from datetime import datetime, timezone

import pytest
from django.urls import reverse

from audit.domain.audit_entry import AuditAction, AuditEntry, EntityType


@pytest.mark.django_db
@pytest.mark.integration
class TestHistoryAPI:
    """Integration tests for History API."""

    def test_filters_and_paging(self, user_client, make_license):
        make_license(name="Slack")
        make_license(name="Figma")

        response = user_client.get(
            reverse("history:history"), {"entity_type": "LICENSE", "action": "CREATED"}
        )

        assert response.status_code == 200
        assert response.data["total"] == 2
        assert response.data["page"] == 1
        assert response.data["total_pages"] == 1
        assert {entry["entity_type"] for entry in response.data["entries"]} == {"LICENSE"}

        searched = user_client.get(reverse("history:history"), {"q": "Figma"})
        assert searched.data["total"] == 1

    def test_invalid_filter(self, user_client):
        response = user_client.get(reverse("history:history"), {"entity_type": "NOPE"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_search_matches_non_ascii_details(self, user_client, make_license):
        make_license(name="한글오피스")
        make_license(name="Slack")

        response = user_client.get(reverse("history:history"), {"q": "한글"})

        assert response.data["total"] == 1
        assert response.data["entries"][0]["details"]["name"] == "한글오피스"

    def test_date_to_includes_the_whole_day(self, user_client, audit_repository):
        for moment in (datetime(2025, 3, 10, 0, 0), datetime(2025, 3, 10, 23, 30),
                       datetime(2025, 3, 11, 0, 30)):
            entry = AuditEntry.create(EntityType.LICENSE, "license-1", AuditAction.UPDATED)
            audit_repository.record(replace(entry, created_at=moment.replace(tzinfo=timezone.utc)))

        response = user_client.get(
            reverse("history:history"), {"date_from": "2025-03-10", "date_to": "2025-03-10"}
        )

        assert response.data["total"] == 2


@pytest.mark.django_db
@pytest.mark.integration
class TestDashboardAPI:
    """Integration tests for Dashboard API."""

    def test_summary(self, user_client, make_license):
        make_license(name="Slack")

        response = user_client.get(reverse("dashboard:dashboard"))

        assert response.status_code == 200
        assert response.data["total_licenses"] == 1
        assert len(response.data["monthly_trend"]) == 12
        assert response.data["type_distribution"] == [
            {"type": "NO_KEY", "label": "No Key", "value": 1}
        ]
