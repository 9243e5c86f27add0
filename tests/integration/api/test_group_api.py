"""
Integration tests for the license group endpoints.
"""

import pytest
from django.urls import reverse


@pytest.mark.django_db
@pytest.mark.integration
class TestGroupAPI:
    """Integration tests for Group API."""

    def test_group_lifecycle(self, user_client, make_license):
        slack = make_license(name="Slack")
        figma = make_license(name="Figma")

        created = user_client.post(
            reverse("groups:group-list"),
            {"name": "Onboarding", "is_default": True, "license_ids": [str(slack.id)]},
            format="json",
        )
        assert created.status_code == 201
        group_id = created.data["id"]
        assert [lic["name"] for lic in created.data["licenses"]] == ["Slack"]

        added = user_client.post(
            reverse("groups:group-members", args=[group_id]),
            {"license_ids": [str(figma.id)]},
            format="json",
        )
        assert sorted(lic["name"] for lic in added.data["licenses"]) == ["Figma", "Slack"]

        removed = user_client.delete(
            reverse("groups:group-members", args=[group_id]),
            {"license_ids": [str(slack.id)]},
            format="json",
        )
        assert [lic["name"] for lic in removed.data["licenses"]] == ["Figma"]

        duplicate = user_client.post(
            reverse("groups:group-list"), {"name": "Onboarding"}, format="json"
        )
        assert duplicate.status_code == 409

        assert user_client.delete(reverse("groups:group-detail", args=[group_id])).status_code == 204
        assert user_client.get(reverse("groups:group-detail", args=[group_id])).status_code == 404

    def test_new_employee_gets_default_group_licenses(self, user_client, make_license):
        slack = make_license(name="Slack")
        user_client.post(
            reverse("groups:group-list"),
            {"name": "Everyone", "is_default": True, "license_ids": [str(slack.id)]},
            format="json",
        )

        created = user_client.post(
            reverse("employees:employee-list"),
            {"name": "New Hire", "department": "Ops"},
            format="json",
        )

        assert created.data["auto_assigned"] == 1
