"""
Integration tests for the employee and assignment endpoints.
"""

import pytest
from django.urls import reverse


@pytest.mark.django_db
@pytest.mark.integration
class TestEmployeeAPI:
    """Integration tests for Employee API."""

    def test_create_and_detail(self, user_client):
        created = user_client.post(
            reverse("employees:employee-list"),
            {"name": "Jane Doe", "department": "Design", "email": "jane@example.com"},
            format="json",
        )
        assert created.status_code == 201
        assert created.data["auto_assigned"] == 0
        employee_id = created.data["employee"]["id"]

        detail = user_client.get(reverse("employees:employee-detail", args=[employee_id]))
        assert detail.status_code == 200
        assert detail.data["employee"]["email"] == "jane@example.com"

        duplicate = user_client.post(
            reverse("employees:employee-list"),
            {"name": "Other", "department": "Sales", "email": "JANE@example.com"},
            format="json",
        )
        assert duplicate.status_code == 409
        assert duplicate.json()["error"]["code"] == "DUPLICATE_EMAIL"

    def test_assign_and_unassign(self, user_client, make_employee, make_license):
        employee = make_employee(email="jane@example.com")
        license = make_license(name="Slack", total_quantity=1)

        assigned = user_client.post(
            reverse("employees:employee-assign", args=[employee.id]),
            {"license_ids": [str(license.id)]},
            format="json",
        )
        assert assigned.status_code == 200
        assert assigned.data["count"] == 1

        again = user_client.post(
            reverse("employees:employee-assign", args=[employee.id]),
            {"license_ids": [str(license.id)]},
            format="json",
        )
        assert again.status_code == 400
        assert again.json()["error"]["skipped"] == ["Slack: already assigned"]

        active = user_client.get(
            reverse("assignments:assignment-list"),
            {"employee_id": str(employee.id), "active": "true"},
        )
        (assignment,) = active.data
        assert assignment["license_name"] == "Slack"

        returned = user_client.post(
            reverse("employees:employee-unassign", args=[employee.id]),
            {"assignment_ids": [assignment["id"]]},
            format="json",
        )
        assert returned.status_code == 200
        assert returned.data["count"] == 1

        detail = user_client.get(reverse("employees:employee-detail", args=[employee.id]))
        assert detail.data["assignments"] == []
        assert [entry["action"] for entry in detail.data["history"]].count("RETURNED") == 1

    def test_return_and_delete_assignment(self, user_client, make_employee, make_license):
        employee = make_employee()
        license = make_license()
        user_client.post(
            reverse("employees:employee-assign", args=[employee.id]),
            {"license_ids": [str(license.id)]},
            format="json",
        )
        (assignment,) = user_client.get(
            reverse("assignments:assignment-list"), {"license_id": str(license.id)}
        ).data
        url = reverse("assignments:assignment-detail", args=[assignment["id"]])

        returned = user_client.put(url)
        assert returned.status_code == 200
        assert returned.data["is_active"] is False
        assert user_client.put(url).status_code == 400

        assert user_client.delete(url).status_code == 204
        assert user_client.delete(url).status_code == 404

    def test_update_and_delete_employee(self, user_client, make_employee):
        employee = make_employee(name="Jane", department="Sales")
        url = reverse("employees:employee-detail", args=[employee.id])

        updated = user_client.put(url, {"name": "Jane", "department": "Marketing"}, format="json")
        assert updated.status_code == 200
        assert updated.data["department"] == "Marketing"

        assert user_client.delete(url).status_code == 204
        assert user_client.get(url).status_code == 404

    def test_bad_uuid_filter(self, user_client):
        response = user_client.get(reverse("assignments:assignment-list"), {"license_id": "x"})

        assert response.status_code == 400
