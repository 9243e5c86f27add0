"""
Integration tests for the license and seat endpoints.
"""

import pytest
from django.urls import reverse

from core.domain.value_objects import LicenseType


def license_payload(**overrides):
    payload = {
        "name": "Adobe Creative Cloud",
        "license_type": "KEY_BASED",
        "total_quantity": 2,
        "purchase_date": "2024-01-15",
        "payment_cycle": "YEARLY",
        "unit_price": "780.00",
        "currency": "USD",
        "exchange_rate": "1350",
        "notice_period_type": "30",
    }
    payload.update(overrides)
    return payload


@pytest.mark.django_db
@pytest.mark.integration
class TestLicenseAPI:
    """Integration tests for License API."""

    def test_create_list_and_detail(self, user_client):
        created = user_client.post(reverse("licenses:license-list"), license_payload(),
                                   format="json")
        assert created.status_code == 201
        license_id = created.data["id"]
        assert created.data["notice_period_days"] == 30
        assert created.data["total_amount_krw"] == 2316600

        listed = user_client.get(reverse("licenses:license-list"))
        assert listed.status_code == 200
        (summary,) = listed.data
        assert summary["remaining_quantity"] == 2

        detail = user_client.get(reverse("licenses:license-detail", args=[license_id]))
        assert detail.status_code == 200
        assert len(detail.data["seats"]) == 2
        assert detail.data["assignments"] == []

    def test_invalid_payload(self, user_client):
        response = user_client.post(
            reverse("licenses:license-list"),
            license_payload(total_quantity=0),
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_custom_notice_period_requires_days(self, user_client):
        response = user_client.post(
            reverse("licenses:license-list"),
            license_payload(notice_period_type="custom"),
            format="json",
        )

        assert response.status_code == 400

    def test_update_and_delete(self, user_client, make_license):
        license = make_license(name="Slack", total_quantity=3)
        url = reverse("licenses:license-detail", args=[license.id])

        updated = user_client.put(
            url,
            license_payload(name="Slack Pro", license_type="NO_KEY", total_quantity=5),
            format="json",
        )
        assert updated.status_code == 200
        assert updated.data["name"] == "Slack Pro"
        assert updated.data["total_quantity"] == 5

        assert user_client.delete(url).status_code == 204
        missing = user_client.get(url)
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "LICENSE_NOT_FOUND"

    def test_seat_key_update_and_check(self, user_client, make_license, seat_repository):
        license = make_license(name="IDE", license_type=LicenseType.KEY_BASED, total_quantity=2)
        first, second = seat_repository.list_for_license(license.id)

        patched = user_client.patch(
            reverse("licenses:seat-detail", args=[first.id]), {"key": "ABC-123"}, format="json"
        )
        assert patched.status_code == 200
        assert patched.data["key"] == "ABC-123"

        check = user_client.get(reverse("licenses:seat-check-key"), {"key": "ABC-123"})
        assert check.data == {"duplicate": True, "license_name": "IDE"}
        own = user_client.get(
            reverse("licenses:seat-check-key"), {"key": "ABC-123", "exclude_seat_id": first.id}
        )
        assert own.data["duplicate"] is False

        conflict = user_client.patch(
            reverse("licenses:seat-detail", args=[second.id]), {"key": "ABC-123"}, format="json"
        )
        assert conflict.status_code == 409

    def test_create_without_type_is_key_based(self, user_client):
        payload = license_payload(total_quantity=2)
        del payload["license_type"]

        created = user_client.post(reverse("licenses:license-list"), payload, format="json")

        assert created.status_code == 201
        assert created.data["license_type"] == "KEY_BASED"

    def test_update_without_type_keeps_keyed_seats(self, user_client, make_license,
                                                   seat_repository):
        license = make_license(name="IDE", license_type=LicenseType.KEY_BASED, total_quantity=2)
        first, _ = seat_repository.list_for_license(license.id)
        user_client.patch(
            reverse("licenses:seat-detail", args=[first.id]), {"key": "ABC-123"}, format="json"
        )

        updated = user_client.put(
            reverse("licenses:license-detail", args=[license.id]),
            {"name": "IDE Ultimate", "total_quantity": 2, "purchase_date": "2024-01-15"},
            format="json",
        )

        assert updated.status_code == 200
        assert updated.data["license_type"] == "KEY_BASED"
        seats = seat_repository.list_for_license(license.id)
        assert len(seats) == 2
        assert [seat.key for seat in seats if seat.key] == ["ABC-123"]
