"""
Integration tests for the CSV import endpoints.
"""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse


def csv_file(content, name="upload.csv"):
    return SimpleUploadedFile(name, content.encode("utf-8"), content_type="text/csv")


@pytest.mark.django_db
@pytest.mark.integration
class TestImportAPI:
    """Integration tests for Import API."""

    def test_import_licenses(self, user_client):
        response = user_client.post(
            reverse("imports:import"),
            {
                "type": "licenses",
                "file": csv_file(
                    "name,totalQuantity,purchaseDate,licenseType\n"
                    "Slack,10,2024-01-01,NO_KEY\n"
                ),
            },
            format="multipart",
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "created": 1,
            "updated": 0,
            "errors": [],
            "message": None,
        }
        listed = user_client.get(reverse("licenses:license-list"))
        assert [item["license"]["name"] for item in listed.data] == ["Slack"]

    def test_invalid_rows_are_reported(self, user_client):
        response = user_client.post(
            reverse("imports:import"),
            {
                "type": "employees",
                "file": csv_file("name,department,email\nJane,,bad-email\n"),
            },
            format="multipart",
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert {(e["row"], e["column"]) for e in body["errors"]} == {
            (2, "department"),
            (2, "email"),
        }

    def test_missing_file(self, user_client):
        response = user_client.post(
            reverse("imports:import"), {"type": "licenses"}, format="multipart"
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Select a CSV file."

    def test_download_template(self, user_client):
        response = user_client.get(reverse("imports:template", args=["seats"]))

        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/csv")
        assert 'filename="seats_template.csv"' in response["Content-Disposition"]
        assert response.content.decode("utf-8").startswith("\ufefflicenseName,key")

    def test_unknown_template(self, user_client):
        response = user_client.get(reverse("imports:template", args=["invoices"]))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "IMPORT_REJECTED"
