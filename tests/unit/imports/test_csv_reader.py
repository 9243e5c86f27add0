"""
Unit tests for the CSV upload reader.
"""
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from core.domain.exceptions import ImportRejectedError
from imports.application.csv_reader import read_csv_upload
from imports.domain.parsing import ImportType


def upload(content, name="data.csv"):
    if isinstance(content, str):
        content = content.encode("utf-8")
    return SimpleUploadedFile(name, content, content_type="text/csv")


class TestReadCsvUpload:
    """Tests for read_csv_upload."""

    def test_rows_keyed_by_trimmed_headers(self):
        rows = read_csv_upload(
            upload("\ufeff name , department\nKim,Engineering\n"), ImportType.EMPLOYEES
        )

        assert rows == [{"name": "Kim", "department": "Engineering"}]

    def test_blank_lines_skipped(self):
        rows = read_csv_upload(
            upload("name,department\nKim,Eng\n,\n\nLee,Design\n"), ImportType.EMPLOYEES
        )

        assert [row["name"] for row in rows] == ["Kim", "Lee"]

    def test_missing_file(self):
        with pytest.raises(ImportRejectedError, match="Select a CSV file"):
            read_csv_upload(None, ImportType.LICENSES)

    def test_wrong_extension(self):
        with pytest.raises(ImportRejectedError, match="Only CSV"):
            read_csv_upload(upload("name\nx\n", name="data.xlsx"), ImportType.LICENSES)

    def test_too_large(self, settings):
        settings.IMPORT_MAX_UPLOAD_BYTES = 10
        with pytest.raises(ImportRejectedError, match="exceeds"):
            read_csv_upload(upload("name,department\nKim,Engineering\n"), ImportType.EMPLOYEES)

    def test_not_utf8(self):
        with pytest.raises(ImportRejectedError, match="UTF-8"):
            read_csv_upload(upload(b"name,department\n\xff\xfe,x\n"), ImportType.EMPLOYEES)

    def test_no_data_rows(self):
        with pytest.raises(ImportRejectedError, match="no data rows"):
            read_csv_upload(upload("name,department\n"), ImportType.EMPLOYEES)

    def test_missing_required_headers(self):
        with pytest.raises(ImportRejectedError) as exc_info:
            read_csv_upload(upload("name,email\nKim,kim@example.com\n"), ImportType.EMPLOYEES)

        assert "department" in exc_info.value.message
