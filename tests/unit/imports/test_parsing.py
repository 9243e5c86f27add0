"""
Unit tests for CSV cell parsers.
"""
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from core.domain.value_objects import LicenseType
from imports.domain.parsing import (
    REQUIRED_MESSAGE,
    ImportResult,
    RowError,
    clean,
    duplicate_key_errors,
    parse_boolean,
    parse_date,
    parse_integer,
    parse_license_type,
    parse_number,
    require_field,
    row_number,
)


def test_row_number_counts_header_line():
    assert row_number(0) == 2


def test_clean():
    assert clean("  x ") == "x"
    assert clean("   ") is None
    assert clean(None) is None


def test_require_field_reports_blank():
    errors = []
    assert require_field(" ", 3, "name", errors) is None
    assert errors == [RowError(3, "name", REQUIRED_MESSAGE)]


class TestParseDate:
    def test_iso_date(self):
        errors = []
        assert parse_date("2024-02-29", 2, "purchaseDate", errors) == date(2024, 2, 29)
        assert errors == []

    def test_invalid_date(self):
        errors = []
        assert parse_date("2024/02/29", 2, "purchaseDate", errors) is None
        assert "YYYY-MM-DD" in errors[0].message

    def test_required_blank(self):
        errors = []
        parse_date("", 2, "purchaseDate", errors, required=True)
        assert errors[0].message == REQUIRED_MESSAGE

    def test_optional_blank(self):
        errors = []
        assert parse_date("", 2, "expiryDate", errors) is None
        assert errors == []


class TestParseBoolean:
    @pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "Y"])
    def test_true_values(self, value):
        assert parse_boolean(value, 2, "isDefault", []) is True

    @pytest.mark.parametrize("value", ["false", "0", "No", "n"])
    def test_false_values(self, value):
        assert parse_boolean(value, 2, "isDefault", []) is False

    def test_invalid(self):
        errors = []
        assert parse_boolean("maybe", 2, "isDefault", errors) is None
        assert errors[0].column == "isDefault"


class TestParseNumbers:
    def test_number_with_thousands_separator(self):
        assert parse_number("1,500.5", 2, "price", []) == Decimal("1500.5")

    @pytest.mark.parametrize("value", ["abc", "NaN", "inf"])
    def test_not_a_number(self, value):
        errors = []
        assert parse_number(value, 2, "price", errors) is None
        assert len(errors) == 1

    def test_integer(self):
        assert parse_integer("12", 2, "totalQuantity", []) == 12

    def test_fraction_is_not_an_integer(self):
        errors = []
        assert parse_integer("1.5", 2, "totalQuantity", errors) is None
        assert "whole number" in errors[0].message


class TestParseLicenseType:
    def test_explicit_type(self):
        assert parse_license_type("key_based", None, 2, []) is LicenseType.KEY_BASED

    def test_invalid_type(self):
        errors = []
        assert parse_license_type("SITE", None, 2, errors) is None
        assert errors[0].column == "licenseType"

    def test_legacy_volume_flag(self):
        assert parse_license_type(None, "true", 2, []) is LicenseType.VOLUME
        assert parse_license_type("", "false", 2, []) is LicenseType.KEY_BASED

    def test_neither_given(self):
        assert parse_license_type(None, None, 2, []) is None


def test_duplicate_key_errors_report_repeats():
    rows = [
        SimpleNamespace(row=2, key="A"),
        SimpleNamespace(row=3, key="B"),
        SimpleNamespace(row=4, key="A"),
        SimpleNamespace(row=5, key=None),
    ]

    errors = duplicate_key_errors(rows)

    assert len(errors) == 1
    assert errors[0].row == 4
    assert "first on row 2" in errors[0].message


def test_invalid_result_sorts_errors_by_row():
    result = ImportResult.invalid([RowError(5, "a", "x"), RowError(2, "b", "y")])

    assert result.success is False
    assert [error["row"] for error in result.to_dict()["errors"]] == [2, 5]
    assert result.message.startswith("2 validation error(s)")
