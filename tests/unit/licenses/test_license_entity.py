"""
Unit tests for License domain entity.
"""

from datetime import date
from decimal import Decimal

import pytest

from core.domain.exceptions import ValidationError
from core.domain.value_objects import LicenseType, PaymentCycle, RenewalCycle
from licenses.domain.license import License, resolve_notice_period


class TestLicenseEntity:
    """Tests for License domain entity."""

    def test_create_license(self):
        """Test creating a license entity."""
        license = License.create(
            name="  Figma  ",
            license_type=LicenseType.NO_KEY,
            total_quantity=5,
            purchase_date=date(2024, 2, 1),
        )

        assert license.name == "Figma"
        assert license.total_quantity == 5
        assert license.renewal_cycle is RenewalCycle.MANUAL
        assert license.id is not None
        assert license.created_at is not None

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            License.create(
                name=" ",
                license_type=LicenseType.NO_KEY,
                total_quantity=1,
                purchase_date=date(2024, 1, 1),
            )

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError) as exc_info:
            License.create(
                name="Zoom",
                license_type=LicenseType.NO_KEY,
                total_quantity=quantity,
                purchase_date=date(2024, 1, 1),
            )
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            License.create(
                name="Zoom",
                license_type=LicenseType.NO_KEY,
                total_quantity=1,
                purchase_date=date(2024, 1, 1),
                price=Decimal("-1"),
            )

    def test_key_dropped_unless_volume(self):
        """Only volume licenses keep a license-level key."""
        keyed = License.create(
            name="Adobe",
            license_type=LicenseType.KEY_BASED,
            total_quantity=2,
            purchase_date=date(2024, 1, 1),
            key="ABC",
        )
        volume = License.create(
            name="Office",
            license_type=LicenseType.VOLUME,
            total_quantity=2,
            purchase_date=date(2024, 1, 1),
            key="ABC",
        )

        assert keyed.key is None
        assert volume.key == "ABC"

    def test_has_cost_inputs(self):
        license = License.create(
            name="Slack",
            license_type=LicenseType.NO_KEY,
            total_quantity=1,
            purchase_date=date(2024, 1, 1),
            payment_cycle=PaymentCycle.MONTHLY,
        )
        assert license.has_cost_inputs is False
        assert license.with_changes(unit_price=Decimal("10")).has_cost_inputs is True

    def test_with_changes_keeps_identity(self):
        license = License.create(
            name="Slack",
            license_type=LicenseType.NO_KEY,
            total_quantity=1,
            purchase_date=date(2024, 1, 1),
        )

        changed = license.with_changes(total_quantity=4)

        assert changed.id == license.id
        assert changed.total_quantity == 4
        assert license.total_quantity == 1


class TestResolveNoticePeriod:
    """Tests for the notice period selection."""

    def test_blank_is_none(self):
        assert resolve_notice_period("", None) is None
        assert resolve_notice_period(None, 10) is None

    @pytest.mark.parametrize("kind,days", [("30", 30), ("90", 90)])
    def test_presets(self, kind, days):
        assert resolve_notice_period(kind, None) == days

    def test_custom(self):
        assert resolve_notice_period("custom", 45) == 45

    def test_custom_requires_days(self):
        with pytest.raises(ValidationError):
            resolve_notice_period("custom", 0)

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            resolve_notice_period("60", None)
