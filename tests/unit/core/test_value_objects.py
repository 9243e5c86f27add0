"""
Unit tests for core value objects.
"""
import pytest

from core.domain.value_objects import Currency, Email, LicenseType, RenewalCycle


class TestEmail:
    """Tests for Email value object."""

    def test_valid_email(self):
        """Test valid email creation."""
        email = Email("test@example.com")
        assert str(email) == "test@example.com"
        assert email.value == "test@example.com"

    def test_invalid_email_no_at(self):
        """Test invalid email without @."""
        with pytest.raises(ValueError, match="Invalid email"):
            Email("invalid-email")

    def test_email_equality(self):
        assert Email("a@example.com") == Email("a@example.com")
        assert hash(Email("a@example.com")) == hash(Email("a@example.com"))
        assert Email("a@example.com") != Email("b@example.com")


class TestLicenseType:
    """Tests for LicenseType enum."""

    @pytest.mark.parametrize(
        "license_type,label",
        [
            (LicenseType.KEY_BASED, "Individual Key"),
            (LicenseType.VOLUME, "Volume Key"),
            (LicenseType.NO_KEY, "No Key"),
        ],
    )
    def test_labels(self, license_type, label):
        assert license_type.label == label

    def test_str_is_value(self):
        assert str(LicenseType.VOLUME) == "VOLUME"
        assert str(RenewalCycle.CUSTOM) == "CUSTOM"
        assert str(Currency.KRW) == "KRW"
