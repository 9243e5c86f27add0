"""
Unit tests for renewal date computation.
"""

from datetime import date

import pytest

from core.domain.value_objects import LicenseType, RenewalCycle
from licenses.domain.license import License
from licenses.domain.renewal import (
    MAX_ROLL_FORWARD,
    add_months,
    calc_renewal_date,
    next_renewal_date,
)


def make_license(cycle, purchase_date=date(2022, 3, 1), **fields):
    return License.create(
        name="Renewing",
        license_type=LicenseType.NO_KEY,
        total_quantity=1,
        purchase_date=purchase_date,
        renewal_cycle=cycle,
        **fields,
    )


@pytest.mark.parametrize(
    "start,months,expected",
    [
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2023, 1, 31), 1, date(2023, 2, 28)),
        (date(2024, 11, 15), 3, date(2025, 2, 15)),
        (date(2024, 5, 31), 12, date(2025, 5, 31)),
    ],
)
def test_add_months_clamps_to_month_end(start, months, expected):
    assert add_months(start, months) == expected


class TestCalcRenewalDate:
    """Tests for calc_renewal_date."""

    def test_manual_has_no_renewal(self):
        assert calc_renewal_date(make_license(RenewalCycle.MANUAL)) is None

    def test_prefers_last_renewal_over_first_purchase(self):
        license = make_license(
            RenewalCycle.ANNUAL,
            first_purchased_at=date(2021, 6, 1),
            last_renewed_at=date(2023, 6, 1),
        )
        assert calc_renewal_date(license) == date(2024, 6, 1)

    def test_first_purchase_over_purchase_date(self):
        license = make_license(RenewalCycle.MONTHLY, first_purchased_at=date(2021, 6, 1))
        assert calc_renewal_date(license) == date(2021, 7, 1)

    def test_custom_cycle_months(self):
        license = make_license(RenewalCycle.CUSTOM, cycle_months=6)
        assert calc_renewal_date(license) == date(2022, 9, 1)

    def test_custom_without_months_is_monthly(self):
        assert calc_renewal_date(make_license(RenewalCycle.CUSTOM)) == date(2022, 4, 1)


class TestNextRenewalDate:
    """Tests for next_renewal_date."""

    def test_rolls_forward_past_today(self):
        license = make_license(RenewalCycle.ANNUAL)
        assert next_renewal_date(license, date(2024, 6, 1)) == date(2025, 3, 1)

    def test_renewal_on_today_rolls_once_more(self):
        license = make_license(RenewalCycle.ANNUAL)
        assert next_renewal_date(license, date(2024, 3, 1)) == date(2025, 3, 1)

    def test_future_date_is_kept(self):
        license = make_license(RenewalCycle.ANNUAL)
        assert next_renewal_date(license, date(2022, 5, 1)) == date(2023, 3, 1)

    def test_roll_forward_is_bounded(self):
        license = make_license(RenewalCycle.MONTHLY, purchase_date=date(1900, 1, 1))
        result = next_renewal_date(license, date(2024, 1, 1))
        assert result == add_months(date(1900, 2, 1), MAX_ROLL_FORWARD)
