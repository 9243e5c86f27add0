"""
Unit tests for the dashboard summary.
"""

from datetime import date

from core.domain.value_objects import LicenseType, PaymentCycle
from licenses.domain.dashboard import TREND_MONTHS, summarize
from licenses.domain.license import License

TODAY = date(2024, 6, 15)


def inventory():
    return [
        License.create(
            name="Adobe",
            license_type=LicenseType.KEY_BASED,
            total_quantity=1,
            purchase_date=date(2024, 1, 1),
            expiry_date=date(2024, 7, 1),
            payment_cycle=PaymentCycle.YEARLY,
            total_amount_krw=1200,
        ),
        License.create(
            name="Slack",
            license_type=LicenseType.NO_KEY,
            total_quantity=1,
            purchase_date=date(2024, 5, 10),
            expiry_date=date(2024, 9, 1),
            payment_cycle=PaymentCycle.MONTHLY,
            total_amount_krw=100,
        ),
        License.create(
            name="Legacy",
            license_type=LicenseType.NO_KEY,
            total_quantity=1,
            purchase_date=date(2023, 1, 1),
            expiry_date=date(2024, 6, 1),
        ),
    ]


class TestSummarize:
    """Tests for summarize."""

    def test_totals_and_expiry_counts(self):
        summary = summarize(inventory(), TODAY)

        assert summary.total_licenses == 3
        assert summary.total_annual_krw == 2400
        assert summary.expiring_30 == 1
        assert summary.expiring_90 == 2

    def test_monthly_trend_covers_last_twelve_months(self):
        trend = summarize(inventory(), TODAY).monthly_trend

        assert len(trend) == TREND_MONTHS
        assert trend[0]["month"] == "2023.07"
        assert trend[-1] == {"month": "2024.06", "cost": 200}
        by_month = {point["month"]: point["cost"] for point in trend}
        assert by_month["2024.04"] == 100
        assert by_month["2023.12"] == 0

    def test_growth_trend_counts_purchases(self):
        growth = summarize(inventory(), TODAY).growth_trend

        assert growth[0] == {"month": "2023.07", "count": 1}
        assert growth[-1] == {"month": "2024.06", "count": 3}

    def test_type_distribution_skips_empty_types(self):
        distribution = summarize(inventory(), TODAY).type_distribution

        assert distribution == [
            {"type": "KEY_BASED", "label": "Individual Key", "value": 1},
            {"type": "NO_KEY", "label": "No Key", "value": 2},
        ]

    def test_empty_inventory(self):
        summary = summarize([], TODAY).to_dict()

        assert summary["total_licenses"] == 0
        assert summary["total_annual_krw"] == 0
        assert summary["type_distribution"] == []
