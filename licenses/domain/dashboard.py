"""
Dashboard figures derived from the license inventory.
"""
import calendar
from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from core.domain.value_objects import LicenseType
from licenses.domain.cost import annualize, monthly_share
from licenses.domain.license import License

TREND_MONTHS = 12


@dataclass(frozen=True)
class DashboardSummary:
    """Aggregated inventory figures."""

    total_licenses: int
    total_annual_krw: int
    expiring_30: int
    expiring_90: int
    monthly_trend: List[Dict[str, Any]] = field(default_factory=list)
    type_distribution: List[Dict[str, Any]] = field(default_factory=list)
    growth_trend: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _month_window(today: date, offset: int):
    month_index = today.month - 1 - offset
    year = today.year + month_index // 12
    month = month_index % 12 + 1
    start = date(year, month, 1)
    end = date(year, month, calendar.monthrange(year, month)[1])
    return start, end


def _month_label(value: date) -> str:
    return f"{value.year}.{value.month:02d}"


def _has_cost(license: License) -> bool:
    return bool(license.total_amount_krw) and license.payment_cycle is not None


def _expiring_within(licenses: Sequence[License], today: date, days: int) -> int:
    cutoff = today + timedelta(days=days)
    return sum(
        1 for lic in licenses if lic.expiry_date and today <= lic.expiry_date <= cutoff
    )


def summarize(licenses: Sequence[License], today: date) -> DashboardSummary:
    """Build the dashboard summary for ``today``."""
    total_annual = sum(
        annualize(lic.total_amount_krw, lic.payment_cycle)
        for lic in licenses
        if _has_cost(lic)
    )

    monthly_trend = []
    growth_trend = []
    for offset in range(TREND_MONTHS - 1, -1, -1):
        start, end = _month_window(today, offset)
        cost = sum(
            monthly_share(lic.total_amount_krw, lic.payment_cycle)
            for lic in licenses
            if _has_cost(lic)
            and lic.purchase_date <= end
            and (lic.expiry_date is None or lic.expiry_date >= start)
        )
        monthly_trend.append({"month": _month_label(start), "cost": cost})
        growth_trend.append(
            {
                "month": _month_label(start),
                "count": sum(1 for lic in licenses if lic.purchase_date <= end),
            }
        )

    type_counts = {license_type: 0 for license_type in LicenseType}
    for lic in licenses:
        type_counts[lic.license_type] += 1
    type_distribution = [
        {"type": license_type.value, "label": license_type.label, "value": count}
        for license_type, count in type_counts.items()
        if count > 0
    ]

    return DashboardSummary(
        total_licenses=len(licenses),
        total_annual_krw=total_annual,
        expiring_30=_expiring_within(licenses, today, 30),
        expiring_90=_expiring_within(licenses, today, 90),
        monthly_trend=monthly_trend,
        type_distribution=type_distribution,
        growth_trend=growth_trend,
    )
