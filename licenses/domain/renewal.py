"""
Renewal date computation.
"""
import calendar
from datetime import date
from typing import Optional

from core.domain.value_objects import RenewalCycle
from licenses.domain.license import License

MAX_ROLL_FORWARD = 100


def add_months(value: date, months: int) -> date:
    """
    Add calendar months, clamping to the last day of the target month.

    Jan 31 + 1 month is Feb 28 (or 29 in a leap year).
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def cycle_length(license: License) -> Optional[int]:
    """Months in one renewal cycle, None for manual renewal."""
    if license.renewal_cycle is RenewalCycle.MONTHLY:
        return 1
    if license.renewal_cycle is RenewalCycle.ANNUAL:
        return 12
    if license.renewal_cycle is RenewalCycle.CUSTOM:
        return license.cycle_months or 1
    return None


def calc_renewal_date(license: License) -> Optional[date]:
    """Next renewal after the most recent renewal, first purchase or purchase date."""
    months = cycle_length(license)
    if months is None:
        return None
    base = license.last_renewed_at or license.first_purchased_at or license.purchase_date
    return add_months(base, months)


def next_renewal_date(license: License, today: date) -> Optional[date]:
    """
    Renewal date rolled forward until it is after ``today``.

    Rolling stops after MAX_ROLL_FORWARD cycles.
    """
    next_date = calc_renewal_date(license)
    if next_date is None:
        return None
    months = cycle_length(license)
    iterations = 0
    while next_date <= today and iterations < MAX_ROLL_FORWARD:
        next_date = add_months(next_date, months)
        iterations += 1
    return next_date
