"""
CreateLicenseCommand.

Command to register a purchased license.
"""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from core.domain.value_objects import Currency, LicenseType, PaymentCycle, RenewalCycle


@dataclass
class LicenseFields:
    """
    Editable attributes of a license.

    Shared by the create and update commands; updates replace every field
    except a missing license_type, which keeps the current type. New licenses
    without a type are key-based.
    """

    name: str
    total_quantity: int
    purchase_date: date
    license_type: Optional[LicenseType] = None
    key: Optional[str] = None
    price: Optional[Decimal] = None
    expiry_date: Optional[date] = None
    contract_date: Optional[date] = None
    notice_period_days: Optional[int] = None
    admin_name: Optional[str] = None
    description: Optional[str] = None
    payment_cycle: Optional[PaymentCycle] = None
    unit_price: Optional[Decimal] = None
    currency: Currency = Currency.KRW
    exchange_rate: Decimal = Decimal("1")
    is_vat_included: bool = False
    renewal_cycle: RenewalCycle = RenewalCycle.MANUAL
    cycle_months: Optional[int] = None
    first_purchased_at: Optional[date] = None
    last_renewed_at: Optional[date] = None

    def as_kwargs(self) -> dict:
        """Optional attributes as keyword arguments for the License entity."""
        return {
            "key": self.key.strip() if self.key and self.key.strip() else None,
            "price": self.price,
            "expiry_date": self.expiry_date,
            "contract_date": self.contract_date,
            "notice_period_days": self.notice_period_days,
            "admin_name": self.admin_name or None,
            "description": self.description or None,
            "payment_cycle": self.payment_cycle,
            "unit_price": self.unit_price,
            "currency": self.currency,
            "exchange_rate": self.exchange_rate,
            "is_vat_included": self.is_vat_included,
            "renewal_cycle": self.renewal_cycle,
            "cycle_months": self.cycle_months,
            "first_purchased_at": self.first_purchased_at,
            "last_renewed_at": self.last_renewed_at,
        }


@dataclass
class CreateLicenseCommand:
    """Command to create a license."""

    fields: LicenseFields
    actor: Optional[str] = None
