"""
License domain entity.

This is the core domain entity representing a purchased software license.
It contains business rules and is independent of infrastructure.
"""
import dataclasses
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

from core.domain.exceptions import ValidationError
from core.domain.value_objects import Currency, LicenseType, PaymentCycle, RenewalCycle

ALLOWED_NOTICE_PRESETS = (30, 90)


@dataclass(frozen=True)
class License:
    """
    License domain entity.

    Immutable; state changes return a new instance through ``with_changes``.
    """

    id: uuid.UUID
    name: str
    license_type: LicenseType
    total_quantity: int
    purchase_date: date
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
    total_amount_foreign: Optional[int] = None
    total_amount_krw: Optional[int] = None
    renewal_cycle: RenewalCycle = RenewalCycle.MANUAL
    cycle_months: Optional[int] = None
    first_purchased_at: Optional[date] = None
    last_renewed_at: Optional[date] = None
    renewal_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate license entity."""
        if not self.name or not self.name.strip():
            raise ValidationError("License name is required", field="name")
        if self.total_quantity is None or self.total_quantity < 1:
            raise ValidationError("Quantity must be at least 1", field="total_quantity")
        if self.price is not None and self.price < 0:
            raise ValidationError("Price must be 0 or greater", field="price")
        if not self.purchase_date:
            raise ValidationError("Purchase date is required", field="purchase_date")
        if self.notice_period_days is not None and self.notice_period_days < 1:
            raise ValidationError(
                "Notice period must be at least 1 day", field="notice_period_days"
            )
        if self.renewal_cycle is RenewalCycle.CUSTOM and self.cycle_months is not None:
            if self.cycle_months < 1:
                raise ValidationError("Cycle months must be at least 1", field="cycle_months")
        if self.license_type is not LicenseType.VOLUME and self.key:
            # Only volume licenses carry a license-level key.
            object.__setattr__(self, "key", None)

    @classmethod
    def create(cls, name: str, license_type: LicenseType, total_quantity: int,
               purchase_date: date, license_id: Optional[uuid.UUID] = None,
               **fields) -> "License":
        """
        Create a new License entity.

        Args:
            name: License display name
            license_type: Key handling mode
            total_quantity: Purchased capacity
            purchase_date: Date of purchase
            license_id: Optional UUID (generated if not provided)
            **fields: Any other optional attribute

        Returns:
            License entity instance
        """
        now = datetime.now(timezone.utc)
        return cls(
            id=license_id or uuid.uuid4(),
            name=name.strip() if name else name,
            license_type=license_type,
            total_quantity=total_quantity,
            purchase_date=purchase_date,
            created_at=now,
            updated_at=now,
            **fields,
        )

    @property
    def is_key_based(self) -> bool:
        """True when capacity is tracked through seats."""
        return self.license_type is LicenseType.KEY_BASED

    @property
    def has_cost_inputs(self) -> bool:
        """True when enough cost data is present to compute totals."""
        return self.payment_cycle is not None and self.unit_price is not None

    def with_changes(self, **changes) -> "License":
        """Return a copy with the given attributes replaced."""
        changes.setdefault("updated_at", datetime.now(timezone.utc))
        return dataclasses.replace(self, **changes)


def resolve_notice_period(kind: Optional[str], custom_days: Optional[int]) -> Optional[int]:
    """
    Translate a notice period selection into a day count.

    ``kind`` is one of "30", "90", "custom" or empty.
    """
    if not kind:
        return None
    if kind in {str(days) for days in ALLOWED_NOTICE_PRESETS}:
        return int(kind)
    if kind == "custom":
        if custom_days is None or custom_days < 1:
            raise ValidationError(
                "Enter a notice period of at least 1 day", field="notice_period_custom"
            )
        return custom_days
    raise ValidationError(f"Unknown notice period: {kind}", field="notice_period_type")
