"""
License cost calculation.

All totals are floored to whole KRW/foreign units.
"""
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Union

from core.domain.value_objects import Currency, PaymentCycle

VAT_RATE = Decimal("0.1")

Number = Union[int, float, Decimal, str]


def _floor(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


@dataclass(frozen=True)
class CostInputs:
    """Inputs of a license cost computation."""

    payment_cycle: PaymentCycle
    quantity: int
    unit_price: Decimal
    currency: Currency = Currency.KRW
    exchange_rate: Decimal = Decimal("1")
    is_vat_included: bool = False


@dataclass(frozen=True)
class CostResult:
    """Result of a license cost computation."""

    subtotal: Decimal
    vat_amount: int
    total_amount_foreign: int
    total_amount_krw: int
    annual_krw: int
    monthly_krw: int


def compute_cost(inputs: CostInputs) -> CostResult:
    """Compute VAT, converted totals and annual/monthly amounts."""
    subtotal = Decimal(str(inputs.unit_price)) * inputs.quantity
    vat_amount = 0 if inputs.is_vat_included else _floor(subtotal * VAT_RATE)
    total_foreign = _floor(subtotal + vat_amount)

    rate = Decimal(str(inputs.exchange_rate)) if inputs.exchange_rate else Decimal("0")
    if rate <= 0:
        rate = Decimal("1")
    total_krw = _floor(total_foreign * rate)

    annual = total_krw if inputs.payment_cycle is PaymentCycle.YEARLY else total_krw * 12
    monthly = total_krw if inputs.payment_cycle is PaymentCycle.MONTHLY else total_krw // 12

    return CostResult(
        subtotal=subtotal,
        vat_amount=vat_amount,
        total_amount_foreign=total_foreign,
        total_amount_krw=total_krw,
        annual_krw=annual,
        monthly_krw=monthly,
    )


def annualize(total_amount_krw: int, payment_cycle: PaymentCycle) -> int:
    """Annual amount of a stored per-cycle total."""
    if payment_cycle is PaymentCycle.YEARLY:
        return total_amount_krw
    return total_amount_krw * 12


def monthly_share(total_amount_krw: int, payment_cycle: PaymentCycle) -> int:
    """Monthly amount of a stored per-cycle total."""
    if payment_cycle is PaymentCycle.MONTHLY:
        return total_amount_krw
    return total_amount_krw // 12
