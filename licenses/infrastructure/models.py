"""
License and LicenseSeat models.
"""
import uuid

from django.core.validators import MinValueValidator
from django.db import models

from core.domain.value_objects import Currency, LicenseType, PaymentCycle, RenewalCycle


def _choices(enum_cls):
    return [(member.value, member.value.replace("_", " ").title()) for member in enum_cls]


class License(models.Model):
    """
    A purchased software entitlement.

    KEY_BASED licenses keep their keys on seats, VOLUME licenses carry one
    shared key, NO_KEY licenses have no key material at all.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, db_index=True)
    license_type = models.CharField(
        max_length=20, choices=_choices(LicenseType), default=LicenseType.KEY_BASED.value
    )
    key = models.CharField(max_length=500, null=True, blank=True, db_index=True)
    total_quantity = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    purchase_date = models.DateField()
    expiry_date = models.DateField(null=True, blank=True)
    contract_date = models.DateField(null=True, blank=True)
    notice_period_days = models.PositiveIntegerField(null=True, blank=True)
    admin_name = models.CharField(max_length=255, null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    # Cost
    payment_cycle = models.CharField(
        max_length=10, choices=_choices(PaymentCycle), null=True, blank=True
    )
    unit_price = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    currency = models.CharField(
        max_length=3, choices=_choices(Currency), default=Currency.KRW.value
    )
    exchange_rate = models.DecimalField(max_digits=14, decimal_places=4, default=1)
    is_vat_included = models.BooleanField(default=False)
    total_amount_foreign = models.BigIntegerField(null=True, blank=True)
    total_amount_krw = models.BigIntegerField(null=True, blank=True)

    # Renewal
    renewal_cycle = models.CharField(
        max_length=10, choices=_choices(RenewalCycle), default=RenewalCycle.MANUAL.value
    )
    cycle_months = models.PositiveIntegerField(null=True, blank=True)
    first_purchased_at = models.DateField(null=True, blank=True)
    last_renewed_at = models.DateField(null=True, blank=True)
    renewal_date = models.DateField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "licenses"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["license_type"]),
            models.Index(fields=["expiry_date"]),
            models.Index(fields=["renewal_cycle"]),
        ]

    def __str__(self):
        return self.name


class LicenseSeat(models.Model):
    """
    One unit of capacity of a KEY_BASED license.

    Seats use an integer primary key so that id order is creation order.
    """

    id = models.BigAutoField(primary_key=True)
    license = models.ForeignKey(License, on_delete=models.CASCADE, related_name="seats")
    key = models.CharField(max_length=500, unique=True, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "license_seats"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["license", "id"]),
        ]

    def __str__(self):
        return f"{self.license.name} #{self.id}"
